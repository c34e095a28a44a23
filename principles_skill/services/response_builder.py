"""Fluent builder for immutable skill responses."""

from __future__ import annotations

from typing import Optional

from principles_skill.core.models import Card, Response


class ResponseBuilder:
    """Accumulate speech, reprompt, card and session flag for one response."""

    def __init__(self) -> None:
        self._speech: Optional[str] = None
        self._reprompt: Optional[str] = None
        self._card: Optional[Card] = None
        self._should_end_session: Optional[bool] = None

    def speak(self, text: str) -> "ResponseBuilder":
        self._speech = text
        return self

    def reprompt(self, text: str) -> "ResponseBuilder":
        """Set reprompt speech; a reprompt keeps the session open."""
        self._reprompt = text
        self._should_end_session = False
        return self

    def with_simple_card(self, title: str, body: str) -> "ResponseBuilder":
        self._card = Card(title=title, body=body)
        return self

    def with_should_end_session(self, value: bool) -> "ResponseBuilder":
        self._should_end_session = value
        return self

    def get_response(self) -> Response:
        return Response(
            speech=self._speech,
            reprompt=self._reprompt,
            card=self._card,
            should_end_session=self._should_end_session,
        )


__all__ = ["ResponseBuilder"]
