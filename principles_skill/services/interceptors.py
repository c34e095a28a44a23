"""Observability hooks that run before and after dispatch."""

from __future__ import annotations

import json
from typing import Awaitable, Optional, Protocol, Union

from principles_skill.core.logging import get_logger
from principles_skill.core.models import Response

from .handlers import HandlerInput

logger = get_logger(__name__)


class RequestInterceptor(Protocol):
    def process(self, handler_input: HandlerInput) -> Union[None, Awaitable[None]]:
        """Observe the envelope before a handler is chosen."""
        ...  # pylint: disable=unnecessary-ellipsis


class ResponseInterceptor(Protocol):
    def process(
        self, handler_input: HandlerInput, response: Optional[Response]
    ) -> Union[None, Awaitable[None]]:
        """Observe the response produced for the envelope."""
        ...  # pylint: disable=unnecessary-ellipsis


class LogRequestInterceptor:
    def process(self, handler_input: HandlerInput) -> None:
        logger.info(
            json.dumps(handler_input.envelope.raw, ensure_ascii=False, default=str),
            extra={"event": "skill_request"},
        )


class LogResponseInterceptor:
    def process(self, handler_input: HandlerInput, response: Optional[Response]) -> None:
        del handler_input
        payload = response.to_envelope() if response is not None else None
        logger.info(
            json.dumps(payload, ensure_ascii=False), extra={"event": "skill_response"}
        )


__all__ = [
    "RequestInterceptor",
    "ResponseInterceptor",
    "LogRequestInterceptor",
    "LogResponseInterceptor",
]
