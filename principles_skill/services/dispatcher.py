"""Ordered, predicate-based dispatch of request envelopes to handlers."""

from __future__ import annotations

import inspect
import random
from typing import Any, Awaitable, Optional, Sequence, TypeVar, Union

from principles_skill.core.corpus import DEFAULT_CORPUS, Corpus
from principles_skill.core.exceptions import SkillIdMismatchError, UnroutableRequestError
from principles_skill.core.logging import get_logger, request_log_context
from principles_skill.core.models import RequestEnvelope, Response
from principles_skill.core.ports import PersistenceAdapterPort
from principles_skill.core.responses import DEFAULT_RESPONSES, ResponseText

from .attributes import AttributesManager
from .handlers import (
    CustomErrorHandler,
    ErrorHandler,
    HandlerInput,
    RequestHandler,
    build_request_handlers,
)
from .interceptors import (
    LogRequestInterceptor,
    LogResponseInterceptor,
    RequestInterceptor,
    ResponseInterceptor,
)
from .response_builder import ResponseBuilder

logger = get_logger(__name__)

T = TypeVar("T")


async def _resolve(value: Union[T, Awaitable[T]]) -> T:
    if inspect.isawaitable(value):
        return await value
    return value


def verify_skill_id(envelope: RequestEnvelope, expected: Optional[str]) -> None:
    """Reject envelopes addressed to a different skill when ``expected`` is set."""
    if expected and envelope.application_id != expected:
        raise SkillIdMismatchError(
            f"envelope addressed to {envelope.application_id!r}, expected {expected!r}"
        )


class SkillDispatcher:
    """Run interceptors, pick the first matching handler, and fall back on errors."""

    def __init__(
        self,
        persistence: PersistenceAdapterPort,
        *,
        handlers: Sequence[RequestHandler] | None = None,
        error_handler: ErrorHandler | None = None,
        request_interceptors: Sequence[RequestInterceptor] = (),
        response_interceptors: Sequence[ResponseInterceptor] = (),
        corpus: Corpus = DEFAULT_CORPUS,
        responses: ResponseText = DEFAULT_RESPONSES,
        rng: random.Random | None = None,
    ) -> None:
        self._persistence = persistence
        self._handlers: tuple[RequestHandler, ...] = tuple(
            build_request_handlers() if handlers is None else handlers
        )
        self._error_handler: ErrorHandler = error_handler or CustomErrorHandler()
        self._request_interceptors = tuple(request_interceptors)
        self._response_interceptors = tuple(response_interceptors)
        self._corpus = corpus
        self._responses = responses
        self._rng = rng or random.Random()

    @property
    def handlers(self) -> tuple[RequestHandler, ...]:
        """Registered request handlers in evaluation order."""
        return self._handlers

    @property
    def corpus(self) -> Corpus:
        return self._corpus

    def _handler_input(self, envelope: RequestEnvelope) -> HandlerInput:
        return HandlerInput(
            envelope=envelope,
            attributes=AttributesManager(self._persistence, envelope.user_id),
            corpus=self._corpus,
            responses=self._responses,
            rng=self._rng,
        )

    async def _select(self, handler_input: HandlerInput) -> RequestHandler:
        # Predicates may suspend on persistence reads; first match wins.
        for handler in self._handlers:
            if await _resolve(handler.can_handle(handler_input)):
                return handler
        raise UnroutableRequestError(
            f"no handler accepts request type {handler_input.envelope.request_type!r}"
            f" (intent {handler_input.envelope.intent_name!r})"
        )

    async def _handle_error(self, handler_input: HandlerInput, error: Exception) -> Response:
        handler_input.response_builder = ResponseBuilder()
        if not self._error_handler.can_handle(handler_input, error):
            raise error
        return await _resolve(self._error_handler.handle(handler_input, error))

    async def _run_request_interceptors(self, handler_input: HandlerInput) -> None:
        for interceptor in self._request_interceptors:
            try:
                await _resolve(interceptor.process(handler_input))
            except Exception:  # pylint: disable=broad-except
                logger.exception("request interceptor %s failed", type(interceptor).__name__)

    async def _run_response_interceptors(
        self, handler_input: HandlerInput, response: Response
    ) -> None:
        for interceptor in self._response_interceptors:
            try:
                await _resolve(interceptor.process(handler_input, response))
            except Exception:  # pylint: disable=broad-except
                logger.exception("response interceptor %s failed", type(interceptor).__name__)

    async def dispatch(self, envelope: RequestEnvelope) -> Response:
        """Produce exactly one response for ``envelope``."""
        handler_input = self._handler_input(envelope)
        with request_log_context(envelope):
            await self._run_request_interceptors(handler_input)
            try:
                handler = await self._select(handler_input)
                logger.debug(
                    "dispatching to %s", type(handler).__name__, extra={"event": "dispatch"}
                )
                response = await _resolve(handler.handle(handler_input))
            except Exception as exc:  # pylint: disable=broad-except
                response = await self._handle_error(handler_input, exc)
            await self._run_response_interceptors(handler_input, response)
            return response

    async def invoke(self, event: Any, skill_id: Optional[str] = None) -> dict[str, Any]:
        """Parse a raw platform event, dispatch it, and serialize the response.

        Raises ``ValueError`` for malformed events and ``SkillIdMismatchError``
        when ``skill_id`` is set and the event targets another skill.
        """
        envelope = RequestEnvelope.from_data(event)
        verify_skill_id(envelope, skill_id)
        response = await self.dispatch(envelope)
        return response.to_envelope()


def build_default_dispatcher(
    persistence: PersistenceAdapterPort,
    *,
    corpus: Corpus = DEFAULT_CORPUS,
    responses: ResponseText = DEFAULT_RESPONSES,
    rng: random.Random | None = None,
) -> SkillDispatcher:
    """Return a dispatcher with the standard handlers and logging interceptors."""
    return SkillDispatcher(
        persistence,
        handlers=build_request_handlers(),
        error_handler=CustomErrorHandler(),
        request_interceptors=(LogRequestInterceptor(),),
        response_interceptors=(LogResponseInterceptor(),),
        corpus=corpus,
        responses=responses,
        rng=rng,
    )


__all__ = ["SkillDispatcher", "build_default_dispatcher", "verify_skill_id"]
