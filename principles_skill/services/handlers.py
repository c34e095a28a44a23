"""Request handlers for each intent and platform event the skill serves.

Each handler exposes ``can_handle`` (sync or async) and ``handle``. The
dispatcher evaluates them in the order returned by
:func:`build_request_handlers`; several predicates overlap, so that order is
part of the contract.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Awaitable, Optional, Protocol, Union

from principles_skill.core.corpus import Corpus
from principles_skill.core.intents import PRINCIPLE_SLOT, IntentName, RequestType
from principles_skill.core.logging import get_logger
from principles_skill.core.models import RequestEnvelope, Response
from principles_skill.core.ports import AttributesGateway
from principles_skill.core.responses import ResponseText

from .response_builder import ResponseBuilder

logger = get_logger(__name__)

LAST_HEARD_KEY = "lastHeardPrinciple"

MaybeAwaitable = Union[bool, Awaitable[bool]]
MaybeAwaitableResponse = Union[Response, Awaitable[Response]]


@dataclass(slots=True)
class HandlerInput:
    """Everything a handler may touch while serving one envelope."""

    envelope: RequestEnvelope
    attributes: AttributesGateway
    corpus: Corpus
    responses: ResponseText
    rng: random.Random = field(default_factory=random.Random)
    response_builder: ResponseBuilder = field(default_factory=ResponseBuilder)


class RequestHandler(Protocol):
    """A routable handler: predicate plus action."""

    def can_handle(self, handler_input: HandlerInput) -> MaybeAwaitable:
        """Return whether this handler accepts the envelope."""
        ...  # pylint: disable=unnecessary-ellipsis

    def handle(self, handler_input: HandlerInput) -> MaybeAwaitableResponse:
        """Produce the response for an accepted envelope."""
        ...  # pylint: disable=unnecessary-ellipsis


class ErrorHandler(Protocol):
    """Last-resort handler invoked with the failure that aborted dispatch."""

    def can_handle(self, handler_input: HandlerInput, error: Exception) -> bool:
        """Return whether this handler accepts ``error``."""
        ...  # pylint: disable=unnecessary-ellipsis

    def handle(self, handler_input: HandlerInput, error: Exception) -> MaybeAwaitableResponse:
        """Produce the response for ``error``."""
        ...  # pylint: disable=unnecessary-ellipsis


async def get_last_heard(handler_input: HandlerInput) -> Optional[int]:
    """Return the caller's last principle index, ignoring values outside the corpus."""
    user_data = await handler_input.attributes.get_attributes(True, {})
    value = user_data.get(LAST_HEARD_KEY)
    return value if handler_input.corpus.is_valid_index(value) else None


async def deliver_principle(
    handler_input: HandlerInput, index: int, *, short: bool = False
) -> Response:
    """Remember ``index`` as the caller's last principle and speak it."""
    principle = handler_input.corpus[index]
    user_data = await handler_input.attributes.get_attributes(True, {})
    handler_input.attributes.set_attributes({**user_data, LAST_HEARD_KEY: index})
    await handler_input.attributes.save_attributes()
    logger.info(
        "Delivered principle %s", principle.name, extra={"event": "principle", "index": index}
    )

    responses = handler_input.responses
    speech = (
        principle.simple
        if short
        else f"{responses.get_principle_message} {principle.name}. {principle.simple}"
    )
    return (
        handler_input.response_builder.speak(speech)
        .reprompt(responses.get_principle_reprompt)
        .with_simple_card(principle.name, principle.simple)
        .get_response()
    )


class GetNewPrincipleHandler:
    """Launch or "tell me a principle": a random principle, never the last one heard."""

    def can_handle(self, handler_input: HandlerInput) -> bool:
        envelope = handler_input.envelope
        return envelope.is_request(RequestType.LAUNCH) or envelope.is_intent(
            IntentName.GET_NEW_PRINCIPLE
        )

    async def handle(self, handler_input: HandlerInput) -> Response:
        last_heard = await get_last_heard(handler_input)
        size = len(handler_input.corpus)
        index = handler_input.rng.randrange(size)
        # A single-entry corpus has nothing else to offer, so it may repeat.
        while size > 1 and index == last_heard:
            index = handler_input.rng.randrange(size)
        return await deliver_principle(handler_input, index)


class GetSpecificPrincipleHandler:
    """Look a principle up by its spoken name."""

    def can_handle(self, handler_input: HandlerInput) -> bool:
        return handler_input.envelope.is_intent(IntentName.GET_SPECIFIC_PRINCIPLE)

    async def handle(self, handler_input: HandlerInput) -> Response:
        spoken_name = handler_input.envelope.slot_value(PRINCIPLE_SLOT) or ""
        index = handler_input.corpus.find_index(spoken_name)
        if index is None:
            logger.info("No principle named %r", spoken_name, extra={"event": "lookup_miss"})
            return handler_input.response_builder.speak(
                handler_input.responses.error_message
            ).get_response()
        return await deliver_principle(handler_input, index, short=True)


class GetNextPrincipleHandler:
    """Advance to the principle after the last one heard."""

    async def can_handle(self, handler_input: HandlerInput) -> bool:
        if not handler_input.envelope.is_intent(IntentName.NEXT):
            return False
        return await get_last_heard(handler_input) is not None

    async def handle(self, handler_input: HandlerInput) -> Response:
        last_heard = await get_last_heard(handler_input)
        if last_heard is None:
            raise LookupError("no principle has been heard yet")
        return await deliver_principle(handler_input, handler_input.corpus.next_index(last_heard))


class TellMeMoreHandler:
    """Speak the extended text of the last principle heard."""

    async def can_handle(self, handler_input: HandlerInput) -> bool:
        if not handler_input.envelope.is_intent(IntentName.YES, IntentName.MORE):
            return False
        return await get_last_heard(handler_input) is not None

    async def handle(self, handler_input: HandlerInput) -> Response:
        last_heard = await get_last_heard(handler_input)
        if last_heard is None:
            raise LookupError("no principle has been heard yet")
        principle = handler_input.corpus[last_heard]
        return (
            handler_input.response_builder.speak(principle.extended)
            .with_simple_card(principle.name, principle.simple)
            .get_response()
        )


class HelpHandler:
    def can_handle(self, handler_input: HandlerInput) -> bool:
        return handler_input.envelope.is_intent(IntentName.HELP)

    def handle(self, handler_input: HandlerInput) -> Response:
        responses = handler_input.responses
        return (
            handler_input.response_builder.speak(responses.help_message)
            .reprompt(responses.help_reprompt)
            .get_response()
        )


class ExitHandler:
    """Cancel, stop, or "no": say goodbye without a reprompt."""

    def can_handle(self, handler_input: HandlerInput) -> bool:
        return handler_input.envelope.is_intent(IntentName.CANCEL, IntentName.STOP, IntentName.NO)

    def handle(self, handler_input: HandlerInput) -> Response:
        return handler_input.response_builder.speak(
            handler_input.responses.stop_message
        ).get_response()


class SkillDisabledEventHandler:
    """Purge a user's stored data when they disable the skill."""

    def can_handle(self, handler_input: HandlerInput) -> bool:
        return handler_input.envelope.is_request(RequestType.SKILL_DISABLED)

    async def handle(self, handler_input: HandlerInput) -> Response:
        user_id = handler_input.envelope.user_id
        if handler_input.attributes.can_delete:
            await handler_input.attributes.delete_attributes()
            logger.info(
                "Data successfully deleted for user %s",
                user_id,
                extra={"event": "skill_disabled"},
            )
        return handler_input.response_builder.get_response()


class FallbackHandler:
    def can_handle(self, handler_input: HandlerInput) -> bool:
        return handler_input.envelope.is_intent(IntentName.FALLBACK)

    def handle(self, handler_input: HandlerInput) -> Response:
        responses = handler_input.responses
        return (
            handler_input.response_builder.speak(responses.fallback_message)
            .reprompt(responses.fallback_reprompt)
            .get_response()
        )


class SessionEndedRequestHandler:
    def can_handle(self, handler_input: HandlerInput) -> bool:
        return handler_input.envelope.is_request(RequestType.SESSION_ENDED)

    def handle(self, handler_input: HandlerInput) -> Response:
        envelope = handler_input.envelope
        logger.info(
            "Session ended with reason: %s",
            envelope.reason,
            extra={
                "event": "session_ended",
                "error": dict(envelope.error) if envelope.error else None,
            },
        )
        return handler_input.response_builder.get_response()


class CustomErrorHandler:
    """Catch-all that turns any failure into the canned apology."""

    def can_handle(self, handler_input: HandlerInput, error: Exception) -> bool:
        del handler_input, error
        return True

    def handle(self, handler_input: HandlerInput, error: Exception) -> Response:
        logger.error(
            "Error handled: %s",
            error,
            exc_info=(type(error), error, error.__traceback__),
            extra={"event": "dispatch_error", "error_type": type(error).__name__},
        )
        return handler_input.response_builder.speak(
            handler_input.responses.error_message
        ).get_response()


def build_request_handlers() -> tuple[RequestHandler, ...]:
    """Return the request handlers in their required evaluation order."""
    return (
        GetNewPrincipleHandler(),
        GetSpecificPrincipleHandler(),
        GetNextPrincipleHandler(),
        TellMeMoreHandler(),
        HelpHandler(),
        ExitHandler(),
        SkillDisabledEventHandler(),
        FallbackHandler(),
        SessionEndedRequestHandler(),
    )


__all__ = [
    "HandlerInput",
    "RequestHandler",
    "ErrorHandler",
    "LAST_HEARD_KEY",
    "get_last_heard",
    "deliver_principle",
    "GetNewPrincipleHandler",
    "GetSpecificPrincipleHandler",
    "GetNextPrincipleHandler",
    "TellMeMoreHandler",
    "HelpHandler",
    "ExitHandler",
    "SkillDisabledEventHandler",
    "FallbackHandler",
    "SessionEndedRequestHandler",
    "CustomErrorHandler",
    "build_request_handlers",
]
