"""Core data transfer objects shared across layers.

The platform wire schema belongs to ``ask_sdk_model``: inbound payloads are
deserialized into its ``RequestEnvelope`` and outbound responses are built as
its ``ResponseEnvelope``. The dataclasses here are the narrow view the handler
chain works with.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ask_sdk_core.exceptions import SerializationException
from ask_sdk_core.serialize import DefaultSerializer
from ask_sdk_model import RequestEnvelope as SdkRequestEnvelope
from ask_sdk_model import Response as SdkResponse
from ask_sdk_model import ResponseEnvelope
from ask_sdk_model.request import Request as SdkRequest
from ask_sdk_model.ui import Reprompt, SimpleCard, SsmlOutputSpeech

from principles_skill.core.intents import RequestType

RESPONSE_VERSION = "1.0"

serializer = DefaultSerializer()


def _deserialize(data: Mapping[str, Any], request_type: str) -> SdkRequestEnvelope:
    payload = dict(data)
    if request_type not in SdkRequest.discriminator_value_class_map:
        # Unknown request kinds still dispatch; only their envelope metadata is typed.
        payload.pop("request")
    try:
        return serializer.deserialize(json.dumps(payload), SdkRequestEnvelope)
    except (SerializationException, TypeError) as exc:
        raise ValueError(f"malformed request envelope: {exc}") from exc


def _user_id(envelope: SdkRequestEnvelope) -> Optional[str]:
    system = getattr(envelope.context, "system", None)
    for user in (getattr(system, "user", None), getattr(envelope.session, "user", None)):
        if user is not None and user.user_id:
            return user.user_id
    return None


def _application_id(envelope: SdkRequestEnvelope) -> Optional[str]:
    system = getattr(envelope.context, "system", None)
    for app in (
        getattr(system, "application", None),
        getattr(envelope.session, "application", None),
    ):
        if app is not None and app.application_id:
            return app.application_id
    return None


def _enum_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(getattr(value, "value", value))


@dataclass(frozen=True, slots=True)
class RequestEnvelope:
    """Normalized platform request with the caller identity resolved."""

    request_type: str
    user_id: str
    request_id: str = ""
    application_id: Optional[str] = None
    intent_name: Optional[str] = None
    slots: Mapping[str, str] = field(default_factory=dict)
    reason: Optional[str] = None
    error: Optional[Mapping[str, Any]] = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_data(cls, data: Any) -> "RequestEnvelope":
        """Build an envelope from the raw platform JSON payload.

        Raises ``ValueError`` when the payload is not a request envelope, has
        no request type or caller, or is an intent request without an intent.
        """
        if not isinstance(data, Mapping):
            raise ValueError("request envelope must be a JSON object")
        request_data = data.get("request")
        if not isinstance(request_data, Mapping):
            raise ValueError("missing or invalid request object")
        request_type = request_data.get("type")
        if not isinstance(request_type, str) or not request_type:
            raise ValueError("missing or invalid request type")

        parsed = _deserialize(data, request_type)
        user_id = _user_id(parsed)
        if user_id is None:
            raise ValueError("missing caller user id")

        request = parsed.request
        intent_name: Optional[str] = None
        slots: dict[str, str] = {}
        if request_type == RequestType.INTENT.value:
            intent = getattr(request, "intent", None)
            if intent is None:
                raise ValueError("intent request payload malformed: missing intent")
            if not intent.name:
                raise ValueError("intent request received with no intent name")
            intent_name = intent.name
            for slot_name, slot in (intent.slots or {}).items():
                if slot is not None and isinstance(slot.value, str):
                    slots[str(slot_name)] = slot.value

        error = getattr(request, "error", None)
        request_id = getattr(request, "request_id", None) or request_data.get("requestId")
        return cls(
            request_type=request_type,
            user_id=user_id,
            request_id=request_id if isinstance(request_id, str) else "",
            application_id=_application_id(parsed),
            intent_name=intent_name,
            slots=MappingProxyType(slots),
            reason=_enum_value(getattr(request, "reason", None)),
            error=MappingProxyType(serializer.serialize(error)) if error is not None else None,
            raw=data,
        )

    def is_request(self, *request_types: RequestType) -> bool:
        """True when the envelope carries one of ``request_types``."""
        return any(self.request_type == kind.value for kind in request_types)

    def is_intent(self, *names: str) -> bool:
        """True for an intent request whose name is one of ``names``."""
        return self.request_type == RequestType.INTENT.value and self.intent_name in {
            str(getattr(name, "value", name)) for name in names
        }

    def slot_value(self, name: str) -> Optional[str]:
        """Return the spoken value captured for slot ``name``."""
        return self.slots.get(name)


@dataclass(frozen=True, slots=True)
class Card:
    """Visual summary shown alongside the spoken response."""

    title: str
    body: str


def _ssml(text: str) -> SsmlOutputSpeech:
    return SsmlOutputSpeech(ssml=f"<speak>{text}</speak>")


@dataclass(frozen=True, slots=True)
class Response:
    """Immutable skill response produced by exactly one handler."""

    speech: Optional[str] = None
    reprompt: Optional[str] = None
    card: Optional[Card] = None
    should_end_session: Optional[bool] = None

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to say or show."""
        return self.speech is None and self.reprompt is None and self.card is None

    def to_sdk(self) -> ResponseEnvelope:
        """Return the platform ``ResponseEnvelope`` for this response."""
        body = SdkResponse(
            output_speech=_ssml(self.speech) if self.speech is not None else None,
            reprompt=(
                Reprompt(output_speech=_ssml(self.reprompt))
                if self.reprompt is not None
                else None
            ),
            card=(
                SimpleCard(title=self.card.title, content=self.card.body)
                if self.card is not None
                else None
            ),
            should_end_session=self.should_end_session,
        )
        return ResponseEnvelope(version=RESPONSE_VERSION, response=body)

    def to_envelope(self) -> dict[str, Any]:
        """Serialize to the platform's JSON response envelope."""
        return serializer.serialize(self.to_sdk())


__all__ = ["RequestEnvelope", "Card", "Response", "serializer"]
