"""Tests for the synchronous function-host entry point."""

from __future__ import annotations

from typing import Any, Callable, Iterator

import pytest

from principles_skill import entrypoint
from principles_skill.adapters.persistence import InMemoryPersistenceAdapter
from principles_skill.core.exceptions import SkillIdMismatchError
from principles_skill.core.responses import DEFAULT_RESPONSES
from principles_skill.services import ServiceContainer, build_default_services, runtime

EventFactory = Callable[..., dict[str, Any]]


@pytest.fixture(name="services")
def _services() -> Iterator[ServiceContainer]:
    container = build_default_services(
        persistence_port=InMemoryPersistenceAdapter(), skill_id="amzn1.ask.skill.test"
    )
    runtime.set_services(container)
    yield container
    runtime.clear_services()


def test_handler_dispatches_with_registered_services(
    services: ServiceContainer, make_event: EventFactory
) -> None:
    del services
    result = entrypoint.handler(make_event(intent="AMAZON.HelpIntent"), object())

    assert result["response"]["outputSpeech"]["ssml"] == (
        f"<speak>{DEFAULT_RESPONSES.help_message}</speak>"
    )
    assert result["response"]["reprompt"]["outputSpeech"]["ssml"] == (
        f"<speak>{DEFAULT_RESPONSES.help_reprompt}</speak>"
    )


def test_handler_state_survives_between_calls(
    services: ServiceContainer, make_event: EventFactory
) -> None:
    entrypoint.handler(make_event("LaunchRequest"))
    assert services.persistence is not None

    result = entrypoint.handler(make_event(intent="AMAZON.NextIntent"))

    assert result["response"]["reprompt"]["outputSpeech"]["ssml"] == (
        f"<speak>{DEFAULT_RESPONSES.get_principle_reprompt}</speak>"
    )


def test_invoke_with_explicit_container(make_event: EventFactory) -> None:
    container = build_default_services(persistence_port=InMemoryPersistenceAdapter())

    result = entrypoint.invoke(make_event("AlexaSkillEvent.SkillDisabled"), container)

    assert result == {"version": "1.0", "response": {}}


def test_invoke_rejects_mismatched_skill(
    services: ServiceContainer, make_event: EventFactory
) -> None:
    del services
    with pytest.raises(SkillIdMismatchError):
        entrypoint.handler(make_event("LaunchRequest", application_id="amzn1.ask.skill.x"))


def test_invoke_without_dispatcher_raises(make_event: EventFactory) -> None:
    with pytest.raises(RuntimeError):
        entrypoint.invoke(make_event("LaunchRequest"), ServiceContainer())


def test_handler_builds_default_container_when_unregistered(
    make_event: EventFactory,
) -> None:
    runtime.clear_services()
    try:
        result = entrypoint.handler(make_event(intent="AMAZON.FallbackIntent"))
        assert runtime.has_services()
    finally:
        runtime.clear_services()

    assert result["response"]["outputSpeech"]["ssml"] == (
        f"<speak>{DEFAULT_RESPONSES.fallback_message}</speak>"
    )
