"""Tests for the POST /skill endpoint."""
# pylint: disable=missing-function-docstring

import random
from http import HTTPStatus
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from principles_skill.adapters.persistence import InMemoryPersistenceAdapter
from principles_skill.apps.api.app import create_app
from principles_skill.core.corpus import DEFAULT_CORPUS
from principles_skill.core.responses import DEFAULT_RESPONSES
from principles_skill.services import build_default_services

EventFactory = Callable[..., dict[str, Any]]


@pytest.fixture(name="client")
def _client() -> TestClient:
    services = build_default_services(
        persistence_port=InMemoryPersistenceAdapter(),
        skill_id="amzn1.ask.skill.test",
        rng=random.Random(5),
    )
    return TestClient(create_app(services))


def test_launch_then_more_uses_stored_principle(
    client: TestClient, make_event: EventFactory
) -> None:
    launch = client.post("/skill", json=make_event("LaunchRequest"))
    assert launch.status_code == HTTPStatus.OK
    body = launch.json()["response"]
    title = body["card"]["title"]
    assert body["shouldEndSession"] is False
    assert body["reprompt"]["outputSpeech"]["ssml"] == (
        f"<speak>{DEFAULT_RESPONSES.get_principle_reprompt}</speak>"
    )

    more = client.post("/skill", json=make_event(intent="MoreIntent"))
    assert more.status_code == HTTPStatus.OK
    principle = DEFAULT_CORPUS[DEFAULT_CORPUS.find_index(title) or 0]
    assert more.json()["response"]["outputSpeech"]["ssml"] == (
        f"<speak>{principle.extended}</speak>"
    )


def test_session_ended_returns_empty_response(
    client: TestClient, make_event: EventFactory
) -> None:
    event = make_event("SessionEndedRequest", reason="EXCEEDED_MAX_REPROMPTS")
    resp = client.post("/skill", json=event)
    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == {"version": "1.0", "response": {}}


def test_malformed_envelope_is_rejected(client: TestClient) -> None:
    resp = client.post("/skill", json={"request": {"type": "LaunchRequest"}})
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert "user id" in resp.json()["detail"]


def test_other_skill_is_forbidden(client: TestClient, make_event: EventFactory) -> None:
    resp = client.post(
        "/skill", json=make_event("LaunchRequest", application_id="amzn1.ask.skill.other")
    )
    assert resp.status_code == HTTPStatus.FORBIDDEN


@pytest.mark.parametrize("body", [[{"request": {"type": "LaunchRequest"}}], "LaunchRequest", 7])
def test_non_object_body_is_bad_request(client: TestClient, body: Any) -> None:
    resp = client.post("/skill", json=body)
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.json()["detail"] == "request envelope must be a JSON object"


def test_unknown_request_kind_gets_error_speech(
    client: TestClient, make_event: EventFactory
) -> None:
    resp = client.post("/skill", json=make_event("Custom.UnheardOfRequest"))
    assert resp.status_code == HTTPStatus.OK
    assert resp.json()["response"]["outputSpeech"]["ssml"] == (
        f"<speak>{DEFAULT_RESPONSES.error_message}</speak>"
    )
