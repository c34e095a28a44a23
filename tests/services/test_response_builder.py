"""Tests for the fluent response builder."""

from principles_skill.core.models import Card
from principles_skill.services.response_builder import ResponseBuilder


def test_empty_builder_yields_empty_response() -> None:
    response = ResponseBuilder().get_response()

    assert response.is_empty
    assert response.should_end_session is None


def test_reprompt_keeps_session_open() -> None:
    response = (
        ResponseBuilder()
        .speak("Hi")
        .reprompt("Still there?")
        .with_simple_card("Title", "Body")
        .get_response()
    )

    assert response.speech == "Hi"
    assert response.reprompt == "Still there?"
    assert response.card == Card(title="Title", body="Body")
    assert response.should_end_session is False


def test_speech_only_leaves_session_flag_unset() -> None:
    response = ResponseBuilder().speak("Bye").get_response()

    assert response.reprompt is None
    assert response.card is None
    assert response.should_end_session is None


def test_explicit_session_flag() -> None:
    response = ResponseBuilder().with_should_end_session(True).get_response()

    assert response.should_end_session is True
    assert response.is_empty
