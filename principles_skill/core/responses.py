"""Canned spoken responses for the skill."""

from __future__ import annotations

from dataclasses import dataclass

SKILL_NAME = "HashiCorp Principles"


@dataclass(frozen=True, slots=True)
class ResponseText:
    """Read-only table of the fixed phrases the handlers speak."""

    get_principle_message: str
    get_principle_reprompt: str
    help_message: str
    help_reprompt: str
    fallback_message: str
    fallback_reprompt: str
    error_message: str
    stop_message: str


DEFAULT_RESPONSES = ResponseText(
    get_principle_message="Here's one of our principles:",
    get_principle_reprompt="Would you like to learn more?",
    help_message=(
        'You can say: "tell me a principle". Or, you can ask for information about a '
        'specific principle by saying: "tell me about Beauty Works Better". Or, you can '
        'say: "exit". What can I help you with?'
    ),
    help_reprompt="What can I help you with?",
    fallback_message=(
        f"The {SKILL_NAME} skill can't help you with that. It can help you learn about "
        "HashiCorp's company principles if you say: \"tell me a principle\". Or, you can "
        "ask for information about a specific principle by saying: \"tell me about Beauty "
        'Works Better". What can I help you with?'
    ),
    fallback_reprompt="What can I help you with?",
    error_message="Hmm, something went wrong. Please try again later.",
    stop_message="Okay, goodbye!",
)


__all__ = ["ResponseText", "DEFAULT_RESPONSES", "SKILL_NAME"]
