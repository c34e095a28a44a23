"""Request kinds and intent names delivered by the voice platform."""

from enum import Enum


class RequestType(str, Enum):
    """Discriminator for the inbound request envelope."""

    LAUNCH = "LaunchRequest"
    INTENT = "IntentRequest"
    SKILL_DISABLED = "AlexaSkillEvent.SkillDisabled"
    SESSION_ENDED = "SessionEndedRequest"


class IntentName(str, Enum):
    """Intent names resolved by the platform's language-understanding layer."""

    GET_NEW_PRINCIPLE = "GetNewPrincipleIntent"
    GET_SPECIFIC_PRINCIPLE = "GetSpecificPrincipleIntent"
    MORE = "MoreIntent"
    NEXT = "AMAZON.NextIntent"
    YES = "AMAZON.YesIntent"
    NO = "AMAZON.NoIntent"
    HELP = "AMAZON.HelpIntent"
    CANCEL = "AMAZON.CancelIntent"
    STOP = "AMAZON.StopIntent"
    FALLBACK = "AMAZON.FallbackIntent"


PRINCIPLE_SLOT = "principle"


__all__ = ["RequestType", "IntentName", "PRINCIPLE_SLOT"]
