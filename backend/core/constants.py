"""Constants and enums for the template ingestion pipeline."""

from enum import Enum


class SkipReason(str, Enum):
    """Why a candidate file was not converted into a template record."""

    NOT_A_WORKFLOW = "not_a_workflow"
    TOO_LARGE = "too_large"
    BAD_JSON = "bad_json"
    EMPTY_NAME = "empty_name"


class Complexity(str, Enum):
    """Template complexity tier, derived from node count."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class Platform(str, Enum):
    """Automation platform a template targets."""

    N8N = "n8n"
    MAKE = "make"
    ZAPIER = "zapier"


# Display names used in generated sentences
PLATFORM_DISPLAY_NAMES = {
    Platform.N8N.value: "n8n",
    Platform.MAKE.value: "Make.com",
    Platform.ZAPIER.value: "Zapier",
}

DEFAULT_TRIGGER_TYPE = "Webhook"
DEFAULT_CATEGORY = "General Automation"
MAX_NAME_LENGTH = 200
