"""Display name and one-sentence description for a template."""

import re
from typing import Optional, Sequence

from core.constants import MAX_NAME_LENGTH, PLATFORM_DISPLAY_NAMES, Platform

# Tags that do not name a recognizable third-party app
INFRASTRUCTURE_TAGS = frozenset({"Webhook", "HTTP/API", "Scheduled", "Manual", "Database", "FTP"})

MAX_DESCRIBED_APPS = 3

_LEADING_ID = re.compile(r"^[0-9]+[_\s-]*")
_UNDERSCORES = re.compile(r"_+")
_WHITESPACE = re.compile(r"\s+")


def name_from_filename(filename: str) -> str:
    """'6102_Slack_Lead_Notify.json' -> 'Slack Lead Notify'."""
    stem = filename[: -len(".json")] if filename.endswith(".json") else filename
    name = _LEADING_ID.sub("", stem)
    name = _UNDERSCORES.sub(" ", name)
    name = _WHITESPACE.sub(" ", name)
    return name.strip()


def derive_name(declared_name: Optional[str], filename: str) -> str:
    """Template name: the declared name if non-blank, else one derived from the filename.

    Returns an empty string when neither yields anything; callers reject
    such documents.
    """
    name = declared_name.strip() if declared_name else ""
    if not name:
        name = name_from_filename(filename)
    return name[:MAX_NAME_LENGTH]


def join_app_names(apps: Sequence[str]) -> str:
    if len(apps) == 1:
        return apps[0]
    if len(apps) == 2:
        return f"{apps[0]} and {apps[1]}"
    return f"{', '.join(apps[:-1])}, and {apps[-1]}"


def generate_description(
    tags: Sequence[str],
    node_count: int,
    platform: str = Platform.N8N.value,
) -> str:
    """Templated sentence naming up to three connected apps.

    Format: "Connects App1, App2, and App3 with N steps"
    """
    apps = list(dict.fromkeys(t for t in tags if t not in INFRASTRUCTURE_TAGS))

    if not apps:
        platform_name = PLATFORM_DISPLAY_NAMES.get(platform, platform)
        return f"Automates a {node_count}-step workflow using {platform_name}."

    steps = "step" if node_count == 1 else "steps"
    return f"Connects {join_app_names(apps[:MAX_DESCRIBED_APPS])} with {node_count} {steps}"
