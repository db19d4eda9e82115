"""Entry-point detection and trigger-type labelling.

Three tiers, in order: an explicit pattern rule, a label derived from
the node type itself, and finally the hard default.
"""

import re
from typing import Optional, Sequence

from core.constants import DEFAULT_TRIGGER_TYPE
from ingestion.documents import WorkflowNode

# Substrings (case-sensitive) that mark an entry node besides "trigger"
TRIGGER_MARKERS: tuple[str, ...] = ("webhook", "cron", "schedule", "manualTrigger")

# Evaluated in order against the entry node type; first match wins.
TRIGGER_RULES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"webhook", re.IGNORECASE), "Webhook"),
    (re.compile(r"scheduleTrigger|cron", re.IGNORECASE), "Scheduled"),
    (re.compile(r"emailRead|imap", re.IGNORECASE), "Email"),
    (re.compile(r"form", re.IGNORECASE), "Form"),
    (re.compile(r"chat|message", re.IGNORECASE), "Message"),
    (re.compile(r"manualTrigger|start", re.IGNORECASE), "Manual"),
)

VENDOR_PREFIXES: tuple[str, ...] = ("n8n-nodes-base.", "@n8n/n8n-nodes-langchain.")

_TRIGGER_SUFFIX = re.compile(r"Trigger$", re.IGNORECASE)


def is_entry_node_type(node_type: str) -> bool:
    if "trigger" in node_type.lower():
        return True
    return any(marker in node_type for marker in TRIGGER_MARKERS)


def find_entry_node(nodes: Sequence[WorkflowNode]) -> Optional[WorkflowNode]:
    """First node, in document order, that looks like the workflow's entry point."""
    for node in nodes:
        if node.type and is_entry_node_type(node.type):
            return node
    return None


def derive_trigger_label(node_type: str) -> str:
    """Label from the type string itself, e.g. 'n8n-nodes-base.slackTrigger' -> 'Slack'."""
    base = node_type
    for prefix in VENDOR_PREFIXES:
        base = base.replace(prefix, "", 1)
    base = _TRIGGER_SUFFIX.sub("", base)
    if not base:
        return DEFAULT_TRIGGER_TYPE
    return base[0].upper() + base[1:]


def classify_trigger_type(node_type: str) -> str:
    for pattern, label in TRIGGER_RULES:
        if pattern.search(node_type):
            return label
    return derive_trigger_label(node_type)


def extract_trigger_type(nodes: Sequence[WorkflowNode]) -> str:
    """Trigger type of a workflow; DEFAULT_TRIGGER_TYPE when no entry node is found."""
    entry = find_entry_node(nodes)
    if entry is None or not entry.type:
        return DEFAULT_TRIGGER_TYPE
    return classify_trigger_type(entry.type)
