"""Node-type signal → business category classification."""

import re
from typing import Iterable

from core.constants import DEFAULT_CATEGORY

# Evaluated in order against the whole lower-cased signal; first match wins.
# Patterns match unanchored substrings ("ai" also hits "mailchimp"), so
# table order decides overlapping cases.
CATEGORY_RULES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"hubspot|salesforce|pipedrive|crm"), "Sales & CRM"),
    (re.compile(r"openai|langchain|anthropic|chatgpt|gpt|llm|ai"), "AI & Automation"),
    (re.compile(r"github|gitlab|jira|jenkins|bitbucket|sonar"), "Development"),
    (re.compile(r"bamboohr|gusto|workday|bamboo"), "HR & Recruiting"),
    (re.compile(r"stripe|quickbooks|xero|invoic|payment|paypal"), "Finance"),
    (re.compile(r"shopify|woocommerce|magento|ecommerce|bigcommerce"), "E-Commerce"),
    (re.compile(r"googledrive|dropbox|onedrive|s3|ftp|storage"), "File Management"),
    (re.compile(r"mailchimp|sendgrid|facebook|instagram|twitter|linkedin"), "Marketing"),
    (re.compile(r"zendesk|intercom|freshdesk|freshservice|support"), "Customer Support"),
    (re.compile(r"slack|discord|telegram|teams|whatsapp"), "Communication"),
    (re.compile(r"postgres|mysql|mongodb|redis|database|sqlite"), "Data"),
    (re.compile(r"cron|schedule|report|analytics"), "Reporting"),
)


def determine_category(node_types: Iterable[str]) -> str:
    """Exactly one category for a node-type signal; DEFAULT_CATEGORY if nothing matches."""
    joined = " ".join(node_types).lower()
    for pattern, category in CATEGORY_RULES:
        if pattern.search(joined):
            return category
    return DEFAULT_CATEGORY
