"""Node-type → integration tag classification."""

from typing import Iterable, Optional

# Ordered most-specific-prefix-first: the first matching prefix wins for
# each node type, so AI platform prefixes must precede vendor prefixes
# they overlap with, and the catch-all `aws` prefix comes last.
NODE_TAG_RULES: tuple[tuple[str, str], ...] = (
    # AI / LLM
    ("@n8n/n8n-nodes-langchain", "AI/LLM"),
    ("n8n-nodes-base.openAi", "AI/LLM"),
    ("n8n-nodes-base.anthropic", "AI/LLM"),
    # Communication
    ("n8n-nodes-base.slack", "Slack"),
    ("n8n-nodes-base.discord", "Discord"),
    ("n8n-nodes-base.telegram", "Telegram"),
    ("n8n-nodes-base.microsoftTeams", "Microsoft Teams"),
    ("n8n-nodes-base.whatsApp", "WhatsApp"),
    # Email
    ("n8n-nodes-base.gmail", "Gmail"),
    ("n8n-nodes-base.sendGrid", "Email Marketing"),
    ("n8n-nodes-base.mailchimp", "Email Marketing"),
    ("n8n-nodes-base.microsoftOutlook", "Outlook"),
    ("n8n-nodes-base.emailSend", "Email"),
    ("n8n-nodes-base.emailReadImap", "Email"),
    # CRM
    ("n8n-nodes-base.hubspot", "HubSpot"),
    ("n8n-nodes-base.salesforce", "Salesforce"),
    ("n8n-nodes-base.pipedrive", "Pipedrive"),
    # Productivity
    ("n8n-nodes-base.notion", "Notion"),
    ("n8n-nodes-base.googleSheets", "Google Sheets"),
    ("n8n-nodes-base.airtable", "Airtable"),
    ("n8n-nodes-base.trello", "Project Management"),
    ("n8n-nodes-base.asana", "Project Management"),
    ("n8n-nodes-base.jira", "Jira"),
    ("n8n-nodes-base.googleCalendar", "Google Calendar"),
    # Dev tools
    ("n8n-nodes-base.github", "GitHub"),
    ("n8n-nodes-base.gitlab", "GitLab"),
    # Files / Storage
    ("n8n-nodes-base.googleDrive", "Google Drive"),
    ("n8n-nodes-base.dropbox", "Dropbox"),
    ("n8n-nodes-base.microsoftOneDrive", "OneDrive"),
    ("n8n-nodes-base.awsS3", "AWS S3"),
    ("n8n-nodes-base.ftp", "FTP"),
    # HTTP / Webhooks
    ("n8n-nodes-base.webhook", "Webhook"),
    ("n8n-nodes-base.httpRequest", "HTTP/API"),
    # Scheduling
    ("n8n-nodes-base.scheduleTrigger", "Scheduled"),
    ("n8n-nodes-base.cron", "Scheduled"),
    # Social
    ("n8n-nodes-base.twitter", "Twitter/X"),
    ("n8n-nodes-base.linkedin", "LinkedIn"),
    ("n8n-nodes-base.instagram", "Instagram"),
    ("n8n-nodes-base.facebook", "Facebook"),
    # Finance / E-commerce
    ("n8n-nodes-base.stripe", "Stripe"),
    ("n8n-nodes-base.quickbooks", "QuickBooks"),
    ("n8n-nodes-base.xero", "Xero"),
    ("n8n-nodes-base.shopify", "Shopify"),
    ("n8n-nodes-base.woocommerce", "WooCommerce"),
    # HR
    ("n8n-nodes-base.bambooHr", "BambooHR"),
    # Database
    ("n8n-nodes-base.postgres", "Database"),
    ("n8n-nodes-base.mysql", "Database"),
    ("n8n-nodes-base.mongodb", "Database"),
    ("n8n-nodes-base.redis", "Database"),
    # Support
    ("n8n-nodes-base.zendesk", "Zendesk"),
    ("n8n-nodes-base.intercom", "Intercom"),
    ("n8n-nodes-base.freshdesk", "Freshdesk"),
    # Communication (extras)
    ("n8n-nodes-base.twilio", "SMS"),
    ("n8n-nodes-base.zoom", "Zoom"),
    # Misc
    ("n8n-nodes-base.wordpress", "WordPress"),
    ("n8n-nodes-base.aws", "AWS"),
)


def tag_for_node_type(node_type: str) -> Optional[str]:
    """Tag of the first rule whose prefix matches, or None."""
    for prefix, tag in NODE_TAG_RULES:
        if node_type.startswith(prefix):
            return tag
    return None


def extract_tags(node_types: Iterable[str]) -> list[str]:
    """Deduplicated integration tags, in first-seen order.

    Node types matching no rule contribute nothing.
    """
    seen: dict[str, None] = {}
    for node_type in node_types:
        tag = tag_for_node_type(node_type)
        if tag is not None:
            seen.setdefault(tag)
    return list(seen)
