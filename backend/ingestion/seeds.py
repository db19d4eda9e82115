"""
Hand-authored seed templates for platforms without a public corpus.

Make.com scenarios and Zapier zaps are defined here as fixtures and go
through the same record shape, complexity rule and batch loader as the
ingested n8n corpus. Each seed set owns its own source key, so reseeding
replaces only that set.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Optional

import structlog

from core.constants import Platform
from core.exceptions import StoreError
from ingestion.assembler import TemplateRecord
from ingestion.classifiers.complexity import determine_complexity
from ingestion.counters import RunCounters, RunReport
from ingestion.loader import BatchLoader
from services.template_service import TemplateStore

logger = structlog.get_logger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+", re.IGNORECASE)


@dataclass
class SeedTemplate:
    """One fixed example template.

    `steps` holds platform-native step objects: Make.com modules or
    Zapier steps.
    """

    name: str
    category: str
    description: str
    tags: list[str]
    trigger_type: str
    steps: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class SeedSet:
    """A platform's seed templates and their provenance."""

    platform: str
    source: str
    source_repo: str
    templates: tuple[SeedTemplate, ...]


def make_module(module_id: int, module: str, x: int, mapper: Optional[dict] = None) -> dict[str, Any]:
    """Make.com scenario module laid out on a single row of the designer."""
    return {
        "id": module_id,
        "module": module,
        "version": 1,
        "parameters": {},
        "mapper": mapper or {},
        "metadata": {"designer": {"x": x, "y": 0}},
    }


def zap_step(step_type: str, app: str, event: str, params: Optional[dict] = None) -> dict[str, Any]:
    """Zapier step: a trigger, filter, action or path."""
    return {"type": step_type, "app": app, "event": event, "params": params or {}}


def seed_filename(platform: str, template: SeedTemplate) -> str:
    slug = _NON_ALNUM.sub("_", template.name).lower()
    return f"{platform}/{template.category}/{slug}.json"


def seed_json_template(platform: str, template: SeedTemplate) -> dict[str, Any]:
    if platform == Platform.MAKE.value:
        return {
            "name": template.name,
            "flow": template.steps,
            "metadata": {
                "instant": template.trigger_type == "Webhook",
                "version": 1,
                "scenario": {"roundtrips": 1, "maxErrors": 3, "autoCommit": True},
            },
        }
    return {
        "title": template.name,
        "description": template.description,
        "steps": template.steps,
    }


def build_seed_records(seed_set: SeedSet) -> list[TemplateRecord]:
    """Turn a seed set into template records."""
    records = []
    for template in seed_set.templates:
        node_count = len(template.steps)
        records.append(TemplateRecord(
            name=template.name,
            platform=seed_set.platform,
            category=template.category,
            description=template.description,
            node_count=node_count,
            complexity=determine_complexity(node_count).value,
            trigger_type=template.trigger_type,
            source=seed_set.source,
            source_repo=seed_set.source_repo,
            source_filename=seed_filename(seed_set.platform, template),
            tags=list(template.tags),
            json_template=seed_json_template(seed_set.platform, template),
        ))
    return records


async def run_seed(
    store: TemplateStore,
    seed_set: SeedSet,
    batch_size: int = 50,
    batch_delay: float = 0.0,
) -> RunReport:
    """Replace a seed set's rows in the store."""
    records = build_seed_records(seed_set)
    counters = RunCounters(files_scanned=len(records), built=len(records))

    loader = BatchLoader(store, batch_size=batch_size, batch_delay=batch_delay)
    counters.cleared = await loader.clear([seed_set.source])
    await loader.write(records, counters)

    try:
        total = await store.count_by_platform(seed_set.platform)
    except StoreError as e:
        logger.warning("Could not count platform templates", platform=seed_set.platform, error=e.message)
        total = None

    logger.info(
        "Seeded templates",
        platform=seed_set.platform,
        inserted=counters.inserted,
        built=counters.built,
        batch_errors=counters.batch_errors,
        total_for_platform=total,
    )
    return RunReport.from_records(counters, records, total_in_store=total)


# ═══════════════════════════════════════════════════════════════════
# MAKE.COM
# ═══════════════════════════════════════════════════════════════════

MAKE_TEMPLATES = (
    SeedTemplate(
        name="New HubSpot Contact → Pipedrive Deal + Slack Alert",
        category="Sales & CRM",
        description="When a new contact is created in HubSpot, automatically create a corresponding deal in Pipedrive and notify your sales team in Slack.",
        tags=["HubSpot", "Pipedrive", "Slack"],
        trigger_type="Event",
        steps=[
            make_module(1, "hubspot-crm:watchContacts", 0),
            make_module(2, "pipedrive:createDeal", 300, {"title": "{{1.firstname}} {{1.lastname}} - New Lead", "value": "0"}),
            make_module(3, "slack:createMessage", 600, {"channel": "#sales", "text": "New HubSpot lead: {{1.firstname}} {{1.lastname}} ({{1.email}})"}),
        ],
    ),
    SeedTemplate(
        name="Pipedrive Deal Won → Google Sheets Log + Email",
        category="Sales & CRM",
        description="Log every won deal in a Google Sheets CRM tracker and send a congratulatory email to the deal owner automatically.",
        tags=["Pipedrive", "Google Sheets", "Gmail"],
        trigger_type="Event",
        steps=[
            make_module(1, "pipedrive:watchDeals", 0),
            make_module(2, "builtin:BasicFilter", 300, {"condition": '{{1.status}} = "won"'}),
            make_module(3, "google-sheets:addRow", 600, {"spreadsheetId": "{{spreadsheetId}}", "values": ["{{1.title}}", "{{1.value}}", "{{1.owner_name}}"]}),
            make_module(4, "gmail:sendEmail", 900, {"to": "{{1.owner_email}}", "subject": "Deal Won: {{1.title}}"}),
        ],
    ),
    SeedTemplate(
        name="Typeform Lead → HubSpot Contact + Pipedrive Deal",
        category="Sales & CRM",
        description="Capture Typeform form submissions and instantly create a HubSpot contact and a Pipedrive deal to start your sales process.",
        tags=["Typeform", "HubSpot", "Pipedrive"],
        trigger_type="Webhook",
        steps=[
            make_module(1, "typeform:watchResponses", 0),
            make_module(2, "hubspot-crm:createContact", 300, {"email": "{{1.answers.email}}", "firstname": "{{1.answers.name}}"}),
            make_module(3, "pipedrive:createDeal", 600, {"title": "{{1.answers.company}} - Inbound Lead", "person_id": "{{2.id}}"}),
        ],
    ),
    SeedTemplate(
        name="Data Backup → Google Sheets → Google Drive",
        category="General Automation",
        description="Run weekly automated backups of important Google Sheets data to Google Drive, ensuring data safety with versioned backup files.",
        tags=["Google Sheets", "Google Drive"],
        trigger_type="Schedule",
        steps=[
            make_module(1, "builtin:BasicScheduler", 0, {"schedule": "0 2 * * 0"}),
            make_module(2, "google-sheets:getRows", 300, {"spreadsheetId": "{{dataSheetId}}"}),
            make_module(3, "google-drive:uploadFile", 600, {"parents": ["{{backupFolderId}}"], "content": "{{json(2.rows)}}"}),
            make_module(4, "slack:createMessage", 900, {"channel": "#ops", "text": "Weekly backup completed: {{3.name}}"}),
        ],
    ),
)

# ═══════════════════════════════════════════════════════════════════
# ZAPIER
# ═══════════════════════════════════════════════════════════════════

ZAPIER_TEMPLATES = (
    SeedTemplate(
        name="New Salesforce Lead → Slack Notification + Gmail",
        category="Sales & CRM",
        description="Instantly notify your sales team in Slack when a new Salesforce lead is created and send the lead an automated welcome email.",
        tags=["Salesforce", "Slack", "Gmail"],
        trigger_type="Event",
        steps=[
            zap_step("trigger", "Salesforce", "New Lead"),
            zap_step("action", "Slack", "Send Channel Message", {"channel": "#sales", "message": "New lead: {{lead_name}} from {{company}}"}),
            zap_step("action", "Gmail", "Send Email", {"to": "{{email}}", "subject": "Welcome! Someone from our team will be in touch"}),
        ],
    ),
    SeedTemplate(
        name="HubSpot Deal Stage Changed → Slack + Google Sheets",
        category="Sales & CRM",
        description="Track every HubSpot deal stage change in real time by logging to Google Sheets and alerting your sales team in Slack.",
        tags=["HubSpot", "Slack", "Google Sheets"],
        trigger_type="Event",
        steps=[
            zap_step("trigger", "HubSpot", "Deal Stage Changed"),
            zap_step("action", "Google Sheets", "Create Spreadsheet Row", {"spreadsheet": "CRM Pipeline", "deal": "{{deal_name}}", "stage": "{{new_stage}}"}),
            zap_step("action", "Slack", "Send Channel Message", {"channel": "#sales", "message": "Deal moved: {{deal_name}} → {{new_stage}}"}),
        ],
    ),
    SeedTemplate(
        name="Typeform Lead → Pipedrive Deal + Welcome Email",
        category="Sales & CRM",
        description="Convert Typeform lead generation form submissions into Pipedrive deals automatically and send an immediate welcome email to each prospect.",
        tags=["Typeform", "Pipedrive", "Gmail"],
        trigger_type="Webhook",
        steps=[
            zap_step("trigger", "Typeform", "New Entry"),
            zap_step("action", "Pipedrive", "Create Person", {"name": "{{name_answer}}", "email": "{{email_answer}}"}),
            zap_step("action", "Pipedrive", "Create Deal", {"title": "{{company_answer}} - Inbound Lead", "person_id": "{{person_id}}"}),
            zap_step("action", "Gmail", "Send Email", {"to": "{{email_answer}}", "subject": "Thank you for reaching out!"}),
        ],
    ),
    SeedTemplate(
        name="Weekly Data Backup → Google Drive + Slack",
        category="General Automation",
        description="Run weekly automated data backups from Google Sheets to Google Drive and notify the team in Slack that the backup completed successfully.",
        tags=["Google Sheets", "Google Drive", "Slack"],
        trigger_type="Schedule",
        steps=[
            zap_step("trigger", "Schedule by Zapier", "Every Week"),
            zap_step("action", "Google Sheets", "Get Many Spreadsheet Rows"),
            zap_step("action", "Google Drive", "Upload File", {"name": "backup_{{today}}.json", "folder": "{{backup_folder_id}}"}),
            zap_step("action", "Slack", "Send Channel Message", {"channel": "#ops", "message": "Weekly backup complete: {{row_count}} rows"}),
        ],
    ),
)

MAKE_SEED_SET = SeedSet(
    platform=Platform.MAKE.value,
    source="seed:make-templates",
    source_repo="seed:manageai/make-templates",
    templates=MAKE_TEMPLATES,
)

ZAPIER_SEED_SET = SeedSet(
    platform=Platform.ZAPIER.value,
    source="seed:zapier-templates",
    source_repo="seed:manageai/zapier-templates",
    templates=ZAPIER_TEMPLATES,
)

SEED_SETS = (MAKE_SEED_SET, ZAPIER_SEED_SET)
