"""Shared pytest fixtures for the template ingestion test suite.

Provides:
- In-memory async SQLite database (no PostgreSQL needed for tests)
- AsyncSession and TemplateService wired to it
- An in-memory TemplateStore that can be told to fail
- Helpers for writing workflow corpora under tmp_path
"""

import json
import os
from pathlib import Path
from typing import Any, AsyncGenerator, Optional, Sequence

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

# Override settings BEFORE any app imports
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOG_FORMAT", "text")

from core.exceptions import StoreError  # noqa: E402
from db.base import Base  # noqa: E402
from db.database import create_session_factory  # noqa: E402
from services.template_service import TemplateService, TemplateStore  # noqa: E402


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def db_engine():
    """Create a fresh in-memory engine per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    # Import all models so Base.metadata knows about them
    import db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a DB session bound to the test engine."""
    async with create_session_factory(db_engine)() as session:
        yield session


@pytest_asyncio.fixture
async def template_service(db_session) -> TemplateService:
    return TemplateService(db_session)


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------

class InMemoryTemplateStore(TemplateStore):
    """TemplateStore keeping rows in a list.

    Set `fail_batches` to 1-based insert call numbers that should fail,
    and `fail_delete_sources` / `fail_count` to simulate other outages.
    """

    def __init__(self):
        self.rows: list[dict[str, Any]] = []
        self.insert_calls = 0
        self.fail_batches: set[int] = set()
        self.fail_delete_sources: set[str] = set()
        self.fail_count = False

    async def delete_by_source(self, source: str) -> int:
        if source in self.fail_delete_sources:
            raise StoreError(f"delete refused for {source}", operation="delete")
        before = len(self.rows)
        self.rows = [row for row in self.rows if row["source"] != source]
        return before - len(self.rows)

    async def insert_batch(self, rows: Sequence[dict[str, Any]]) -> int:
        self.insert_calls += 1
        if self.insert_calls in self.fail_batches:
            raise StoreError(f"batch {self.insert_calls} rejected", operation="insert")
        self.rows.extend(dict(row) for row in rows)
        return len(rows)

    async def count(self) -> int:
        if self.fail_count:
            raise StoreError("count unavailable", operation="count")
        return len(self.rows)

    async def count_by_platform(self, platform: str) -> int:
        if self.fail_count:
            raise StoreError("count unavailable", operation="count")
        return sum(1 for row in self.rows if row["platform"] == platform)


@pytest.fixture
def memory_store() -> InMemoryTemplateStore:
    return InMemoryTemplateStore()


# ---------------------------------------------------------------------------
# Corpus helpers
# ---------------------------------------------------------------------------

def make_workflow(node_types: Sequence[str], name: Optional[str] = None) -> dict:
    """Minimal n8n workflow document with one node per type."""
    workflow: dict[str, Any] = {
        "nodes": [
            {"name": f"Node {i}", "type": node_type, "parameters": {}}
            for i, node_type in enumerate(node_types, start=1)
        ],
        "connections": {},
    }
    if name is not None:
        workflow["name"] = name
    return workflow


def write_json(path: Path, value: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(value), encoding="utf-8")
    return path


@pytest.fixture
def corpus(tmp_path) -> Path:
    """A small corpus exercising every skip reason."""
    root = tmp_path / "corpus"
    write_json(root / "crm" / "6102_Slack_Lead_Notify.json", make_workflow(
        ["n8n-nodes-base.hubspotTrigger", "n8n-nodes-base.slack"],
    ))
    write_json(root / "ai" / "0001_Summarize.json", make_workflow(
        ["n8n-nodes-base.webhook", "@n8n/n8n-nodes-langchain.agent", "n8n-nodes-base.gmail", "n8n-nodes-base.set"],
        name="Summarize inbound mail",
    ))
    write_json(root / "ops" / "nightly.json", make_workflow(
        ["n8n-nodes-base.cron", "n8n-nodes-base.postgres"],
        name="Nightly export",
    ))
    write_json(root / "package.json", {"name": "corpus", "nodes": [{"type": "x"}]})
    write_json(root / "ops" / "empty.json", {"name": "Empty", "nodes": []})
    (root / "ops" / "broken.json").write_text("{not json", encoding="utf-8")
    write_json(root / "ops" / "123_.json", make_workflow(["n8n-nodes-base.set"]))
    write_json(root / ".git" / "hidden.json", make_workflow(["n8n-nodes-base.slack"], name="Hidden"))
    (root / "README.md").write_text("# corpus\n", encoding="utf-8")
    return root
