"""Template model for the workflow template library."""

from typing import Optional

from sqlalchemy import JSON
from sqlalchemy.orm import Mapped, mapped_column

from db.base import BaseModel


class Template(BaseModel):
    """A classified workflow template, one row per ingested document.

    Attributes:
        id: Unique identifier (UUID string)
        name: Display name (at most 200 characters)
        platform: Automation platform (n8n, make, zapier)
        category: Business category, exactly one per template
        description: One-sentence generated description
        node_count: Number of nodes in the workflow
        tags: Integration tags (JSON array)
        json_template: Original workflow document, verbatim
        source: Provenance key; rows are replaced per source on re-ingestion
        source_repo: Repository the document came from
        source_filename: Path relative to the walked corpus root
        trigger_type: Label of the workflow's entry-point trigger
        complexity: Beginner, Intermediate or Advanced
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    __tablename__ = "templates"

    name: Mapped[str] = mapped_column(nullable=False, index=True)
    platform: Mapped[str] = mapped_column(nullable=False, index=True)
    category: Mapped[str] = mapped_column(nullable=False, index=True)
    description: Mapped[str] = mapped_column(nullable=False, default="")
    node_count: Mapped[int] = mapped_column(nullable=False)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    json_template: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    source: Mapped[str] = mapped_column(nullable=False, index=True)
    source_repo: Mapped[str] = mapped_column(nullable=False, default="")
    source_filename: Mapped[str] = mapped_column(nullable=False, default="")
    trigger_type: Mapped[str] = mapped_column(nullable=False)
    complexity: Mapped[str] = mapped_column(nullable=False, index=True)
