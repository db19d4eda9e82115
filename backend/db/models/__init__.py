"""Database models for the template store.

This module imports all models to ensure they are registered
with SQLAlchemy's declarative base.
"""

from db.models.template import Template

__all__ = [
    "Template",
]
