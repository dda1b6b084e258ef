"""SQLAlchemy adapter package for the kontentsync node store."""

from __future__ import annotations

from .mappings import content_node_table, create_all_tables, metadata
from .repositories import SqlAlchemyNodeStore
from .unit_of_work import SqlAlchemyNodeUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyNodeStore",
    "SqlAlchemyNodeUnitOfWork",
    "content_node_table",
    "create_all_tables",
    "metadata",
    "shutdown",
    "startup",
]
