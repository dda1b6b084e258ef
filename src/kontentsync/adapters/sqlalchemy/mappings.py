"""SQLAlchemy table metadata for the node store."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    Index,
    MetaData,
    String,
    Table,
    TypeDecorator,
    Uuid,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "pk": "pk_%(table_name)s",
    }
)

content_node_table = Table(
    "content_node",
    metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("type", String(255), nullable=False),
    Column("item_id", String(64), nullable=True),
    Column("codename", String(255), nullable=True),
    Column("language", String(64), nullable=True),
    Column("preferred_language", String(64), nullable=True),
    # system, elements and (optionally) the raw delivery payload
    Column("document", JSON, nullable=False),
    Column("updated_at", UTCDateTime, nullable=False),
    Column("touched_at", UTCDateTime, nullable=True),
    Index("ix_content_node_type", "type"),
    Index("ix_content_node_codename_language", "codename", "preferred_language"),
)


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine, checkfirst=True)
