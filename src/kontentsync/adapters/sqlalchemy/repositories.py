"""Node store backed by a SQLAlchemy session."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, insert, select, update

from kontentsync.adapters.sqlalchemy.mappings import content_node_table
from kontentsync.domain.model import ContentElement, ItemSystem, LocalNode

if TYPE_CHECKING:
    from sqlalchemy import Row
    from sqlalchemy.orm import Session

    from kontentsync.domain.model import NodeId


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _system_document(system: ItemSystem) -> dict[str, object]:
    return {
        "id": system.id,
        "codename": system.codename,
        "language": system.language,
        "type": system.type,
        "name": system.name,
        "collection": system.collection,
        "last_modified": system.last_modified.isoformat() if system.last_modified else None,
    }


def _system_from_document(document: Mapping[str, Any]) -> ItemSystem:
    last_modified = document.get("last_modified")
    return ItemSystem(
        id=document["id"],
        codename=document["codename"],
        language=document["language"],
        type=document["type"],
        name=document.get("name") or "",
        collection=document.get("collection"),
        last_modified=datetime.fromisoformat(last_modified) if last_modified else None,
    )


def node_to_document(node: LocalNode) -> dict[str, object]:
    return {
        "system": _system_document(node.system) if node.system else None,
        "elements": {
            codename: {
                "type": element.type,
                "name": element.name,
                "value": element.value,
                "modular_content": list(element.modular_content),
            }
            for codename, element in node.elements.items()
        },
        "raw": dict(node.raw) if node.raw is not None else None,
    }


def node_from_row(row: Row[Any]) -> LocalNode:
    document = cast(Mapping[str, Any], row.document)
    system_document = document.get("system")
    elements = cast(Mapping[str, Mapping[str, Any]], document.get("elements") or {})
    return LocalNode(
        id=row.id,
        type=row.type,
        system=_system_from_document(system_document) if system_document else None,
        elements={
            codename: ContentElement(
                type=element["type"],
                name=element.get("name") or "",
                value=element.get("value"),
                modular_content=tuple(element.get("modular_content") or ()),
            )
            for codename, element in elements.items()
        },
        preferred_language=row.preferred_language,
        raw=document.get("raw"),
    )


class SqlAlchemyNodeStore:
    """Persist nodes in the ``content_node`` table.

    ``create`` replaces the row with the same id; ``touch`` stamps
    ``touched_at`` for the downstream stale-node sweep.
    """

    def __init__(self, session: Session, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self.session = session
        self._clock = clock

    def create(self, node: LocalNode) -> None:
        table = content_node_table
        self.session.execute(delete(table).where(table.c.id == node.id))
        self.session.execute(
            insert(table).values(
                id=node.id,
                type=node.type,
                item_id=node.system.id if node.system else None,
                codename=node.codename,
                language=node.system.language if node.system else None,
                preferred_language=node.preferred_language,
                document=node_to_document(node),
                updated_at=self._clock(),
                touched_at=None,
            )
        )

    def delete(self, node: LocalNode) -> None:
        table = content_node_table
        self.session.execute(delete(table).where(table.c.id == node.id))

    def touch(self, node_id: NodeId) -> None:
        table = content_node_table
        self.session.execute(
            update(table).where(table.c.id == node_id).values(touched_at=self._clock())
        )

    def get_by_id(self, node_id: NodeId) -> LocalNode | None:
        table = content_node_table
        row = self.session.execute(select(table).where(table.c.id == node_id)).one_or_none()
        return node_from_row(row) if row is not None else None

    def get_all_by_type(self, node_type: str) -> list[LocalNode]:
        table = content_node_table
        stmt = (
            select(table)
            .where(table.c.type == node_type)
            .order_by(table.c.codename, table.c.preferred_language)
        )
        return [node_from_row(row) for row in self.session.execute(stmt)]

    def get_all(self) -> list[LocalNode]:
        table = content_node_table
        stmt = select(table).order_by(table.c.type, table.c.codename, table.c.preferred_language)
        return [node_from_row(row) for row in self.session.execute(stmt)]

    def touched_at(self, node_id: NodeId) -> datetime | None:
        table = content_node_table
        stmt = select(table.c.touched_at).where(table.c.id == node_id)
        return self.session.execute(stmt).scalar_one_or_none()


if TYPE_CHECKING:
    from kontentsync.domain.ports import NodeStore

    def _store_check(session: Session) -> NodeStore:
        return SqlAlchemyNodeStore(session)
