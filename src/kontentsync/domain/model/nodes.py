"""Locally stored graph nodes and their deterministic identities."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from .content import ContentElement, ItemSystem, is_component_id, rich_text_references

if TYPE_CHECKING:
    from collections.abc import Mapping

ITEM_NODE_TYPE_PREFIX: Final[str] = "kontent_item"
TAXONOMY_NODE_TYPE: Final[str] = "kontent_taxonomy"
TYPE_NODE_TYPE: Final[str] = "kontent_type"

NODE_ID_NAMESPACE: Final[uuid.UUID] = uuid.UUID("5c3b8e4e-0c1f-5c9a-9a4e-6f0d1c2b7a11")

type NodeId = uuid.UUID


def item_node_id(item_id: str, language: str) -> NodeId:
    """Derive the node id for ``item_id`` in the *requested* language slot.

    Fallback may serve another language's content under this id, so the id must
    never be computed from the snapshot's resolved ``system.language``.
    """

    return uuid.uuid5(NODE_ID_NAMESPACE, f"{ITEM_NODE_TYPE_PREFIX}_{language}_{item_id}")


def item_node_type(content_type: str) -> str:
    return f"{ITEM_NODE_TYPE_PREFIX}_{content_type}"


def is_item_node_type(node_type: str) -> bool:
    return node_type.startswith(f"{ITEM_NODE_TYPE_PREFIX}_")


@dataclass(slots=True, frozen=True, kw_only=True)
class LocalNode:
    """Persisted form of a snapshot (or of a taxonomy/type definition).

    ``preferred_language`` records the requested-language slot the node
    occupies; it is ``None`` for nodes that are not content items.
    """

    id: NodeId
    type: str
    system: ItemSystem | None = None
    elements: Mapping[str, ContentElement] = field(default_factory=dict[str, ContentElement])
    preferred_language: str | None = None
    raw: Mapping[str, object] | None = None

    @property
    def codename(self) -> str | None:
        return self.system.codename if self.system else None

    @property
    def is_item(self) -> bool:
        return self.system is not None and is_item_node_type(self.type)

    @property
    def is_component(self) -> bool:
        return self.system is not None and is_component_id(self.system.id)

    def rich_text_references(self) -> tuple[str, ...]:
        return rich_text_references(self.elements.values())
