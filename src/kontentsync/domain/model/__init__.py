"""Domain model for cached Kontent content."""

from __future__ import annotations

from .content import (
    COMPONENT_ID_MARKER,
    RICH_TEXT_ELEMENT_TYPE,
    ContentElement,
    ContentItemSnapshot,
    ItemSystem,
    ModularContentMap,
    is_component_id,
    rich_text_references,
)
from .nodes import (
    ITEM_NODE_TYPE_PREFIX,
    TAXONOMY_NODE_TYPE,
    TYPE_NODE_TYPE,
    LocalNode,
    NodeId,
    is_item_node_type,
    item_node_id,
    item_node_type,
)

__all__ = [
    "COMPONENT_ID_MARKER",
    "ITEM_NODE_TYPE_PREFIX",
    "RICH_TEXT_ELEMENT_TYPE",
    "TAXONOMY_NODE_TYPE",
    "TYPE_NODE_TYPE",
    "ContentElement",
    "ContentItemSnapshot",
    "ItemSystem",
    "LocalNode",
    "ModularContentMap",
    "NodeId",
    "is_component_id",
    "is_item_node_type",
    "item_node_id",
    "item_node_type",
    "rich_text_references",
]
