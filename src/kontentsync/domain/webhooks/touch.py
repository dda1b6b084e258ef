"""Mark nodes as still valid for the current build pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import Logger, getLogger
from typing import TYPE_CHECKING

from kontentsync.domain.model import TAXONOMY_NODE_TYPE, TYPE_NODE_TYPE

if TYPE_CHECKING:
    from collections.abc import Iterable

    from kontentsync.domain.model import NodeId
    from kontentsync.domain.ports import NodeStore

_log = getLogger(__name__)


@dataclass(slots=True)
class TouchPropagator:
    """Touch processed item nodes, plus all taxonomy/type nodes when included.

    Taxonomies and type definitions are not versioned per change event, so
    every stored one is touched regardless of ``processed_ids``.
    """

    store: NodeStore
    item_types: tuple[str, ...] = ()
    include_taxonomies: bool = False
    include_types: bool = False
    log: Logger = field(default=_log)

    def __call__(self, processed_ids: Iterable[NodeId]) -> tuple[NodeId, ...]:
        processed = set(processed_ids)
        touched: dict[NodeId, None] = {}

        for item_type in self.item_types:
            for node in self.store.get_all_by_type(item_type):
                if node.id in processed:
                    touched[node.id] = None

        unconditional: list[str] = []
        if self.include_taxonomies:
            unconditional.append(TAXONOMY_NODE_TYPE)
        if self.include_types:
            unconditional.append(TYPE_NODE_TYPE)
        for node_type in unconditional:
            touched.update(dict.fromkeys(node.id for node in self.store.get_all_by_type(node_type)))

        for node_id in touched:
            self.store.touch(node_id)
        self.log.debug("Touched %d node(s)", len(touched))
        return tuple(touched)
