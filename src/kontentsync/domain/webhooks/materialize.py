"""Turn fetched snapshots into stored nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import Logger, getLogger
from typing import TYPE_CHECKING

from kontentsync.domain.model import LocalNode, item_node_id, item_node_type

if TYPE_CHECKING:
    from kontentsync.domain.model import ContentItemSnapshot, ModularContentMap, NodeId
    from kontentsync.domain.ports import NodeStore

_log = getLogger(__name__)


def build_item_node(
    snapshot: ContentItemSnapshot,
    *,
    preferred_language: str,
    include_raw_content: bool = False,
) -> LocalNode:
    """Build the node for ``snapshot`` in the ``preferred_language`` slot."""

    return LocalNode(
        id=item_node_id(snapshot.system.id, preferred_language),
        type=item_node_type(snapshot.system.type),
        system=snapshot.system,
        elements=dict(snapshot.elements),
        preferred_language=preferred_language,
        raw=dict(snapshot.raw) if include_raw_content and snapshot.raw is not None else None,
    )


@dataclass(slots=True)
class NodeMaterializer:
    """Create (or recreate) nodes for an item and its modular content."""

    store: NodeStore
    include_raw_content: bool = False
    log: Logger = field(default=_log)

    def __call__(
        self,
        item: ContentItemSnapshot,
        modular_content: ModularContentMap,
        *,
        language: str,
    ) -> tuple[NodeId, ...]:
        created = [self._create(item, language)]
        created.extend(self._create(linked, language) for linked in modular_content.values())
        self.log.debug(
            "Materialized %s (%s served as %s) with %d linked item(s)",
            item.system.codename,
            item.system.language,
            language,
            len(modular_content),
        )
        return tuple(created)

    def _create(self, snapshot: ContentItemSnapshot, language: str) -> NodeId:
        node = build_item_node(
            snapshot,
            preferred_language=language,
            include_raw_content=self.include_raw_content,
        )
        self.store.create(node)
        return node.id
