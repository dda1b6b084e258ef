"""Per-language reconciliation of one content item.

Every configured language is re-resolved on every relevant event: the remote
fallback rules mean a change in one language's publication state can change
what resolves for another. Languages are processed sequentially in configured
order; node ids are keyed by ``(item id, requested language)`` so the result
does not depend on that order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import Logger, getLogger
from typing import TYPE_CHECKING

from kontentsync.domain.model import item_node_id

from .classify import ReconcileAction

if TYPE_CHECKING:
    from kontentsync.domain.model import NodeId
    from kontentsync.domain.ports import ContentItemFetcher, ContentItemFetchResult, NodeStore

    from .cascade import ComponentCascadeResolver
    from .envelope import ItemRef, SupportedEnvelope
    from .materialize import NodeMaterializer

_log = getLogger(__name__)


@dataclass(slots=True)
class LanguageFanoutReconciler:
    fetcher: ContentItemFetcher
    store: NodeStore
    materialize: NodeMaterializer
    cascade: ComponentCascadeResolver
    log: Logger = field(default=_log)

    def __call__(self, envelope: SupportedEnvelope) -> tuple[NodeId, ...]:
        """Reconcile every configured language; return created/updated/deleted ids."""

        action = envelope.action
        item = envelope.item
        if action is ReconcileAction.IGNORE:
            return ()
        if item.language not in envelope.languages:
            self.log.debug("Cant find specified language %s in configuration", item.language)
            return ()

        processed: dict[NodeId, None] = {}
        for language in envelope.languages:
            result = self.fetcher(item.id, language, include_components=True)
            if action is ReconcileAction.UPSERT:
                node_ids = self._upsert(item, language, result)
            else:
                node_ids = self._delete(item, language, result)
            processed.update(dict.fromkeys(node_ids))
        return tuple(processed)

    def _upsert(
        self,
        item: ItemRef,
        language: str,
        result: ContentItemFetchResult,
    ) -> tuple[NodeId, ...]:
        if result.item is None:
            self.log.debug(
                "Kontent item (%s) language variant (%s) not found on the delivery API for update",
                item.id,
                language,
            )
            return ()
        return self.materialize(result.item, result.modular_content, language=language)

    def _delete(
        self,
        item: ItemRef,
        language: str,
        result: ContentItemFetchResult,
    ) -> tuple[NodeId, ...]:
        if result.item is not None:
            # a fallback chain still resolves content for this language
            self.log.debug(
                "Kontent item (%s) still resolves for %s via %s, updating instead of deleting",
                item.id,
                language,
                result.item.system.language,
            )
            return self.materialize(result.item, result.modular_content, language=language)

        node = self.store.get_by_id(item_node_id(item.id, language))
        if node is None:
            self.log.debug("No local node for Kontent item (%s) in %s to delete", item.id, language)
            return ()

        removed = self.cascade(node)
        self.store.delete(node)
        self.log.debug("Deleted Kontent item (%s) language variant (%s)", item.id, language)
        return (*removed, node.id)
