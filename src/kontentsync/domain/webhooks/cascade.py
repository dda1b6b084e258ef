"""Remove component sub-items orphaned by a deleted node."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import Logger, getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from kontentsync.domain.model import LocalNode, NodeId
    from kontentsync.domain.ports import NodeStore

_log = getLogger(__name__)


@dataclass(slots=True)
class ComponentCascadeResolver:
    """Delete the components referenced from a node's rich-text elements.

    A candidate is matched by codename within the same preferred-language slot
    as the removed node. Only candidates whose id carries the component marker
    are deleted; ordinary linked items are shared and stay in place.
    """

    store: NodeStore
    log: Logger = field(default=_log)

    def __call__(self, node: LocalNode) -> tuple[NodeId, ...]:
        references = node.rich_text_references()
        if not references:
            return ()

        candidates = [candidate for candidate in self.store.get_all() if candidate.is_item]
        removed: dict[NodeId, None] = {}
        for codename in references:
            candidate = _find_candidate(candidates, codename, node.preferred_language)
            if candidate is None or candidate.id in removed:
                continue
            if not candidate.is_component:
                self.log.debug("Keeping linked item %s referenced from %s", codename, node.codename)
                continue
            self.store.delete(candidate)
            removed[candidate.id] = None
            self.log.debug(
                "Removed component %s (%s) of %s",
                codename,
                node.preferred_language,
                node.codename,
            )
        return tuple(removed)


def _find_candidate(
    candidates: Sequence[LocalNode],
    codename: str,
    preferred_language: str | None,
) -> LocalNode | None:
    for candidate in candidates:
        if candidate.codename == codename and candidate.preferred_language == preferred_language:
            return candidate
    return None
