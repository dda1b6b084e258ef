"""Ports for fetching content from the remote delivery API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from kontentsync.domain.model import ContentItemSnapshot

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(slots=True, frozen=True)
class ContentItemFetchResult:
    """Resolved item plus the linked/component items delivered alongside it.

    ``item`` is ``None`` when no content resolves for the requested language,
    even after the remote fallback rules are applied. That is a valid result,
    not an error.
    """

    item: ContentItemSnapshot | None
    modular_content: Mapping[str, ContentItemSnapshot] = field(
        default_factory=dict[str, ContentItemSnapshot]
    )


@runtime_checkable
class ContentItemFetcher(Protocol):
    """Callable port resolving one item in one language."""

    def __call__(
        self,
        item_id: str,
        language: str,
        *,
        include_components: bool = True,
    ) -> ContentItemFetchResult: ...


__all__ = ["ContentItemFetchResult", "ContentItemFetcher"]
