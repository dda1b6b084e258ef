"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import ContentItemFetcher, ContentItemFetchResult
from .persistence import NodeStore
from .unit_of_work import NodeUnitOfWork

__all__ = [
    "ContentItemFetchResult",
    "ContentItemFetcher",
    "NodeStore",
    "NodeUnitOfWork",
]
