"""Public interface for the Kontent delivery adapter."""

from __future__ import annotations

from .client import KontentAPIError, KontentDeliveryFetcher
from .schema import ItemListingResponse, ItemPayload, ItemPayloadInput
from .translator import parse_content_item, parse_item_listing

__all__ = [
    "ItemListingResponse",
    "ItemPayload",
    "ItemPayloadInput",
    "KontentAPIError",
    "KontentDeliveryFetcher",
    "parse_content_item",
    "parse_item_listing",
]
