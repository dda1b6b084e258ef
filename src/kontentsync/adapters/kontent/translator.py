"""Translate Kontent delivery payloads into content snapshots."""

from __future__ import annotations

from collections.abc import Mapping
from logging import getLogger
from typing import cast

from kontentsync.domain.model import ContentElement, ContentItemSnapshot, ItemSystem
from kontentsync.domain.ports.fetching import ContentItemFetchResult

from .schema import ElementPayload, ItemListingResponse, ItemPayload, ItemPayloadInput

log = getLogger(__name__)


def _ensure_item_payload(raw: ItemPayloadInput) -> ItemPayload:
    if isinstance(raw, ItemPayload):
        return raw
    return ItemPayload.model_validate(raw)


def _to_element(payload: ElementPayload) -> ContentElement:
    return ContentElement(
        type=payload.type,
        name=payload.name,
        value=payload.value,
        modular_content=tuple(payload.modular_content),
    )


def parse_content_item(raw: ItemPayloadInput) -> ContentItemSnapshot:
    """Build a snapshot; mapping input is kept verbatim as the raw payload."""

    payload = _ensure_item_payload(raw)
    system = payload.system
    raw_payload = (
        dict(cast(Mapping[str, object], raw))
        if isinstance(raw, Mapping)
        else payload.model_dump(mode="json")
    )
    return ContentItemSnapshot(
        system=ItemSystem(
            id=system.id,
            codename=system.codename,
            language=system.language,
            type=system.type,
            name=system.name,
            collection=system.collection,
            last_modified=system.last_modified,
        ),
        elements={
            codename: _to_element(element) for codename, element in payload.elements.items()
        },
        raw=raw_payload,
    )


def parse_item_listing(
    payload: Mapping[str, object],
    *,
    include_components: bool = True,
) -> ContentItemFetchResult:
    """Translate an ``/items`` listing filtered to one item id.

    An empty ``items`` list means nothing resolves for the requested language.
    """

    listing = ItemListingResponse.model_validate(payload)
    raw_items = cast(list[Mapping[str, object]], payload.get("items", []))
    raw_modular = cast(Mapping[str, Mapping[str, object]], payload.get("modular_content") or {})

    if not listing.items:
        return ContentItemFetchResult(item=None)
    if len(listing.items) > 1:
        log.warning("Expected one Kontent item, listing returned %d", len(listing.items))

    modular_content: dict[str, ContentItemSnapshot] = {}
    for codename in listing.modular_content:
        snapshot = parse_content_item(raw_modular[codename])
        if not include_components and snapshot.is_component:
            continue
        modular_content[codename] = snapshot

    return ContentItemFetchResult(
        item=parse_content_item(raw_items[0]),
        modular_content=modular_content,
    )
