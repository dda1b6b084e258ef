"""Content item snapshots as resolved by the remote delivery API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from datetime import datetime

RICH_TEXT_ELEMENT_TYPE: Final[str] = "rich_text"

# xxxxxxxx-xxxx-01xx-xxxx-xxxxxxxxxxxx
COMPONENT_ID_MARKER: Final[str] = "01"
_COMPONENT_MARKER_SLICE: Final[slice] = slice(14, 16)


def is_component_id(item_id: str | None) -> bool:
    """Return whether ``item_id`` identifies a content component.

    Version-nibble based component marker: components are never addressed on
    their own and the delivery API gives them ids whose version field (the two
    characters at positions 14-15 of the canonical UUID string) reads ``01``.
    """

    if not item_id:
        return False
    return item_id[_COMPONENT_MARKER_SLICE] == COMPONENT_ID_MARKER


@dataclass(slots=True, frozen=True, kw_only=True)
class ContentElement:
    type: str
    name: str = ""
    value: object = None
    modular_content: tuple[str, ...] = ()

    @property
    def is_rich_text(self) -> bool:
        return self.type == RICH_TEXT_ELEMENT_TYPE


@dataclass(slots=True, frozen=True, kw_only=True)
class ItemSystem:
    id: str
    codename: str
    language: str
    type: str
    name: str = ""
    collection: str | None = None
    last_modified: datetime | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class ContentItemSnapshot:
    """One language variant of a content item, possibly served through fallback.

    ``system.language`` is the language the content actually resolved to, which
    can differ from the language that was requested.
    """

    system: ItemSystem
    elements: Mapping[str, ContentElement] = field(default_factory=dict[str, ContentElement])
    raw: Mapping[str, object] | None = None

    @property
    def is_component(self) -> bool:
        return is_component_id(self.system.id)


def rich_text_references(elements: Iterable[ContentElement]) -> tuple[str, ...]:
    """Return linked codenames from rich-text elements, first occurrence wins."""

    references: dict[str, None] = {}
    for element in elements:
        if not element.is_rich_text:
            continue
        for codename in element.modular_content:
            references.setdefault(codename, None)
    return tuple(references)


type ModularContentMap = Mapping[str, ContentItemSnapshot]
