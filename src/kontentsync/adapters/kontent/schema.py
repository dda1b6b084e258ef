"""Pydantic models describing Kontent delivery API payloads."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime  # noqa: TC003
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class KontentBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SystemPayload(KontentBaseModel):
    id: str
    name: str = ""
    codename: str
    language: str
    type: str
    collection: str | None = None
    last_modified: datetime | None = None
    workflow_step: str | None = None


class ElementPayload(KontentBaseModel):
    type: str
    name: str = ""
    value: Any = None
    modular_content: list[str] = Field(default_factory=list[str])

    @field_validator("modular_content", mode="before")
    @classmethod
    def _null_to_empty(cls, value: object) -> object:
        return [] if value is None else value


class ItemPayload(KontentBaseModel):
    system: SystemPayload
    elements: dict[str, ElementPayload] = Field(default_factory=dict[str, ElementPayload])


class Pagination(KontentBaseModel):
    skip: int = 0
    limit: int = 0
    count: int = 0
    next_page: str = ""


class ItemListingResponse(KontentBaseModel):
    items: list[ItemPayload]
    modular_content: dict[str, ItemPayload] = Field(default_factory=dict[str, ItemPayload])
    pagination: Pagination | None = None


class ErrorResponse(KontentBaseModel):
    message: str
    request_id: str | None = None
    error_code: int | None = None
    specific_code: int | None = None


ItemPayloadInput = ItemPayload | Mapping[str, object]
