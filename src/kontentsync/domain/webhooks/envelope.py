"""Structural validation and authorization of inbound Kontent webhooks.

Webhook bodies are untrusted. ``validate_envelope`` runs one pass over a body
and returns exactly one of:

- ``InvalidEnvelope``: the body is not a Kontent webhook at all
- ``UnsupportedEnvelope``: a Kontent webhook this project does not handle
- ``SupportedEnvelope``: a classified, authorized change for one item

None of these raise; foreign or malformed payloads are an expected input.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, Final, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .classify import ReconcileAction, classify_operation, is_supported_operation

if TYPE_CHECKING:
    from logging import Logger

    from kontentsync.config import KontentConfig

_log = getLogger(__name__)

CONTENT_ITEM_VARIANT_TYPE: Final[str] = "content_item_variant"


class WebhookModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class WebhookItem(WebhookModel):
    id: str = Field(min_length=1)
    language: str = Field(min_length=1)
    codename: str | None = None
    type: str | None = None


class WebhookData(WebhookModel):
    items: list[WebhookItem]


class WebhookMessage(WebhookModel):
    api_name: str = Field(min_length=1)
    project_id: str = Field(min_length=1)
    operation: str
    type: str | None = None
    id: str | None = None


class WebhookEnvelope(WebhookModel):
    data: WebhookData
    message: WebhookMessage


@dataclass(slots=True, frozen=True)
class ItemRef:
    id: str
    language: str


class EnvelopeStatus(StrEnum):
    INVALID = "invalid"
    UNSUPPORTED = "unsupported"
    SUPPORTED = "supported"


@dataclass(slots=True, frozen=True, kw_only=True)
class InvalidEnvelope:
    """Body failed the structural check."""

    reason: str
    status: Literal[EnvelopeStatus.INVALID] = EnvelopeStatus.INVALID


@dataclass(slots=True, frozen=True, kw_only=True)
class UnsupportedEnvelope:
    """Well-formed webhook for another project, message type or operation."""

    envelope: WebhookEnvelope
    reason: str
    status: Literal[EnvelopeStatus.UNSUPPORTED] = EnvelopeStatus.UNSUPPORTED


@dataclass(slots=True, frozen=True, kw_only=True)
class SupportedEnvelope:
    """Authorized webhook reduced to what the fan-out needs.

    Only the first item of ``data.items`` is reconciled. ``languages`` is the
    configured language order the fan-out walks.
    """

    envelope: WebhookEnvelope
    action: ReconcileAction
    item: ItemRef
    languages: tuple[str, ...]
    status: Literal[EnvelopeStatus.SUPPORTED] = EnvelopeStatus.SUPPORTED

    @property
    def item_count(self) -> int:
        return len(self.envelope.data.items)


type Envelope = InvalidEnvelope | UnsupportedEnvelope | SupportedEnvelope


def parse_envelope(body: object) -> WebhookEnvelope:
    """Validate ``body`` (a mapping or JSON text) into a ``WebhookEnvelope``.

    Raises ``pydantic.ValidationError`` when the structure does not match.
    """

    if isinstance(body, (str, bytes, bytearray)):
        return WebhookEnvelope.model_validate_json(body)
    return WebhookEnvelope.model_validate(body)


def unsupported_reason(message: WebhookMessage, *, project_id: str) -> str | None:
    """Return why ``message`` is not handled, or ``None`` when it is supported."""

    if message.project_id != project_id:
        return f"project {message.project_id} is not the configured project"
    if message.type != CONTENT_ITEM_VARIANT_TYPE:
        return f"message type {message.type!r} is not a content item variant change"
    if not is_supported_operation(message.api_name, message.operation):
        return f"operation {message.operation!r} from {message.api_name!r} is not supported"
    return None


def validate_envelope(
    body: object,
    *,
    config: KontentConfig,
    log: Logger | None = None,
) -> Envelope:
    logger = log or _log
    try:
        envelope = parse_envelope(body)
    except ValidationError as exc:
        logger.debug("Webhook ignored - webhook does not come from Kontent (%s)", exc.title)
        return InvalidEnvelope(reason=f"{exc.error_count()} validation error(s)")

    items = envelope.data.items
    if not items:
        logger.debug("Webhook ignored - webhook does not reference any item")
        return InvalidEnvelope(reason="webhook contains no items")

    reason = unsupported_reason(envelope.message, project_id=config.project_id)
    if reason is not None:
        logger.debug("Webhook ignored - not handled by kontentsync: %s", reason)
        return UnsupportedEnvelope(envelope=envelope, reason=reason)

    first = items[0]
    return SupportedEnvelope(
        envelope=envelope,
        action=classify_operation(envelope.message.api_name, envelope.message.operation),
        item=ItemRef(id=first.id, language=first.language),
        languages=config.language_codenames,
    )
