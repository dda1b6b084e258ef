"""Orchestrator for inbound webhook reconciliation.

Flow: validate envelope -> classify operation -> per-language fan-out
(upsert or delete, the latter cascading into components) -> touch
propagation. Every ignore path ends in a log record rather than an exception;
only failures raised by the fetcher or the node store propagate.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum
from logging import Logger, getLogger
from typing import TYPE_CHECKING

from .cascade import ComponentCascadeResolver
from .classify import ReconcileAction
from .envelope import InvalidEnvelope, SupportedEnvelope, UnsupportedEnvelope, validate_envelope
from .fanout import LanguageFanoutReconciler
from .materialize import NodeMaterializer
from .touch import TouchPropagator

if TYPE_CHECKING:
    from collections.abc import Sequence

    from kontentsync.config import KontentConfig
    from kontentsync.domain.model import NodeId
    from kontentsync.domain.ports import ContentItemFetcher, NodeStore

    from .envelope import ItemRef

_log = getLogger(__name__)


class OutcomeStatus(StrEnum):
    INVALID = "invalid"
    UNSUPPORTED = "unsupported"
    IGNORED = "ignored"
    RECONCILED = "reconciled"


@dataclass(slots=True, frozen=True, kw_only=True)
class WebhookOutcome:
    """Summary of one webhook run."""

    status: OutcomeStatus
    action: ReconcileAction | None = None
    item: ItemRef | None = None
    processed_ids: tuple[NodeId, ...] = ()
    touched_ids: tuple[NodeId, ...] = ()

    @property
    def reconciled(self) -> bool:
        return self.status is OutcomeStatus.RECONCILED


@dataclass(slots=True)
class WebhookProcessor:
    config: KontentConfig
    fetcher: ContentItemFetcher
    store: NodeStore
    log: Logger = field(default=_log)

    def __call__(self, body: object) -> WebhookOutcome:
        envelope = validate_envelope(body, config=self.config, log=self.log)
        if isinstance(envelope, InvalidEnvelope):
            return WebhookOutcome(status=OutcomeStatus.INVALID)
        if isinstance(envelope, UnsupportedEnvelope):
            return WebhookOutcome(status=OutcomeStatus.UNSUPPORTED)
        return self._reconcile(envelope)

    def _reconcile(self, envelope: SupportedEnvelope) -> WebhookOutcome:
        message = envelope.envelope.message
        if envelope.action is ReconcileAction.IGNORE:
            self.log.debug("Webhook is not supported yet!")
            self.log.debug(json.dumps(envelope.envelope.model_dump(mode="json"), indent=2))
            return WebhookOutcome(status=OutcomeStatus.IGNORED, item=envelope.item)

        self.log.debug("Handling %s from %s API", message.operation, message.api_name)
        if envelope.item_count > 1:
            self.log.warning(
                "Webhook contains more than one item! - contains (%d)", envelope.item_count
            )

        processed_ids = self._build_fanout()(envelope)
        touched_ids = TouchPropagator(
            store=self.store,
            item_types=self.config.item_types,
            include_taxonomies=self.config.include_taxonomies,
            include_types=self.config.include_types,
            log=self.log,
        )(processed_ids)

        self.log.info(
            "Reconciled %s of Kontent item %s: processed=%d, touched=%d",
            envelope.action,
            envelope.item.id,
            len(processed_ids),
            len(touched_ids),
        )
        return WebhookOutcome(
            status=OutcomeStatus.RECONCILED,
            action=envelope.action,
            item=envelope.item,
            processed_ids=processed_ids,
            touched_ids=touched_ids,
        )

    def _build_fanout(self) -> LanguageFanoutReconciler:
        return LanguageFanoutReconciler(
            fetcher=self.fetcher,
            store=self.store,
            materialize=NodeMaterializer(
                store=self.store,
                include_raw_content=self.config.include_raw_content,
                log=self.log,
            ),
            cascade=ComponentCascadeResolver(store=self.store, log=self.log),
            log=self.log,
        )


def handle_incoming_webhook(
    body: object,
    *,
    config: KontentConfig,
    fetcher: ContentItemFetcher,
    store: NodeStore,
    item_types: Sequence[str] | None = None,
    log: Logger | None = None,
) -> WebhookOutcome:
    """Validate ``body`` and reconcile the referenced item into ``store``.

    ``item_types`` overrides the registered content-item node types from
    ``config``.
    """

    effective_config = config if item_types is None else config.with_item_types(tuple(item_types))
    processor = WebhookProcessor(
        config=effective_config,
        fetcher=fetcher,
        store=store,
        log=log or _log,
    )
    return processor(body)
