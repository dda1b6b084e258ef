"""Webhook-driven reconciliation of cached Kontent content.

Stages, leaf first:
1) envelope validation and authorization (``envelope``)
2) operation classification (``classify``)
3) per-language fan-out with fallback-aware upsert/delete (``fanout``)
4) component cascade on delete (``cascade``)
5) touch propagation (``touch``)

``processor.handle_incoming_webhook`` runs all of them for one webhook body.
"""

from __future__ import annotations

from .cascade import ComponentCascadeResolver
from .classify import ApiName, ReconcileAction, classify_operation, is_supported_operation
from .envelope import (
    CONTENT_ITEM_VARIANT_TYPE,
    Envelope,
    EnvelopeStatus,
    InvalidEnvelope,
    ItemRef,
    SupportedEnvelope,
    UnsupportedEnvelope,
    WebhookEnvelope,
    parse_envelope,
    validate_envelope,
)
from .fanout import LanguageFanoutReconciler
from .materialize import NodeMaterializer, build_item_node
from .processor import OutcomeStatus, WebhookOutcome, WebhookProcessor, handle_incoming_webhook
from .touch import TouchPropagator

__all__ = [
    "CONTENT_ITEM_VARIANT_TYPE",
    "ApiName",
    "ComponentCascadeResolver",
    "Envelope",
    "EnvelopeStatus",
    "InvalidEnvelope",
    "ItemRef",
    "LanguageFanoutReconciler",
    "NodeMaterializer",
    "OutcomeStatus",
    "ReconcileAction",
    "SupportedEnvelope",
    "TouchPropagator",
    "UnsupportedEnvelope",
    "WebhookEnvelope",
    "WebhookOutcome",
    "WebhookProcessor",
    "build_item_node",
    "classify_operation",
    "handle_incoming_webhook",
    "is_supported_operation",
    "parse_envelope",
    "validate_envelope",
]
