"""Map webhook (API, operation) pairs onto reconciliation actions."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Final


class ApiName(StrEnum):
    """Delivery channels that emit content change webhooks."""

    PREVIEW = "delivery_preview"
    PRODUCTION = "delivery_production"


class ReconcileAction(StrEnum):
    UPSERT = "upsert"
    DELETE = "delete"
    IGNORE = "ignore"


SUPPORTED_OPERATIONS: Final[Mapping[str, frozenset[str]]] = {
    ApiName.PREVIEW: frozenset({"upsert", "archive", "restore"}),
    ApiName.PRODUCTION: frozenset({"publish", "unpublish"}),
}

_ACTIONS: Final[Mapping[tuple[str, str], ReconcileAction]] = {
    (ApiName.PREVIEW, "upsert"): ReconcileAction.UPSERT,
    (ApiName.PREVIEW, "restore"): ReconcileAction.UPSERT,
    (ApiName.PREVIEW, "archive"): ReconcileAction.DELETE,
    (ApiName.PRODUCTION, "publish"): ReconcileAction.UPSERT,
    (ApiName.PRODUCTION, "unpublish"): ReconcileAction.DELETE,
}


def is_supported_operation(api_name: str, operation: str) -> bool:
    return operation in SUPPORTED_OPERATIONS.get(api_name, frozenset())


def classify_operation(api_name: str, operation: str) -> ReconcileAction:
    """Return the action for a webhook operation; unknown pairs are ``IGNORE``."""

    return _ACTIONS.get((api_name, operation), ReconcileAction.IGNORE)
