"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from kontentsync.adapters.kontent import KontentDeliveryFetcher
from kontentsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyNodeUnitOfWork,
    is_started,
    startup,
)
from kontentsync.config import get_kontent_config
from kontentsync.domain.model import is_item_node_type
from kontentsync.domain.ports.unit_of_work import NodeUnitOfWork
from kontentsync.domain.webhooks import handle_incoming_webhook

if TYPE_CHECKING:
    from kontentsync.config import KontentConfig
    from kontentsync.domain.model import LocalNode
    from kontentsync.domain.ports import ContentItemFetcher, NodeStore
    from kontentsync.domain.webhooks import WebhookOutcome

UnitOfWorkFactory = Callable[[], NodeUnitOfWork]


log = getLogger(__name__)


def _default_unit_of_work() -> NodeUnitOfWork:
    if not is_started():
        startup()
    return SqlAlchemyNodeUnitOfWork()


def registered_item_types(store: NodeStore) -> tuple[str, ...]:
    """Content-item node types currently present in ``store``, sorted."""

    return tuple(sorted({node.type for node in store.get_all() if is_item_node_type(node.type)}))


def process_webhook(
    body: object,
    *,
    config: KontentConfig | None = None,
    fetcher: ContentItemFetcher | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> WebhookOutcome:
    """Reconcile one Kontent webhook body into the configured node store."""

    effective_config = config or get_kontent_config()
    effective_fetcher = fetcher or KontentDeliveryFetcher(config=effective_config)
    effective_uow = unit_of_work_factory or _default_unit_of_work

    with effective_uow() as uow:
        item_types = effective_config.item_types or registered_item_types(uow.nodes)
        outcome = handle_incoming_webhook(
            body,
            config=effective_config,
            fetcher=effective_fetcher,
            store=uow.nodes,
            item_types=item_types,
        )
        uow.commit()

    log.info(
        f"Finished webhook: status={outcome.status}, action={outcome.action}, "
        f"processed={len(outcome.processed_ids)}, touched={len(outcome.touched_ids)}"
    )
    return outcome


def list_nodes(
    *,
    node_type: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[LocalNode]:
    """Return stored nodes, optionally restricted to one node type."""

    effective_uow = unit_of_work_factory or _default_unit_of_work
    with effective_uow() as uow:
        if node_type is None:
            return list(uow.nodes.get_all())
        return list(uow.nodes.get_all_by_type(node_type))
