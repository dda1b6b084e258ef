from __future__ import annotations

import uuid
from collections.abc import Callable  # noqa: TC003

from kontentsync.adapters.memory import InMemoryNodeStore, InMemoryNodeUnitOfWork
from kontentsync.adapters.sqlalchemy import SqlAlchemyNodeUnitOfWork  # noqa: TC001
from kontentsync.app import list_nodes, process_webhook, registered_item_types
from kontentsync.config import KontentConfig  # noqa: TC001
from kontentsync.domain.model import LocalNode, item_node_id
from kontentsync.domain.webhooks import OutcomeStatus
from tests.support.kontent import (
    FakeContentFetcher,
    component_id,
    item_id,
    make_node,
    make_snapshot,
    make_webhook,
)

ARTICLE = item_id(1)


def _fetcher() -> FakeContentFetcher:
    fetcher = FakeContentFetcher()
    for language in ("default", "cz"):
        fetcher.serve(
            ARTICLE,
            language,
            make_snapshot(ARTICLE, "homepage", language=language, references=("hero",)),
            {"hero": make_snapshot(component_id(2), "hero", language=language, content_type="hero")},
        )
    return fetcher


def test_registered_item_types_come_from_stored_item_nodes() -> None:
    store = InMemoryNodeStore(
        [
            make_node(make_snapshot(item_id(2), "about", content_type="page"), preferred_language="cz"),
            make_node(make_snapshot(item_id(3), "news"), preferred_language="default"),
            LocalNode(id=uuid.uuid4(), type="kontent_taxonomy"),
        ]
    )

    assert registered_item_types(store) == ("kontent_item_article", "kontent_item_page")


def test_process_webhook_commits_memory_unit_of_work(kontent_config: KontentConfig) -> None:
    existing = make_node(make_snapshot(item_id(9), "other"), preferred_language="default")
    uow = InMemoryNodeUnitOfWork(InMemoryNodeStore([existing]))

    outcome = process_webhook(
        make_webhook(ARTICLE),
        config=kontent_config,
        fetcher=_fetcher(),
        unit_of_work_factory=lambda: uow,
    )

    assert outcome.status is OutcomeStatus.RECONCILED
    assert uow.committed
    # only the article type was registered before the run
    assert uow.nodes.touched == {item_node_id(ARTICLE, "default"), item_node_id(ARTICLE, "cz")}


def test_process_webhook_persists_to_sqlalchemy(
    kontent_config: KontentConfig,
    sqlite_unit_of_work: Callable[[], SqlAlchemyNodeUnitOfWork],
) -> None:
    outcome = process_webhook(
        make_webhook(ARTICLE),
        config=kontent_config.with_item_types(("kontent_item_article", "kontent_item_hero")),
        fetcher=_fetcher(),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    nodes = list_nodes(unit_of_work_factory=sqlite_unit_of_work)
    heroes = list_nodes(node_type="kontent_item_hero", unit_of_work_factory=sqlite_unit_of_work)

    assert len(outcome.processed_ids) == 4
    assert len(outcome.touched_ids) == 4
    assert {node.id for node in nodes} == set(outcome.processed_ids)
    assert {node.preferred_language for node in heroes} == {"default", "cz"}

    with sqlite_unit_of_work() as uow:
        assert all(uow.nodes.touched_at(node_id) is not None for node_id in outcome.touched_ids)


def test_process_webhook_ignores_foreign_project(
    kontent_config: KontentConfig,
    sqlite_unit_of_work: Callable[[], SqlAlchemyNodeUnitOfWork],
) -> None:
    fetcher = _fetcher()

    outcome = process_webhook(
        make_webhook(ARTICLE, project_id="foreign"),
        config=kontent_config,
        fetcher=fetcher,
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert outcome.status is OutcomeStatus.UNSUPPORTED
    assert fetcher.calls == []
    assert list_nodes(unit_of_work_factory=sqlite_unit_of_work) == []
