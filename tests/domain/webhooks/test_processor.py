from __future__ import annotations

import logging
import uuid

import httpx
import pytest

from kontentsync.adapters.memory import InMemoryNodeStore
from kontentsync.config import KontentConfig
from kontentsync.domain.model import LocalNode, item_node_id
from kontentsync.domain.webhooks import OutcomeStatus, ReconcileAction, handle_incoming_webhook
from tests.support.kontent import (
    PROJECT_ID,
    FakeContentFetcher,
    component_id,
    item_id,
    make_node,
    make_snapshot,
    make_webhook,
)

ITEM_TYPES = ("kontent_item_article", "kontent_item_callout")
ARTICLE = item_id(1)
CALLOUT = component_id(2)
AUTHOR = item_id(3)


def _config(**overrides: object) -> KontentConfig:
    values: dict[str, object] = {
        "project_id": PROJECT_ID,
        "language_codenames": ("default", "cz"),
        "item_types": ITEM_TYPES,
    }
    values.update(overrides)
    return KontentConfig(**values)  # type: ignore[arg-type]


def _taxonomy_node() -> LocalNode:
    return LocalNode(id=uuid.uuid5(uuid.NAMESPACE_URL, "taxonomy"), type="kontent_taxonomy")


def _serve_article(fetcher: FakeContentFetcher, language: str, *, served_as: str | None = None) -> None:
    resolved = served_as or language
    fetcher.serve(
        ARTICLE,
        language,
        make_snapshot(ARTICLE, "homepage", language=resolved, references=("promo_callout",)),
        {
            "promo_callout": make_snapshot(
                CALLOUT, "promo_callout", language=resolved, content_type="callout"
            ),
        },
    )


def _seed_article(store: InMemoryNodeStore, language: str) -> None:
    store.create(
        make_node(
            make_snapshot(
                ARTICLE,
                "homepage",
                language=language,
                references=("promo_callout", "jane_doe"),
            ),
            preferred_language=language,
        )
    )
    store.create(
        make_node(
            make_snapshot(CALLOUT, "promo_callout", language=language, content_type="callout"),
            preferred_language=language,
        )
    )


def _seed_author(store: InMemoryNodeStore, language: str) -> None:
    store.create(
        make_node(
            make_snapshot(AUTHOR, "jane_doe", language=language, content_type="author"),
            preferred_language=language,
        )
    )


@pytest.mark.parametrize(
    "body",
    [
        {"foo": "bar"},
        make_webhook(ARTICLE, project_id="some-other-project"),
        make_webhook(ARTICLE, message_type="taxonomy"),
    ],
)
def test_rejected_webhooks_cause_no_mutations_or_touches(body: object) -> None:
    store = InMemoryNodeStore([_taxonomy_node()])
    _seed_article(store, "default")
    before = store.get_all()
    fetcher = FakeContentFetcher()

    outcome = handle_incoming_webhook(
        body,
        config=_config(include_taxonomies=True),
        fetcher=fetcher,
        store=store,
    )

    assert outcome.status in {OutcomeStatus.INVALID, OutcomeStatus.UNSUPPORTED}
    assert not outcome.reconciled
    assert store.get_all() == before
    assert store.touched == set()
    assert fetcher.calls == []



def test_fetcher_failure_propagates_without_touching() -> None:
    store = InMemoryNodeStore([_taxonomy_node()])
    _seed_article(store, "default")
    before = store.get_all()

    def failing_fetcher(item_id: str, language: str, *, include_components: bool = True) -> object:
        raise httpx.ConnectError("delivery API unreachable")

    with pytest.raises(httpx.ConnectError):
        handle_incoming_webhook(
            make_webhook(ARTICLE),
            config=_config(include_taxonomies=True),
            fetcher=failing_fetcher,  # type: ignore[arg-type]
            store=store,
        )

    assert store.get_all() == before
    assert store.touched == set()


def test_upsert_fans_out_over_every_configured_language() -> None:
    store = InMemoryNodeStore()
    fetcher = FakeContentFetcher()
    _serve_article(fetcher, "default")
    _serve_article(fetcher, "cz")

    outcome = handle_incoming_webhook(
        make_webhook(ARTICLE, language="cz"),
        config=_config(),
        fetcher=fetcher,
        store=store,
    )

    expected = {
        item_node_id(ARTICLE, "default"),
        item_node_id(CALLOUT, "default"),
        item_node_id(ARTICLE, "cz"),
        item_node_id(CALLOUT, "cz"),
    }
    assert outcome.status is OutcomeStatus.RECONCILED
    assert outcome.action is ReconcileAction.UPSERT
    assert [(call[0], call[1]) for call in fetcher.calls] == [
        (ARTICLE, "default"),
        (ARTICLE, "cz"),
    ]
    assert all(include_components for *_, include_components in fetcher.calls)
    assert {node.id for node in store.get_all()} == expected
    assert set(outcome.processed_ids) == expected
    assert set(outcome.touched_ids) == expected
    assert store.touched == expected


def test_upsert_is_idempotent() -> None:
    store = InMemoryNodeStore()
    fetcher = FakeContentFetcher()
    _serve_article(fetcher, "default")
    _serve_article(fetcher, "cz")
    body = make_webhook(ARTICLE)

    first = handle_incoming_webhook(body, config=_config(), fetcher=fetcher, store=store)
    snapshot = store.get_all()
    second = handle_incoming_webhook(body, config=_config(), fetcher=fetcher, store=store)

    assert store.get_all() == snapshot
    assert first.processed_ids == second.processed_ids


def test_upsert_skips_languages_without_content() -> None:
    store = InMemoryNodeStore()
    fetcher = FakeContentFetcher()
    _serve_article(fetcher, "default")

    outcome = handle_incoming_webhook(
        make_webhook(ARTICLE, operation="upsert", api_name="delivery_preview"),
        config=_config(),
        fetcher=fetcher,
        store=store,
    )

    assert set(outcome.processed_ids) == {
        item_node_id(ARTICLE, "default"),
        item_node_id(CALLOUT, "default"),
    }
    assert store.get_by_id(item_node_id(ARTICLE, "cz")) is None


def test_upsert_keeps_fallback_content_in_requested_language_slot() -> None:
    store = InMemoryNodeStore()
    fetcher = FakeContentFetcher()
    _serve_article(fetcher, "default")
    _serve_article(fetcher, "cz", served_as="default")

    handle_incoming_webhook(make_webhook(ARTICLE), config=_config(), fetcher=fetcher, store=store)

    node = store.get_by_id(item_node_id(ARTICLE, "cz"))
    assert node is not None
    assert node.preferred_language == "cz"
    assert node.system is not None
    assert node.system.language == "default"


def test_delete_without_content_removes_node_and_same_language_components() -> None:
    store = InMemoryNodeStore()
    _seed_article(store, "default")
    _seed_author(store, "default")
    store.create(
        make_node(
            make_snapshot(CALLOUT, "promo_callout", language="cz", content_type="callout"),
            preferred_language="cz",
        )
    )
    fetcher = FakeContentFetcher()

    outcome = handle_incoming_webhook(
        make_webhook(ARTICLE, operation="unpublish"),
        config=_config(),
        fetcher=fetcher,
        store=store,
    )

    assert outcome.action is ReconcileAction.DELETE
    assert outcome.processed_ids == (
        item_node_id(CALLOUT, "default"),
        item_node_id(ARTICLE, "default"),
    )
    assert item_node_id(ARTICLE, "default") not in store
    assert item_node_id(CALLOUT, "default") not in store
    # the cz component and the shared linked item stay
    assert item_node_id(CALLOUT, "cz") in store
    assert item_node_id(AUTHOR, "default") in store
    assert outcome.touched_ids == ()


def test_delete_with_fallback_content_recreates_node() -> None:
    store = InMemoryNodeStore()
    _seed_article(store, "default")
    _seed_article(store, "cz")
    fetcher = FakeContentFetcher()
    _serve_article(fetcher, "cz", served_as="default")

    outcome = handle_incoming_webhook(
        make_webhook(ARTICLE, language="default", operation="archive", api_name="delivery_preview"),
        config=_config(),
        fetcher=fetcher,
        store=store,
    )

    recreated = store.get_by_id(item_node_id(ARTICLE, "cz"))
    assert item_node_id(ARTICLE, "default") not in store
    assert recreated is not None
    assert recreated.system is not None
    assert recreated.system.language == "default"
    assert item_node_id(ARTICLE, "cz") in outcome.processed_ids
    assert item_node_id(ARTICLE, "cz") in outcome.touched_ids


def test_delete_of_unknown_node_is_a_no_op() -> None:
    store = InMemoryNodeStore()
    _seed_author(store, "default")

    outcome = handle_incoming_webhook(
        make_webhook(ARTICLE, operation="unpublish"),
        config=_config(),
        fetcher=FakeContentFetcher(),
        store=store,
    )

    assert outcome.status is OutcomeStatus.RECONCILED
    assert outcome.processed_ids == ()
    assert len(store) == 1


def test_touch_is_limited_to_processed_item_nodes_but_covers_taxonomies() -> None:
    store = InMemoryNodeStore([_taxonomy_node()])
    _seed_author(store, "default")
    fetcher = FakeContentFetcher()
    _serve_article(fetcher, "default")

    outcome = handle_incoming_webhook(
        make_webhook(ARTICLE),
        config=_config(include_taxonomies=True),
        fetcher=fetcher,
        store=store,
    )

    assert _taxonomy_node().id in store.touched
    assert item_node_id(ARTICLE, "default") in store.touched
    assert item_node_id(AUTHOR, "default") not in store.touched
    assert set(outcome.touched_ids) == store.touched


def test_unregistered_item_types_are_not_touched() -> None:
    store = InMemoryNodeStore()
    fetcher = FakeContentFetcher()
    _serve_article(fetcher, "default")

    outcome = handle_incoming_webhook(
        make_webhook(ARTICLE),
        config=_config(),
        fetcher=fetcher,
        store=store,
        item_types=["kontent_item_article"],
    )

    assert item_node_id(CALLOUT, "default") in outcome.processed_ids
    assert store.touched == {item_node_id(ARTICLE, "default")}


def test_unconfigured_event_language_skips_fanout_but_still_touches() -> None:
    store = InMemoryNodeStore([_taxonomy_node()])
    fetcher = FakeContentFetcher()

    outcome = handle_incoming_webhook(
        make_webhook(ARTICLE, language="de"),
        config=_config(include_taxonomies=True),
        fetcher=fetcher,
        store=store,
    )

    assert fetcher.calls == []
    assert outcome.processed_ids == ()
    assert outcome.touched_ids == (_taxonomy_node().id,)


def test_only_first_item_is_reconciled_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    store = InMemoryNodeStore()
    fetcher = FakeContentFetcher()
    _serve_article(fetcher, "default")
    body = make_webhook(ARTICLE, extra_items=[{"id": AUTHOR, "language": "default"}])

    with caplog.at_level(logging.WARNING):
        outcome = handle_incoming_webhook(body, config=_config(), fetcher=fetcher, store=store)

    assert {call[0] for call in fetcher.calls} == {ARTICLE}
    assert outcome.item is not None
    assert outcome.item.id == ARTICLE
    assert any("more than one item" in record.getMessage() for record in caplog.records)
