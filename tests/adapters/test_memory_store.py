from __future__ import annotations

import uuid

from kontentsync.adapters.memory import InMemoryNodeStore, InMemoryNodeUnitOfWork
from kontentsync.domain.model import LocalNode
from tests.support.kontent import item_id, make_node, make_snapshot


def test_create_replaces_node_with_same_id() -> None:
    store = InMemoryNodeStore()
    first = make_node(make_snapshot(item_id(1), "homepage", title="Old"), preferred_language="default")
    second = make_node(make_snapshot(item_id(1), "homepage", title="New"), preferred_language="default")

    store.create(first)
    store.create(second)

    assert len(store) == 1
    assert store.get_by_id(first.id) == second


def test_touch_only_marks_existing_nodes_and_delete_clears_mark() -> None:
    node = make_node(make_snapshot(item_id(1), "homepage"), preferred_language="default")
    store = InMemoryNodeStore([node])

    store.touch(node.id)
    store.touch(uuid.uuid4())
    assert store.touched == {node.id}

    store.delete(node)
    assert store.touched == set()
    assert node.id not in store



def test_create_clears_touch_of_replaced_node() -> None:
    node = make_node(make_snapshot(item_id(1), "homepage"), preferred_language="default")
    store = InMemoryNodeStore([node])

    store.touch(node.id)
    store.create(node)

    assert store.touched == set()
    assert node.id in store

def test_get_all_by_type_filters() -> None:
    article = make_node(make_snapshot(item_id(1), "homepage"), preferred_language="default")
    taxonomy = LocalNode(id=uuid.uuid4(), type="kontent_taxonomy")
    store = InMemoryNodeStore([article, taxonomy])

    assert store.get_all_by_type("kontent_item_article") == [article]
    assert store.get_all_by_type("kontent_taxonomy") == [taxonomy]
    assert store.get_all() == [article, taxonomy]


def test_unit_of_work_shares_store_and_tracks_commit() -> None:
    store = InMemoryNodeStore()
    uow = InMemoryNodeUnitOfWork(store)

    with uow:
        uow.nodes.create(LocalNode(id=uuid.uuid4(), type="kontent_type"))
        uow.commit()

    assert uow.committed
    assert len(store) == 1
