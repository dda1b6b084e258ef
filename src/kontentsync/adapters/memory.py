"""In-memory node store and unit of work."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Self

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType

    from kontentsync.domain.model import LocalNode, NodeId


class InMemoryNodeStore:
    """Dict-backed node store keeping insertion order."""

    def __init__(self, nodes: Iterable[LocalNode] = ()) -> None:
        self._nodes: dict[NodeId, LocalNode] = {}
        self.touched: set[NodeId] = set()
        for node in nodes:
            self.create(node)

    def create(self, node: LocalNode) -> None:
        self._nodes[node.id] = node
        # a replaced node starts unmarked, like a fresh row
        self.touched.discard(node.id)

    def delete(self, node: LocalNode) -> None:
        self._nodes.pop(node.id, None)
        self.touched.discard(node.id)

    def touch(self, node_id: NodeId) -> None:
        if node_id in self._nodes:
            self.touched.add(node_id)

    def get_by_id(self, node_id: NodeId) -> LocalNode | None:
        return self._nodes.get(node_id)

    def get_all_by_type(self, node_type: str) -> list[LocalNode]:
        return [node for node in self._nodes.values() if node.type == node_type]

    def get_all(self) -> list[LocalNode]:
        return list(self._nodes.values())

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)


class InMemoryNodeUnitOfWork:
    """Unit of work over a shared ``InMemoryNodeStore``; commits are no-ops."""

    def __init__(self, store: InMemoryNodeStore | None = None) -> None:
        self._store = store if store is not None else InMemoryNodeStore()
        self.committed = False

    @property
    def nodes(self) -> InMemoryNodeStore:
        return self._store

    def __enter__(self) -> Self:
        self.committed = False
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        return False

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.committed = False


if TYPE_CHECKING:
    from kontentsync.domain.ports import NodeStore, NodeUnitOfWork

    _store_check: NodeStore = InMemoryNodeStore()
    _uow_check: NodeUnitOfWork = InMemoryNodeUnitOfWork()
