"""Ports for the local node store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from kontentsync.domain.model import LocalNode, NodeId


@runtime_checkable
class NodeStore(Protocol):
    """Mutable graph store holding the cached nodes.

    ``create`` replaces any node with the same id. ``touch`` marks a node as
    still valid for the current build pass and has no other effect.
    """

    def create(self, node: LocalNode) -> None: ...

    def delete(self, node: LocalNode) -> None: ...

    def touch(self, node_id: NodeId) -> None: ...

    def get_by_id(self, node_id: NodeId) -> LocalNode | None: ...

    def get_all_by_type(self, node_type: str) -> Sequence[LocalNode]: ...

    def get_all(self) -> Sequence[LocalNode]: ...


__all__ = ["NodeStore"]
