"""Unit of work port wrapping a node store transaction."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from .persistence import NodeStore


@runtime_checkable
class NodeUnitOfWork(Protocol):
    """Transactional boundary around one webhook's node store mutations."""

    @property
    def nodes(self) -> NodeStore: ...

    def __enter__(self) -> Self: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


__all__ = ["NodeUnitOfWork"]
