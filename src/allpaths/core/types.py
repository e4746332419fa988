from __future__ import annotations

from collections.abc import Hashable, Iterable
from dataclasses import dataclass
from typing import Generic, NamedTuple, Protocol, TypeVar

N = TypeVar("N", bound=Hashable)
_NodeContra_contra = TypeVar("_NodeContra_contra", bound=Hashable, contravariant=True)

Position = tuple[int, int]
Direction = tuple[int, int]


class OrientedNode(NamedTuple):
    position: Position
    direction: Direction


class TerminalTest(Protocol[_NodeContra_contra]):
    def __call__(self, node: _NodeContra_contra) -> bool: ...


class NodeSpace(Protocol[N]):
    def is_passable(self, node: N) -> bool: ...

    def neighbors(self, node: N) -> Iterable[tuple[N, int]]: ...


@dataclass(frozen=True)
class CostRecord(Generic[N]):
    cost: int
    predecessors: frozenset[N] = frozenset()


def position_of(node: Hashable) -> Hashable:
    """Project a node to its grid position, dropping any facing."""
    return getattr(node, "position", node)
