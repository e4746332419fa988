from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Generic

from .core.errors import InvalidEdgeCostError, MissingNodeError
from .core.types import N as Node, Position, position_of as _position_of
from .search import Explored


@dataclass(frozen=True)
class Shortcut(Generic[Node]):
    start: Node
    end: Node
    cost: int
    saving: int


def evaluate_shortcut(
    explored: Explored[Node], from_node: Node, to_node: Node, shortcut_cost: int
) -> int | None:
    """Cost saved at ``to_node`` by a new edge ``from_node -> to_node``.

    ``None`` means the edge would not be an improvement. Both endpoints must
    already be explored.
    """
    if from_node not in explored:
        raise MissingNodeError(from_node, "shortcut start")
    if to_node not in explored:
        raise MissingNodeError(to_node, "shortcut end")
    if shortcut_cost < 0:
        raise InvalidEdgeCostError(shortcut_cost, from_node, to_node)
    via = explored[from_node].cost + shortcut_cost
    current = explored[to_node].cost
    if via < current:
        return current - via
    return None


def diamond_offsets(radius: int) -> list[tuple[int, int]]:
    return [
        (dx, dy)
        for dx in range(-radius, radius + 1)
        for dy in range(-(radius - abs(dx)), radius - abs(dx) + 1)
        if (dx, dy) != (0, 0)
    ]


def enumerate_shortcuts(
    explored: Explored[Node],
    max_distance: int,
    *,
    min_saving: int = 1,
    position_of: Callable[[Node], Position] | None = None,
    node_at: Callable[[Position], Node] | None = None,
) -> Iterator[Shortcut[Node]]:
    """Yield every shortcut of Manhattan length ``<= max_distance`` that saves
    at least ``min_saving``.

    Candidate ends are found by offsetting the start's position, so nodes must
    project to ``(x, y)`` positions and ``node_at`` must map a position back to
    the node explored there (identity for orientation-free nodes).
    """
    project = position_of or _position_of
    lookup = node_at or (lambda p: p)
    offsets = diamond_offsets(max_distance)
    for start in explored:
        x, y = project(start)
        for dx, dy in offsets:
            end = lookup((x + dx, y + dy))
            if end not in explored:
                continue
            saving = evaluate_shortcut(explored, start, end, abs(dx) + abs(dy))
            if saving is not None and saving >= min_saving:
                yield Shortcut(start, end, abs(dx) + abs(dy), saving)


def tally_savings(shortcuts: Iterable[Shortcut[Any]]) -> Counter[int]:
    return Counter(s.saving for s in shortcuts)


def count_shortcuts(
    explored: Explored[Node],
    max_distance: int,
    min_saving: int,
    *,
    position_of: Callable[[Node], Position] | None = None,
    node_at: Callable[[Position], Node] | None = None,
) -> int:
    cuts = enumerate_shortcuts(
        explored, max_distance, min_saving=min_saving, position_of=position_of, node_at=node_at
    )
    return sum(1 for _ in cuts)
