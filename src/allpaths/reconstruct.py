from __future__ import annotations

from collections import deque
from collections.abc import Callable, Hashable
from typing import Any

from .core.types import N as Node, position_of as _position_of
from .search import Explored


def reconstruct_path(explored: Explored[Node], target: Node) -> list[Node]:
    """One minimum-cost path from ``explored.start`` to ``target``.

    Every predecessor edge is tight, so any chain of predecessors ending at the
    start is optimal. A breadth-first walk picks the chain with the fewest
    nodes and cannot get trapped in a zero-cost predecessor cycle.
    """
    if target not in explored:
        return []
    parent: dict[Node, Node | None] = {target: None}
    queue: deque[Node] = deque([target])
    while queue:
        node = queue.popleft()
        if node == explored.start:
            path = [node]
            nxt = parent[node]
            while nxt is not None:
                path.append(nxt)
                nxt = parent[nxt]
            return path
        for pred in explored.predecessors(node):
            if pred not in parent:
                parent[pred] = node
                queue.append(pred)
    raise RuntimeError(f"predecessor chain from {target!r} never reaches {explored.start!r}")


def reconstruct(
    explored: Explored[Node],
    target: Node,
    shortest_only: bool,
    *,
    position_of: Callable[[Node], Hashable] | None = None,
) -> set[Any]:
    """Positions on one best path (``shortest_only``) or on every best path."""
    project = position_of or _position_of
    if shortest_only:
        return {project(node) for node in reconstruct_path(explored, target)}
    if target not in explored:
        return set()
    tiles: set[Any] = set()
    seen: set[Node] = {target}
    remaining: list[Node] = [target]
    while remaining:
        node = remaining.pop()
        tiles.add(project(node))
        for pred in explored.predecessors(node):
            if pred not in seen:
                seen.add(pred)
                remaining.append(pred)
    return tiles
