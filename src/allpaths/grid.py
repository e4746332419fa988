from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from .core.types import Direction, OrientedNode, Position, TerminalTest

EAST: Direction = (1, 0)
SOUTH: Direction = (0, 1)
WEST: Direction = (-1, 0)
NORTH: Direction = (0, -1)

# clockwise, y grows downward
ORTHOGONAL: tuple[Direction, ...] = (EAST, SOUTH, WEST, NORTH)


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def advance(p: Position, d: Direction) -> Position:
    return (p[0] + d[0], p[1] + d[1])


@dataclass
class Grid:
    width: int
    height: int
    walls: set[Position] = field(default_factory=set)
    step: int = 1

    def in_bounds(self, p: Position) -> bool:
        x, y = p
        return 0 <= x < self.width and 0 <= y < self.height

    def is_passable(self, p: Position) -> bool:
        return self.in_bounds(p) and p not in self.walls

    def enter_cost(self, p: Position) -> int:
        return self.step

    def neighbors(self, p: Position) -> Iterable[tuple[Position, int]]:
        for d in ORTHOGONAL:
            q = advance(p, d)
            if self.is_passable(q):
                yield q, self.enter_cost(q)

    def with_obstacles(self, obstacles: Iterable[Position]) -> Grid:
        return replace(self, walls=self.walls | set(obstacles))

    def open_cells(self) -> Iterable[Position]:
        for y in range(self.height):
            for x in range(self.width):
                if (x, y) not in self.walls:
                    yield (x, y)


@dataclass
class TerrainGrid(Grid):
    """Grid whose cells carry an integer weight paid on entry."""

    terrain: dict[Position, int] = field(default_factory=dict)

    def enter_cost(self, p: Position) -> int:
        return self.step * self.terrain.get(p, 1)


@dataclass(frozen=True)
class TurnCosts:
    forward: int = 1
    turn: int = 1000
    directions: tuple[Direction, ...] = ORTHOGONAL

    def rotate_right(self, d: Direction) -> Direction:
        i = self.directions.index(d)
        return self.directions[(i + 1) % len(self.directions)]

    def rotate_left(self, d: Direction) -> Direction:
        i = self.directions.index(d)
        return self.directions[(i - 1) % len(self.directions)]


@dataclass
class OrientedGrid:
    """Facing-aware view of a grid: move forward or turn in place."""

    grid: Grid
    costs: TurnCosts = field(default_factory=TurnCosts)

    def is_passable(self, node: OrientedNode) -> bool:
        return self.grid.is_passable(node.position)

    def neighbors(self, node: OrientedNode) -> Iterable[tuple[OrientedNode, int]]:
        pos, d = node
        ahead = advance(pos, d)
        if self.grid.is_passable(ahead):
            yield OrientedNode(ahead, d), self.costs.forward
        yield OrientedNode(pos, self.costs.rotate_left(d)), self.costs.turn
        yield OrientedNode(pos, self.costs.rotate_right(d)), self.costs.turn

    def start_node(self, position: Position, facing: Direction = EAST) -> OrientedNode:
        return OrientedNode(position, facing)

    def at_position(self, position: Position) -> TerminalTest[OrientedNode]:
        def is_terminal(node: OrientedNode) -> bool:
            return node.position == position

        return is_terminal

    def with_obstacles(self, obstacles: Iterable[Position]) -> OrientedGrid:
        return replace(self, grid=self.grid.with_obstacles(obstacles))
