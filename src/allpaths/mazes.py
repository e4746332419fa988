from __future__ import annotations

import random

from .core.types import Position
from .grid import Grid

_STRIDES = ((2, 0), (-2, 0), (0, 2), (0, -2))
_TERRAIN_KINDS = (1, 2, 3, 5)
_TERRAIN_WEIGHTS = (0.55, 0.25, 0.15, 0.05)


def carve_maze(width: int, height: int, seed: int = 0) -> list[Position]:
    """Open cells of a perfect maze, in the order a randomized depth-first
    walk from (0, 0) carves them.

    Rooms sit on even coordinates and every room after the first is preceded
    by the doorway that joins it to an already carved room.
    """
    rng = random.Random(seed)
    order = [(0, 0)]
    carved = {(0, 0)}
    trail = [(0, 0)]
    while trail:
        x, y = trail[-1]
        rooms = [
            (x + dx, y + dy)
            for dx, dy in _STRIDES
            if 0 <= x + dx < width and 0 <= y + dy < height and (x + dx, y + dy) not in carved
        ]
        if not rooms:
            trail.pop()
            continue
        room = rng.choice(rooms)
        carved.add(room)
        order.append(((x + room[0]) // 2, (y + room[1]) // 2))
        order.append(room)
        trail.append(room)
    return order


def generate_maze(width: int, height: int, seed: int = 0) -> Grid:
    """Perfect maze: every pair of open cells is joined by exactly one simple
    path. Use odd sizes so the far corner is a room."""
    open_cells = set(carve_maze(width, height, seed))
    walls = {(x, y) for x in range(width) for y in range(height)} - open_cells
    return Grid(width, height, walls=walls)


def generate_terrain(
    width: int,
    height: int,
    seed: int = 0,
    kinds: tuple[int, ...] = _TERRAIN_KINDS,
    weights: tuple[float, ...] | None = None,
) -> dict[Position, int]:
    if weights is None:
        weights = _TERRAIN_WEIGHTS if kinds == _TERRAIN_KINDS else (1.0,) * len(kinds)
    if len(weights) != len(kinds):
        raise ValueError(f"got {len(weights)} weights for {len(kinds)} terrain kinds")
    rng = random.Random(seed)
    return {
        (x, y): rng.choices(kinds, weights=weights, k=1)[0]
        for x in range(width)
        for y in range(height)
    }


def random_obstacles(
    width: int,
    height: int,
    density: float,
    seed: int = 0,
    keep: tuple[Position, ...] = (),
) -> set[Position]:
    rng = random.Random(seed)
    walls = {(x, y) for x in range(width) for y in range(height) if rng.random() < density}
    return walls - set(keep)


def obstacle_sequence(
    width: int, height: int, count: int, seed: int = 0, keep: tuple[Position, ...] = ()
) -> list[Position]:
    """Distinct cells in the order they fall, as in a wall-growth puzzle."""
    rng = random.Random(seed)
    cells = [(x, y) for x in range(width) for y in range(height) if (x, y) not in keep]
    rng.shuffle(cells)
    return cells[:count]


def corridor(length: int) -> Grid:
    return Grid(length, 1)
