from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .core.types import NodeSpace, Position, TerminalTest
from .grid import Grid, OrientedGrid, TerrainGrid, TurnCosts
from .mazes import generate_maze, generate_terrain, obstacle_sequence, random_obstacles


@dataclass
class Scenario:
    name: str
    start: Any
    space: NodeSpace[Any]
    is_goal: TerminalTest[Any]
    meta: dict[str, Any]
    obstacles: list[Position] = field(default_factory=list)


def _reaches(goal: Position) -> TerminalTest[Any]:
    def is_goal(node: Any) -> bool:
        return getattr(node, "position", node) == goal

    return is_goal


def scenario_open_grid(width: int, height: int) -> Scenario:
    goal = (width - 1, height - 1)
    return Scenario(
        name=f"open_{width}x{height}",
        start=(0, 0),
        space=Grid(width, height),
        is_goal=_reaches(goal),
        meta={"kind": "open", "goal": goal},
    )


def scenario_obstacles(width: int, height: int, density: float, seed: int = 0) -> Scenario:
    start, goal = (0, 0), (width - 1, height - 1)
    # top row and right column stay open so the goal is always reachable
    lane = tuple((x, 0) for x in range(width)) + tuple((width - 1, y) for y in range(height))
    walls = random_obstacles(width, height, density, seed, keep=lane)
    return Scenario(
        name=f"obstacles_{width}x{height}_d{density}_s{seed}",
        start=start,
        space=Grid(width, height, walls=walls),
        is_goal=_reaches(goal),
        meta={"kind": "obstacles", "goal": goal, "density": density, "seed": seed},
    )


def scenario_maze(width: int, height: int, seed: int = 0) -> Scenario:
    goal = (width - 1, height - 1)
    return Scenario(
        name=f"maze_{width}x{height}_s{seed}",
        start=(0, 0),
        space=generate_maze(width, height, seed=seed),
        is_goal=_reaches(goal),
        meta={"kind": "maze", "goal": goal, "seed": seed},
    )


def scenario_terrain(width: int, height: int, seed: int = 0) -> Scenario:
    goal = (width - 1, height - 1)
    return Scenario(
        name=f"terrain_{width}x{height}_s{seed}",
        start=(0, 0),
        space=TerrainGrid(width, height, terrain=generate_terrain(width, height, seed=seed)),
        is_goal=_reaches(goal),
        meta={"kind": "terrain", "goal": goal, "seed": seed},
    )


def scenario_oriented_maze(
    width: int, height: int, seed: int = 0, costs: TurnCosts | None = None
) -> Scenario:
    goal = (width - 1, height - 1)
    space = OrientedGrid(generate_maze(width, height, seed=seed), costs or TurnCosts())
    return Scenario(
        name=f"oriented_maze_{width}x{height}_s{seed}",
        start=space.start_node((0, 0)),
        space=space,
        is_goal=space.at_position(goal),
        meta={"kind": "oriented_maze", "goal": goal, "seed": seed},
    )


def scenario_falling_obstacles(width: int, height: int, count: int, seed: int = 0) -> Scenario:
    start, goal = (0, 0), (width - 1, height - 1)
    return Scenario(
        name=f"falling_{width}x{height}_n{count}_s{seed}",
        start=start,
        space=Grid(width, height),
        is_goal=_reaches(goal),
        meta={"kind": "falling", "goal": goal, "count": count, "seed": seed},
        obstacles=obstacle_sequence(width, height, count, seed=seed, keep=(start, goal)),
    )


def default_scenarios(seed: int = 0) -> list[Scenario]:
    return [
        scenario_open_grid(40, 40),
        scenario_obstacles(50, 50, density=0.2, seed=seed),
        scenario_maze(51, 51, seed=seed),
        scenario_terrain(40, 40, seed=seed),
        scenario_oriented_maze(41, 41, seed=seed),
    ]
