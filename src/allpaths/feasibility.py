from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Generic

from .core.errors import InfeasibleBaselineError
from .core.types import N as Node, NodeSpace, Position, TerminalTest
from .logging import get_logger as _get_logger
from .search import LabelCorrectingSearch, SearchParams, best_terminal

NodeSpaceBuilder = Callable[[frozenset[Position]], NodeSpace[Any]]


def _goal_test(goal: Node | None, is_goal: TerminalTest[Node] | None) -> TerminalTest[Node]:
    if (goal is None) == (is_goal is None):
        raise ValueError("pass exactly one of goal or is_goal")
    if is_goal is not None:
        return is_goal

    def reached(node: Node) -> bool:
        return node == goal

    return reached


def is_feasible(
    space: NodeSpace[Node],
    start: Node,
    goal: Node | None = None,
    *,
    is_goal: TerminalTest[Node] | None = None,
    params: SearchParams | None = None,
    logger: Any | None = None,
) -> bool:
    test = _goal_test(goal, is_goal)
    explored = LabelCorrectingSearch(start, space, params=params, logger=logger).run()
    if goal is not None:
        return goal in explored
    return best_terminal(explored, test) is not None


class IncrementalFeasibilitySearch(Generic[Node]):
    """Binary search for the obstacle that first disconnects start from goal.

    Obstacles only ever accumulate, so reachability is monotone in the prefix
    length: once a prefix is infeasible every longer one is too.
    """

    def __init__(
        self,
        ordered_obstacles: Sequence[Position],
        node_space_builder: NodeSpaceBuilder,
        *,
        start: Node,
        goal: Node | None = None,
        is_goal: TerminalTest[Node] | None = None,
        known_feasible: int = 0,
        params: SearchParams | None = None,
        logger: Any | None = None,
    ) -> None:
        if not 0 <= known_feasible <= len(ordered_obstacles):
            raise ValueError(
                f"known_feasible must be within [0, {len(ordered_obstacles)}], got {known_feasible}"
            )
        _goal_test(goal, is_goal)
        self.obstacles = list(ordered_obstacles)
        self.build = node_space_builder
        self.start = start
        self.goal = goal
        self.is_goal = is_goal
        self.known_feasible = known_feasible
        self.params = params
        self.logger = logger or _get_logger(__name__)
        self.history: list[tuple[int, bool]] = []

    def probe(self, prefix: int) -> bool:
        space = self.build(frozenset(self.obstacles[:prefix]))
        feasible = is_feasible(
            space,
            self.start,
            self.goal,
            is_goal=self.is_goal,
            params=self.params,
            logger=self.logger,
        )
        self.history.append((prefix, feasible))
        return feasible

    def run(self) -> int | None:
        """Index of the first blocking obstacle, or None if none blocks."""
        low = self.known_feasible
        if not self.probe(low):
            raise InfeasibleBaselineError(
                f"start {self.start!r} is already cut off after {low} obstacles"
            )
        high = len(self.obstacles)
        if high == low or self.probe(high):
            self.logger.info("all %d obstacles placed; goal still reachable", high)
            return None
        # invariant: prefix `low` is feasible, prefix `high` is not
        while low + 1 < high:
            middle = (low + high) // 2
            self.logger.debug("probe low=%d middle=%d high=%d", low, middle, high)
            if self.probe(middle):
                low = middle
            else:
                high = middle
        self.logger.info(
            "obstacle %d at %r disconnects start after %d probes",
            high - 1,
            self.obstacles[high - 1],
            len(self.history),
        )
        return high - 1


def find_first_blocking_obstacle(
    ordered_obstacles: Sequence[Position],
    node_space_builder: NodeSpaceBuilder,
    *,
    start: Node,
    goal: Node | None = None,
    is_goal: TerminalTest[Node] | None = None,
    known_feasible: int = 0,
    params: SearchParams | None = None,
    logger: Any | None = None,
) -> int | None:
    return IncrementalFeasibilitySearch(
        ordered_obstacles,
        node_space_builder,
        start=start,
        goal=goal,
        is_goal=is_goal,
        known_feasible=known_feasible,
        params=params,
        logger=logger,
    ).run()


def first_blocking_linear(
    ordered_obstacles: Sequence[Position],
    node_space_builder: NodeSpaceBuilder,
    *,
    start: Node,
    goal: Node | None = None,
    is_goal: TerminalTest[Node] | None = None,
    params: SearchParams | None = None,
) -> int | None:
    """Same answer as the binary search, one full search per obstacle."""
    obstacles = list(ordered_obstacles)
    if not is_feasible(node_space_builder(frozenset()), start, goal, is_goal=is_goal, params=params):
        raise InfeasibleBaselineError(f"start {start!r} is cut off before any obstacle")
    for index in range(len(obstacles)):
        space = node_space_builder(frozenset(obstacles[: index + 1]))
        if not is_feasible(space, start, goal, is_goal=is_goal, params=params):
            return index
    return None
