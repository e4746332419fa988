from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
import heapq
import time
from typing import Any, Generic

from .core.errors import InvalidEdgeCostError
from .core.types import CostRecord, N as Node, NodeSpace, TerminalTest, position_of
from .logging import get_logger as _get_logger

POLICIES = ("heap", "fifo")


def combine(
    current: tuple[int, set[Node]] | None, cost: int, preds: set[Node]
) -> tuple[tuple[int, set[Node]], bool]:
    """Apply the combine rule to a mutable ``(cost, predecessors)`` label.

    Cheaper replaces the predecessor set, equal cost unions it, dearer is
    dropped. Returns the resulting label and whether its cost changed.
    """
    if current is None or cost < current[0]:
        return (cost, set(preds)), True
    if cost == current[0]:
        current[1].update(preds)
    return current, False


@dataclass(order=True)
class _FrontierItem(Generic[Node]):
    cost: int
    count: int
    node: Node = field(compare=False)


class Frontier(Generic[Node]):
    """Tentative labels popped in arrival order, regardless of cost."""

    def __init__(self) -> None:
        self._labels: dict[Node, tuple[int, set[Node]]] = {}
        self._queue: deque[Node] = deque()
        self.merges = 0

    def _merge(self, node: Node, cost: int, preds: set[Node]) -> bool:
        current = self._labels.get(node)
        if current is not None and cost == current[0] and not preds <= current[1]:
            self.merges += 1
        label, changed = combine(current, cost, preds)
        self._labels[node] = label
        return changed

    def push(self, node: Node, cost: int, preds: set[Node]) -> bool:
        if node not in self._labels:
            self._queue.append(node)
        return self._merge(node, cost, preds)

    def pop(self) -> tuple[Node, int, set[Node]] | None:
        if not self._queue:
            return None
        node = self._queue.popleft()
        cost, preds = self._labels.pop(node)
        return node, cost, preds

    def empty(self) -> bool:
        return not self._labels

    def __contains__(self, node: Node) -> bool:
        return node in self._labels

    def __len__(self) -> int:
        return len(self._labels)

    def get(self, node: Node) -> tuple[int, set[Node]] | None:
        return self._labels.get(node)


class HeapFrontier(Frontier[Node]):
    """Binary heap with lazy decrease-key policy."""

    def __init__(self) -> None:
        super().__init__()
        self._heap: list[_FrontierItem[Node]] = []
        self._counter = 0
        self.stale = 0

    def push(self, node: Node, cost: int, preds: set[Node]) -> bool:
        changed = self._merge(node, cost, preds)
        if changed:
            heapq.heappush(self._heap, _FrontierItem(cost, self._counter, node))
            self._counter += 1
        return changed

    def pop(self) -> tuple[Node, int, set[Node]] | None:
        while self._heap:
            item = heapq.heappop(self._heap)
            label = self._labels.get(item.node)
            if label is None or label[0] != item.cost:
                self.stale += 1
                continue
            del self._labels[item.node]
            return item.node, label[0], label[1]
        return None


def make_frontier(policy: str) -> Frontier[Any]:
    if policy == "heap":
        return HeapFrontier()
    if policy == "fifo":
        return Frontier()
    raise ValueError(f"unknown frontier policy {policy!r}; expected one of {POLICIES}")


class Explored(Mapping[Node, CostRecord[Node]], Generic[Node]):
    """Finalized cost records of one search, keyed by node."""

    def __init__(self, start: Node, records: dict[Node, CostRecord[Node]] | None = None) -> None:
        self.start = start
        self._records: dict[Node, CostRecord[Node]] = dict(records or {})

    def __getitem__(self, node: Node) -> CostRecord[Node]:
        return self._records[node]

    def __iter__(self) -> Iterator[Node]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"Explored(start={self.start!r}, nodes={len(self)})"

    def cost(self, node: Node) -> int | None:
        record = self._records.get(node)
        return None if record is None else record.cost

    def predecessors(self, node: Node) -> frozenset[Node]:
        record = self._records.get(node)
        return frozenset() if record is None else record.predecessors

    def positions(self, position_fn: Callable[[Any], Any] | None = None) -> set[Any]:
        project = position_fn or position_of
        return {project(node) for node in self._records}


@dataclass
class SearchStats:
    expansions: int = 0
    generated: int = 0
    corrections: int = 0
    tie_merges: int = 0
    stale: int = 0
    runtime_ms: float = 0.0


@dataclass
class SearchParams:
    policy: str = "heap"
    log_every: int | None = None


class LabelCorrectingSearch(Generic[Node]):
    """Single-source search keeping every equal-cost predecessor.

    Explored labels may be corrected after a node was first expanded: a
    cheaper route replaces the label wholesale and the node is expanded again.
    With the heap frontier and non-negative costs this never happens and the
    search degenerates to Dijkstra; the ``fifo`` frontier relies on it.
    """

    def __init__(
        self,
        start: Node,
        space: NodeSpace[Node],
        *,
        params: SearchParams | None = None,
        logger: Any | None = None,
    ) -> None:
        cfg = params or SearchParams()
        self.start = start
        self.space = space
        self.policy = cfg.policy
        self.log_every = cfg.log_every
        self.logger = logger or _get_logger(__name__)
        self.frontier: Frontier[Node] = make_frontier(cfg.policy)
        self.labels: dict[Node, tuple[int, set[Node]]] = {}
        self.stats = SearchStats()
        self._explored_merges = 0
        if space.is_passable(start):
            self.frontier.push(start, 0, set())

    def _absorb(self, node: Node, cost: int, preds: set[Node]) -> bool:
        current = self.labels.get(node)
        label, changed = combine(current, cost, preds)
        self.labels[node] = label
        if changed and current is not None:
            self.stats.corrections += 1
        return changed

    def _relax(self, node: Node, cost: int) -> None:
        for nxt, edge_cost in self.space.neighbors(node):
            self.stats.generated += 1
            if not isinstance(edge_cost, int) or edge_cost < 0:
                raise InvalidEdgeCostError(edge_cost, node, nxt)
            if not self.space.is_passable(nxt):
                continue
            candidate = cost + edge_cost
            known = self.labels.get(nxt)
            if known is None or candidate < known[0]:
                self.frontier.push(nxt, candidate, {node})
            elif candidate == known[0]:
                if node not in known[1]:
                    known[1].add(node)
                    self._explored_merges += 1

    def run(self) -> Explored[Node]:
        t0 = time.perf_counter()
        while True:
            popped = self.frontier.pop()
            if popped is None:
                break
            node, cost, preds = popped
            if not self._absorb(node, cost, preds):
                continue
            self.stats.expansions += 1
            if self.log_every and (self.stats.expansions % self.log_every == 0):
                self.logger.info(
                    "expansions=%(exp)d, generated=%(gen)d, corrections=%(cor)d, frontier=%(fr)d",
                    {
                        "exp": self.stats.expansions,
                        "gen": self.stats.generated,
                        "cor": self.stats.corrections,
                        "fr": len(self.frontier),
                    },
                )
            self._relax(node, cost)
        self.stats.stale = getattr(self.frontier, "stale", 0)
        self.stats.tie_merges = self._explored_merges + self.frontier.merges
        self.stats.runtime_ms += (time.perf_counter() - t0) * 1000.0
        self.logger.debug(
            "search from %r finished: %d nodes, %d expansions, %d corrections",
            self.start,
            len(self.labels),
            self.stats.expansions,
            self.stats.corrections,
        )
        return self.snapshot()

    def snapshot(self) -> Explored[Node]:
        records = {
            node: CostRecord(cost, frozenset(preds)) for node, (cost, preds) in self.labels.items()
        }
        return Explored(self.start, records)


def search(
    start: Node,
    space: NodeSpace[Node],
    *,
    params: SearchParams | None = None,
    logger: Any | None = None,
) -> Explored[Node]:
    return LabelCorrectingSearch(start, space, params=params, logger=logger).run()


def best_terminal(
    explored: Mapping[Node, CostRecord[Node]], is_terminal: TerminalTest[Node]
) -> tuple[Node, int] | None:
    best: tuple[Node, int] | None = None
    for node, record in explored.items():
        if is_terminal(node) and (best is None or record.cost < best[1]):
            best = (node, record.cost)
    return best
