from collections.abc import Iterable
import unittest

from allpaths.core.types import CostRecord
from allpaths.grid import EAST, Grid, OrientedGrid, TerrainGrid, TurnCosts, manhattan
from allpaths.mazes import generate_terrain
from allpaths.reconstruct import reconstruct, reconstruct_path
from allpaths.search import Explored, SearchParams, best_terminal, search
from reference import MAZE_A, MAZE_B, parse_grid


def edge_cost(space, u, v):
    for w, c in space.neighbors(u):
        if w == v:
            return c
    raise AssertionError(f"{v!r} is not a neighbor of {u!r}")


def all_best_paths(space, explored, target) -> Iterable[list]:
    """Brute-force enumeration of every optimal path, for small graphs."""
    if target == explored.start:
        yield [target]
        return
    for pred in explored.predecessors(target):
        for path in all_best_paths(space, explored, pred):
            yield path + [target]


class TestOpenGridReconstruction(unittest.TestCase):
    def setUp(self):
        self.grid = Grid(3, 3)
        self.explored = search((0, 0), self.grid)

    def test_all_paths_cover_the_square(self):
        tiles = reconstruct(self.explored, (2, 2), shortest_only=False)
        self.assertEqual(tiles, {(x, y) for x in range(3) for y in range(3)})

    def test_single_path_is_a_monotone_staircase(self):
        path = reconstruct_path(self.explored, (2, 2))
        self.assertEqual(path[0], (0, 0))
        self.assertEqual(path[-1], (2, 2))
        self.assertEqual(len(path), 5)
        for a, b in zip(path, path[1:]):
            self.assertEqual(manhattan(a, b), 1)
        self.assertEqual(reconstruct(self.explored, (2, 2), shortest_only=True), set(path))

    def test_center_obstacle_drops_center_tile(self):
        explored = search((0, 0), Grid(3, 3, walls={(1, 1)}))
        tiles = reconstruct(explored, (2, 2), shortest_only=False)
        self.assertEqual(tiles, {(x, y) for x in range(3) for y in range(3)} - {(1, 1)})

    def test_unreachable_target(self):
        explored = search((0, 0), Grid(3, 1, walls={(1, 0)}))
        self.assertEqual(reconstruct(explored, (2, 0), shortest_only=False), set())
        self.assertEqual(reconstruct(explored, (2, 0), shortest_only=True), set())
        self.assertEqual(reconstruct_path(explored, (2, 0)), [])

    def test_start_is_its_own_path(self):
        self.assertEqual(reconstruct_path(self.explored, (0, 0)), [(0, 0)])
        self.assertEqual(reconstruct(self.explored, (0, 0), shortest_only=False), {(0, 0)})


class TestOrientedReconstruction(unittest.TestCase):
    def solve(self, text):
        grid, start, end = parse_grid(text)
        space = OrientedGrid(grid, TurnCosts(forward=1, turn=1000))
        explored = search(space.start_node(start, EAST), space)
        node, cost = best_terminal(explored, space.at_position(end))
        return space, explored, node, cost

    def test_first_example(self):
        _, explored, node, cost = self.solve(MAZE_A)
        self.assertEqual(cost, 7036)
        self.assertEqual(len(reconstruct(explored, node, shortest_only=False)), 45)
        self.assertEqual(len(reconstruct(explored, node, shortest_only=True)), 37)

    def test_second_example(self):
        _, explored, node, cost = self.solve(MAZE_B)
        self.assertEqual(cost, 11048)
        self.assertEqual(len(reconstruct(explored, node, shortest_only=False)), 64)
        self.assertEqual(len(reconstruct(explored, node, shortest_only=True)), 49)

    def test_single_path_is_tight(self):
        space, explored, node, cost = self.solve(MAZE_A)
        path = reconstruct_path(explored, node)
        self.assertEqual(path[0], explored.start)
        self.assertEqual(path[-1], node)
        self.assertEqual(sum(edge_cost(space, a, b) for a, b in zip(path, path[1:])), cost)
        tiles = reconstruct(explored, node, shortest_only=True)
        self.assertLessEqual(tiles, reconstruct(explored, node, shortest_only=False))

    def test_position_projection_can_be_overridden(self):
        _, explored, node, _ = self.solve(MAZE_A)
        nodes = reconstruct(explored, node, shortest_only=False, position_of=lambda n: n)
        self.assertTrue(all(n in explored for n in nodes))
        self.assertEqual({n.position for n in nodes}, reconstruct(explored, node, False))


class TestUnionOfBestPaths(unittest.TestCase):
    def test_matches_brute_force_enumeration(self):
        for seed in range(5):
            grid = TerrainGrid(6, 6, terrain=generate_terrain(6, 6, seed=seed, kinds=(1, 2)))
            for policy in ("heap", "fifo"):
                explored = search((0, 0), grid, params=SearchParams(policy=policy))
                paths = list(all_best_paths(grid, explored, (5, 5)))
                self.assertTrue(paths)
                for path in paths:
                    total = sum(edge_cost(grid, a, b) for a, b in zip(path, path[1:]))
                    self.assertEqual(total, explored.cost((5, 5)))
                union = {tile for path in paths for tile in path}
                self.assertEqual(reconstruct(explored, (5, 5), shortest_only=False), union)
                self.assertIn(reconstruct_path(explored, (5, 5)), paths)

    def test_zero_cost_cycle_terminates(self):
        explored = Explored(
            "s",
            {
                "s": CostRecord(0, frozenset({"b"})),
                "a": CostRecord(0, frozenset({"s", "b"})),
                "b": CostRecord(0, frozenset({"a"})),
                "t": CostRecord(2, frozenset({"b"})),
            },
        )
        self.assertEqual(reconstruct_path(explored, "t"), ["s", "a", "b", "t"])
        self.assertEqual(reconstruct(explored, "t", shortest_only=False), {"s", "a", "b", "t"})


if __name__ == "__main__":
    unittest.main()
