import unittest

from allpaths.core.errors import InvalidEdgeCostError, MissingNodeError
from allpaths.core.types import CostRecord, OrientedNode
from allpaths.grid import EAST, Grid, OrientedGrid, TurnCosts
from allpaths.mazes import generate_maze
from allpaths.search import Explored, search
from allpaths.shortcuts import (
    Shortcut,
    count_shortcuts,
    diamond_offsets,
    enumerate_shortcuts,
    evaluate_shortcut,
    tally_savings,
)
from reference import parse_grid

RACETRACK = """
###############
#...#...#.....#
#.#.#.#.#.###.#
#S#...#.#.#...#
#######.#.#.###
#######.#.#...#
#######.#.###.#
###..E#...#...#
###.#######.###
#...###...#...#
#.#####.#.###.#
#.#...#.#.#...#
#.#.#.#.#.#.###
#...#...#...###
###############
"""


class TestEvaluateShortcut(unittest.TestCase):
    def setUp(self):
        self.explored = Explored(
            "s",
            {
                "s": CostRecord(0),
                "from": CostRecord(10, frozenset({"s"})),
                "to": CostRecord(50, frozenset({"from"})),
            },
        )

    def test_improvement(self):
        self.assertEqual(evaluate_shortcut(self.explored, "from", "to", 5), 35)

    def test_not_an_improvement(self):
        self.assertIsNone(evaluate_shortcut(self.explored, "to", "from", 5))
        self.assertIsNone(evaluate_shortcut(self.explored, "from", "to", 40))
        self.assertEqual(evaluate_shortcut(self.explored, "from", "to", 39), 1)

    def test_missing_endpoint_fails_loudly(self):
        with self.assertRaises(MissingNodeError) as ctx:
            evaluate_shortcut(self.explored, "nowhere", "to", 1)
        self.assertEqual(ctx.exception.node, "nowhere")
        self.assertIn("shortcut start", str(ctx.exception))
        with self.assertRaises(KeyError):
            evaluate_shortcut(self.explored, "from", "nowhere", 1)

    def test_negative_shortcut_cost(self):
        with self.assertRaises(InvalidEdgeCostError):
            evaluate_shortcut(self.explored, "from", "to", -1)


class TestEnumerateShortcuts(unittest.TestCase):
    def setUp(self):
        grid, self.start, self.end = parse_grid(RACETRACK)
        self.explored = search(self.start, grid)

    def test_baseline(self):
        self.assertEqual(self.explored.cost(self.end), 84)

    def test_two_step_tally(self):
        tally = tally_savings(enumerate_shortcuts(self.explored, 2))
        self.assertEqual(
            dict(tally),
            {2: 14, 4: 14, 6: 2, 8: 4, 10: 2, 12: 3, 20: 1, 36: 1, 38: 1, 40: 1, 64: 1},
        )

    def test_long_shortcuts_with_threshold(self):
        self.assertEqual(count_shortcuts(self.explored, 20, 50), 285)
        self.assertEqual(count_shortcuts(self.explored, 20, 76), 3)

    def test_count_on_oriented_track(self):
        grid, start, _ = parse_grid(RACETRACK)
        # free turns: every facing of a tile costs the same as the tile itself
        space = OrientedGrid(grid, TurnCosts(forward=1, turn=0))
        explored = search(space.start_node(start), space)
        east = lambda p: OrientedNode(p, EAST)
        count = count_shortcuts(explored, 2, 10, node_at=east)
        self.assertEqual(count, 4 * count_shortcuts(self.explored, 2, 10))
        self.assertEqual(count, 40)

    def test_shortcuts_respect_distance_and_threshold(self):
        for cut in enumerate_shortcuts(self.explored, 3, min_saving=10):
            self.assertIsInstance(cut, Shortcut)
            self.assertLessEqual(cut.cost, 3)
            self.assertGreaterEqual(cut.saving, 10)
            self.assertEqual(
                cut.saving,
                self.explored[cut.end].cost - self.explored[cut.start].cost - cut.cost,
            )

    def test_diamond_offsets(self):
        self.assertEqual(len(diamond_offsets(1)), 4)
        self.assertEqual(len(diamond_offsets(2)), 12)
        self.assertEqual(len(diamond_offsets(20)), 2 * 20 * 21)
        self.assertNotIn((0, 0), diamond_offsets(3))

    def test_single_lane_maze(self):
        maze = generate_maze(21, 21, seed=11)
        explored = search((0, 0), maze)
        cuts = list(enumerate_shortcuts(explored, 2, min_saving=1))
        self.assertTrue(cuts)
        # through a single wall cell; adjacent cells differ by one step
        self.assertTrue(all(cut.cost == 2 for cut in cuts))

    def test_oriented_nodes_need_a_lookup(self):
        space = OrientedGrid(Grid(5, 1))
        explored = search(space.start_node((0, 0)), space)
        cuts = list(
            enumerate_shortcuts(
                explored, 2, min_saving=1, node_at=lambda p: OrientedNode(p, EAST)
            )
        )
        self.assertEqual(cuts, [])


if __name__ == "__main__":
    unittest.main()
