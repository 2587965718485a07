import random
import unittest
import sys
import os
from collections import deque

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pathquest.core.cell import TerrainKind
from pathquest.core.complexity import MazeStats
from pathquest.core.errors import ConfigurationError
from pathquest.core.grid import Grid
from pathquest.algo.prim import PrimsAlgorithm, generate, check_terrain_weights

def flood_fill(grid):
    seen = {id(grid.start_cell)}
    queue = deque([grid.start_cell])
    while queue:
        cell = queue.popleft()
        for n in grid.get_open_neighbors(cell):
            if id(n) not in seen:
                seen.add(id(n))
                queue.append(n)
    return len(seen)

def snapshot(grid):
    return ([(c.walls, c.terrain) for c in grid.cells],
            [(g.row, g.col) for g in grid.goal_cells])

class TestGenerators(unittest.TestCase):
    def test_prim_spanning_tree(self):
        for rows, cols, seed in [(20, 20, 42), (7, 13, 1), (1, 9, 5), (9, 1, 6), (2, 2, 3)]:
            grid = generate(rows, cols, rng=random.Random(seed), goal_count=1)

            # rows*cols - 1 open internal edges and full reachability -> spanning tree
            self.assertEqual(MazeStats.count_open_edges(grid), rows * cols - 1)
            self.assertEqual(flood_fill(grid), rows * cols, "Prim's should reach every cell")

    def test_walls_symmetric(self):
        grid = generate(12, 15, rng=7)
        for cell in grid.cells:
            for nr, nc, dir_bit in grid.get_neighbors(cell.row, cell.col):
                self.assertEqual(cell.has_wall(dir_bit),
                                 grid.has_wall(nr, nc, Grid.OPPOSITE[dir_bit]))

    def test_entrance_and_exits(self):
        grid = generate(10, 10, rng=11)
        self.assertFalse(grid.start_cell.has_wall(Grid.TOP))
        for goal in grid.goal_cells:
            # Far goals are on the boundary, each with one exit opened
            self.assertTrue(grid.is_boundary(goal.row, goal.col))
            self.assertGreater(goal.manhattan(grid.start_cell), 5)
            walls = grid.walls_of(goal)
            boundary_sides = []
            if goal.row == 0: boundary_sides.append("top")
            if goal.row == 9: boundary_sides.append("bottom")
            if goal.col == 0: boundary_sides.append("left")
            if goal.col == 9: boundary_sides.append("right")
            self.assertEqual(sum(not walls[side] for side in boundary_sides), 1)

    def test_goals(self):
        grid = generate(15, 15, rng=3)
        self.assertEqual(len(grid.goal_cells), 3)
        coords = {(g.row, g.col) for g in grid.goal_cells}
        self.assertEqual(len(coords), 3)
        self.assertNotIn((0, 0), coords)

        grid = generate(6, 6, rng=3, goal_count=5)
        self.assertEqual(len(grid.goal_cells), 5)

    def test_goal_fallback(self):
        # 2x2: only (1,1) is far enough, so the rest are drawn at random
        grid = generate(2, 2, rng=9, goal_count=3)
        coords = sorted((g.row, g.col) for g in grid.goal_cells)
        self.assertEqual(coords, [(0, 1), (1, 0), (1, 1)])

    def test_terrain(self):
        for seed in range(5):
            grid = generate(10, 10, rng=seed, goal_count=4)
            self.assertEqual(grid.start_cell.terrain.cost, 0)
            for goal in grid.goal_cells:
                self.assertEqual(goal.terrain.cost, 0)

        grid = generate(40, 40, rng=1)
        kinds = {cell.terrain for cell in grid.cells}
        self.assertEqual(kinds, set(TerrainKind))

    def test_terrain_weights(self):
        grid = generate(8, 8, rng=2, terrain_weights={"water": 1})
        free = {id(grid.start_cell)} | {id(g) for g in grid.goal_cells}
        for cell in grid.cells:
            expected = TerrainKind.DEFAULT if id(cell) in free else TerrainKind.WATER
            self.assertIs(cell.terrain, expected)

        table = check_terrain_weights({TerrainKind.GRASS: 3, "mud": 1})
        self.assertEqual(table[TerrainKind.GRASS], 3)
        self.assertEqual(table[TerrainKind.DEFAULT], 0)

    def test_search_state_clear(self):
        grid = generate(6, 6, rng=4)
        self.assertFalse(any(c.visited or c.on_path for c in grid.cells))

    def test_determinism(self):
        grid1 = generate(10, 10, rng=random.Random(12345))

        grid2 = Grid(10, 10)
        gen = PrimsAlgorithm(grid2, rng=12345)
        for _ in gen.run(): pass

        self.assertEqual(snapshot(grid1), snapshot(grid2))
        self.assertNotEqual(snapshot(grid1), snapshot(generate(10, 10, rng=54321)))

    def test_single_cell(self):
        grid = generate(1, 1, rng=0, goal_count=0)
        self.assertEqual(grid.goal_cells, [])
        self.assertEqual(MazeStats.count_open_edges(grid), 0)

    def test_configuration_errors(self):
        with self.assertRaises(ConfigurationError):
            generate(0, 5)
        with self.assertRaises(ConfigurationError):
            generate(1, 1) # default 3 goals cannot fit
        with self.assertRaises(ConfigurationError):
            generate(2, 2, goal_count=4)
        with self.assertRaises(ConfigurationError):
            generate(3, 3, goal_count=-1)
        with self.assertRaises(ConfigurationError):
            generate(3, 3, terrain_weights={"lava": 5})
        with self.assertRaises(ConfigurationError):
            generate(3, 3, terrain_weights={"grass": -1, "mud": 2})
        with self.assertRaises(ConfigurationError):
            generate(3, 3, terrain_weights={"grass": 0})

if __name__ == '__main__':
    unittest.main()
