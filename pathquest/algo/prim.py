import logging
import random
from typing import Dict, Iterator, List, NamedTuple, Optional, Union

from pathquest.core.cell import Cell, TerrainKind
from pathquest.core.errors import ConfigurationError
from pathquest.core.grid import Grid, START
from pathquest.algo.base import Generator

logger = logging.getLogger(__name__)

DEFAULT_GOAL_COUNT = 3

# Percent chance of each terrain kind
DEFAULT_TERRAIN_WEIGHTS = {
    TerrainKind.DEFAULT: 40,
    TerrainKind.GRASS: 30,
    TerrainKind.MUD: 20,
    TerrainKind.WATER: 10,
}


class WallCandidate(NamedTuple):
    """The wall on 'direction' side of (row, col). Only exists during generation."""
    row: int
    col: int
    direction: int


def check_dimensions(rows, cols, goal_count: int):
    if not isinstance(rows, int) or not isinstance(cols, int) or rows < 1 or cols < 1:
        raise ConfigurationError(f"Maze dimensions must be positive integers, got {rows}x{cols}")
    if not isinstance(goal_count, int) or goal_count < 0:
        raise ConfigurationError(f"Goal count must be a non-negative integer, got {goal_count!r}")
    if goal_count > rows * cols - 1:
        raise ConfigurationError(
            f"Cannot place {goal_count} goals in a {rows}x{cols} maze (at most {rows * cols - 1})")


def check_terrain_weights(weights) -> Dict[TerrainKind, float]:
    """
    Normalizes a weight table. Keys may be TerrainKind members or their names
    ("grass", "MUD", ...). Kinds left out get weight 0.
    """
    if weights is None:
        return dict(DEFAULT_TERRAIN_WEIGHTS)

    table = {kind: 0 for kind in TerrainKind}
    for key, weight in weights.items():
        if isinstance(key, TerrainKind):
            kind = key
        else:
            try:
                kind = TerrainKind[str(key).upper()]
            except KeyError:
                raise ConfigurationError(f"Unknown terrain kind: {key!r}") from None
        if weight < 0:
            raise ConfigurationError(f"Terrain weight for {kind.name} is negative: {weight}")
        table[kind] = weight

    if sum(table.values()) <= 0:
        raise ConfigurationError("Terrain weights must not all be zero")
    return table


class PrimsAlgorithm(Generator):
    def __init__(self, grid: Grid, rng: Optional[Union[random.Random, int]] = None,
                 goal_count: int = DEFAULT_GOAL_COUNT, terrain_weights=None):
        super().__init__(grid, rng)
        check_dimensions(grid.rows, grid.cols, goal_count)
        self.goal_count = goal_count
        self.terrain_weights = check_terrain_weights(terrain_weights)

    def run(self) -> Iterator[str]:
        yield from self.carve()

        self.open_entrance()
        self.place_goals()
        self.assign_terrain()

        # Generation borrowed the visited flags; searches expect them clear
        self.grid.reset_search_state()
        yield "Done"

    def carve(self) -> Iterator[str]:
        grid = self.grid
        start = grid.cell_at(*START)
        start.visited = True

        # Frontier: walls between a reached cell and an unreached neighbour
        frontier: List[WallCandidate] = []
        self.add_candidates(start, frontier)

        while frontier:
            # Pick a random wall. Swap remove for O(1)
            idx = self.rng.randrange(len(frontier))
            wall = frontier[idx]
            frontier[idx] = frontier[-1]
            frontier.pop()

            cell1 = grid.cells[wall.row * grid.cols + wall.col]
            cell2 = grid.cell_at(wall.row + Grid.DR[wall.direction], wall.col + Grid.DC[wall.direction])

            # Both sides reached would close a cycle
            if cell1.visited == cell2.visited:
                continue

            grid.carve_path(wall.row, wall.col, wall.direction)
            unvisited = cell2 if cell1.visited else cell1
            unvisited.visited = True
            self.add_candidates(unvisited, frontier)
            self.step_count += 1

            if self.step_count % 100 == 0:
                yield f"Frontier: {len(frontier)}"

        logger.debug("Carved %d passages in %dx%d grid", self.step_count, grid.rows, grid.cols)

    def add_candidates(self, cell: Cell, frontier: List[WallCandidate]):
        for nr, nc, dir_bit in self.grid.get_neighbors(cell.row, cell.col):
            if not self.grid.cells[nr * self.grid.cols + nc].visited:
                frontier.append(WallCandidate(cell.row, cell.col, dir_bit))

    def open_entrance(self):
        self.grid.open_boundary(*START, Grid.TOP)

    def exit_direction(self, cell: Cell) -> Optional[int]:
        """The side of 'cell' touching the grid edge, or None for interior cells."""
        if cell.row == self.grid.rows - 1:
            return Grid.BOTTOM
        if cell.col == self.grid.cols - 1:
            return Grid.RIGHT
        if cell.row == 0:
            return Grid.TOP
        if cell.col == 0:
            return Grid.LEFT
        return None

    def place_goals(self):
        grid = self.grid
        start = grid.start_cell
        threshold = min(grid.rows, grid.cols) / 2

        # Prefer far-away boundary cells
        pool = [cell for cell in grid.cells
                if cell is not start
                and grid.is_boundary(cell.row, cell.col)
                and cell.manhattan(start) > threshold]
        self.rng.shuffle(pool)
        goals = pool[:self.goal_count]

        if len(goals) < self.goal_count:
            chosen = set(goals)
            rest = [cell for cell in grid.cells if cell is not start and cell not in chosen]
            self.rng.shuffle(rest)
            goals.extend(rest[:self.goal_count - len(goals)])
            logger.debug("Only %d far boundary cells, filled goals at random", len(pool))

        for goal in goals:
            dir_bit = self.exit_direction(goal)
            if dir_bit is not None:
                grid.open_boundary(goal.row, goal.col, dir_bit)

        grid.goal_cells = goals

    def assign_terrain(self):
        kinds = list(self.terrain_weights)
        weights = [self.terrain_weights[kind] for kind in kinds]
        for cell in self.grid.cells:
            cell.terrain = self.rng.choices(kinds, weights)[0]

        # Keep start and goals free
        self.grid.start_cell.terrain = TerrainKind.DEFAULT
        for goal in self.grid.goal_cells:
            goal.terrain = TerrainKind.DEFAULT


def generate(rows: int, cols: int, rng: Optional[Union[random.Random, int]] = None,
             goal_count: int = DEFAULT_GOAL_COUNT, terrain_weights=None) -> Grid:
    """
    Builds a new maze: a randomized-Prim spanning tree over rows x cols cells,
    an entrance at the start cell, 'goal_count' goals and weighted terrain.
    Deterministic for a given rng (or int seed).
    """
    # Fail before allocating anything
    check_dimensions(rows, cols, goal_count)
    check_terrain_weights(terrain_weights)

    grid = Grid(rows, cols)
    PrimsAlgorithm(grid, rng, goal_count=goal_count, terrain_weights=terrain_weights).run_all()
    logger.debug("Generated %dx%d maze with goals %s", rows, cols, grid.goal_cells)
    return grid
