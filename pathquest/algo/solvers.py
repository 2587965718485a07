import heapq
import logging
from array import array
from collections import deque
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional

from pathquest.core.cell import Cell
from pathquest.core.errors import ConfigurationError
from pathquest.core.events import SearchHooks
from pathquest.core.grid import Grid
from pathquest.algo.paths import ParentMap, path_cost, reconstruct_path

logger = logging.getLogger(__name__)


class Strategy(Enum):
    BFS = "bfs"
    DFS = "dfs"
    DIJKSTRA = "dijkstra"
    ASTAR = "astar"

    @property
    def weighted(self) -> bool:
        """Weighted strategies finalize cells on pop and relax by terrain cost."""
        return self in (Strategy.DIJKSTRA, Strategy.ASTAR)


class GoalMode(Enum):
    FIRST_REACHED = "first"
    ALL_GOALS = "all"


class GoalPath(NamedTuple):
    goal_index: int  # position in grid.goal_cells
    goal: Cell
    cells: List[Cell]
    cost: int


class SearchResult:
    def __init__(self, grid: Grid, strategy: Strategy, goal_mode: GoalMode):
        self.strategy = strategy
        self.goal_mode = goal_mode
        self.total_cells = grid.rows * grid.cols
        self.exploration_order: List[Cell] = []
        self.parent_of: ParentMap = {}
        self.found_goals: List[Cell] = []
        self.paths: List[GoalPath] = []

    @property
    def explored_count(self) -> int:
        return len(self.exploration_order)

    @property
    def efficiency(self) -> float:
        """Share of the maze left unexplored, 0.0 - 1.0."""
        return max(0.0, 1.0 - self.explored_count / self.total_cells)

    @property
    def best_cost(self) -> Optional[int]:
        if not self.paths:
            return None
        return min(p.cost for p in self.paths)

    def path_to(self, goal: Cell) -> Optional[GoalPath]:
        for p in self.paths:
            if p.goal is goal:
                return p
        return None


# Frontier disciplines. push() takes the cell index and its g-score.

class FifoFrontier:
    def __init__(self):
        self.queue = deque()

    def push(self, idx: int, g: int):
        self.queue.append(idx)

    def pop(self) -> int:
        return self.queue.popleft()

    def __len__(self):
        return len(self.queue)


class LifoFrontier:
    def __init__(self):
        self.stack: List[int] = []

    def push(self, idx: int, g: int):
        self.stack.append(idx)

    def pop(self) -> int:
        return self.stack.pop()

    def __len__(self):
        return len(self.stack)


class PriorityFrontier:
    """Min-heap on g (+ heuristic). Equal priorities pop in insertion order."""

    def __init__(self, heuristic: Optional[Callable[[int], int]] = None):
        self.heap = []
        self.counter = 0
        self.heuristic = heuristic

    def push(self, idx: int, g: int):
        priority = g + self.heuristic(idx) if self.heuristic else g
        heapq.heappush(self.heap, (priority, self.counter, idx))
        self.counter += 1

    def pop(self) -> int:
        return heapq.heappop(self.heap)[2]

    def __len__(self):
        return len(self.heap)


def nearest_goal_heuristic(grid: Grid) -> Callable[[int], int]:
    """
    Manhattan distance to the closest goal. Not admissible when a step can
    cost 0 (DEFAULT terrain), so A* may return a costlier path than Dijkstra.
    """
    goals = [(g.row, g.col) for g in grid.goal_cells]
    cols = grid.cols

    def heuristic(idx: int) -> int:
        if not goals:
            return 0
        r, c = divmod(idx, cols)
        return min(abs(r - gr) + abs(c - gc) for gr, gc in goals)

    return heuristic


def make_frontier(strategy: Strategy, grid: Grid):
    if strategy is Strategy.BFS:
        return FifoFrontier()
    if strategy is Strategy.DFS:
        return LifoFrontier()
    if strategy is Strategy.DIJKSTRA:
        return PriorityFrontier()
    return PriorityFrontier(nearest_goal_heuristic(grid))


def coerce_option(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise ConfigurationError(f"Unknown {enum_cls.__name__} {value!r} (expected one of: {choices})") from None


def solve(grid: Grid, strategy=Strategy.BFS, goal_mode=GoalMode.FIRST_REACHED,
          hooks: Optional[SearchHooks] = None, **callbacks) -> SearchResult:
    """
    Searches 'grid' from its start cell toward its goal cells.

    strategy: Strategy member or its value ("bfs", "dfs", "dijkstra", "astar").
    goal_mode: FIRST_REACHED stops at the first goal expanded, ALL_GOALS keeps
        going until every goal has been expanded or the frontier is empty.
        A grid without goals is traversed completely.
    hooks: SearchHooks, or pass on_cell_explored / on_path_found /
        on_search_complete directly as keyword arguments.

    Visited and g-score state is private to this call; the grid's visited and
    on_path flags are cleared first and written back once the search is over.
    """
    strategy = coerce_option(Strategy, strategy)
    goal_mode = coerce_option(GoalMode, goal_mode)
    if hooks is None:
        hooks = SearchHooks(**callbacks)
    elif callbacks:
        raise ConfigurationError("Pass either a SearchHooks instance or hook callbacks, not both")

    grid.reset_search_state()
    result = SearchResult(grid, strategy, goal_mode)

    n = grid.rows * grid.cols
    # Dense per-run arrays. g_score -1 = unseen (infinity)
    visited = array('B', [0] * n)
    g_score = array('l', [-1] * n)

    order = result.exploration_order
    parent_of = result.parent_of
    remaining = {grid.index_of(goal) for goal in grid.goal_cells}
    weighted = strategy.weighted
    frontier = make_frontier(strategy, grid)

    def explore(cell: Cell):
        order.append(cell)
        hooks.cell_explored(cell, len(order) - 1)

    start = grid.start_cell
    start_idx = grid.index_of(start)
    parent_of[start] = None
    g_score[start_idx] = 0
    if not weighted:
        # Unweighted searches mark on push
        visited[start_idx] = 1
        explore(start)
    frontier.push(start_idx, 0)

    while frontier:
        idx = frontier.pop()
        current = grid.cells[idx]

        if weighted:
            # Lazy deletion: stale entries for finalized cells
            if visited[idx]:
                continue
            visited[idx] = 1
            explore(current)

        if idx in remaining:
            remaining.discard(idx)
            result.found_goals.append(current)
            if goal_mode is GoalMode.FIRST_REACHED or not remaining:
                break

        curr_g = g_score[idx]
        for neighbor in grid.get_open_neighbors(current):
            n_idx = grid.index_of(neighbor)
            if visited[n_idx]:
                continue

            if weighted:
                new_g = curr_g + neighbor.cost
                old_g = g_score[n_idx]
                if old_g == -1 or new_g < old_g:
                    g_score[n_idx] = new_g
                    parent_of[neighbor] = current
                    frontier.push(n_idx, new_g)
            else:
                visited[n_idx] = 1
                parent_of[neighbor] = current
                explore(neighbor)
                frontier.push(n_idx, 0)

    # Write back for renderers
    for i in range(n):
        if visited[i]:
            grid.cells[i].visited = True

    for goal in result.found_goals:
        cells = reconstruct_path(parent_of, goal)
        goal_path = GoalPath(grid.goal_cells.index(goal), goal, cells, path_cost(cells))
        result.paths.append(goal_path)
        hooks.path_found(goal_path.goal_index, goal_path.cells, goal_path.cost)

    logger.debug("%s (%s): explored %d/%d cells, found %d/%d goals, best cost %s",
                 strategy.value, goal_mode.value, result.explored_count, n,
                 len(result.found_goals), len(grid.goal_cells), result.best_cost)

    hooks.search_complete()
    return result


def solve_all(grid: Grid, goal_mode=GoalMode.FIRST_REACHED) -> Dict[Strategy, SearchResult]:
    """Runs every strategy in turn on the same grid."""
    return {strategy: solve(grid, strategy, goal_mode) for strategy in Strategy}
