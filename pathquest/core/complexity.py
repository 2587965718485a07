from collections import Counter

from pathquest.core.grid import Grid


class MazeStats:
    @staticmethod
    def count_open_edges(grid: Grid) -> int:
        """Open internal edges, each counted once (via the RIGHT and BOTTOM walls)."""
        edges = 0
        for cell in grid.cells:
            if cell.col < grid.cols - 1 and not cell.has_wall(Grid.RIGHT):
                edges += 1
            if cell.row < grid.rows - 1 and not cell.has_wall(Grid.BOTTOM):
                edges += 1
        return edges

    @staticmethod
    def calculate_stats(grid: Grid):
        dead_ends = 0
        intersections = 0 # 3+ exits
        corridors = 0 # 2 exits

        # Exits toward the outside of the grid don't count
        for cell in grid.cells:
            exits = sum(1 for _ in grid.get_open_neighbors(cell))
            if exits == 1: dead_ends += 1
            elif exits == 2: corridors += 1
            elif exits >= 3: intersections += 1

        total = grid.rows * grid.cols
        terrain = Counter(cell.terrain.name.lower() for cell in grid.cells)
        return {
            "dead_ends": dead_ends,
            "corridors": corridors,
            "intersections": intersections,
            "open_edges": MazeStats.count_open_edges(grid),
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0,
            "terrain": dict(terrain),
        }
