from typing import Dict, Iterator, List, Tuple

from pathquest.core.cell import Cell, TerrainKind, TOP, RIGHT, BOTTOM, LEFT, WALL_NAMES
from pathquest.core.errors import ConfigurationError, OutOfRange

START = (0, 0)


class Grid:
    TOP = TOP
    RIGHT = RIGHT
    BOTTOM = BOTTOM
    LEFT = LEFT

    # Direction Helpers
    DR = {TOP: -1, BOTTOM: 1, LEFT: 0, RIGHT: 0}
    DC = {TOP: 0, BOTTOM: 0, LEFT: -1, RIGHT: 1}
    OPPOSITE = {TOP: BOTTOM, BOTTOM: TOP, LEFT: RIGHT, RIGHT: LEFT}

    # Neighbour enumeration order, also the search tie-break order
    DIRECTIONS = (TOP, BOTTOM, LEFT, RIGHT)

    __slots__ = ('rows', 'cols', 'cells', 'goal_cells')

    def __init__(self, rows: int, cols: int):
        if not isinstance(rows, int) or not isinstance(cols, int) or rows < 1 or cols < 1:
            raise ConfigurationError(f"Grid dimensions must be positive integers, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        # Row-major, every cell starts fully walled
        self.cells: List[Cell] = [Cell(r, c) for r in range(rows) for c in range(cols)]
        self.goal_cells: List[Cell] = []

    def get_index(self, row: int, col: int) -> int:
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return row * self.cols + col
        raise OutOfRange(row, col, self.rows, self.cols)

    def index_of(self, cell: Cell) -> int:
        return cell.row * self.cols + cell.col

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_boundary(self, row: int, col: int) -> bool:
        return row == 0 or col == 0 or row == self.rows - 1 or col == self.cols - 1

    # Read-only query surface

    def cell_at(self, row: int, col: int) -> Cell:
        return self.cells[self.get_index(row, col)]

    @property
    def start_cell(self) -> Cell:
        return self.cells[0]

    def walls_of(self, cell: Cell) -> Dict[str, bool]:
        return {name: cell.has_wall(bit) for bit, name in WALL_NAMES.items()}

    def terrain_of(self, cell: Cell) -> TerrainKind:
        return cell.terrain

    # Wall mutation

    def carve_path(self, row: int, col: int, dir_bit: int):
        """
        Removes the wall between (row, col) and the neighbour in 'dir_bit',
        and the OPPOSITE wall on the neighbour. Carving into the void is a no-op;
        use open_boundary for entrances and exits.
        """
        r2, c2 = row + self.DR[dir_bit], col + self.DC[dir_bit]
        if not self.in_bounds(r2, c2):
            return

        self.cells[self.get_index(row, col)].walls &= ~dir_bit
        self.cells[r2 * self.cols + c2].walls &= ~self.OPPOSITE[dir_bit]

    def add_wall(self, row: int, col: int, dir_bit: int):
        self.cells[self.get_index(row, col)].walls |= dir_bit

        r2, c2 = row + self.DR[dir_bit], col + self.DC[dir_bit]
        if self.in_bounds(r2, c2):
            self.cells[r2 * self.cols + c2].walls |= self.OPPOSITE[dir_bit]

    def open_boundary(self, row: int, col: int, dir_bit: int):
        """Opens a wall facing outside the grid. Internal walls are refused."""
        if self.in_bounds(row + self.DR[dir_bit], col + self.DC[dir_bit]):
            raise ConfigurationError(f"Wall {WALL_NAMES[dir_bit]} of ({row}, {col}) is not a boundary wall")
        self.cells[self.get_index(row, col)].walls &= ~dir_bit

    def has_wall(self, row: int, col: int, dir_bit: int) -> bool:
        return self.cells[self.get_index(row, col)].has_wall(dir_bit)

    # Adjacency

    def get_neighbors(self, row: int, col: int) -> Iterator[Tuple[int, int, int]]:
        """
        Yields (nr, nc, direction_to_neighbor) for all in-grid neighbours.
        Does NOT check walls.
        """
        for dir_bit in self.DIRECTIONS:
            nr, nc = row + self.DR[dir_bit], col + self.DC[dir_bit]
            if 0 <= nr < self.rows and 0 <= nc < self.cols:
                yield (nr, nc, dir_bit)

    def get_open_neighbors(self, cell: Cell) -> Iterator[Cell]:
        """Yields neighbours not blocked by a wall, in top, bottom, left, right order."""
        for nr, nc, dir_bit in self.get_neighbors(cell.row, cell.col):
            if not cell.has_wall(dir_bit):
                yield self.cells[nr * self.cols + nc]

    # Per-run state

    def reset_search_state(self):
        for cell in self.cells:
            cell.visited = False
            cell.on_path = False

    def set_goals(self, goals: List[Tuple[int, int]]):
        """Places goal cells by coordinate, for hand-built grids."""
        cells = [self.cell_at(r, c) for r, c in goals]
        if any(cell is self.start_cell for cell in cells):
            raise ConfigurationError("The start cell cannot be a goal")
        if len(set(map(id, cells))) != len(cells):
            raise ConfigurationError("Goal cells must be distinct")
        self.goal_cells = cells
