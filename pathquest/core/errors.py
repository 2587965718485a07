class MazeError(Exception):
    """Base class for errors raised by the maze core."""


class ConfigurationError(MazeError, ValueError):
    """Invalid maze or search parameters. Raised before any grid is touched."""


class OutOfRange(MazeError, IndexError):
    """A (row, col) lookup fell outside the grid."""

    def __init__(self, row: int, col: int, rows: int, cols: int):
        super().__init__(f"Coordinate ({row}, {col}) out of bounds for {rows}x{cols} grid")
        self.row = row
        self.col = col
