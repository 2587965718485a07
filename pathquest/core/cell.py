from enum import Enum

# Wall bitmask constants
TOP    = 0b0001
RIGHT  = 0b0010
BOTTOM = 0b0100
LEFT   = 0b1000

ALL_WALLS = TOP | RIGHT | BOTTOM | LEFT

WALL_NAMES = {TOP: "top", RIGHT: "right", BOTTOM: "bottom", LEFT: "left"}


class TerrainKind(Enum):
    DEFAULT = 0
    GRASS = 1
    MUD = 5
    WATER = 10

    @property
    def cost(self) -> int:
        return self.value


class Cell:
    __slots__ = ('_row', '_col', 'walls', 'terrain', 'visited', 'on_path')

    def __init__(self, row: int, col: int):
        self._row = row
        self._col = col
        # All walls present by default
        self.walls = ALL_WALLS
        self.terrain = TerrainKind.DEFAULT
        self.visited = False
        self.on_path = False

    @property
    def row(self) -> int:
        return self._row

    @property
    def col(self) -> int:
        return self._col

    @property
    def cost(self) -> int:
        return self.terrain.cost

    def has_wall(self, dir_bit: int) -> bool:
        return (self.walls & dir_bit) != 0

    def manhattan(self, other: "Cell") -> int:
        return abs(self._row - other._row) + abs(self._col - other._col)

    def __repr__(self):
        return f"Cell({self._row}, {self._col})"
