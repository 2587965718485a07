from typing import Callable, List, Optional

from pathquest.core.cell import Cell

CellExplored = Callable[[Cell, int], None]
PathFound = Callable[[int, List[Cell], int], None]
SearchComplete = Callable[[], None]


class SearchHooks:
    """
    Optional notification callbacks for presentation code (renderers, sound, stat labels).
    The solver calls them synchronously; what they do is up to the collaborator.
    """
    __slots__ = ('on_cell_explored', 'on_path_found', 'on_search_complete')

    def __init__(self,
                 on_cell_explored: Optional[CellExplored] = None,
                 on_path_found: Optional[PathFound] = None,
                 on_search_complete: Optional[SearchComplete] = None):
        self.on_cell_explored = on_cell_explored
        self.on_path_found = on_path_found
        self.on_search_complete = on_search_complete

    def cell_explored(self, cell: Cell, index: int):
        if self.on_cell_explored:
            self.on_cell_explored(cell, index)

    def path_found(self, goal_index: int, path: List[Cell], cost: int):
        if self.on_path_found:
            self.on_path_found(goal_index, path, cost)

    def search_complete(self):
        if self.on_search_complete:
            self.on_search_complete()


class EventRecorder(SearchHooks):
    """Collects every notification in order. Handy for tests and headless playback."""
    __slots__ = ('events',)

    def __init__(self):
        super().__init__(self._explored, self._path, self._complete)
        self.events = []

    def _explored(self, cell, index):
        self.events.append(("explored", cell, index))

    def _path(self, goal_index, path, cost):
        self.events.append(("path", goal_index, list(path), cost))

    def _complete(self):
        self.events.append(("complete",))

    def explored_cells(self) -> List[Cell]:
        return [e[1] for e in self.events if e[0] == "explored"]
