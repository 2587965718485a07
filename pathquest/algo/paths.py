from typing import Dict, Iterable, List, Optional

from pathquest.core.cell import Cell

ParentMap = Dict[Cell, Optional[Cell]]


def reconstruct_path(parent_of: ParentMap, goal: Cell) -> Optional[List[Cell]]:
    """
    Walks parent_of back from 'goal' to the cell with no parent (the start) and
    returns the cells in start -> goal order, marking each one on_path.
    Returns None if the search never reached 'goal'.
    """
    if goal not in parent_of:
        return None

    path = []
    curr = goal
    while curr is not None:
        path.append(curr)
        curr = parent_of[curr]
    path.reverse()

    for cell in path:
        cell.on_path = True
    return path


def reconstruct_all(parent_of: ParentMap, goals: Iterable[Cell]) -> List[List[Cell]]:
    paths = []
    for goal in goals:
        path = reconstruct_path(parent_of, goal)
        if path is not None:
            paths.append(path)
    return paths


def path_cost(path: List[Cell]) -> int:
    # Start and goal included
    return sum(cell.cost for cell in path)
