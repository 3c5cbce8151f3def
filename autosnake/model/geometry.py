"""Grid geometry helpers shared by the world model and the path planner."""

from typing import List, Tuple

Cell = Tuple[int, int]
Direction = Tuple[int, int]

# Screen convention: y grows downward, so UP decreases y
UP: Direction = (0, -1)
DOWN: Direction = (0, 1)
LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)
STAY: Direction = (0, 0)

# Von Neumann neighbourhood (4-connected), in expansion order
DIRECTIONS: List[Direction] = [UP, DOWN, LEFT, RIGHT]

DIRECTION_NAMES = {
    UP: "up",
    DOWN: "down",
    LEFT: "left",
    RIGHT: "right",
    STAY: "stay",
}


def add(cell: Cell, direction: Direction) -> Cell:
    """Cell reached by moving one step from `cell` along `direction`."""
    return (cell[0] + direction[0], cell[1] + direction[1])


def delta(a: Cell, b: Cell) -> Direction:
    """Direction vector from `a` to `b`."""
    return (b[0] - a[0], b[1] - a[1])


def in_bounds(cell: Cell, cols: int, rows: int) -> bool:
    x, y = cell
    return 0 <= x < cols and 0 <= y < rows


def manhattan(a: Cell, b: Cell) -> int:
    """
    Manhattan distance |dx| + |dy|.

    Admissible and consistent on a 4-connected unit-cost grid, so A* with
    this heuristic returns shortest paths.
    """
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def neighbors(cell: Cell, cols: int, rows: int) -> List[Cell]:
    """In-bounds 4-neighbours of `cell`."""
    result = []
    for direction in DIRECTIONS:
        nxt = add(cell, direction)
        if in_bounds(nxt, cols, rows):
            result.append(nxt)
    return result


def pack(cell: Cell, cols: int) -> int:
    """Flat index y * cols + x."""
    return cell[1] * cols + cell[0]


def unpack(index: int, cols: int) -> Cell:
    y, x = divmod(int(index), cols)
    return (x, y)
