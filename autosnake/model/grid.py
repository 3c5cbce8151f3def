"""Grid world state for the autosnake simulation."""

import logging
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from ..errors import ERROR_UNKNOWN_PLACEMENT, GridFullError
from .geometry import DIRECTIONS, STAY, Cell, Direction, add, in_bounds

logger = logging.getLogger(__name__)

PLACEMENT_MODES = ("uniform", "rejection")


class Outcome(Enum):
    """Result of advancing the snake by one cell."""
    MOVED = "moved"
    ATE = "ate"
    COLLIDED = "collided"


class GridWorld:
    """
    Authoritative simulation state: grid bounds, snake body and food cell.

    Coordinate convention: (x, y) for API, [y, x] for array indexing.
    The body is head-first; an occupancy layer mirrors it for O(1) lookups.
    """

    def __init__(self, cols: int, rows: int,
                 rng: Optional[np.random.Generator] = None,
                 body: Optional[Sequence[Cell]] = None,
                 food: Optional[Cell] = None,
                 placement: str = "uniform"):
        if cols < 1 or rows < 1:
            raise ValueError(f"Grid must be at least 1x1, got {cols}x{rows}")
        if placement not in PLACEMENT_MODES:
            raise ValueError(ERROR_UNKNOWN_PLACEMENT.format(
                mode=placement, choices=", ".join(PLACEMENT_MODES)))

        self.cols = cols
        self.rows = rows
        self.rng = rng if rng is not None else np.random.default_rng()
        self.placement = placement
        self.last_direction: Direction = STAY

        if body is None:
            body = [(cols // 2, rows // 2)]
        self.body: List[Cell] = [tuple(c) for c in body]
        self._validate_body()

        # Occupancy: True = body segment (head included)
        self.occupancy = np.zeros((rows, cols), dtype=bool)
        for x, y in self.body:
            self.occupancy[y, x] = True

        self.food: Cell
        if food is None:
            self.relocate_food()
        else:
            food = tuple(food)
            if not in_bounds(food, cols, rows):
                raise ValueError(f"Food {food} is outside the {cols}x{rows} grid")
            if self.is_occupied(food):
                raise ValueError(f"Food {food} overlaps the snake body")
            self.food = food

    def _validate_body(self) -> None:
        if not self.body:
            raise ValueError("Snake body must contain at least one cell")
        for cell in self.body:
            if not in_bounds(cell, self.cols, self.rows):
                raise ValueError(f"Body cell {cell} is outside the "
                                 f"{self.cols}x{self.rows} grid")
        if len(set(self.body)) != len(self.body):
            raise ValueError("Snake body cells must be distinct")

    @property
    def head(self) -> Cell:
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def in_bounds(self, cell: Cell) -> bool:
        return in_bounds(cell, self.cols, self.rows)

    def is_occupied(self, cell: Cell, exclude_head: bool = False) -> bool:
        """
        Check if `cell` matches a body segment.

        With `exclude_head` the index-0 segment is skipped: the head vacates
        its cell as soon as the snake moves. Out-of-bounds cells are never
        occupied.
        """
        if not self.in_bounds(cell):
            return False
        if exclude_head and cell == self.head:
            return False
        x, y = cell
        return bool(self.occupancy[y, x])

    def is_blocked(self, cell: Cell) -> bool:
        """Pathfinding obstacle: off-grid or a non-head body segment."""
        return not self.in_bounds(cell) or self.is_occupied(cell, exclude_head=True)

    def blocked_mask(self) -> np.ndarray:
        """Boolean (rows, cols) layer of body segments with index > 0."""
        mask = self.occupancy.copy()
        hx, hy = self.head
        mask[hy, hx] = False
        return mask

    def free_cells(self) -> List[Cell]:
        """All in-bounds cells not covered by any body segment."""
        ys, xs = np.where(~self.occupancy)
        return [(int(x), int(y)) for x, y in zip(xs, ys)]

    def relocate_food(self) -> Cell:
        """
        Move food to a uniformly random free cell.

        Raises GridFullError when the body covers the whole grid.
        """
        free_count = self.occupancy.size - int(self.occupancy.sum())
        if free_count == 0:
            raise GridFullError(self.cols, self.rows)

        if self.placement == "rejection":
            while True:
                x = int(self.rng.integers(0, self.cols))
                y = int(self.rng.integers(0, self.rows))
                if not self.occupancy[y, x]:
                    break
        else:
            ys, xs = np.where(~self.occupancy)
            idx = int(self.rng.integers(0, free_count))
            x, y = int(xs[idx]), int(ys[idx])

        self.food = (x, y)
        logger.debug("Food placed at %s (%d free cells)", self.food, free_count)
        return self.food

    def advance(self, direction: Direction) -> Outcome:
        """
        Move the head one step along `direction`.

        COLLIDED leaves the body untouched. ATE keeps the new length (growth
        by one) and the caller must follow with relocate_food(). MOVED drops
        the tail. STAY is a no-op reported as MOVED.
        """
        direction = tuple(direction)
        if direction == STAY:
            return Outcome.MOVED
        if direction not in DIRECTIONS:
            raise ValueError(f"Not a unit grid direction: {direction}")

        new_head = add(self.head, direction)
        if not self.in_bounds(new_head) or self.is_occupied(new_head, exclude_head=True):
            return Outcome.COLLIDED

        self.body.insert(0, new_head)
        nx, ny = new_head
        self.occupancy[ny, nx] = True

        if new_head == self.food:
            return Outcome.ATE

        tx, ty = self.body.pop()
        self.occupancy[ty, tx] = False
        return Outcome.MOVED

    def __repr__(self) -> str:
        return (f"GridWorld({self.cols}x{self.rows}, head={self.head}, "
                f"length={len(self.body)}, food={self.food})")
