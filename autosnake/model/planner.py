"""A* path planner choosing the snake's next move."""

import heapq
import itertools
import logging
from typing import List, Optional

import numpy as np

from .geometry import DIRECTION_NAMES, Cell, Direction, delta, manhattan, neighbors, pack, unpack
from .grid import GridWorld

logger = logging.getLogger(__name__)


def reconstruct_path(came_from: np.ndarray, goal_idx: int, cols: int) -> List[Cell]:
    """Follow back-pointers from the goal to the start; returns [start, ..., goal]."""
    path = [unpack(goal_idx, cols)]
    idx = goal_idx
    while came_from[idx] >= 0:
        idx = int(came_from[idx])
        path.append(unpack(idx, cols))
    path.reverse()
    return path


def find_path(world: GridWorld, start: Cell, goal: Cell) -> Optional[List[Cell]]:
    """
    Shortest 4-connected path from `start` to `goal` avoiding blocked cells.

    Unit edge costs with the Manhattan heuristic. The frontier is a binary
    heap ordered by (f, h, insertion order): among equal f the node nearer
    the goal is expanded first, then the earliest discovered. Scores and
    back-pointers are flat arrays indexed by y * cols + x.

    Returns None when the goal is blocked or unreachable.
    """
    cols, rows = world.cols, world.rows
    if world.is_blocked(goal) or not world.in_bounds(start):
        return None

    size = cols * rows
    g_score = np.full(size, np.inf)
    came_from = np.full(size, -1, dtype=np.int64)
    closed = np.zeros(size, dtype=bool)
    blocked = world.blocked_mask().ravel()

    start_idx = pack(start, cols)
    goal_idx = pack(goal, cols)
    g_score[start_idx] = 0

    counter = itertools.count()
    h = manhattan(start, goal)
    frontier = [(h, h, next(counter), start_idx)]

    while frontier:
        _, _, _, idx = heapq.heappop(frontier)
        if closed[idx]:
            continue  # stale entry, superseded by a cheaper one
        if idx == goal_idx:
            return reconstruct_path(came_from, idx, cols)
        closed[idx] = True

        current = unpack(idx, cols)
        tentative = g_score[idx] + 1
        for nxt in neighbors(current, cols, rows):
            n_idx = pack(nxt, cols)
            if blocked[n_idx] or closed[n_idx]:
                continue
            if tentative < g_score[n_idx]:
                came_from[n_idx] = idx
                g_score[n_idx] = tentative
                h = manhattan(nxt, goal)
                heapq.heappush(frontier, (tentative + h, h, next(counter), n_idx))

    return None


class PathPlanner:
    """
    Chooses the direction for the next tick.

    Follows the first step of an A* path from head to food; if no path
    exists it keeps the previous direction, even when that leads into a
    collision. The caller detects the collision through GridWorld.advance.
    """

    def __init__(self):
        self.last_path: Optional[List[Cell]] = None
        self.fallbacks = 0

    def find_path(self, world: GridWorld) -> Optional[List[Cell]]:
        return find_path(world, world.head, world.food)

    def decide(self, world: GridWorld) -> Direction:
        path = self.find_path(world)
        self.last_path = path

        if path is not None and len(path) > 1:
            return delta(path[0], path[1])

        self.fallbacks += 1
        logger.debug("No path from %s to %s, continuing %s",
                     world.head, world.food,
                     DIRECTION_NAMES.get(world.last_direction, world.last_direction))
        return world.last_direction
