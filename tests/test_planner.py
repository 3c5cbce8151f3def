"""Tests for the A* path planner."""

from collections import deque

import numpy as np
import pytest

from autosnake.model.geometry import DOWN, LEFT, RIGHT, UP, manhattan, neighbors
from autosnake.model.grid import GridWorld, Outcome
from autosnake.model.planner import PathPlanner, find_path

RING = [(2, 2), (3, 2), (4, 2), (4, 3), (4, 4), (3, 4), (2, 4), (2, 3)]


def bfs_distance(world, start, goal):
    """Reference shortest distance over non-blocked cells, or None."""
    seen = {start}
    queue = deque([(start, 0)])
    while queue:
        cell, dist = queue.popleft()
        if cell == goal:
            return dist
        for nxt in neighbors(cell, world.cols, world.rows):
            if nxt not in seen and not world.is_blocked(nxt):
                seen.add(nxt)
                queue.append((nxt, dist + 1))
    return None


def random_world(rng, cols, rows, obstacle_count):
    cells = [(x, y) for y in range(rows) for x in range(cols)]
    picks = rng.choice(len(cells), size=obstacle_count + 2, replace=False)
    chosen = [cells[int(i)] for i in picks]
    head, food, obstacles = chosen[0], chosen[1], chosen[2:]
    return GridWorld(cols, rows, body=[head] + obstacles, food=food)


class TestFindPath:
    """Test the shortest-path search."""

    def test_straight_line(self):
        world = GridWorld(10, 10, body=[(5, 5)], food=(5, 2))

        path = find_path(world, world.head, world.food)

        assert path == [(5, 5), (5, 4), (5, 3), (5, 2)]

    def test_start_equals_goal(self):
        world = GridWorld(10, 10, body=[(5, 5)], food=(0, 0))
        assert find_path(world, (3, 3), (3, 3)) == [(3, 3)]

    def test_blocked_goal_returns_none(self):
        world = GridWorld(10, 10, body=[(5, 5), (5, 6)], food=(0, 0))
        assert find_path(world, world.head, (5, 6)) is None

    def test_enclosed_goal_returns_none(self):
        world = GridWorld(7, 7, body=[(0, 0)] + RING, food=(3, 3))
        assert find_path(world, world.head, world.food) is None

    def test_detours_around_body(self):
        # Wall across column 3 except the bottom row
        wall = [(3, y) for y in range(0, 4)]
        world = GridWorld(5, 5, body=[(1, 0)] + wall, food=(4, 0))

        path = find_path(world, world.head, world.food)

        assert path is not None
        assert len(path) - 1 == bfs_distance(world, world.head, world.food)
        assert (3, 4) in path
        assert not any(cell in wall for cell in path)

    def test_path_may_cross_head_cell(self):
        world = GridWorld(3, 1, body=[(1, 0)], food=(2, 0))
        assert find_path(world, (0, 0), (2, 0)) == [(0, 0), (1, 0), (2, 0)]

    @pytest.mark.parametrize("seed", range(25))
    def test_matches_bfs_distance(self, seed):
        rng = np.random.default_rng(seed)
        world = random_world(rng, 8, 8, obstacle_count=int(rng.integers(0, 30)))

        path = find_path(world, world.head, world.food)
        expected = bfs_distance(world, world.head, world.food)

        if expected is None:
            assert path is None
            return
        assert path is not None
        assert len(path) - 1 == expected
        assert path[0] == world.head
        assert path[-1] == world.food
        for a, b in zip(path, path[1:]):
            assert manhattan(a, b) == 1
        for cell in path[1:]:
            assert not world.is_blocked(cell)

    def test_deterministic(self):
        world = GridWorld(9, 9, body=[(0, 0)], food=(6, 6))
        first = find_path(world, world.head, world.food)
        assert all(find_path(world, world.head, world.food) == first for _ in range(5))


class TestDecide:
    """Test move selection."""

    def test_open_grid_scenario(self):
        world = GridWorld(10, 10, body=[(5, 5)], food=(5, 2))
        planner = PathPlanner()

        assert planner.decide(world) == UP
        assert planner.last_path[-1] == (5, 2)
        assert planner.fallbacks == 0

    def test_each_step_follows_shortest_path(self):
        world = GridWorld(10, 10, body=[(1, 1)], food=(4, 3))
        planner = PathPlanner()

        ticks = 0
        while True:
            direction = planner.decide(world)
            world.last_direction = direction
            ticks += 1
            if world.advance(direction) == Outcome.ATE:
                break
        assert ticks == 5

    def test_no_path_keeps_last_direction(self):
        world = GridWorld(7, 7, body=[(0, 0)] + RING, food=(3, 3))
        world.last_direction = RIGHT
        planner = PathPlanner()

        assert planner.decide(world) == RIGHT
        assert planner.last_path is None
        assert planner.fallbacks == 1

    def test_degenerate_path_keeps_last_direction(self):
        world = GridWorld(10, 10, body=[(5, 5)], food=(0, 0))
        world.last_direction = DOWN
        world.food = world.head

        assert PathPlanner().decide(world) == DOWN

    def test_fallback_into_wall_then_collision(self):
        world = GridWorld(7, 7, body=[(0, 0)] + RING, food=(3, 3))
        world.last_direction = LEFT
        planner = PathPlanner()

        direction = planner.decide(world)

        assert direction == LEFT
        assert world.advance(direction) == Outcome.COLLIDED
