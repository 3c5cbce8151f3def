"""Tests for the simulation engine (tick driver core)."""

import pytest

from autosnake.model.engine import RunStatus, SimulationEngine
from autosnake.model.geometry import LEFT, UP

from .test_planner import RING


class TestLifecycle:
    """Test NOT_STARTED -> RUNNING -> HALTED transitions."""

    def test_initial_status(self, make_config):
        engine = SimulationEngine(make_config())

        assert engine.status == RunStatus.NOT_STARTED
        assert engine.world is None
        assert not engine.is_finished()

    def test_step_before_start_raises(self, make_config):
        engine = SimulationEngine(make_config())
        with pytest.raises(RuntimeError):
            engine.step()

    def test_start_builds_centered_world(self, make_config):
        engine = SimulationEngine(make_config(12, 8))
        world = engine.start()

        assert engine.status == RunStatus.RUNNING
        assert world.body == [(6, 4)]
        assert world.food not in world.body
        assert engine.current_tick == 0

    def test_collision_halts(self, engine_with_world):
        # Head boxed into the corner by its own body
        engine = engine_with_world(5, 5, body=[(0, 0), (1, 0), (1, 1), (0, 1)],
                                   food=(4, 4))
        engine.world.last_direction = UP

        state = engine.step()

        assert state.outcome == "collided"
        assert engine.status == RunStatus.HALTED
        assert engine.halt_reason == "collision"
        assert engine.is_finished()
        with pytest.raises(RuntimeError):
            engine.step()

    def test_restart_replaces_world(self, engine_with_world):
        engine = engine_with_world(7, 7, body=[(0, 0)] + RING, food=(3, 3))
        engine.world.last_direction = LEFT
        engine.step()
        old_world = engine.world
        assert engine.status == RunStatus.HALTED

        new_world = engine.start()

        assert new_world is not old_world
        assert engine.status == RunStatus.RUNNING
        assert engine.current_tick == 0
        assert engine.food_eaten == 0
        assert engine.halt_reason is None
        assert new_world.body == [(3, 3)]
        assert engine.runs == 2

    def test_max_ticks_finishes(self, make_config):
        engine = SimulationEngine(make_config(max_ticks=3))
        engine.start()

        for _ in range(3):
            engine.step()

        assert engine.is_finished()
        assert engine.status == RunStatus.RUNNING


class TestScenarios:
    """End-to-end tick scenarios."""

    def test_straight_chase_takes_three_ticks(self, engine_with_world):
        engine = engine_with_world(10, 10, body=[(5, 5)], food=(5, 2))

        outcomes = [engine.step().outcome for _ in range(3)]

        assert outcomes == ["moved", "moved", "ate"]
        assert engine.world.last_direction == UP
        assert engine.world.body == [(5, 2), (5, 3)]
        assert engine.food_eaten == 1
        assert engine.world.food not in engine.world.body

    def test_adjacent_food_eaten_in_one_tick(self, engine_with_world):
        engine = engine_with_world(10, 10, body=[(5, 5), (6, 5)], food=(4, 5))

        state = engine.step()

        assert state.outcome == "ate"
        assert state.length == 3
        assert state.direction == LEFT

    def test_enclosed_food_falls_back_then_halts(self, engine_with_world):
        engine = engine_with_world(7, 7, body=[(0, 0)] + RING, food=(3, 3))
        engine.world.last_direction = LEFT

        state = engine.step()

        assert state.path is None
        assert state.direction == LEFT
        assert state.outcome == "collided"
        assert engine.get_summary()["fallback_ticks"] == 1

    def test_board_full_halts(self, make_config):
        engine = SimulationEngine(make_config(2, 1))
        engine.start()

        state = engine.step()

        assert state.outcome == "ate"
        assert engine.status == RunStatus.HALTED
        assert engine.halt_reason == "board_full"


class TestInvariants:
    """Properties that hold over whole runs."""

    @pytest.mark.parametrize("seed", range(8))
    def test_run_invariants(self, make_config, seed):
        engine = SimulationEngine(make_config(8, 6, seed=seed))
        engine.start()

        for _ in range(600):
            before = len(engine.world)
            state = engine.step()

            if state.outcome == "ate":
                assert state.length == before + 1
            elif state.outcome == "moved":
                assert state.length == before
            else:
                assert state.body == tuple(engine.world.body)
                assert state.length == before

            if engine.is_running():
                assert len(set(state.body)) == len(state.body)
                assert state.food not in state.body
            else:
                break

    def test_seed_reproducible(self, make_config):
        runs = []
        for _ in range(2):
            engine = SimulationEngine(make_config(8, 8, seed=123))
            engine.start()
            states = []
            while not engine.is_finished() and engine.current_tick < 300:
                states.append(engine.step())
            runs.append([(s.outcome, s.body, s.food) for s in states])

        assert runs[0] == runs[1]

    def test_summary(self, engine_with_world):
        engine = engine_with_world(10, 10, body=[(5, 5)], food=(5, 4))
        engine.step()

        summary = engine.get_summary()

        assert summary["total_ticks"] == 1
        assert summary["food_eaten"] == 1
        assert summary["final_length"] == 2
        assert summary["peak_length"] == 2
        assert summary["status"] == "running"
