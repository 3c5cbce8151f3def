"""Simulation engine (tick driver core) for the autosnake simulation."""

import logging
from enum import Enum
from typing import Dict, Optional, TYPE_CHECKING

import numpy as np

from ..errors import ERROR_NOT_RUNNING, GridFullError
from .grid import GridWorld, Outcome
from .planner import PathPlanner
from .state import TickSnapshot

if TYPE_CHECKING:
    from ..config import SimulationConfig

logger = logging.getLogger(__name__)


class RunStatus(Enum):
    """Simulation lifecycle: NOT_STARTED -> RUNNING -> HALTED."""
    NOT_STARTED = "not_started"
    RUNNING = "running"
    HALTED = "halted"


class SimulationEngine:
    """
    Orchestrates the discrete-time simulation loop.

    Each tick:
    1. Plan the next direction (A* toward the food)
    2. Advance the snake
    3. Relocate food after a capture
    4. Halt on collision
    5. Return a state snapshot

    The engine exclusively owns the single GridWorld; start() replaces it
    wholesale rather than resetting it in place.
    """

    def __init__(self, config: "SimulationConfig"):
        self.config = config
        self.rng = np.random.default_rng(config.seed)
        self.status = RunStatus.NOT_STARTED
        self.halt_reason: Optional[str] = None
        self.world: Optional[GridWorld] = None
        self.planner = PathPlanner()
        self.runs = 0

        # Metrics tracking
        self.current_tick = 0
        self.food_eaten = 0
        self.peak_length = 0

    def start(self) -> GridWorld:
        """Begin a fresh run (also used to restart after a halt)."""
        self.world = GridWorld(
            self.config.grid.cols, self.config.grid.rows,
            rng=self.rng,
            placement=self.config.food_placement
        )
        self.planner = PathPlanner()
        self.status = RunStatus.RUNNING
        self.halt_reason = None
        self.current_tick = 0
        self.food_eaten = 0
        self.peak_length = len(self.world)
        self.runs += 1
        logger.info("Run %d started on %dx%d grid, head=%s food=%s",
                    self.runs, self.world.cols, self.world.rows,
                    self.world.head, self.world.food)
        return self.world

    def step(self) -> TickSnapshot:
        """Execute one tick: plan, advance, handle outcome, snapshot."""
        if self.status != RunStatus.RUNNING:
            raise RuntimeError(ERROR_NOT_RUNNING.format(status=self.status.value))

        world = self.world
        self.current_tick += 1

        direction = self.planner.decide(world)
        world.last_direction = direction
        outcome = world.advance(direction)

        if outcome == Outcome.ATE:
            self.food_eaten += 1
            self.peak_length = max(self.peak_length, len(world))
            logger.debug("Tick %d: ate at %s, length %d",
                         self.current_tick, world.head, len(world))
            try:
                world.relocate_food()
            except GridFullError:
                self._halt("board_full")
        elif outcome == Outcome.COLLIDED:
            self._halt("collision")

        return self._create_snapshot(outcome)

    def _halt(self, reason: str) -> None:
        self.status = RunStatus.HALTED
        self.halt_reason = reason
        logger.info("Run %d halted at tick %d (%s), length %d",
                    self.runs, self.current_tick, reason, len(self.world))

    def snapshot(self) -> TickSnapshot:
        """Snapshot of the current world without advancing it."""
        if self.world is None:
            raise RuntimeError(ERROR_NOT_RUNNING.format(status=self.status.value))
        return self._create_snapshot(None)

    def _create_snapshot(self, outcome: Optional[Outcome]) -> TickSnapshot:
        """Create immutable snapshot of current simulation state."""
        world = self.world
        path = self.planner.last_path
        metrics = {
            'length': len(world),
            'food_eaten': self.food_eaten,
            'fallbacks': self.planner.fallbacks,
            'free_cells': world.cols * world.rows - len(world),
        }
        return TickSnapshot(
            tick=self.current_tick,
            outcome=outcome.value if outcome is not None else "ready",
            body=tuple(world.body),
            food=world.food,
            direction=world.last_direction,
            path=tuple(path) if path is not None else None,
            metrics=metrics
        )

    def is_running(self) -> bool:
        return self.status == RunStatus.RUNNING

    def is_finished(self) -> bool:
        """Check if simulation should terminate."""
        if self.status == RunStatus.HALTED:
            return True
        return (self.config.max_ticks is not None and
                self.current_tick >= self.config.max_ticks)

    def get_summary(self) -> Dict:
        """Get summary statistics for the current run."""
        return {
            'total_ticks': self.current_tick,
            'food_eaten': self.food_eaten,
            'final_length': len(self.world) if self.world else 0,
            'peak_length': self.peak_length,
            'fallback_ticks': self.planner.fallbacks,
            'status': self.status.value,
            'halt_reason': self.halt_reason,
        }
