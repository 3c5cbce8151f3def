"""Model package for the autosnake simulation."""

from .geometry import Cell, Direction, DIRECTIONS, UP, DOWN, LEFT, RIGHT, STAY
from .grid import GridWorld, Outcome
from .planner import PathPlanner, find_path
from .state import TickSnapshot
from .engine import SimulationEngine, RunStatus

__all__ = [
    'Cell',
    'Direction',
    'DIRECTIONS',
    'UP',
    'DOWN',
    'LEFT',
    'RIGHT',
    'STAY',
    'GridWorld',
    'Outcome',
    'PathPlanner',
    'find_path',
    'TickSnapshot',
    'SimulationEngine',
    'RunStatus',
]
