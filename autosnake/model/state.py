"""State snapshot dataclasses for the autosnake simulation."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .geometry import Cell, Direction


@dataclass(frozen=True)
class TickSnapshot:
    """Immutable record of the world after one tick."""
    tick: int
    outcome: str  # "ready", "moved", "ate", "collided"
    body: Tuple[Cell, ...]
    food: Cell
    direction: Direction
    path: Optional[Tuple[Cell, ...]]  # None when the planner fell back
    metrics: Dict[str, float] = field(default_factory=dict)

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def length(self) -> int:
        return len(self.body)

    def to_csv_rows(self) -> List[Dict]:
        """Convert to CSV-compatible format."""
        return [{
            "tick": self.tick,
            "outcome": self.outcome,
            "head_x": self.head[0],
            "head_y": self.head[1],
            "food_x": self.food[0],
            "food_y": self.food[1],
            "length": self.length,
            "dx": self.direction[0],
            "dy": self.direction[1],
            "path_length": len(self.path) - 1 if self.path else "",
        }]
