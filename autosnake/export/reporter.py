"""Summary report generation for the autosnake simulation."""

from typing import Dict, List, Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import TickSnapshot


class Reporter:
    """Accumulates per-tick statistics and formats the end-of-run report."""

    def __init__(self, config_path: str, seed: Optional[int]):
        self.config_path = config_path
        self.seed = seed
        self.path_lengths: List[int] = []
        self.fallback_ticks = 0
        self.peak_length = 0
        self.ticks_per_food: List[int] = []
        self._ticks_since_food = 0

    def update(self, state: "TickSnapshot") -> None:
        """Accumulate metrics per tick."""
        if state.path:
            self.path_lengths.append(len(state.path) - 1)
        else:
            self.fallback_ticks += 1

        self.peak_length = max(self.peak_length, state.length)

        self._ticks_since_food += 1
        if state.outcome == "ate":
            self.ticks_per_food.append(self._ticks_since_food)
            self._ticks_since_food = 0

    def averages(self) -> Dict[str, float]:
        avg_path = (sum(self.path_lengths) / len(self.path_lengths)
                    if self.path_lengths else 0.0)
        avg_chase = (sum(self.ticks_per_food) / len(self.ticks_per_food)
                     if self.ticks_per_food else 0.0)
        return {'avg_path_length': avg_path, 'avg_ticks_per_food': avg_chase}

    def generate_summary(self, final_state: "TickSnapshot",
                         summary: Dict,
                         output_dir: Path,
                         csv_enabled: bool,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report."""
        averages = self.averages()
        halt_reason = summary.get('halt_reason') or 'tick limit reached'

        lines = [
            "",
            "=" * 80,
            "                       AUTOSNAKE SIMULATION REPORT",
            "=" * 80,
            f"Configuration: {self.config_path}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            "",
            "RUN METRICS",
            "-" * 40,
            f"Total Ticks:           {final_state.tick}",
            f"Food Eaten:            {summary.get('food_eaten', 0)}",
            f"Final Length:          {final_state.length}",
            f"Peak Length:           {self.peak_length}",
            f"Avg Ticks per Food:    {averages['avg_ticks_per_food']:.1f}",
            f"Avg Planned Path:      {averages['avg_path_length']:.1f} cells",
            f"Fallback Ticks:        {self.fallback_ticks}",
            f"Ended By:              {halt_reason}",
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        # Output file paths
        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / 'simulation_log.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'simulation.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
