"""Drawing surface, PNG snapshots and GIF export for the autosnake simulation."""

import numpy as np
import matplotlib
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from pathlib import Path
from typing import List, Optional, TYPE_CHECKING
from PIL import Image
import io

if TYPE_CHECKING:
    from ..config import RenderConfig
    from ..model.state import TickSnapshot


class Visualizer:
    """
    Grid drawing surface backed by an RGB pixel buffer.

    Supports:
    - Clearing to the background colour
    - Filling one cell-sized square at a grid coordinate
    - Single PNG snapshots
    - Animated GIF compilation
    """

    def __init__(self, cols: int, rows: int, render: "RenderConfig"):
        self.cols = cols
        self.rows = rows
        self.render_config = render
        self.cell_size = render.cell_size
        self.frames: List[Image.Image] = []
        self.canvas = np.zeros((rows * self.cell_size, cols * self.cell_size, 3),
                               dtype=np.float64)

    def clear(self, color: Optional[str] = None) -> None:
        """Fill the whole surface with the background colour."""
        self.canvas[:, :] = to_rgb(color or self.render_config.background)

    def fill_cell(self, x: int, y: int, color: str) -> None:
        """Fill the square for grid cell (x, y)."""
        if not (0 <= x < self.cols and 0 <= y < self.rows):
            return
        s = self.cell_size
        self.canvas[y * s:(y + 1) * s, x * s:(x + 1) * s] = to_rgb(color)

    def render(self, state: "TickSnapshot") -> np.ndarray:
        """Draw one tick: background, planned path, food, then body segments."""
        cfg = self.render_config
        self.clear()

        if cfg.show_path and state.path:
            for x, y in state.path[1:-1]:
                self.fill_cell(x, y, cfg.path_color)

        self.fill_cell(*state.food, cfg.food_color)
        for x, y in state.body:
            self.fill_cell(x, y, cfg.body_color)
        return self.canvas

    def _create_figure(self, state: "TickSnapshot") -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        aspect = self.cols / self.rows
        fig_height = 6
        fig_width = max(6, fig_height * aspect)
        fig, ax = plt.subplots(figsize=(fig_width, fig_height))

        ax.imshow(self.render(state), origin='upper', interpolation='nearest')
        ax.set_title(f'Tick {state.tick} | Length: {state.length} | '
                     f'Eaten: {int(state.metrics.get("food_eaten", 0))} | '
                     f'{state.outcome}')
        ax.set_axis_off()

        plt.tight_layout()
        return fig

    def buffer_frame(self, state: "TickSnapshot") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "TickSnapshot", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 10) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )

    def clear_frames(self) -> None:
        """Clear buffered frames."""
        self.frames.clear()


def use_headless_backend() -> None:
    """Switch matplotlib to the non-interactive Agg backend."""
    matplotlib.use('Agg')
