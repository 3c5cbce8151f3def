"""Configuration dataclasses and YAML loader for the autosnake simulation."""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from pathlib import Path
import yaml

from .model.grid import PLACEMENT_MODES

DEFAULT_CELL_SIZE = 20
DEFAULT_PADDING = 20
DEFAULT_TICK_INTERVAL_MS = 50
HEADLESS_TICK_CAP = 10000


@dataclass
class GridConfig:
    cols: int
    rows: int


@dataclass
class RenderConfig:
    cell_size: int = DEFAULT_CELL_SIZE
    background: str = '#f0f0f0'
    food_color: str = 'red'
    body_color: str = 'green'
    path_color: str = '#9ecae1'
    show_path: bool = False
    restart_key: str = ' '  # matplotlib reports the space bar as ' '


@dataclass
class SimulationConfig:
    grid: GridConfig
    max_ticks: Optional[int] = None
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS
    food_placement: str = 'uniform'
    render: RenderConfig = field(default_factory=RenderConfig)

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))

    def __post_init__(self):
        if self.grid.cols < 1 or self.grid.rows < 1:
            raise ValueError(f"Grid must be at least 1x1, got "
                             f"{self.grid.cols}x{self.grid.rows}")
        if self.grid.cols * self.grid.rows < 2:
            raise ValueError("Grid needs at least two cells (snake plus food)")
        if self.max_ticks is not None and self.max_ticks < 0:
            raise ValueError(f"max_ticks must be non-negative: {self.max_ticks}")
        if self.tick_interval_ms < 1:
            raise ValueError(f"tick_interval_ms must be positive: "
                             f"{self.tick_interval_ms}")
        if self.food_placement not in PLACEMENT_MODES:
            raise ValueError(f"Unknown food placement: {self.food_placement}")


def grid_from_canvas(width: int, height: int,
                     cell_size: int = DEFAULT_CELL_SIZE,
                     padding: int = DEFAULT_PADDING) -> GridConfig:
    """Derive grid dimensions from a drawing surface size."""
    if cell_size < 1:
        raise ValueError(f"cell_size must be positive: {cell_size}")
    cols = (width - padding * 2) // cell_size
    rows = (height - padding * 2) // cell_size
    return GridConfig(cols=cols, rows=rows)


def _parse_grid(grid_raw: Dict[str, Any], cell_size: int) -> GridConfig:
    """Parse grid dimensions, either explicit or derived from a canvas size."""
    if 'cols' in grid_raw and 'rows' in grid_raw:
        return GridConfig(cols=int(grid_raw['cols']), rows=int(grid_raw['rows']))
    if 'canvas_width' in grid_raw and 'canvas_height' in grid_raw:
        return grid_from_canvas(
            int(grid_raw['canvas_width']),
            int(grid_raw['canvas_height']),
            cell_size=int(grid_raw.get('cell_size', cell_size)),
            padding=int(grid_raw.get('padding', DEFAULT_PADDING))
        )
    raise ValueError("grid needs either cols/rows or canvas_width/canvas_height")


def _parse_render(render_raw: Dict[str, Any]) -> RenderConfig:
    defaults = RenderConfig()
    return RenderConfig(
        cell_size=int(render_raw.get('cell_size', defaults.cell_size)),
        background=render_raw.get('background', defaults.background),
        food_color=render_raw.get('food_color', defaults.food_color),
        body_color=render_raw.get('body_color', defaults.body_color),
        path_color=render_raw.get('path_color', defaults.path_color),
        show_path=bool(render_raw.get('show_path', defaults.show_path)),
        restart_key=render_raw.get('restart_key', defaults.restart_key)
    )


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    render = _parse_render(raw.get('render') or {})
    grid = _parse_grid(raw.get('grid') or {}, render.cell_size)

    sim_raw = raw.get('simulation') or {}
    max_ticks = sim_raw.get('max_ticks')

    # Parse export config (optional)
    export_raw = raw.get('export') or {}

    return SimulationConfig(
        grid=grid,
        max_ticks=int(max_ticks) if max_ticks is not None else None,
        tick_interval_ms=int(sim_raw.get('tick_interval_ms', DEFAULT_TICK_INTERVAL_MS)),
        food_placement=sim_raw.get('food_placement', 'uniform'),
        render=render,
        csv_enabled=export_raw.get('csv', True),
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False),
        seed=sim_raw.get('seed')
    )
