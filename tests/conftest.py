import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from autosnake.config import GridConfig, RenderConfig, SimulationConfig  # noqa: E402
from autosnake.model.engine import SimulationEngine  # noqa: E402
from autosnake.model.grid import GridWorld  # noqa: E402


@pytest.fixture
def make_config():
    """Build a SimulationConfig for a small grid."""

    def _make(cols=10, rows=10, **kwargs):
        kwargs.setdefault("seed", 0)
        return SimulationConfig(grid=GridConfig(cols=cols, rows=rows), **kwargs)

    return _make


@pytest.fixture
def engine_with_world(make_config):
    """Start an engine, then swap in a hand-built world."""

    def _make(cols, rows, body, food, **kwargs):
        engine = SimulationEngine(make_config(cols, rows, **kwargs))
        engine.start()
        engine.world = GridWorld(cols, rows, rng=engine.rng, body=body, food=food)
        engine.peak_length = len(engine.world)
        return engine

    return _make


@pytest.fixture
def render_config():
    return RenderConfig(cell_size=2)
