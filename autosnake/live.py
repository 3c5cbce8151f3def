"""Interactive matplotlib window driving the simulation at a fixed cadence."""

import logging
from typing import Optional

import matplotlib.pyplot as plt

from .export.visualizer import Visualizer
from .model.engine import SimulationEngine
from .model.state import TickSnapshot

logger = logging.getLogger(__name__)


class LiveView:
    """
    Runs the simulation in a window.

    A canvas timer fires one tick every `tick_interval_ms`; each tick runs to
    completion before the next can fire. The restart key stops the timer
    before the engine builds a new world, so no pending tick from the old
    run can touch the new one.
    """

    def __init__(self, engine: SimulationEngine, visualizer: Visualizer):
        self.engine = engine
        self.visualizer = visualizer
        self.restart_key = engine.config.render.restart_key
        self.last_state: Optional[TickSnapshot] = None

        cols, rows = engine.config.grid.cols, engine.config.grid.rows
        self.fig, self.ax = plt.subplots(figsize=(max(6, 6 * cols / rows), 6))
        self.ax.set_axis_off()
        self.im = self.ax.imshow(visualizer.canvas, origin='upper',
                                 interpolation='nearest')

        self.timer = self.fig.canvas.new_timer(
            interval=engine.config.tick_interval_ms)
        self.timer.add_callback(self.on_tick)
        self.fig.canvas.mpl_connect('key_press_event', self.on_key)

    def start_run(self) -> None:
        """(Re)start: stop pending ticks, rebuild the world, resume the timer."""
        self.timer.stop()
        self.engine.start()
        self.draw(self.engine.snapshot())
        self.timer.start()

    def on_key(self, event) -> None:
        if event.key == self.restart_key:
            logger.info("Restart requested")
            self.start_run()

    def on_tick(self) -> None:
        if not self.engine.is_running():
            self.timer.stop()
            return

        state = self.engine.step()
        if self.engine.is_finished():
            self.timer.stop()
        self.draw(state)

    def draw(self, state: TickSnapshot) -> None:
        self.last_state = state
        self.im.set_data(self.visualizer.render(state))
        status = 'HALTED' if self.engine.is_finished() else 'RUNNING'
        self.ax.set_title(f'Length: {state.length}  Eaten: '
                          f'{int(state.metrics.get("food_eaten", 0))}  '
                          f'{status}  (space: restart)')
        self.fig.canvas.draw_idle()

    def show(self) -> None:
        """Start the first run and block until the window is closed."""
        self.start_run()
        plt.show()
