"""Exceptions and error messages for the autosnake package."""

ERROR_GRID_FULL = "No free cell left on the {cols}x{rows} grid to place food."
ERROR_UNKNOWN_PLACEMENT = "Unknown food placement mode: {mode!r} (expected one of {choices})"
ERROR_NOT_RUNNING = "Simulation is not running (status: {status}); call start() first."


class GridFullError(RuntimeError):
    """Raised when food must be placed but every cell is occupied by the body."""

    def __init__(self, cols: int, rows: int):
        super().__init__(ERROR_GRID_FULL.format(cols=cols, rows=rows))
        self.cols = cols
        self.rows = rows
