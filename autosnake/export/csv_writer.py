"""CSV tick log export for the autosnake simulation."""

import csv
from pathlib import Path
from typing import Optional, TYPE_CHECKING, IO

if TYPE_CHECKING:
    from ..model.state import TickSnapshot

FIELDNAMES = ['tick', 'outcome', 'head_x', 'head_y', 'food_x', 'food_y',
              'length', 'dx', 'dy', 'path_length']


class CSVWriter:
    """
    Writes one CSV row per simulation tick.

    Output format:
        tick,outcome,head_x,head_y,food_x,food_y,length,dx,dy,path_length
        1,moved,15,9,22,4,1,1,0,11
        ...

    `path_length` is empty on ticks where no path to the food existed.
    """

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self.file: Optional[IO[str]] = None
        self.writer: Optional[csv.DictWriter] = None
        self._is_open = False

    def open(self) -> None:
        """Initialize file and write header."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.file = open(self.output_path, 'w', newline='')
        self.writer = csv.DictWriter(self.file, fieldnames=FIELDNAMES)
        self.writer.writeheader()
        self._is_open = True

    def append(self, state: "TickSnapshot") -> None:
        """Write the row for one tick."""
        if not self._is_open:
            self.open()
        for row in state.to_csv_rows():
            self.writer.writerow(row)
        self.file.flush()

    def close(self) -> None:
        """Close file handle."""
        if self.file:
            self.file.close()
            self.file = None
            self.writer = None
            self._is_open = False

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
