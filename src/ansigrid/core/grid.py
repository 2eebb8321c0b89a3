"""Grid - ragged, lazily grown 2D cell storage with a logical cursor."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

from ansigrid.core.attributes import Attributes
from ansigrid.core.cell import BLANK, Cell
from ansigrid.core.errors import AllocationFailure, GridInvariantError

logger = logging.getLogger(__name__)

MIN_ALLOC_ROWS = 64
MIN_ALLOC_COLS = 80


def _grown(capacity: int, minimum: int, index: int) -> int:
    """Smallest doubling of capacity (at least minimum) that holds index."""
    new = max(capacity * 2, minimum)
    while new <= index:
        new *= 2
    return new


@dataclass
class Row:
    """
    One line of cells.

    ``width`` is the highest column ever written plus one; ``capacity``
    is how many cells are allocated. Cells past ``width`` are blank.
    """
    cells: list[Cell] = field(default_factory=list)
    width: int = 0

    @property
    def capacity(self) -> int:
        return len(self.cells)

    def reserve(self, x: int) -> None:
        """Make sure column x is allocated."""
        if x < self.capacity:
            return
        new = _grown(self.capacity, MIN_ALLOC_COLS, x)
        self.cells.extend([BLANK] * (new - self.capacity))

    def __getitem__(self, x: int) -> Cell:
        if x < 0:
            raise IndexError(f"x={x} out of bounds")
        if x >= self.width:
            return BLANK
        return self.cells[x]

    def __len__(self) -> int:
        return self.width

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells[:self.width])


class Grid:
    """
    The decoded character grid plus the cursor that writes into it.

    Rows are created the first time a cell is written to them and both the
    row index and each row's storage grow by doubling. Nothing is ever
    scrolled out or truncated: moving the cursor anywhere and writing
    simply makes the grid big enough.
    """

    def __init__(self, wrap_width: int = 0):
        self.wrap_width = wrap_width
        self.height = 0
        self.cursor_x = 0
        self.cursor_y = 0
        self._rows: list[Row | None] = []

    @property
    def capacity(self) -> int:
        """Number of allocated row slots."""
        return len(self._rows)

    @property
    def cursor(self) -> tuple[int, int]:
        """Cursor position as (x, y)."""
        return self.cursor_x, self.cursor_y

    # Writing

    def write_cell(self, code: int, attrs: Attributes) -> None:
        """
        Write a character at the cursor and advance it.

        With a wrap width set, a cursor sitting at that width moves to the
        start of the next line first. If storage cannot be grown the
        cursor is left where it was and AllocationFailure is raised.
        """
        x, y = self.cursor_x, self.cursor_y
        if self.wrap_width and x >= self.wrap_width:
            x, y = 0, y + 1

        try:
            row = self._reserve(x, y)
        except MemoryError as e:
            raise AllocationFailure(f"could not grow grid to hold ({x}, {y})") from e

        row.cells[x] = Cell(code, attrs)
        if row.width <= x:
            row.width = x + 1
        if self.height <= y:
            self.height = y + 1

        self.cursor_x, self.cursor_y = x, y
        self.advance_cursor()

    def _reserve(self, x: int, y: int) -> Row:
        if y >= self.capacity:
            new = _grown(self.capacity, MIN_ALLOC_ROWS, y)
            logger.debug("growing row index %d -> %d", self.capacity, new)
            self._rows.extend([None] * (new - self.capacity))

        row = self._rows[y]
        if row is None:
            row = Row()
            self._rows[y] = row
        row.reserve(x)

        if x >= row.capacity or y >= self.capacity:
            raise GridInvariantError(f"reserve({x}, {y}) left capacity {row.capacity}x{self.capacity}")
        return row

    # Cursor movement

    def advance_cursor(self) -> None:
        self.cursor_x += 1

    def move_cursor(self, row: int, col: int) -> None:
        """Move to an absolute, 0-based position."""
        if self.wrap_width:
            col = min(col, self.wrap_width - 1)
        self.cursor_y = max(0, row)
        self.cursor_x = max(0, col)

    def cursor_up(self, n: int = 1) -> None:
        self.cursor_y = max(0, self.cursor_y - n)

    def cursor_down(self, n: int = 1) -> None:
        self.cursor_y += n

    def cursor_forward(self, n: int = 1) -> None:
        x = self.cursor_x + n
        if self.wrap_width:
            # Parking at the width makes the next character wrap.
            x = min(x, self.wrap_width)
        self.cursor_x = x

    def backspace(self) -> None:
        if self.cursor_x > 0:
            self.cursor_x -= 1

    def carriage_return(self) -> None:
        self.cursor_x = 0

    def line_feed(self) -> None:
        self.cursor_y += 1

    def tab(self, tab_width: int = 8) -> None:
        """Advance to the next tab stop without writing anything."""
        stop = (self.cursor_x // tab_width + 1) * tab_width
        self.cursor_forward(stop - self.cursor_x)

    # Reading

    def row(self, y: int) -> Row | None:
        """The row at y, or None if nothing was ever written there."""
        if y < 0:
            raise IndexError(f"y={y} out of bounds")
        if y >= self.height:
            return None
        return self._rows[y]

    def row_width(self, y: int) -> int:
        row = self.row(y)
        return row.width if row is not None else 0

    def get(self, x: int, y: int) -> Cell:
        """Get the cell at (x, y); unwritten positions read as blank."""
        if x < 0:
            raise IndexError(f"x={x} out of bounds")
        row = self.row(y)
        if row is None:
            return BLANK
        return row[x]

    def __getitem__(self, pos: tuple[int, int]) -> Cell:
        """Get cell using indexing: grid[x, y]."""
        x, y = pos
        return self.get(x, y)

    @property
    def width(self) -> int:
        """Widest written row."""
        return max((row.width for row in self._rows[:self.height] if row is not None), default=0)

    def rows(self) -> Iterator[list[Cell]]:
        """Iterate over written rows; rows never written are empty lists."""
        for y in range(self.height):
            row = self._rows[y]
            yield list(row) if row is not None else []

    def cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Iterate over all written cells as (x, y, cell) tuples."""
        for y, row in enumerate(self.rows()):
            for x, cell in enumerate(row):
                yield x, y, cell

    def clear(self) -> None:
        """Release every row and the row index, and home the cursor."""
        for y in range(len(self._rows)):
            self._rows[y] = None
        self._rows = []
        self.height = 0
        self.cursor_x = self.cursor_y = 0
