"""Render a decoded grid back to escape sequences for a modern terminal."""

from ansigrid.codec.cp437 import cp437_char
from ansigrid.core.attributes import Attributes
from ansigrid.core.grid import Grid

# Flags a typical terminal can show, with their SGR codes
_SGR_FLAGS = (
    ("bold", "1"),
    ("faint", "2"),
    ("italic", "3"),
    ("underline", "4"),
    ("slow_blink", "5"),
    ("invert", "7"),
    ("conceal", "8"),
    ("strikeout", "9"),
)


def sgr_for(attrs: Attributes) -> str:
    """Full SGR sequence selecting attrs from a reset state."""
    parts = ["0"]
    parts.extend(code for name, code in _SGR_FLAGS if getattr(attrs, name))
    parts.append(attrs.fg.to_sgr_fg())
    parts.append(attrs.bg.to_sgr_bg())
    return f"\x1b[{';'.join(parts)}m"


class TerminalRenderer:
    """
    Render a Grid to UTF-8 text with ANSI colors.

    Only emits an SGR sequence when the attributes change between cells,
    and resets at the end of every line so colors don't bleed.
    """

    def __init__(self, reset_at_end: bool = True):
        self.reset_at_end = reset_at_end

    def render(self, grid: Grid) -> str:
        lines: list[str] = []

        for row in grid.rows():
            parts: list[str] = []
            last = Attributes.reset()

            for cell in row:
                if cell.attrs != last:
                    parts.append(sgr_for(cell.attrs))
                    last = cell.attrs
                parts.append(cp437_char(cell.code))

            if not last.is_default():
                parts.append('\x1b[0m')

            lines.append(''.join(parts))

        result = '\n'.join(lines)

        if self.reset_at_end:
            result += '\x1b[0m'

        return result
