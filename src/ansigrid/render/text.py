"""Render a decoded grid to plain text (strip colors)."""

from ansigrid.codec.cp437 import cp437_char
from ansigrid.core.grid import Grid


class TextRenderer:
    """Render a Grid to plain Unicode text, mapping cell codes through CP437."""

    def __init__(self, preserve_whitespace: bool = False):
        self.preserve_whitespace = preserve_whitespace

    def render(self, grid: Grid) -> str:
        lines: list[str] = []

        for row in grid.rows():
            line = ''.join(cp437_char(cell.code) for cell in row)
            if not self.preserve_whitespace:
                line = line.rstrip()
            lines.append(line)

        result = '\n'.join(lines)

        if not self.preserve_whitespace:
            result = result.rstrip('\n')

        return result
