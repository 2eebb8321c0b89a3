"""Renderers for decoded grids."""

from ansigrid.render.terminal import TerminalRenderer
from ansigrid.render.text import TextRenderer

__all__ = ["TerminalRenderer", "TextRenderer"]
