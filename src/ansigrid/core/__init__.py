"""Core data structures for decoded ANSI documents."""

from ansigrid.core.attributes import Attributes
from ansigrid.core.cell import Cell
from ansigrid.core.color import Color
from ansigrid.core.config import Config
from ansigrid.core.document import Document
from ansigrid.core.grid import Grid, Row

__all__ = ["Attributes", "Cell", "Color", "Config", "Document", "Grid", "Row"]
