"""Cell - atomic unit of the decoded grid."""

from __future__ import annotations

from dataclasses import dataclass, field

from ansigrid.core.attributes import Attributes


@dataclass(frozen=True, slots=True)
class Cell:
    """
    A single character position: the raw byte plus its attribute snapshot.

    ``code`` is the undecoded byte value; mapping it to a glyph (CP437 for
    classic art) is up to the renderer. The blank cell is ``Cell()``.
    """
    code: int = 0
    attrs: Attributes = field(default_factory=Attributes.reset)

    def is_blank(self) -> bool:
        """Check if this cell still holds the zero value it was allocated with."""
        return self.code == 0 and self.attrs.is_default()


BLANK = Cell()
