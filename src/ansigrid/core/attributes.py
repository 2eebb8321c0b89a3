"""Attributes - the display state snapshotted into every written cell."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import ClassVar

from ansigrid.core.color import Color


@dataclass(frozen=True, slots=True)
class Attributes:
    """
    Colors and style flags active at the moment a character is written.

    Instances are immutable, so a cell can hold a reference to the state
    it was written under without later SGR changes leaking into it.
    The default instance is the SGR 0 reset state: white on black, no flags.
    """
    fg: Color = Color.WHITE
    bg: Color = Color.BLACK
    bold: bool = False
    faint: bool = False
    italic: bool = False
    underline: bool = False
    double_underline: bool = False
    slow_blink: bool = False
    rapid_blink: bool = False
    invert: bool = False
    conceal: bool = False
    strikeout: bool = False
    proportional: bool = False
    framed: bool = False
    encircled: bool = False
    overlined: bool = False
    ideogram_underline: bool = False
    ideogram_double_underline: bool = False
    ideogram_overline: bool = False
    ideogram_double_overline: bool = False
    ideogram_stress: bool = False
    superscript: bool = False
    subscript: bool = False

    FLAGS: ClassVar[tuple[str, ...]]
    DEFAULT: ClassVar["Attributes"]

    @classmethod
    def reset(cls) -> Attributes:
        """Return the reset state (equivalent to SGR 0)."""
        return cls.DEFAULT

    def merge(self, **changes: object) -> Attributes:
        """Return a copy with the given fields replaced."""
        if not changes:
            return self
        return replace(self, **changes)

    def is_default(self) -> bool:
        return self == Attributes.DEFAULT

    def active_flags(self) -> tuple[str, ...]:
        """Names of the style flags that are currently set."""
        return tuple(name for name in self.FLAGS if getattr(self, name))


Attributes.FLAGS = tuple(f.name for f in fields(Attributes) if f.name not in ("fg", "bg"))
Attributes.DEFAULT = Attributes()
