"""The eight base colors of the ANSI palette."""

from enum import IntEnum


class Color(IntEnum):
    """
    Base color index as selected by SGR 30-37 (fg) and 40-47 (bg).

    Bright variants and extended palettes are not representable here;
    the resolver reports them as unsupported.
    """
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7

    @classmethod
    def from_sgr(cls, code: int) -> "Color":
        """Create a Color from an SGR code (30-37 or 40-47)."""
        if 30 <= code <= 37:
            return cls(code - 30)
        elif 40 <= code <= 47:
            return cls(code - 40)
        else:
            raise ValueError(f"Invalid SGR color code: {code}")

    def to_sgr_fg(self) -> str:
        """Return SGR parameter for this color as foreground."""
        return str(30 + self.value)

    def to_sgr_bg(self) -> str:
        """Return SGR parameter for this color as background."""
        return str(40 + self.value)
