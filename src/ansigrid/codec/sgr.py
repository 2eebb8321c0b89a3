"""SGR (Select Graphic Rendition) resolution."""

from __future__ import annotations

from typing import Sequence

from ansigrid.core.attributes import Attributes
from ansigrid.core.color import Color
from ansigrid.core.errors import UnsupportedSequence

_IDEOGRAMS = (
    "ideogram_underline",
    "ideogram_double_underline",
    "ideogram_overline",
    "ideogram_double_overline",
    "ideogram_stress",
)

# Flag changes per SGR code
FLAG_CODES: dict[int, dict[str, bool]] = {
    1: {"bold": True},
    2: {"faint": True},
    3: {"italic": True},
    4: {"underline": True},
    5: {"slow_blink": True},
    6: {"rapid_blink": True},
    7: {"invert": True},
    8: {"conceal": True},
    9: {"strikeout": True},
    21: {"double_underline": True},
    22: {"bold": False, "faint": False},
    23: {"italic": False},
    24: {"underline": False, "double_underline": False},
    25: {"slow_blink": False, "rapid_blink": False},
    26: {"proportional": False},
    27: {"invert": False},
    28: {"conceal": False},
    29: {"strikeout": False},
    50: {"proportional": False},
    51: {"framed": True},
    52: {"encircled": True},
    53: {"overlined": True},
    54: {"framed": False, "encircled": False},
    55: {"overlined": False},
    **{60 + i: {name: True} for i, name in enumerate(_IDEOGRAMS)},
    65: {name: False for name in _IDEOGRAMS},
    73: {"superscript": True},
    74: {"subscript": True},
    75: {"superscript": False, "subscript": False},
}


def describe_code(code: int) -> str:
    """Human-readable name for an SGR code this resolver does not apply."""
    if code == 10:
        return "primary font"
    elif 11 <= code <= 19:
        return f"alternative font {code - 10}"
    elif code == 20:
        return "fraktur"
    elif code in (38, 48):
        return "extended background color" if code == 48 else "extended foreground color"
    elif code in (39, 49):
        return "default background color" if code == 49 else "default foreground color"
    elif code in (58, 59):
        return "underline color"
    elif 90 <= code <= 97:
        return "bright foreground color"
    elif 100 <= code <= 107:
        return "bright background color"
    return "unassigned code"


def apply_sgr(attrs: Attributes, params: Sequence[int | None]) -> Attributes:
    """
    Return attrs updated by one SGR parameter list.

    Parameters apply left to right, so later ones win. No parameters at
    all means reset; an omitted parameter counts as 0. Raises
    UnsupportedSequence on the first code that is not implemented, in
    which case none of the list takes effect.
    """
    if not params:
        return Attributes.reset()

    for param in params:
        code = param or 0
        if code == 0:
            attrs = Attributes.reset()
        elif 30 <= code <= 37:
            attrs = attrs.merge(fg=Color.from_sgr(code))
        elif 40 <= code <= 47:
            attrs = attrs.merge(bg=Color.from_sgr(code))
        elif code in FLAG_CODES:
            attrs = attrs.merge(**FLAG_CODES[code])
        else:
            raise UnsupportedSequence(f"SGR {code} ({describe_code(code)}) not supported")

    return attrs
