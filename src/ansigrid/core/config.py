"""Decoder configuration."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Config:
    """
    Settings for a Document.

    ``screen_width`` enables legacy autowrap at that column count; 0 means
    lines never wrap. ``screen_lines`` is advisory only and never limits
    how far the grid grows.
    """
    screen_width: int = 0
    screen_lines: int = 0
    tab_width: int = 8
    max_parameter: int = 0xFFFF
    strict: bool = False  # raise DecodeError instead of recording a diagnostic

    def __post_init__(self) -> None:
        if self.screen_width < 0:
            raise ValueError(f"screen_width must be >= 0, got {self.screen_width}")
        if self.screen_lines < 0:
            raise ValueError(f"screen_lines must be >= 0, got {self.screen_lines}")
        if self.tab_width < 1:
            raise ValueError(f"tab_width must be >= 1, got {self.tab_width}")
        if self.max_parameter < 0xFF:
            raise ValueError(
                f"max_parameter must cover the SGR code space (>= 255), got {self.max_parameter}"
            )


# Used when no configuration is supplied: the classic 80x24 screen.
DEFAULT_CONFIG = Config(screen_width=80, screen_lines=24)
