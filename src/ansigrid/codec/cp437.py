"""CP437 (IBM PC) character set conversion."""

from ansigrid.core.constants import CP437_TO_UNICODE


def cp437_char(code: int) -> str:
    """Glyph for a single cell code; NUL (an unwritten cell) reads as a space."""
    if code == 0:
        return ' '
    return CP437_TO_UNICODE[code]


def cp437_to_unicode(data: bytes) -> str:
    """Convert CP437-encoded bytes to Unicode string."""
    return ''.join(CP437_TO_UNICODE[b] for b in data)
