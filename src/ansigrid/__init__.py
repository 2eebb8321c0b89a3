"""
ansigrid: decode ANSI art byte streams into a character grid

Turns text interleaved with ANSI/VT100 escape sequences into a
random-access grid of cells, each carrying the colors and style flags
that were active when it was written.

Quick Start:
    >>> import ansigrid
    >>> doc = ansigrid.create(ansigrid.Config(screen_width=80))
    >>> doc.write(b"\\x1b[1;31mHello\\x1b[0m")
    >>> doc.get(0, 0).attrs.bold
    True

Features:
    - Incremental decoding: feed a stream in chunks of any size
    - Lazily grown ragged grid, never truncated or scrolled
    - Attribute snapshot per cell (8 colors, 21 style flags)
    - Malformed or unsupported sequences reported, never fatal
    - Bytes after the EOF marker kept for a SAUCE reader
"""

__version__ = "0.1.0"

# Core types
from ansigrid.core.attributes import Attributes
from ansigrid.core.cell import Cell
from ansigrid.core.color import Color
from ansigrid.core.config import Config
from ansigrid.core.document import Document
from ansigrid.core.grid import Grid, Row

# Errors
from ansigrid.core.errors import (
    AllocationFailure,
    AnsiGridError,
    DecodeError,
    Diagnostic,
    DiagnosticKind,
    DocumentClosed,
    ParameterOverflow,
    UnsupportedSequence,
)
from ansigrid.codec.decoder import DiagnosticHandler, ParserState


def create(
    config: Config | None = None,
    data: bytes | None = None,
    on_diagnostic: DiagnosticHandler | None = None,
    keep_diagnostics: bool = True,
) -> Document:
    """Create a Document, optionally decoding an initial chunk."""
    return Document.create(config, data, on_diagnostic=on_diagnostic, keep_diagnostics=keep_diagnostics)


def write(document: Document, data: bytes) -> None:
    """Decode the next chunk of a document's stream."""
    document.write(data)


def destroy(document: Document) -> None:
    """Release all storage owned by a document."""
    document.close()


__all__ = [
    # Version
    "__version__",
    # Core types
    "Attributes",
    "Cell",
    "Color",
    "Config",
    "Document",
    "Grid",
    "Row",
    "ParserState",
    # Errors
    "AnsiGridError",
    "AllocationFailure",
    "DecodeError",
    "ParameterOverflow",
    "UnsupportedSequence",
    "DocumentClosed",
    "Diagnostic",
    "DiagnosticKind",
    # Functions
    "create",
    "write",
    "destroy",
]
