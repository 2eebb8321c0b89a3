"""Document - the decoder, its grid and the diagnostics of one stream."""

from __future__ import annotations

from typing import Iterator

from ansigrid.codec.decoder import Decoder, DiagnosticHandler, ParserState
from ansigrid.core.attributes import Attributes
from ansigrid.core.cell import Cell
from ansigrid.core.config import DEFAULT_CONFIG, Config
from ansigrid.core.errors import Diagnostic, DiagnosticKind, DocumentClosed
from ansigrid.core.grid import Grid, Row


class Document:
    """
    A decoded ANSI document that can be fed incrementally.

    Combines the Grid being drawn into, the Decoder that draws it and
    the diagnostics collected along the way. Feeding a stream in any
    number of ``write`` calls gives the same result as a single call.

    Bytes after the end-of-file marker are not decoded; they are kept in
    ``trailer`` so a metadata reader (SAUCE) can pick them up.

    Every diagnostic is kept in ``diagnostics`` for the life of the
    document. A caller streaming untrusted input with an ``on_diagnostic``
    callback can pass ``keep_diagnostics=False`` so the list stays empty
    and only the callback sees them.
    """

    def __init__(
        self,
        config: Config | None = None,
        on_diagnostic: DiagnosticHandler | None = None,
        keep_diagnostics: bool = True,
    ):
        self.config = config if config is not None else DEFAULT_CONFIG
        self.grid = Grid(wrap_width=self.config.screen_width)
        self.diagnostics: list[Diagnostic] = []
        self._on_diagnostic = on_diagnostic
        self._keep_diagnostics = keep_diagnostics
        self._decoder = Decoder(self.grid, self.config, on_diagnostic=self._record)
        self._closed = False

    @classmethod
    def create(
        cls,
        config: Config | None = None,
        data: bytes | None = None,
        on_diagnostic: DiagnosticHandler | None = None,
        keep_diagnostics: bool = True,
    ) -> Document:
        """Create a document, optionally decoding an initial chunk."""
        doc = cls(config, on_diagnostic=on_diagnostic, keep_diagnostics=keep_diagnostics)
        if data:
            doc.write(data)
        return doc

    def write(self, data: bytes) -> None:
        """
        Decode the next chunk of the stream.

        Raises AllocationFailure if the grid cannot grow; everything
        decoded before that point stays in place.
        """
        if self._closed:
            raise DocumentClosed("write() on a closed document")
        self._decoder.feed(data)

    def close(self) -> None:
        """Release all grid storage. The document cannot be written afterwards."""
        self.grid.clear()
        self._decoder.trailer.clear()
        self._decoder.params.reset()
        self._closed = True

    def __enter__(self) -> Document:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _record(self, diagnostic: Diagnostic) -> None:
        if self._keep_diagnostics:
            self.diagnostics.append(diagnostic)
        if self._on_diagnostic is not None:
            self._on_diagnostic(diagnostic)

    # Decoder state

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def state(self) -> ParserState:
        return self._decoder.state

    @property
    def eof(self) -> bool:
        """True once the end-of-file marker has been seen."""
        return self._decoder.state is ParserState.DONE

    @property
    def attributes(self) -> Attributes:
        """Attributes the next written character will get."""
        return self._decoder.attributes

    @property
    def cursor(self) -> tuple[int, int]:
        return self.grid.cursor

    @property
    def trailer(self) -> bytes:
        """Bytes that followed the end-of-file marker."""
        return bytes(self._decoder.trailer)

    def diagnostics_of(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.kind is kind]

    # Grid access

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def width(self) -> int:
        return self.grid.width

    def row(self, y: int) -> Row | None:
        return self.grid.row(y)

    def row_width(self, y: int) -> int:
        return self.grid.row_width(y)

    def get(self, x: int, y: int) -> Cell:
        return self.grid.get(x, y)

    def __getitem__(self, pos: tuple[int, int]) -> Cell:
        return self.grid[pos]

    def rows(self) -> Iterator[list[Cell]]:
        return self.grid.rows()

    # Rendering

    def render(self) -> str:
        """Render to a terminal-compatible ANSI string."""
        from ansigrid.render.terminal import TerminalRenderer
        return TerminalRenderer().render(self.grid)

    def render_to_text(self) -> str:
        """Render to plain text (no colors)."""
        from ansigrid.render.text import TextRenderer
        return TextRenderer().render(self.grid)
