"""Incremental ANSI escape sequence decoder."""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable

from ansigrid.codec.params import ParameterAccumulator
from ansigrid.codec.sgr import apply_sgr
from ansigrid.core.attributes import Attributes
from ansigrid.core.config import Config
from ansigrid.core.constants import (
    BEL,
    BS,
    CR,
    CSI_INTRODUCER,
    DEL,
    ESC,
    FINAL_BYTES,
    HT,
    INTERMEDIATES,
    LF,
    PARAM_SEPARATOR,
    PRIVATE_FINAL_BYTES,
    PRIVATE_PARAMS,
    SUB,
    SUBPARAM_SEPARATOR,
)
from ansigrid.core.errors import (
    AllocationFailure,
    DecodeError,
    Diagnostic,
    DiagnosticKind,
    UnsupportedSequence,
)
from ansigrid.core.grid import Grid

logger = logging.getLogger(__name__)

DiagnosticHandler = Callable[[Diagnostic], None]

# Final bytes that are known but deliberately left unimplemented
UNSUPPORTED_COMMANDS = {
    ord('D'): "cursor back",
    ord('E'): "cursor next line",
    ord('F'): "cursor previous line",
    ord('I'): "cursor forward tabulation",
    ord('K'): "erase in line",
    ord('S'): "scroll up",
    ord('T'): "scroll down",
    ord('f'): "horizontal vertical position",
}


class ParserState(Enum):
    NORMAL = auto()
    SAW_ESCAPE = auto()
    IN_SEQUENCE = auto()
    DONE = auto()


class Decoder:
    """
    Byte-at-a-time interpreter that drives a Grid.

    All parser state lives on the instance, so ``feed`` can be called with
    arbitrary slices of a stream: a sequence split across two calls is
    decoded exactly as if it had arrived in one.

    Malformed or unimplemented sequences never stop decoding. The
    sequence is abandoned, a Diagnostic goes to ``on_diagnostic`` and the
    next byte is decoded normally. Only a strict config turns those into
    raised DecodeErrors.
    """

    def __init__(
        self,
        grid: Grid,
        config: Config | None = None,
        on_diagnostic: DiagnosticHandler | None = None,
    ):
        self.grid = grid
        self.config = config or Config()
        self.on_diagnostic = on_diagnostic

        self.state = ParserState.NORMAL
        self.attributes = Attributes.reset()
        self.params = ParameterAccumulator(limit=self.config.max_parameter)
        self.offset = 0  # bytes consumed over the life of the stream
        self.trailer = bytearray()

        # Sequence currently being parsed
        self._sequence = bytearray()
        self._sequence_start = 0
        self._abandoned = False

    def feed(self, data: bytes) -> None:
        """Decode a chunk of the stream."""
        for byte in data:
            self.offset += 1
            if self.state is ParserState.NORMAL:
                self._normal(byte)
            elif self.state is ParserState.SAW_ESCAPE:
                self._escape(byte)
            elif self.state is ParserState.IN_SEQUENCE:
                self._in_sequence(byte)
            else:
                self.trailer.append(byte)

    # States

    def _normal(self, byte: int) -> None:
        if byte == BEL or byte == DEL:
            pass
        elif byte == BS:
            self.grid.backspace()
        elif byte == HT:
            self.grid.tab(self.config.tab_width)
        elif byte == LF:
            self.grid.line_feed()
        elif byte == CR:
            self.grid.carriage_return()
        elif byte == SUB:
            logger.debug("end-of-file marker at offset %d", self.offset - 1)
            self.state = ParserState.DONE
        elif byte == ESC:
            self.state = ParserState.SAW_ESCAPE
            self._sequence = bytearray((byte,))
            self._sequence_start = self.offset - 1
            self._abandoned = False
        else:
            self.grid.write_cell(byte, self.attributes)

    def _escape(self, byte: int) -> None:
        if byte == CSI_INTRODUCER:
            self._sequence.append(byte)
            self.state = ParserState.IN_SEQUENCE
            self.params.reset()
            return

        self.state = ParserState.NORMAL
        if _is_sequence_byte(byte):
            self._sequence.append(byte)
            self._report(UnsupportedSequence(f"escape sequence ESC {chr(byte)} not supported"))
        else:
            self._report(UnsupportedSequence(f"escape interrupted by byte 0x{byte:02x}"))
            self._normal(byte)

    def _in_sequence(self, byte: int) -> None:
        if not _is_sequence_byte(byte):
            # Can't be part of any sequence: drop what we have and treat it as input.
            self.state = ParserState.NORMAL
            if not self._abandoned:
                self._report(UnsupportedSequence(f"control sequence interrupted by byte 0x{byte:02x}"))
            self._normal(byte)
            return

        self._sequence.append(byte)

        if byte in FINAL_BYTES:
            self.state = ParserState.NORMAL
            if self._abandoned:
                return
            try:
                self._flush_params(final=True)
                self._dispatch(byte)
            except DecodeError as e:
                self._report(e)
            return

        if self._abandoned:
            return

        try:
            if 0x30 <= byte <= 0x39:
                self.params.digit(byte - 0x30)
            elif byte == PARAM_SEPARATOR:
                self._flush_params()
            elif byte == SUBPARAM_SEPARATOR:
                raise UnsupportedSequence("sub-parameters not supported")
            elif byte in PRIVATE_PARAMS:
                raise UnsupportedSequence("private parameters not supported")
            elif byte in INTERMEDIATES:
                raise UnsupportedSequence("intermediate bytes not supported")
        except DecodeError as e:
            self._abandoned = True
            self._report(e)

    def _flush_params(self, final: bool = False) -> None:
        """Finish a parameter; running out of memory drops the whole sequence."""
        try:
            self.params.flush(final=final)
        except MemoryError as e:
            self.state = ParserState.NORMAL
            sequence = bytes(self._sequence)
            self._sequence = bytearray()
            self.params.reset()
            raise AllocationFailure(f"could not store parameters of {sequence!r}") from e

    # Commands

    def _dispatch(self, final: int) -> None:
        grid = self.grid
        params = self.params

        if final == ord('A'):
            grid.cursor_up(params.get(0, 1) or 1)
        elif final == ord('B'):
            grid.cursor_down(params.get(0, 1) or 1)
        elif final == ord('C'):
            grid.cursor_forward(params.get(0, 1) or 1)
        elif final == ord('G'):
            grid.move_cursor(grid.cursor_y, (params.get(0, 1) or 1) - 1)
        elif final == ord('H'):
            row = params.get(0, 1) or 1
            col = params.get(1, 1) or 1
            grid.move_cursor(row - 1, col - 1)
        elif final == ord('m'):
            self.attributes = apply_sgr(self.attributes, params.values)
        elif final == ord('J'):
            # Many files open with a clear screen; the grid starts empty anyway.
            self._notify(Diagnostic(
                kind=DiagnosticKind.IGNORED,
                offset=self._sequence_start,
                sequence=bytes(self._sequence),
                message="erase in display has no effect",
            ))
        elif final in UNSUPPORTED_COMMANDS:
            raise UnsupportedSequence(f"{UNSUPPORTED_COMMANDS[final]} not supported")
        elif final in PRIVATE_FINAL_BYTES:
            raise UnsupportedSequence(f"private control sequence {chr(final)!r} not supported")
        else:
            raise UnsupportedSequence(f"control sequence {chr(final)!r} not supported")

    # Diagnostics

    def _report(self, error: DecodeError) -> None:
        error.offset = self._sequence_start
        error.sequence = bytes(self._sequence)
        self._notify(Diagnostic.from_error(error))
        if self.config.strict:
            raise error

    def _notify(self, diagnostic: Diagnostic) -> None:
        logger.debug("%s", diagnostic)
        if self.on_diagnostic is not None:
            self.on_diagnostic(diagnostic)


def _is_sequence_byte(byte: int) -> bool:
    """True for bytes that may appear inside an escape or control sequence."""
    return 0x20 <= byte < DEL
