"""Exceptions and diagnostics raised or recorded while decoding."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AnsiGridError(Exception):
    """Base class for all ansigrid errors."""


class AllocationFailure(AnsiGridError):
    """Grid storage could not be grown to hold a write."""


class DocumentClosed(AnsiGridError):
    """A Document was used after close()."""


class GridInvariantError(AnsiGridError):
    """Internal bookkeeping reached a state that should be impossible."""


class DecodeError(AnsiGridError):
    """
    A recoverable problem with the input stream.

    The decoder abandons the offending sequence and carries on; these are
    only raised to the caller when the Document is configured as strict.
    """

    def __init__(self, message: str, offset: int = -1, sequence: bytes = b"") -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.sequence = sequence

    def __str__(self) -> str:
        if self.offset < 0:
            return self.message
        return f"{self.message} at offset {self.offset} ({self.sequence!r})"


class ParameterOverflow(DecodeError):
    """A numeric parameter exceeded the configured maximum."""


class UnsupportedSequence(DecodeError):
    """A control sequence that is recognised syntactically but not implemented."""


class DiagnosticKind(Enum):
    """Category of a recorded decoding condition."""
    OVERFLOW = "overflow"
    UNSUPPORTED = "unsupported"
    IGNORED = "ignored"  # seen and accepted, but without effect


@dataclass(frozen=True)
class Diagnostic:
    """A decoding condition recorded instead of aborting."""
    kind: DiagnosticKind
    offset: int
    sequence: bytes
    message: str

    @classmethod
    def from_error(cls, error: DecodeError) -> Diagnostic:
        kind = DiagnosticKind.OVERFLOW if isinstance(error, ParameterOverflow) else DiagnosticKind.UNSUPPORTED
        return cls(kind=kind, offset=error.offset, sequence=error.sequence, message=error.message)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message} at offset {self.offset} ({self.sequence!r})"
