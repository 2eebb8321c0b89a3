"""Accumulator for the numeric parameters of a control sequence."""

from __future__ import annotations

from ansigrid.core.errors import ParameterOverflow


class ParameterAccumulator:
    """
    Folds decimal digits into a pending value and collects finished values.

    An empty field (``ESC[;5H``) is stored as None so each command can
    substitute its own default.
    """

    def __init__(self, limit: int = 0xFFFF):
        self.limit = limit
        self.value = 0
        self.pending = False
        self.values: list[int | None] = []

    def reset(self) -> None:
        self.value = 0
        self.pending = False
        self.values = []

    def digit(self, d: int) -> None:
        """Append one decimal digit to the pending value."""
        self.value = self.value * 10 + d
        self.pending = True
        if self.value > self.limit:
            raise ParameterOverflow(f"parameter exceeds {self.limit}")

    def flush(self, final: bool = False) -> None:
        """
        Finish the pending value and start a new one.

        On the final byte a sequence with no digits and no separators
        (``ESC[m``) keeps an empty list: it has zero parameters.
        """
        if final and not self.values and not self.pending:
            return
        self.values.append(self.value if self.pending else None)
        self.value = 0
        self.pending = False

    def get(self, index: int, default: int) -> int:
        """Parameter at index, or default when absent or omitted."""
        if index < len(self.values):
            value = self.values[index]
            if value is not None:
                return value
        return default

    def __len__(self) -> int:
        return len(self.values)
