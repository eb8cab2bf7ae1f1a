"""
Error types raised by the minefield engine.
"""


class MinefieldError(Exception):
    """Base class for all engine errors."""


class InvalidConfiguration(MinefieldError, ValueError):
    """Board dimensions, mine count or mine layout are not playable."""


class OutOfBounds(MinefieldError, IndexError):
    """A (row, col) position lies outside the grid."""

    def __init__(self, row: int, col: int, rows: int, columns: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) is outside the {rows}x{columns} board"
        )
        self.row = row
        self.col = col
