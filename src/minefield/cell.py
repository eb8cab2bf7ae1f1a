"""
Cell module for the minefield engine.

Represents individual grid positions with their visibility state
(hidden/revealed/flagged) and content (mine/adjacent count), plus the
read-only view handed out in board snapshots.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visibility states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the minefield grid.

    A single state field holds both the revealed and flagged flags, so a
    cell can never be revealed and flagged at the same time.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visibility state (hidden, revealed, or flagged).
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was revealed, False if already revealed or
            flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden and unflagged."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def to_observation(self) -> int:
        """
        Convert cell to its numeric observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.adjacent_mines

    def to_view(self, game_over: bool = False) -> "CellView":
        """
        Build the read-only view of this cell for a snapshot.

        Mine content is concealed while the cell is unrevealed and the game
        is still in progress; the count is only shown on revealed safe cells.
        """
        show_mine = self.is_revealed or game_over
        show_count = self.is_revealed and not self.is_mine
        return CellView(
            is_mine=self.is_mine if show_mine else None,
            is_revealed=self.is_revealed,
            is_flagged=self.is_flagged,
            adjacent_mines=self.adjacent_mines if show_count else None,
        )


@dataclass(frozen=True)
class CellView:
    """
    Immutable view of a cell as seen by the presentation layer.

    Attributes:
        is_mine: Mine content, or None while concealed.
        is_revealed: Whether the cell has been revealed.
        is_flagged: Whether the cell carries a flag.
        adjacent_mines: Count shown on a revealed safe cell, else None.
    """

    is_mine: Optional[bool]
    is_revealed: bool
    is_flagged: bool
    adjacent_mines: Optional[int]
