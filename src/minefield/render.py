"""
Plain-text rendering of board snapshots.
"""
from typing import List

from .cell import CellView
from .engine import BoardSnapshot


def render_cell(view: CellView) -> str:
    """Single-character symbol for a cell."""
    if view.is_flagged:
        return "F"
    if view.is_revealed:
        if view.is_mine:
            return "*"
        if view.adjacent_mines == 0:
            return " "
        return str(view.adjacent_mines)
    if view.is_mine:
        # Unrevealed mine shown after the game ended
        return "*"
    return "."


def render_text(snapshot: BoardSnapshot, show_coordinates: bool = False) -> str:
    """
    Render a snapshot as text, one line per row.

    Args:
        snapshot: Board snapshot to draw.
        show_coordinates: Add a column header and row labels.

    Returns:
        Multi-line string without a trailing newline.
    """
    lines: List[str] = []
    label_width = len(str(snapshot.rows - 1))

    if show_coordinates:
        header = " ".join(str(col % 10) for col in range(snapshot.columns))
        lines.append(" " * (label_width + 1) + header)

    for row, cells in enumerate(snapshot.cells):
        row_str = " ".join(render_cell(view) for view in cells)
        if show_coordinates:
            row_str = f"{row:>{label_width}} {row_str}"
        lines.append(row_str)

    return "\n".join(lines)
