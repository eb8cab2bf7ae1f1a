"""
Minefield game module.

Provides the board-state engine (mine placement, reveal and flag rules,
win/loss tracking) and thin callers built on it.
"""
from .errors import MinefieldError, InvalidConfiguration, OutOfBounds
from .cell import Cell, CellState, CellView
from .board import (
    Board,
    BoardConfig,
    GameStatus,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    DIFFICULTIES,
    get_difficulty,
)
from .engine import BoardSnapshot, GameEngine, new_game
from .render import render_text
from .environment import MinesweeperEnv

__all__ = [
    "MinefieldError",
    "InvalidConfiguration",
    "OutOfBounds",
    "Cell",
    "CellState",
    "CellView",
    "Board",
    "BoardConfig",
    "GameStatus",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "DIFFICULTIES",
    "get_difficulty",
    "BoardSnapshot",
    "GameEngine",
    "new_game",
    "render_text",
    "MinesweeperEnv",
]
