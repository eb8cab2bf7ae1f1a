"""
Game engine handle for presentation layers.

Wraps a Board with the operations a front-end needs: start a game,
reveal, flag, reset, and read back immutable snapshots. Front-ends can
subscribe to be handed a fresh snapshot after every change instead of
polling.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np

from .board import Board, BoardConfig, GameStatus
from .cell import Cell, CellView


logger = logging.getLogger(__name__)


# ============================================================================
# Snapshot
# ============================================================================

@dataclass(frozen=True)
class BoardSnapshot:
    """
    Immutable picture of the board after an operation.

    Attributes:
        rows: Number of rows.
        columns: Number of columns.
        num_mines: Total mines on the board.
        status: Game status at the time of the snapshot.
        flag_count: Flags currently placed.
        cells: Row-major grid of cell views.
    """

    rows: int
    columns: int
    num_mines: int
    status: GameStatus
    flag_count: int
    cells: Tuple[Tuple[CellView, ...], ...]

    def __getitem__(self, position: Tuple[int, int]) -> CellView:
        row, col = position
        return self.cells[row][col]

    @property
    def mines_remaining(self) -> int:
        return self.num_mines - self.flag_count

    @property
    def is_over(self) -> bool:
        return self.status != GameStatus.PLAYING

    @classmethod
    def of(cls, board: Board) -> "BoardSnapshot":
        """Capture the current state of a board."""
        game_over = not board.is_playing
        cells = tuple(
            tuple(
                board.cell_at(row, col).to_view(game_over)
                for col in range(board.columns)
            )
            for row in range(board.rows)
        )
        return cls(
            rows=board.rows,
            columns=board.columns,
            num_mines=board.config.num_mines,
            status=board.status,
            flag_count=board.flag_count,
            cells=cells,
        )


Observer = Callable[[BoardSnapshot], None]


# ============================================================================
# Game Engine
# ============================================================================

class GameEngine:
    """
    Owns one game at a time and notifies observers of every change.

    Moves outside the grid, on revealed or flagged cells, or after the
    game has ended are ignored. Not thread-safe; callers sharing an engine
    across threads must serialize access.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        board: Optional[Board] = None,
    ) -> None:
        """
        Initialize the engine and start the first game.

        Args:
            config: Board configuration (default: 8x8 with 10 mines).
            seed: Seed for reproducible mine placement.
            rng: Random generator to draw mine positions from; takes
                precedence over ``seed``.
            board: Existing board to adopt instead of creating one.

        Raises:
            InvalidConfiguration: If the configuration is not playable.
        """
        self._observers: List[Observer] = []
        if board is None:
            board = self._make_board(config or BoardConfig(), seed, rng)
        self.board = board

    @classmethod
    def from_board(cls, board: Board) -> "GameEngine":
        """Wrap an already built board, e.g. one with a fixed mine layout."""
        return cls(board=board)

    @staticmethod
    def _make_board(
        config: BoardConfig,
        seed: Optional[int],
        rng: Optional[np.random.Generator],
    ) -> Board:
        if rng is None:
            rng = np.random.default_rng(seed)
        board = Board(config, rng=rng)
        logger.info(
            "New game: %dx%d with %d mines",
            config.rows,
            config.columns,
            config.num_mines,
        )
        return board

    # ========================================================================
    # Observers
    # ========================================================================

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register a callback that receives a snapshot after each change.

        Returns:
            A function that removes the observer again.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        if not self._observers:
            return
        snapshot = self.snapshot()
        for observer in list(self._observers):
            observer(snapshot)

    # ========================================================================
    # Mutators
    # ========================================================================

    def reveal(self, row: int, col: int) -> GameStatus:
        """
        Reveal a cell.

        Returns:
            Game status after the move.
        """
        if not self._check_position(row, col):
            return self.board.status
        if not self.board.reveal(row, col):
            logger.debug("Ignored reveal at (%d, %d)", row, col)
            return self.board.status

        logger.debug("Revealed (%d, %d)", row, col)
        if not self.board.is_playing:
            logger.info("Game over: %s", self.board.status.name)
        self._notify()
        return self.board.status

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Place or remove a flag.

        Returns:
            True if the flag changed, False if the move was ignored.
        """
        if not self._check_position(row, col):
            return False
        if not self.board.toggle_flag(row, col):
            logger.debug("Ignored flag at (%d, %d)", row, col)
            return False

        logger.debug("Toggled flag at (%d, %d)", row, col)
        self._notify()
        return True

    def reset(
        self,
        config: Optional[BoardConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Discard the current game and start a new one.

        Args:
            config: New configuration; keeps the current one if omitted.
            seed: Seed for the new mine placement.
            rng: Random generator for the new game. When neither ``seed``
                nor ``rng`` is given, the current generator keeps going.
        """
        config = config or self.board.config
        if rng is None and seed is None:
            rng = self.board.rng
        self.board = self._make_board(config, seed, rng)
        self._notify()

    def _check_position(self, row: int, col: int) -> bool:
        if self.board.get_cell(row, col) is None:
            logger.warning(
                "Move at (%d, %d) is outside the %dx%d board",
                row,
                col,
                self.board.rows,
                self.board.columns,
            )
            return False
        return True

    # ========================================================================
    # Queries
    # ========================================================================

    def status(self) -> GameStatus:
        """Get current game status."""
        return self.board.status

    def snapshot(self) -> BoardSnapshot:
        """Get an immutable picture of the current board."""
        return BoardSnapshot.of(self.board)

    def cell(self, row: int, col: int) -> CellView:
        """
        Get the view of one cell.

        Raises:
            OutOfBounds: If the position is not on the board.
        """
        cell: Cell = self.board.cell_at(row, col)
        return cell.to_view(not self.board.is_playing)

    @property
    def config(self) -> BoardConfig:
        return self.board.config


def new_game(
    config: Optional[BoardConfig] = None,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> GameEngine:
    """Start a new game and return its engine."""
    return GameEngine(config, seed=seed, rng=rng)
