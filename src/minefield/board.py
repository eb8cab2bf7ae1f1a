"""
Board module for the minefield engine.

Implements the game board with mine placement, adjacency counts,
cell revealing with flood fill, flagging and game status tracking.
"""
from collections import deque
from dataclasses import dataclass, field, InitVar
from enum import Enum, auto
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState
from .errors import InvalidConfiguration, OutOfBounds


Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a minefield board.

    Attributes:
        rows: Number of rows.
        columns: Number of columns.
        num_mines: Total mines to place.
    """

    rows: int = 8
    columns: int = 8
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are playable."""
        if self.rows < 1 or self.columns < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.num_mines < 1:
            raise InvalidConfiguration("Board needs at least one mine")
        max_mines = self.rows * self.columns - 1
        if self.num_mines > max_mines:
            raise InvalidConfiguration(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.rows * self.columns

    @property
    def safe_cells(self) -> int:
        """Number of cells without a mine."""
        return self.total_cells - self.num_mines


# Preset difficulty levels
BEGINNER = BoardConfig(8, 8, 10)
INTERMEDIATE = BoardConfig(12, 12, 20)
EXPERT = BoardConfig(16, 16, 40)

DIFFICULTIES: Dict[str, BoardConfig] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


def get_difficulty(name: str) -> BoardConfig:
    """
    Look up a preset configuration by name (case-insensitive).

    Raises:
        InvalidConfiguration: If no preset has that name.
    """
    try:
        return DIFFICULTIES[name.lower()]
    except KeyError:
        choices = ", ".join(DIFFICULTIES)
        raise InvalidConfiguration(
            f"Unknown difficulty {name!r} (choose from {choices})"
        ) from None


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minefield game board.

    Manages the grid of cells, mine placement, revealing logic,
    and win/lose conditions. Mines are placed as soon as the board
    is created, drawing from ``rng``.

    Pass ``layout`` to use an explicit list of mine positions instead of
    random placement; its length must match ``config.num_mines``.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: Optional[np.random.Generator] = field(
        default=None, repr=False, compare=False
    )
    layout: InitVar[Optional[Iterable[Position]]] = None
    _grid: List[List[Cell]] = field(default_factory=list, init=False, repr=False)
    _status: GameStatus = field(default=GameStatus.PLAYING, init=False)
    _safe_revealed: int = field(default=0, init=False)
    _flags: int = field(default=0, init=False)

    def __post_init__(self, layout: Optional[Iterable[Position]]) -> None:
        """Create the grid and lay out mines after dataclass creation."""
        if self.rng is None:
            self.rng = np.random.default_rng()
        self._new_game(layout)

    @classmethod
    def create(
        cls,
        rows: int,
        columns: int,
        num_mines: int,
        seed: Optional[int] = None,
    ) -> "Board":
        """
        Create a randomly mined board.

        Args:
            rows: Number of rows.
            columns: Number of columns.
            num_mines: Mines to place.
            seed: Seed for reproducible placement.

        Raises:
            InvalidConfiguration: If the dimensions or mine count are invalid.
        """
        config = BoardConfig(rows, columns, num_mines)
        return cls(config, rng=np.random.default_rng(seed))

    @classmethod
    def from_mines(
        cls, rows: int, columns: int, mines: Iterable[Position]
    ) -> "Board":
        """
        Create a board with mines at exactly the given positions.

        Raises:
            InvalidConfiguration: If a position is out of bounds or repeated,
                or the mine count is not playable.
        """
        positions = [tuple(position) for position in mines]
        config = BoardConfig(rows, columns, len(positions))
        return cls(config, layout=positions)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _new_game(self, layout: Optional[Iterable[Position]] = None) -> None:
        """Build a fresh grid and place mines."""
        self._init_grid()
        self._status = GameStatus.PLAYING
        self._safe_revealed = 0
        self._flags = 0
        if layout is None:
            self._place_mines()
        else:
            self._set_mines(layout)
        self._calculate_adjacent_mines()

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.columns)]
            for _ in range(self.config.rows)
        ]

    def _place_mines(self) -> None:
        """
        Place mines by rejection sampling.

        Draws uniformly random positions and keeps those not already mined
        until ``num_mines`` are placed. Always terminates because the
        config guarantees at least one safe cell.
        """
        placed = 0
        while placed < self.config.num_mines:
            row = int(self.rng.integers(self.config.rows))
            col = int(self.rng.integers(self.config.columns))
            cell = self._grid[row][col]
            if not cell.is_mine:
                cell.is_mine = True
                placed += 1

    def _set_mines(self, layout: Iterable[Position]) -> None:
        """Place mines at explicit positions."""
        positions = [tuple(position) for position in layout]
        if len(set(positions)) != len(positions):
            raise InvalidConfiguration("Mine layout contains duplicate positions")
        if len(positions) != self.config.num_mines:
            raise InvalidConfiguration(
                f"Mine layout has {len(positions)} mines, "
                f"expected {self.config.num_mines}"
            )
        for row, col in positions:
            if not self._is_valid_position(row, col):
                raise InvalidConfiguration(
                    f"Mine position ({row}, {col}) is outside the "
                    f"{self.config.rows}x{self.config.columns} board"
                )
            self._grid[row][col].is_mine = True

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all safe cells."""
        for row in range(self.config.rows):
            for col in range(self.config.columns):
                if not self._grid[row][col].is_mine:
                    count = self._count_adjacent_mines(row, col)
                    self._grid[row][col].adjacent_mines = count

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for the in-bounds Moore neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.columns

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal a cell at the given position.

        If the cell is empty (0 adjacent mines), connected safe cells are
        revealed as well. If the cell is a mine, the game is lost and every
        unflagged mine is uncovered.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            True if the board changed, False if the move was ignored.
        """
        if not self._can_reveal(row, col):
            return False

        cell = self._grid[row][col]
        cell.reveal()

        if cell.is_mine:
            self._status = GameStatus.LOST
            self._reveal_all_mines()
            return True

        self._safe_revealed += 1
        if cell.adjacent_mines == 0:
            self._flood_reveal(row, col)

        self._check_win_condition()
        return True

    def _can_reveal(self, row: int, col: int) -> bool:
        """Check if a cell can be revealed."""
        if self._status != GameStatus.PLAYING:
            return False
        if not self._is_valid_position(row, col):
            return False
        return self._grid[row][col].state == CellState.HIDDEN

    def _flood_reveal(self, row: int, col: int) -> None:
        """
        Reveal the region connected to an empty cell.

        Breadth-first over an explicit queue. Cells are marked revealed
        before being queued, so each is expanded at most once. Flagged
        cells are left alone and stop the spread.
        """
        queue = deque([(row, col)])
        while queue:
            current_row, current_col = queue.popleft()
            for neighbor_row, neighbor_col in self.get_neighbors(
                current_row, current_col
            ):
                neighbor = self._grid[neighbor_row][neighbor_col]
                if not neighbor.reveal():
                    continue
                self._safe_revealed += 1
                if neighbor.adjacent_mines == 0:
                    queue.append((neighbor_row, neighbor_col))

    def _reveal_all_mines(self) -> None:
        """Uncover every unflagged mine after a loss."""
        for _, _, cell in self.iter_cells():
            if cell.is_mine:
                cell.reveal()

    def _check_win_condition(self) -> None:
        """Check if all non-mine cells are revealed."""
        if self._safe_revealed >= self.config.safe_cells:
            self._status = GameStatus.WON

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if self._status != GameStatus.PLAYING:
            return False
        if not self._is_valid_position(row, col):
            return False
        cell = self._grid[row][col]
        if not cell.toggle_flag():
            return False
        self._flags += 1 if cell.is_flagged else -1
        return True

    def reset(self, rng: Optional[np.random.Generator] = None) -> None:
        """Start a new randomly mined game with the same configuration."""
        if rng is not None:
            self.rng = rng
        self._new_game()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def columns(self) -> int:
        return self.config.columns

    @property
    def status(self) -> GameStatus:
        """Get current game status."""
        return self._status

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._status == GameStatus.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._status == GameStatus.LOST

    @property
    def flag_count(self) -> int:
        """Number of flags currently placed."""
        return self._flags

    @property
    def mines_remaining(self) -> int:
        """Mines minus flags; negative when over-flagged."""
        return self.config.num_mines - self._flags

    @property
    def safe_revealed(self) -> int:
        """Number of revealed non-mine cells."""
        return self._safe_revealed

    @property
    def revealed_count(self) -> int:
        """Number of revealed cells, mines included."""
        return sum(1 for _, _, cell in self.iter_cells() if cell.is_revealed)

    def compute_status(self) -> GameStatus:
        """
        Derive the game status from cell state alone.

        Always agrees with ``status``; useful as an independent check.
        """
        all_safe_revealed = True
        for _, _, cell in self.iter_cells():
            if cell.is_mine and cell.is_revealed:
                return GameStatus.LOST
            if not cell.is_mine and not cell.is_revealed:
                all_safe_revealed = False
        return GameStatus.WON if all_safe_revealed else GameStatus.PLAYING

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def cell_at(self, row: int, col: int) -> Cell:
        """
        Get cell at position.

        Raises:
            OutOfBounds: If the position is not on the board.
        """
        if not self._is_valid_position(row, col):
            raise OutOfBounds(row, col, self.config.rows, self.config.columns)
        return self._grid[row][col]

    def iter_cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Yield (row, col, cell) in row-major order."""
        for row, cells in enumerate(self._grid):
            for col, cell in enumerate(cells):
                yield row, col, cell

    def mine_positions(self) -> List[Position]:
        """Positions of all mines in row-major order."""
        return [(row, col) for row, col, cell in self.iter_cells() if cell.is_mine]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.rows, self.config.columns), dtype=np.int8)
        for row, col, cell in self.iter_cells():
            obs[row, col] = cell.to_observation()
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that can be revealed.

        Returns:
            List of (row, col) positions that are hidden and unflagged.
        """
        return [
            (row, col)
            for row, col, cell in self.iter_cells()
            if cell.state == CellState.HIDDEN
        ]
