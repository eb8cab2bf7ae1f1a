"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, Cell, GameEngine


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a seeded default 8x8 board with 10 mines."""
    return Board.create(8, 8, 10, seed=1234)


@pytest.fixture
def diagonal_board() -> Board:
    """3x3 board with mines in two opposite corners."""
    return Board.from_mines(3, 3, [(0, 0), (2, 2)])


@pytest.fixture
def strip_board() -> Board:
    """1x6 board with a single mine at the right end."""
    return Board.from_mines(1, 6, [(0, 5)])


@pytest.fixture
def strip_engine(strip_board: Board) -> GameEngine:
    """Engine wrapping the 1x6 strip board."""
    return GameEngine.from_board(strip_board)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(8, 8, 10)


