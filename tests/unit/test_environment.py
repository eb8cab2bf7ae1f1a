"""
Unit tests for the Gymnasium environment wrapper.
"""
import numpy as np
import pytest
from minefield import Board, BoardConfig, GameEngine, MinesweeperEnv


@pytest.fixture
def strip_env() -> MinesweeperEnv:
    """1x6 environment with the mine fixed at the right end."""
    env = MinesweeperEnv(config=BoardConfig(1, 6, 1), render_mode="ansi")
    env.reset(seed=0)
    env.engine = GameEngine.from_board(Board.from_mines(1, 6, [(0, 5)]))
    return env


class TestSpaces:
    """Test observation and action spaces."""

    def test_spaces_match_board(self) -> None:
        """Spaces follow the configured size."""
        env = MinesweeperEnv(config=BoardConfig(4, 7, 5))
        assert env.observation_space.shape == (4, 7)
        assert env.action_space.n == 28

    def test_reset_observation(self) -> None:
        """Reset returns an all-hidden observation inside the space."""
        env = MinesweeperEnv()
        obs, info = env.reset(seed=1)
        assert env.observation_space.contains(obs)
        assert np.all(obs == -1)
        assert info["game_state"] == "PLAYING"
        assert info["total_safe"] == 54

    def test_reset_seed_is_reproducible(self) -> None:
        """Equal seeds give equal layouts."""
        env = MinesweeperEnv()
        env.reset(seed=21)
        first = env.engine.board.mine_positions()
        env.reset(seed=21)
        assert env.engine.board.mine_positions() == first


class TestStep:
    """Test rewards and termination."""

    def test_safe_reveal_reward(self, strip_env: MinesweeperEnv) -> None:
        """A safe reveal earns +1 and the game continues."""
        obs, reward, terminated, truncated, info = strip_env.step(4)
        assert reward == 1.0
        assert terminated is False
        assert truncated is False
        assert obs[0, 4] == 1
        assert info["revealed"] == 1

    def test_winning_reveal(self, strip_env: MinesweeperEnv) -> None:
        """Clearing the strip earns +10 and ends the episode."""
        _, reward, terminated, _, info = strip_env.step(0)
        assert reward == 10.0
        assert terminated is True
        assert info["game_state"] == "WON"
        assert info["revealed"] == 5

    def test_mine_reveal(self, strip_env: MinesweeperEnv) -> None:
        """Hitting the mine costs -10 and ends the episode."""
        obs, reward, terminated, _, info = strip_env.step(5)
        assert reward == -10.0
        assert terminated is True
        assert info["game_state"] == "LOST"
        assert obs[0, 5] == 9

    def test_repeated_action_is_penalized(self, strip_env: MinesweeperEnv) -> None:
        """Revealing a revealed cell costs -0.1."""
        strip_env.step(4)
        _, reward, terminated, _, info = strip_env.step(4)
        assert reward == pytest.approx(-0.1)
        assert terminated is False
        assert info["steps"] == 2

    def test_action_mask(self, strip_env: MinesweeperEnv) -> None:
        """Revealed and flagged cells are masked out."""
        strip_env.step(4)
        strip_env.engine.toggle_flag(0, 5)
        mask = strip_env.get_action_mask()
        assert mask.tolist() == [True, True, True, True, False, False]

    def test_render_ansi(self, strip_env: MinesweeperEnv) -> None:
        """ANSI rendering returns the board as text."""
        strip_env.step(4)
        assert strip_env.render() == ". . . . 1 ."
