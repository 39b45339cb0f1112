"""
Unit tests for the Gymnasium environment.
"""
import numpy as np
import pytest
from game import Board, GameSetting, MinesweeperEnv


@pytest.fixture
def env() -> MinesweeperEnv:
    """3x3 environment reset onto the corner-mine layout."""
    environment = MinesweeperEnv(GameSetting(size=3, density=0.5), render_mode="ansi")
    environment.reset(seed=0)
    environment.board = Board.from_layout([
        [True, False, False],
        [False, False, False],
        [False, False, False],
    ])
    return environment


class TestSpaces:
    """Test observation and action spaces."""

    def test_space_shapes(self) -> None:
        environment = MinesweeperEnv(GameSetting(size=4))
        assert environment.observation_space.shape == (4, 4)
        assert environment.action_space.n == 32

    def test_reset_returns_hidden_observation(self) -> None:
        environment = MinesweeperEnv(GameSetting(size=5))
        obs, info = environment.reset(seed=3)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)
        assert environment.observation_space.contains(obs)
        assert info["closed"] == 25
        assert info["mines"] >= 1

    def test_reset_with_seed_is_reproducible(self) -> None:
        first = MinesweeperEnv(GameSetting(size=6))
        second = MinesweeperEnv(GameSetting(size=6))
        first.reset(seed=11)
        second.reset(seed=11)
        assert first.board.mine_count == second.board.mine_count
        for row in range(6):
            for col in range(6):
                assert (
                    first.board.get_cell(row, col).has_mine
                    == second.board.get_cell(row, col).has_mine
                )


class TestStep:
    """Test actions and rewards."""

    def test_safe_open_rewards_one(self, env: MinesweeperEnv) -> None:
        obs, reward, terminated, truncated, info = env.step(8)
        assert reward == 1.0
        assert terminated is False
        assert truncated is False
        assert obs[2, 2] == 0
        assert info["closed"] == 1

    def test_flagging_every_mine_wins(self, env: MinesweeperEnv) -> None:
        env.step(8)
        obs, reward, terminated, _, info = env.step(9)
        assert reward == 10.0
        assert terminated is True
        assert info["cleared"] is True
        assert obs[0, 0] == -2

    def test_opening_mine_loses(self, env: MinesweeperEnv) -> None:
        obs, reward, terminated, _, info = env.step(0)
        assert reward == -10.0
        assert terminated is True
        assert info["exploded"] is True
        assert obs[0, 0] == 9

    def test_no_op_is_penalised(self, env: MinesweeperEnv) -> None:
        env.step(8)
        _, reward, terminated, _, _ = env.step(4)
        assert reward == pytest.approx(-0.1)
        assert terminated is False
        _, reward, _, _, _ = env.step(9 + 4)
        assert reward == pytest.approx(-0.1)

    def test_flag_on_safe_cell_is_neutral(self, env: MinesweeperEnv) -> None:
        _, reward, terminated, _, _ = env.step(9 + 8)
        assert reward == 0.0
        assert terminated is False


class TestHelpers:
    """Test action mask and rendering."""

    def test_action_mask_covers_closed_cells(self, env: MinesweeperEnv) -> None:
        env.step(8)
        mask = env.get_action_mask()
        assert mask.shape == (18,)
        assert mask[0] and mask[9]
        assert mask.sum() == 2

    def test_render_ansi(self, env: MinesweeperEnv) -> None:
        env.step(8)
        env.step(9)
        lines = env.render().split("\n")
        assert lines[0] == "F 1  "
        assert len(lines) == 3
