"""
Gymnasium environment wrapper for Minesweeper.

Lets scripted or learning agents play by the same rules as the
console game: open or flag cells until every mine is flagged or a
mine explodes.
"""
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, GameSetting
from .cell import CellFlagResult, CellOpenResult


# ============================================================================
# Constants
# ============================================================================

REWARD_OPEN = 1.0
REWARD_CLEARED = 10.0
REWARD_EXPLODED = -10.0
REWARD_NO_OP = -0.1
REWARD_FLAG = 0.0


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = cell not open
        - -2 = flagged cell
        - 0-8 = opened cell with adjacent mine count
        - 9 = exploded mine

    Actions:
        Discrete action space of size 2 * size * size.
        Action a < size * size opens cell (a // size, a % size);
        larger actions toggle the flag on cell a - size * size.

    Rewards:
        - +1 for opening a safe cell
        - +10 when every mine is flagged
        - -10 for opening a mine
        - -0.1 for an action on an already opened cell
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        setting: Optional[GameSetting] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            setting: Game setting (default: 10x10 with density 0.3).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.setting = setting or GameSetting()
        self.render_mode = render_mode
        self.board = Board(self.setting)

        size = self.setting.size
        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(size, size),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * size * size)

        self._steps = 0
        self._exploded = False

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.board = Board(self.setting, rng=self.np_random)
        self._steps = 0
        self._exploded = False

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Flat action index (see class docstring).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        is_flag, row, col = self._decode_action(int(action))
        self._steps += 1

        if is_flag:
            reward = self._apply_flag(row, col)
        else:
            reward = self._apply_open(row, col)

        terminated = self._exploded or self.board.cleared()
        return self.board.get_observation(), reward, terminated, False, self._get_info()

    def _decode_action(self, action: int) -> Tuple[bool, int, int]:
        """Convert flat action index to (is_flag, row, col)."""
        cells = self.setting.size * self.setting.size
        is_flag = action >= cells
        index = action - cells if is_flag else action
        return is_flag, index // self.setting.size, index % self.setting.size

    def _apply_open(self, row: int, col: int) -> float:
        result = self.board.try_open(row, col)
        if result == CellOpenResult.ALREADY_OPENED:
            return REWARD_NO_OP
        if result == CellOpenResult.EXPLODED:
            self._exploded = True
            return REWARD_EXPLODED
        if self.board.cleared():
            return REWARD_OPEN + REWARD_CLEARED
        return REWARD_OPEN

    def _apply_flag(self, row: int, col: int) -> float:
        result = self.board.try_flag(row, col)
        if result == CellFlagResult.ALREADY_OPENED:
            return REWARD_NO_OP
        if self.board.cleared():
            return REWARD_CLEARED
        return REWARD_FLAG

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "closed": len(self.board.closed_positions()),
            "mines": self.board.mine_count,
            "exploded": self._exploded,
            "cleared": self.board.cleared(),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        symbols = {-1: "-", -2: "F", 9: "*", 0: " "}
        lines = []
        for row in self.board.get_observation():
            lines.append(" ".join(symbols.get(int(val), str(val)) for val in row))
        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = the action changes the board.
        """
        cells = self.setting.size * self.setting.size
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.board.closed_positions():
            index = row * self.setting.size + col
            mask[index] = True
            mask[cells + index] = True
        return mask
