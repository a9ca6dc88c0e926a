"""
env.py - Gymnasium environment backed by the ConnectN engine

ConnectNEnv lets a reinforcement learning agent play as Player.ONE. The
environment registers itself as an observer of a fresh GameEngine on every
reset and reads rewards off the events the engine broadcasts. In the default
single-player mode the engine's automated opponent answers each move inside
the same step.
"""

from typing import Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces
from gymnasium.error import ResetNeeded

from connectn.ai.opponent import AutomatedOpponent
from connectn.debug import debug
from connectn.game.engine import GameEngine
from connectn.game.observer import GameObserver
from connectn.utils import GameConfig, GameMode, Player


class ConnectNEnv(gym.Env, GameObserver):
    """
    ConnectN environment following the Gymnasium interface.

    Actions are column indices; observations are copies of the grid.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, config: Optional[GameConfig] = None,
                 mode: GameMode = GameMode.SINGLE_PLAYER,
                 render_mode: Optional[str] = None):
        """
        Initialize the environment.

        Args:
            config: Board dimensions and win length (defaults to 6x7, four in a row)
            mode: SINGLE_PLAYER to play against the automated opponent,
                  TWO_PLAYER to drive both sides from the agent
            render_mode: Mode for rendering the environment
        """
        debug.debug("Initializing ConnectNEnv", "env")
        self.config = config if config is not None else GameConfig()
        self.mode = mode
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(self.config.columns)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=self.config.shape, dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster solutions

        self.engine: Optional[GameEngine] = None
        self._winner: Optional[Player] = None
        self._draw = False
        self._last_move: Optional[Tuple[int, int]] = None

    # --- Observer callbacks ---

    def on_move_made(self, row, col, owner, engine):
        self._last_move = (row, col)

    def on_game_won(self, row, col, owner, engine):
        self._winner = owner

    def on_game_draw(self, engine):
        self._draw = True

    # --- Gymnasium interface ---

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Start a new game on a fresh engine.

        Args:
            seed: Random seed; also seeds the automated opponent
            options: Unused

        Returns:
            Initial observation and info dictionary
        """
        super().reset(seed=seed)

        if self.engine is not None:
            self.engine.exit_game(self)

        self.engine = GameEngine.from_config(self.config, opponent=AutomatedOpponent(rng=self.np_random))
        self._winner = None
        self._draw = False
        self._last_move = None
        self.engine.join_game(self)
        self.engine.start_game(self, self.mode)

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop a token in the chosen column.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if self.engine is None:
            raise ResetNeeded("Call reset() before step()")
        if not self.engine.is_game_started():
            raise ResetNeeded("Episode is over; call reset() before step()")

        action = int(action)
        debug.debug(f"Environment step with action {action}", "env")

        if not self.engine.play_move(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = False
        if self._winner == Player.ONE:
            reward = self.reward_win
            terminated = True
        elif self._winner == Player.TWO:
            reward = self.reward_lose
            terminated = True
        elif self._draw:
            reward = self.reward_draw
            terminated = True

        if terminated:
            debug.info(f"Episode over: {self._get_info()['game_result']}", "env")

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode is None or self.engine is None:
            return None

        if self.render_mode == "ascii":
            return self.engine.render()

        print(self.engine.render())
        return None

    def close(self):
        if self.engine is not None:
            self.engine.exit_game(self)
            self.engine = None

    # --- Helpers ---

    def _get_observation(self) -> np.ndarray:
        return self.engine.get_state()

    def _get_info(self) -> Dict:
        state = self.engine.get_state()
        valid_moves = [col for col in range(self.config.columns)
                       if state[0, col] == Player.EMPTY.value] if self.engine.is_game_started() else []

        if self._winner is not None:
            game_result = f"{self._winner.name}_WIN"
        elif self._draw:
            game_result = "DRAW"
        else:
            game_result = "IN_PROGRESS"

        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.engine.current_player.value,
            'game_result': game_result,
            'moves_made': self.config.total_moves - self.engine.remaining_moves,
            'last_move': self._last_move,
        }
