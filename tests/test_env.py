"""Tests for the gymnasium environment."""

import numpy as np
import pytest
from gymnasium.error import ResetNeeded

from connectn.ai.env import ConnectNEnv
from connectn.utils import GameConfig, GameMode, Player


@pytest.fixture
def two_player_env():
    env = ConnectNEnv(mode=GameMode.TWO_PLAYER)
    env.reset(seed=0)
    yield env
    env.close()


class TestConnectNEnv:

    def test_reset_gives_empty_observation(self, two_player_env):
        observation, info = two_player_env.reset(seed=1)
        assert observation.shape == (6, 7)
        assert observation.dtype == np.int8
        assert not observation.any()
        assert two_player_env.observation_space.contains(observation)
        assert info['valid_moves'] == list(range(7))
        assert info['current_player'] == Player.ONE.value

    def test_win_rewarded(self, two_player_env):
        rewards = []
        for action in [0, 6, 1, 6, 2, 6, 3]:
            observation, reward, terminated, truncated, info = two_player_env.step(action)
            rewards.append(reward)

        assert rewards[:-1] == [two_player_env.reward_step] * 6
        assert rewards[-1] == two_player_env.reward_win
        assert terminated and not truncated
        assert info['game_result'] == "ONE_WIN"
        assert info['last_move'] == (5, 3)
        assert info['valid_moves'] == []

    def test_loss_penalised(self, two_player_env):
        for action in [0, 1, 0, 1, 0, 1, 6]:
            two_player_env.step(action)
        _, reward, terminated, _, info = two_player_env.step(1)
        assert reward == two_player_env.reward_lose
        assert terminated
        assert info['game_result'] == "TWO_WIN"

    def test_full_column_is_invalid(self, two_player_env):
        for _ in range(6):
            two_player_env.step(0)
        observation, reward, terminated, truncated, info = two_player_env.step(0)
        assert reward == two_player_env.reward_invalid_move
        assert truncated and not terminated
        assert info['invalid_move']
        assert np.count_nonzero(observation) == 6

    def test_single_player_opponent_replies(self):
        env = ConnectNEnv()
        env.reset(seed=3)
        observation, _, _, _, info = env.step(3)
        assert np.count_nonzero(observation == Player.ONE.value) == 1
        assert np.count_nonzero(observation == Player.TWO.value) == 1
        assert info['moves_made'] == 2
        env.close()

    def test_single_player_episode_terminates(self):
        env = ConnectNEnv(config=GameConfig(4, 5, 3))
        _, info = env.reset(seed=5)
        done = False
        while not done:
            action = env.np_random.choice(info['valid_moves'])
            _, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
        assert terminated
        assert reward in (env.reward_win, env.reward_lose, env.reward_draw)
        env.close()

    def test_seeded_resets_repeat(self):
        def episode():
            env = ConnectNEnv()
            env.reset(seed=42)
            observations = [env.step(col)[0] for col in (3, 3, 2)]
            env.close()
            return observations

        first, second = episode(), episode()
        assert all(np.array_equal(a, b) for a, b in zip(first, second))

    def test_ascii_render(self):
        env = ConnectNEnv(render_mode="ascii")
        env.reset(seed=0)
        assert env.render().splitlines()[-1] == "|0 1 2 3 4 5 6|"
        env.close()

    def test_step_before_reset(self):
        with pytest.raises(ResetNeeded):
            ConnectNEnv().step(0)

    def test_step_after_episode_end(self, two_player_env):
        for action in [0, 6, 1, 6, 2, 6, 3]:
            two_player_env.step(action)
        with pytest.raises(ResetNeeded):
            two_player_env.step(4)
        observation, _ = two_player_env.reset(seed=2)
        assert not observation.any()
        assert two_player_env.step(4)[1] == two_player_env.reward_step

    def test_close_leaves_engine(self, two_player_env):
        engine = two_player_env.engine
        two_player_env.close()
        assert engine.observers == ()
        assert not engine.is_game_started()
