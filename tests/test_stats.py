"""Tests for the GameStats observer."""

import pytest

from connectn.data.stats import GameStats
from connectn.game.engine import GameEngine
from connectn.game.observer import GameObserver
from connectn.utils import GameMode, Player
from tests.helpers import DRAW_SEQUENCE, play_columns


@pytest.fixture
def stats():
    return GameStats()


def start(engine, stats):
    engine.join_game(stats)
    engine.start_game(stats, GameMode.TWO_PLAYER)


class TestGameStats:

    def test_numbers_games_per_engine(self, stats):
        first, second = GameEngine(), GameEngine()
        start(first, stats)
        start(second, stats)
        assert stats.game_number == 2
        assert stats.get_log().splitlines() == ["Game 1: Started.", "Game 2: Started."]

    def test_records_win(self, stats):
        engine = GameEngine()
        start(engine, stats)
        play_columns(engine, [0, 6, 1, 6, 2, 6, 3])

        assert stats.wins == {Player.ONE.name: 1, Player.TWO.name: 0}
        assert stats.games_played == 1
        record = stats.history[0]
        assert record['result'] == 'won'
        assert record['winner'] == 'ONE'
        assert record['moves'] == 7
        assert record['mode'] == 'TWO_PLAYER'
        assert stats.get_log().splitlines()[-1] == "ONE won game 1."

    def test_records_draw(self, stats):
        engine = GameEngine()
        start(engine, stats)
        play_columns(engine, DRAW_SEQUENCE)
        assert stats.draws == 1
        assert stats.history[0]['moves'] == 42
        assert stats.get_log().splitlines()[-1] == "Game 1: ended in a draw."

    def test_restart_after_win_gets_new_number(self, stats):
        engine = GameEngine()
        start(engine, stats)
        play_columns(engine, [0, 6, 1, 6, 2, 6, 3])
        engine.start_game(stats, GameMode.TWO_PLAYER)
        assert stats.game_number == 2

    def test_stopped_game_logged(self, stats):
        engine = GameEngine()
        start(engine, stats)
        engine.exit_game(stats)
        assert stats.history[0]['result'] == 'stopped'
        assert stats.games_played == 0
        assert stats.get_log().splitlines()[-1] == "Game 1: Stopped."

    def test_stop_for_unknown_engine(self, stats):
        engine = GameEngine()
        engine.join_game(stats)
        engine.exit_game(stats)
        assert stats.get_log() == "Engine is already removed."

    def test_repeated_start_for_same_engine(self, stats):
        engine = GameEngine()
        start(engine, stats)
        stats.on_game_started(Player.ONE, GameMode.TWO_PLAYER, engine)
        assert stats.game_number == 1
        assert "related to Game 1" in stats.get_log()

    def test_late_join_counts_replayed_moves(self, stats):
        engine = GameEngine()
        player = GameObserver()
        engine.join_game(player)
        engine.start_game(player, GameMode.TWO_PLAYER)
        play_columns(engine, [3, 3, 4])
        engine.join_game(stats)
        play_columns(engine, [4])
        assert stats.game_number == 1
        assert stats._active[engine]['moves'] == 4


class TestPersistence:

    def test_save_and_load(self, stats, tmp_path):
        engine = GameEngine()
        start(engine, stats)
        play_columns(engine, [0, 6, 1, 6, 2, 6, 3])

        path = tmp_path / "stats.json"
        stats.save(str(path))
        loaded = GameStats.load(str(path))

        assert loaded.game_number == 1
        assert loaded.wins == stats.wins
        assert loaded.history == stats.history
        assert loaded.get_log() == stats.get_log()

    def test_load_missing_file(self, tmp_path):
        loaded = GameStats.load(str(tmp_path / "missing.json"))
        assert loaded.game_number == 0
        assert loaded.history == []

    def test_load_corrupt_file(self, tmp_path):
        path = tmp_path / "stats.json"
        path.write_text("{not json")
        loaded = GameStats.load(str(path))
        assert loaded.game_number == 0

    @pytest.mark.parametrize("content", ["[]", "3", "\"stats\"", "null"])
    def test_load_non_object_file(self, tmp_path, content):
        path = tmp_path / "stats.json"
        path.write_text(content)
        loaded = GameStats.load(str(path))
        assert loaded.game_number == 0
        assert loaded.history == []

    def test_save_creates_directory(self, stats, tmp_path):
        path = tmp_path / "nested" / "stats.json"
        stats.save(str(path))
        assert path.exists()
