"""Tests for the console view, the interactive CLI and run.py."""

import json
import sys

import pytest

import run
from connectn.data.stats import GameStats
from connectn.game.engine import GameEngine
from connectn.interfaces.cli import QUIT, RESTART, ConsoleView, SimpleCLI
from connectn.utils import GameMode


def feed_input(monkeypatch, lines):
    answers = iter(lines)
    monkeypatch.setattr('builtins.input', lambda prompt='': next(answers))


class TestConsoleView:

    def test_prints_moves_and_result(self, capsys):
        engine = GameEngine()
        view = ConsoleView()
        engine.join_game(view)
        engine.start_game(view, GameMode.TWO_PLAYER)
        for col in [0, 6, 1, 6, 2, 6, 3]:
            engine.play_move(col)

        out = capsys.readouterr().out
        assert "New two-player game on a GameEngine of size 6x7 with winning size 4." in out
        assert "Player X plays column 0" in out
        assert "Player O plays column 6" in out
        assert "Game over! Player X wins with the token at row 5, column 3!" in out
        assert "|X X X X     O|" in out

    def test_board_can_be_hidden(self, capsys):
        engine = GameEngine()
        view = ConsoleView(show_board=False)
        engine.join_game(view)
        engine.start_game(view, GameMode.TWO_PLAYER)
        assert "|0 1 2 3 4 5 6|" not in capsys.readouterr().out


class TestSimpleCLI:

    def test_get_human_move_commands(self, monkeypatch, capsys):
        cli = SimpleCLI(engine=GameEngine())
        feed_input(monkeypatch, ["q", "r", " 4 ", "x", "7"])
        assert cli.get_human_move() == QUIT
        assert cli.get_human_move() == RESTART
        assert cli.get_human_move() == 4
        assert cli.get_human_move() is None
        assert cli.get_human_move() is None
        out = capsys.readouterr().out
        assert "Invalid input" in out
        assert "Column must be between 0 and 6." in out

    def test_two_player_game_to_the_end(self, monkeypatch, capsys):
        stats = GameStats()
        cli = SimpleCLI(engine=GameEngine(), stats=stats)
        feed_input(monkeypatch, ["0", "6", "1", "6", "2", "6", "3"])
        cli.play_game(GameMode.TWO_PLAYER)

        assert stats.wins["ONE"] == 1
        assert cli.engine.observers == ()
        assert "Player X wins" in capsys.readouterr().out

    def test_quit_stops_game(self, monkeypatch, capsys):
        cli = SimpleCLI(engine=GameEngine())
        feed_input(monkeypatch, ["3", "q"])
        cli.play_game(GameMode.TWO_PLAYER)
        out = capsys.readouterr().out
        assert "Quitting game." in out
        assert "Game stopped." in out
        assert not cli.engine.is_game_started()

    def test_restart_clears_board(self, monkeypatch):
        cli = SimpleCLI(engine=GameEngine())
        feed_input(monkeypatch, ["3", "r", "q"])
        seen = []
        monkeypatch.setattr(cli, "_leave", lambda: (seen.append(cli.engine.get_state().sum()),
                                                   SimpleCLI._leave(cli)))
        cli.play_game(GameMode.TWO_PLAYER)
        assert seen == [1, 0]

    def test_full_column_reported(self, monkeypatch, capsys):
        cli = SimpleCLI(engine=GameEngine())
        feed_input(monkeypatch, ["0"] * 7 + ["q"])
        cli.play_game(GameMode.TWO_PLAYER)
        assert "Column 0 is full." in capsys.readouterr().out

    def test_run_play_saves_stats(self, monkeypatch, tmp_path):
        path = tmp_path / "stats.json"
        feed_input(monkeypatch, ["0", "6", "1", "6", "2", "6", "3"])
        SimpleCLI().run(["play", "--mode", "two", "--rows", "6", "--cols", "7",
                         "--stats-file", str(path)])

        data = json.loads(path.read_text())
        assert data['wins']['ONE'] == 1
        assert data['history'][0]['mode'] == 'TWO_PLAYER'

    def test_single_player_mode_selected(self, monkeypatch):
        cli = SimpleCLI()
        cli.parse_args(["play", "--seed", "3"])
        cli.engine = cli.build_engine()
        assert cli.selected_mode() == GameMode.SINGLE_PLAYER
        feed_input(monkeypatch, ["3", "q"])
        cli.play_game(cli.selected_mode())
        assert cli.engine.remaining_moves == 40

    def test_missing_command_exits(self, capsys):
        with pytest.raises(SystemExit):
            SimpleCLI().run([])


class TestRunScript:

    def test_simulate(self, monkeypatch, tmp_path, capsys):
        path = tmp_path / "sim.json"
        monkeypatch.setattr(sys, 'argv', ['run.py', 'simulate', '--episodes', '3',
                                          '--seed', '1', '--stats-file', str(path)])
        run.main()

        out = capsys.readouterr().out
        assert "Episodes: 3" in out
        data = json.loads(path.read_text())
        assert data['game_number'] == 3
        assert data['draws'] + sum(data['wins'].values()) == 3
