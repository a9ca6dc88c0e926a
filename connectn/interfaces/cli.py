"""
cli.py - Command-line interface for playing ConnectN

This module provides ConsoleView, an observer that prints the board and
game events, and SimpleCLI, an interactive loop that feeds typed columns
into a GameEngine.
"""

import argparse
import sys
from typing import List, Optional

import numpy as np

from connectn.ai.opponent import AutomatedOpponent
from connectn.data.stats import GameStats
from connectn.debug import DebugLevel, debug
from connectn.game.engine import GameEngine
from connectn.game.observer import GameObserver
from connectn.utils import COLS, CONNECT_N, ROWS, GameConfig, GameMode

QUIT = -1
RESTART = -2


class ConsoleView(GameObserver):
    """Prints every engine event to stdout."""

    def __init__(self, show_board: bool = True):
        self.show_board = show_board

    def _board(self, engine):
        if self.show_board:
            print(engine.render())

    def on_game_started(self, turn, mode, engine):
        print(f"New {mode.name.replace('_', '-').lower()} game on a {engine}.")
        print(f"Player {turn} moves first.")
        self._board(engine)

    def on_game_stopped(self, engine):
        print("Game stopped.")

    def on_move_made(self, row, col, owner, engine):
        print(f"\nPlayer {owner} plays column {col}")
        self._board(engine)

    def on_game_won(self, row, col, owner, engine):
        print(f"Game over! Player {owner} wins with the token at row {row}, column {col}!")

    def on_game_draw(self, engine):
        print("Game over! It's a draw!")


class SimpleCLI:
    """Simple command-line interface for ConnectN."""

    def __init__(self, engine: Optional[GameEngine] = None, stats: Optional[GameStats] = None):
        self.engine = engine
        self.stats = stats
        self.view = ConsoleView()
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments and configure logging."""
        parser = argparse.ArgumentParser(description='ConnectN CLI')
        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--rows', type=int, default=ROWS, help='Number of rows')
        play_parser.add_argument('--cols', type=int, default=COLS, help='Number of columns')
        play_parser.add_argument('--connect', type=int, default=CONNECT_N,
                                 help='Tokens in a row needed to win')
        play_parser.add_argument('--mode', choices=['single', 'two'], default='single',
                                 help='Play against the computer or another person')
        play_parser.add_argument('--seed', type=int, default=None,
                                 help='Seed for the computer opponent')
        play_parser.add_argument('--stats-file', type=str, default=None,
                                 help='JSON file to load and save game statistics')
        play_parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        play_parser.add_argument('--debug-level', type=str, default='warning',
                                 choices=[level.name.lower() for level in DebugLevel],
                                 help='Logging level')

        self.args = parser.parse_args(argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        elif getattr(self.args, 'debug_level', None):
            debug.set_from_string(self.args.debug_level)

        return self.args

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.engine = self.build_engine()
            if self.args.stats_file:
                self.stats = GameStats.load(self.args.stats_file)
            self.play_game(self.selected_mode())
            if self.args.stats_file and self.stats is not None:
                self.stats.save(self.args.stats_file)
        else:
            print("Please specify a command. Use --help for options.")
            sys.exit(1)

    def build_engine(self) -> GameEngine:
        config = GameConfig(self.args.rows, self.args.cols, self.args.connect)
        opponent = AutomatedOpponent(rng=np.random.default_rng(self.args.seed))
        return GameEngine.from_config(config, opponent=opponent)

    def selected_mode(self) -> GameMode:
        return GameMode.SINGLE_PLAYER if self.args.mode == 'single' else GameMode.TWO_PLAYER

    def _join(self):
        self.engine.join_game(self.view)
        if self.stats is not None:
            self.engine.join_game(self.stats)

    def _leave(self):
        self.engine.exit_game(self.view)
        if self.stats is not None:
            self.engine.exit_game(self.stats)

    def play_game(self, mode: GameMode) -> None:
        """Play games until one ends or the user quits."""
        if self.engine is None:
            self.engine = GameEngine()

        print(f"Enter a column number (0-{self.engine.columns - 1}) to make a move.")
        print("Other commands: 'q' to quit, 'r' to restart.")

        self._join()
        self.engine.start_game(self.view, mode)

        while self.engine.is_game_started():
            move = self.get_human_move()
            if move is None:
                continue
            if move == QUIT:
                print("Quitting game.")
                self._leave()
                return
            if move == RESTART:
                self._leave()
                self._join()
                self.engine.start_game(self.view, mode)
                continue

            if not self.engine.play_move(move):
                print(f"Column {move} is full.")

        self._leave()

    def get_human_move(self) -> Optional[int]:
        """
        Read one command from the player.

        Returns:
            Column index, QUIT or RESTART, or None for unusable input
        """
        last_column = self.engine.columns - 1
        user_input = input(f"Player {self.engine.current_player} move (0-{last_column}, q/r): ").strip().lower()

        if user_input == 'q':
            return QUIT
        if user_input == 'r':
            return RESTART

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or command.")
            return None

        if not 0 <= move <= last_column:
            print(f"Column must be between 0 and {last_column}.")
            return None
        return move
