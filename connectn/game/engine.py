"""
engine.py - Game state engine for ConnectN

This module provides GameEngine, which owns the board, the turn state and
the list of registered observers. Every public operation completes,
including all observer notifications and any automated reply in
single-player mode, before it returns to the caller.
"""

import threading
from typing import List, Optional, Tuple

import numpy as np

from connectn.ai.opponent import AutomatedOpponent
from connectn.debug import debug
from connectn.game.board import Board
from connectn.utils import (AUTOMATED_PLAYER, COLS, CONNECT_N, ROWS, GameConfig,
                            GameMode, GameResult, InvalidArgumentError, Player)


class GameEngine:
    """
    Turn-based connection game engine with synchronous observer fan-out.

    Declined actions (game already running, observer already joined or not
    joined, full column, game not running) return False. Caller misuse
    (missing arguments, coordinates off the board) raises
    InvalidArgumentError or OutOfRangeError before any state changes.

    All operations on one engine are serialised by a re-entrant lock.
    Observers may query the engine, join or exit from inside a callback,
    but play_move and start_game called during a broadcast are declined
    and return False. Exceptions raised by an observer propagate to the caller and the
    remaining observers of that broadcast are not notified.
    """

    def __init__(self, rows: int = ROWS, columns: int = COLS, win_length: int = CONNECT_N,
                 opponent: Optional[AutomatedOpponent] = None):
        """
        Initialize an engine with an empty board and no observers.

        Args:
            rows: Number of rows
            columns: Number of columns
            win_length: Run length needed to win
            opponent: Move selector for single-player games

        Raises:
            InvalidArgumentError: If a dimension is not a positive integer
        """
        self._config = GameConfig(rows, columns, win_length)
        self._board = Board(self._config)
        self._opponent = opponent if opponent is not None else AutomatedOpponent()
        self._lock = threading.RLock()
        self._observers: List = []
        self._broadcasting = 0
        self._started = False
        self._mode: Optional[GameMode] = None
        self._current_player = Player.ONE
        self._remaining_moves = self._config.total_moves
        debug.debug(f"Initialized {self}", "engine")

    @classmethod
    def from_config(cls, config: GameConfig,
                    opponent: Optional[AutomatedOpponent] = None) -> 'GameEngine':
        return cls(config.rows, config.columns, config.win_length, opponent=opponent)

    # --- Read-only accessors ---

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def rows(self) -> int:
        return self._config.rows

    @property
    def columns(self) -> int:
        return self._config.columns

    @property
    def win_length(self) -> int:
        return self._config.win_length

    @property
    def current_player(self) -> Player:
        with self._lock:
            return self._current_player

    @property
    def mode(self) -> Optional[GameMode]:
        with self._lock:
            return self._mode

    @property
    def remaining_moves(self) -> int:
        with self._lock:
            return self._remaining_moves

    @property
    def observers(self) -> Tuple:
        with self._lock:
            return tuple(self._observers)

    def is_game_started(self) -> bool:
        with self._lock:
            return self._started

    def get_state(self) -> np.ndarray:
        """Copy of the grid (0 empty, 1 Player.ONE, 2 Player.TWO)."""
        with self._lock:
            return self._board.get_state()

    def get_cell(self, row: int, col: int) -> Player:
        with self._lock:
            return self._board.get_cell(row, col)

    def render(self) -> str:
        with self._lock:
            return self._board.render()

    # --- Lifecycle ---

    def start_game(self, requesting_observer, mode: GameMode) -> bool:
        """
        Start a new game and notify every registered observer.

        Args:
            requesting_observer: The observer asking for the game
            mode: GameMode for this game

        Returns:
            True if a game was started, False if one is already running

        Raises:
            InvalidArgumentError: If requesting_observer or mode is missing
        """
        if mode is None:
            raise InvalidArgumentError("Game mode cannot be None")
        if not isinstance(mode, GameMode):
            raise InvalidArgumentError(f"Unknown game mode: {mode!r}")
        if requesting_observer is None:
            raise InvalidArgumentError("Observer cannot be None")

        with self._lock:
            if self._broadcasting:
                debug.debug("start_game declined: called from an observer callback", "engine")
                return False
            if self._started:
                debug.debug("start_game declined: a game is already running", "engine")
                return False

            self._reset_state()
            self._mode = mode
            self._started = True
            debug.info(f"Game started in {mode.name} mode", "engine")
            self._notify("on_game_started", self._current_player, mode, self)
            return True

    def join_game(self, observer) -> bool:
        """
        Register an observer.

        If a game is running, the new observer alone receives a game-started
        event followed by one move event per filled cell in row-major order.

        Returns:
            True if the observer was added, False if it was already registered

        Raises:
            InvalidArgumentError: If observer is None
        """
        if observer is None:
            raise InvalidArgumentError("Observer cannot be None")

        with self._lock:
            if observer in self._observers:
                return False

            self._observers.append(observer)
            debug.debug(f"Observer joined ({len(self._observers)} registered)", "engine")
            if self._started:
                self._replay(observer)
            return True

    def exit_game(self, observer) -> bool:
        """
        Unregister an observer and send it a game-stopped event.

        When the last observer leaves, the running game is marked as not
        started; nobody else is notified.

        Returns:
            True if the observer was removed, False if it was not registered

        Raises:
            InvalidArgumentError: If observer is None
        """
        if observer is None:
            raise InvalidArgumentError("Observer cannot be None")

        with self._lock:
            if observer not in self._observers:
                return False

            self._observers.remove(observer)
            if not self._observers:
                if self._started:
                    debug.info("Last observer left, game stopped", "engine")
                self._started = False
            observer.on_game_stopped(self)
            return True

    # --- Moves ---

    def play_move(self, column: int) -> bool:
        """
        Drop the current player's token into a column.

        In single-player mode the automated reply, if it is due, is played
        before this call returns.

        Args:
            column: Column index (0-indexed); the row follows from gravity

        Returns:
            True if the move was played, False if no game is running or the
            column is full

        Raises:
            OutOfRangeError: If a game is running and column is off the board
        """
        with self._lock:
            if self._broadcasting:
                debug.debug(f"play_move({column}) declined: called from an observer callback", "engine")
                return False
            if not self._started:
                debug.debug(f"play_move({column}) declined: no game running", "engine")
                return False

            row = self._board.landing_row(column)
            if row is None:
                debug.debug(f"play_move({column}) declined: column is full", "engine")
                return False

            while True:
                result = self._apply_move(row, column)
                if result.is_game_over():
                    return True

                self._current_player = self._current_player.other()
                if not self._automated_turn():
                    return True

                debug.start_timer("opponent_move")
                row, column = self._opponent.choose_move(self._board, self._current_player)
                debug.end_timer("opponent_move", "ai")

    def _automated_turn(self) -> bool:
        return (self._started
                and self._mode == GameMode.SINGLE_PLAYER
                and self._current_player == AUTOMATED_PLAYER)

    def _apply_move(self, row: int, column: int) -> GameResult:
        """Place, broadcast, then settle win or draw. Turn order is left to the caller."""
        mover = self._current_player
        self._board.place(row, column, mover)
        self._remaining_moves -= 1
        debug.debug(f"{mover.name} played ({row}, {column}), {self._remaining_moves} moves left", "engine")
        self._notify("on_move_made", row, column, mover, self)

        if self._board.would_win(row, column, mover):
            self._started = False
            debug.info(f"{mover.name} wins with move at ({row}, {column})", "engine")
            self._notify("on_game_won", row, column, mover, self)
            return GameResult.WON

        if self._remaining_moves == 0:
            self._started = False
            debug.info("Game ends in a draw", "engine")
            self._notify("on_game_draw", self)
            return GameResult.DRAW

        return GameResult.IN_PROGRESS

    # --- Internals ---

    def _reset_state(self):
        self._board.reset()
        self._current_player = Player.ONE
        self._remaining_moves = self._config.total_moves

    def _notify(self, callback: str, *args):
        # Snapshot so observers may join or exit from inside a callback
        self._broadcasting += 1
        try:
            for observer in list(self._observers):
                getattr(observer, callback)(*args)
        finally:
            self._broadcasting -= 1

    def _replay(self, observer):
        self._broadcasting += 1
        try:
            observer.on_game_started(self._current_player, self._mode, self)
            for row, col, owner in self._board.filled_cells():
                observer.on_move_made(row, col, owner, self)
        finally:
            self._broadcasting -= 1

    def __str__(self) -> str:
        return (f"GameEngine of size {self.rows}x{self.columns} "
                f"with winning size {self.win_length}")
