"""
opponent.py - Automated opponent for single-player games

The opponent looks exactly one move ahead: it takes the leftmost column
that wins immediately and otherwise drops a token in a random open column.
"""

from typing import TYPE_CHECKING, Optional, Tuple

import numpy as np

from connectn.debug import debug
from connectn.utils import InvalidArgumentError, Player

if TYPE_CHECKING:
    from connectn.game.board import Board


class AutomatedOpponent:
    """
    One-ply move selection for the engine's automated side.

    The win search only probes the board through Board.would_win, so it
    never mutates the grid or reaches the engine's observers.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Initialize the opponent.

        Args:
            rng: Random generator for the fallback move. Pass a seeded
                 generator for reproducible games.
        """
        self.rng = rng if rng is not None else np.random.default_rng()

    def find_winning_move(self, board: 'Board', player: Player) -> Optional[Tuple[int, int]]:
        """
        Scan columns left to right for a move that wins at once.

        Returns:
            (row, column) of the first winning placement, or None
        """
        for col in range(board.columns):
            row = board.landing_row(col)
            if row is None:
                continue
            if board.would_win(row, col, player):
                debug.debug(f"Winning move found for {player.name} at ({row}, {col})", "ai")
                return row, col
        return None

    def random_move(self, board: 'Board') -> Tuple[int, int]:
        """
        Draw uniformly random columns until one has room.

        Raises:
            InvalidArgumentError: If the board is full
        """
        if board.is_full():
            raise InvalidArgumentError("Cannot choose a move on a full board")

        while True:
            col = int(self.rng.integers(board.columns))
            if board.is_column_full(col):
                continue
            row = board.landing_row(col)
            debug.trace(f"Random move chosen at ({row}, {col})", "ai")
            return row, col

    def choose_move(self, board: 'Board', player: Player) -> Tuple[int, int]:
        """
        Pick the automated player's next move.

        Args:
            board: Current board
            player: The side to move

        Returns:
            (row, column) where the token will land
        """
        move = self.find_winning_move(board, player)
        if move is None:
            move = self.random_move(board)
        return move
