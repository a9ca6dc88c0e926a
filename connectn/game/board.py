"""
board.py - Grid representation and rule primitives for ConnectN

This module implements the Board class: a gravity-fed grid of any size that
knows where a token lands, whether a coordinate is on the board, and whether
a (possibly hypothetical) placement completes a winning run.
"""

from typing import Iterator, List, Optional, Tuple

import numpy as np

from connectn.debug import debug
from connectn.utils import (DIRECTION_VECTORS, GameConfig, OutOfRangeError,
                            Player, render_board_ascii)


class Board:
    """
    A rows x columns grid of Player values.

    Row 0 is the top of the board; tokens fall towards the highest row index.
    The board does not track turns or game results, those belong to the engine.
    """

    def __init__(self, config: GameConfig):
        debug.debug(f"Initializing new {config.rows}x{config.columns} Board", "board")
        self.config = config
        self.grid = np.zeros(config.shape, dtype=np.int8)

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def columns(self) -> int:
        return self.config.columns

    @property
    def win_length(self) -> int:
        return self.config.win_length

    def reset(self):
        """Reset the board to an empty state."""
        debug.debug("Resetting board", "board")
        self.grid.fill(Player.EMPTY.value)

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if a position is within the board boundaries."""
        return 0 <= row < self.rows and 0 <= col < self.columns

    def check_position(self, row: int, col: int):
        """
        Raise if a coordinate lies outside the board.

        Raises:
            OutOfRangeError: If (row, col) is not on the board
        """
        if not self.is_valid_position(row, col):
            raise OutOfRangeError(
                f"Invalid grid location ({row}, {col}) for a {self.rows}x{self.columns} board")

    def check_column(self, col: int):
        """
        Raise if a column index lies outside the board.

        Raises:
            OutOfRangeError: If col is not in [0, columns)
        """
        if not 0 <= col < self.columns:
            raise OutOfRangeError(f"Invalid column {col}, expected 0-{self.columns - 1}")

    def is_empty(self, row: int, col: int) -> bool:
        """
        Check whether no player has moved on a cell.

        Raises:
            OutOfRangeError: If (row, col) is not on the board
        """
        self.check_position(row, col)
        return self.grid[row, col] == Player.EMPTY.value

    def get_cell(self, row: int, col: int) -> Player:
        self.check_position(row, col)
        return Player(int(self.grid[row, col]))

    def is_column_full(self, col: int) -> bool:
        return not self.is_empty(0, col)

    def is_full(self) -> bool:
        return not (self.grid[0] == Player.EMPTY.value).any()

    def landing_row(self, col: int) -> Optional[int]:
        """
        Find the lowest empty row in a column.

        Args:
            col: Column index (0-indexed)

        Returns:
            The row a token dropped in this column would land on,
            or None if the column is full

        Raises:
            OutOfRangeError: If col is not on the board
        """
        self.check_column(col)
        empty_rows = np.flatnonzero(self.grid[:, col] == Player.EMPTY.value)
        if empty_rows.size == 0:
            return None
        return int(empty_rows[-1])

    def place(self, row: int, col: int, player: Player):
        """Put a token on an empty cell. Gravity is the caller's concern."""
        debug.trace(f"Placing {player.name} at ({row}, {col})", "board")
        self.check_position(row, col)
        self.grid[row, col] = player.value

    def filled_cells(self) -> Iterator[Tuple[int, int, Player]]:
        """
        Iterate over occupied cells in row-major order.

        Yields:
            (row, col, owner) for every non-empty cell
        """
        for row in range(self.rows):
            for col in range(self.columns):
                value = self.grid[row, col]
                if value != Player.EMPTY.value:
                    yield row, col, Player(int(value))

    def _window_matches(self, start_row: int, start_col: int, dr: int, dc: int,
                        center: Tuple[int, int], player: Player) -> bool:
        for n in range(self.win_length):
            r, c = start_row + n * dr, start_col + n * dc
            if not self.is_valid_position(r, c):
                return False
            if (r, c) != center and self.grid[r, c] != player.value:
                return False
        return True

    def winning_line(self, row: int, col: int, player: Player) -> List[Tuple[int, int]]:
        """
        Find a winning run through (row, col) for player.

        The cell at (row, col) is treated as holding player's token whatever
        it currently holds, so the check works for hypothetical placements
        without touching the grid. Every window of win_length cells along the
        four axes that contains (row, col) is examined.

        Args:
            row: Row of the placed (or probed) token
            col: Column of the placed (or probed) token
            player: Colour to test

        Returns:
            Positions of the first complete window found, or an empty list

        Raises:
            OutOfRangeError: If (row, col) is not on the board
        """
        self.check_position(row, col)
        center = (row, col)

        for direction, (dr, dc) in DIRECTION_VECTORS.items():
            for offset in range(self.win_length):
                start_row, start_col = row - offset * dr, col - offset * dc
                if self._window_matches(start_row, start_col, dr, dc, center, player):
                    debug.trace(f"{player.name} completes a {direction.name} run at {center}", "board")
                    return [(start_row + n * dr, start_col + n * dc)
                            for n in range(self.win_length)]
        return []

    def would_win(self, row: int, col: int, player: Player) -> bool:
        """Check if player holding (row, col) completes a run."""
        return bool(self.winning_line(row, col, player))

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Copy of the grid
        """
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()
