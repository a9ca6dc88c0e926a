"""
utils.py - Constants, enumerations and helpers for the ConnectN engine

This module provides the shared vocabulary of the package: player and cell
states, game modes, move outcomes, the four win axes, per-engine
configuration, the exception types raised on caller misuse, and an ASCII
renderer for boards of any size.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple

import numpy as np

# Default game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win


class InvalidArgumentError(ValueError):
    """Raised when a required argument is missing or invalid."""


class OutOfRangeError(InvalidArgumentError):
    """Raised when a grid coordinate lies outside the board."""


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player, always the human in single-player games
    TWO = 2    # Second player, the automated side in single-player games

    def other(self):
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


# The side the engine plays for itself in single-player mode
AUTOMATED_PLAYER = Player.TWO


class GameMode(Enum):
    """Game types supported by the engine."""
    SINGLE_PLAYER = auto()
    TWO_PLAYER = auto()


class GameResult(Enum):
    """Outcome of applying a single move."""
    IN_PROGRESS = auto()
    WON = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()  # Diagonal from bottom-left to top-right
    DIAGONAL_DOWN = auto()  # Diagonal from top-left to bottom-right


# Direction vectors (row, col) for each direction
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (-1, 1),
    Direction.DIAGONAL_DOWN: (1, 1)
}


def require_positive_int(name: str, value) -> int:
    """
    Validate a dimension argument.

    Args:
        name: Argument name used in the error message
        value: Value to check

    Returns:
        The value, unchanged

    Raises:
        InvalidArgumentError: If value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
        raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")
    return int(value)


@dataclass(frozen=True)
class GameConfig:
    """Immutable board dimensions and winning run length."""
    rows: int = ROWS
    columns: int = COLS
    win_length: int = CONNECT_N

    def __post_init__(self):
        require_positive_int("rows", self.rows)
        require_positive_int("columns", self.columns)
        require_positive_int("win_length", self.win_length)

    @property
    def total_moves(self) -> int:
        return self.rows * self.columns

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.columns)


def render_board_ascii(board: np.ndarray) -> str:
    """
    Render the board as ASCII art.

    Args:
        board: The game grid (rows x columns of Player values)

    Returns:
        ASCII representation of the board
    """
    rows, cols = board.shape
    # Column labels wider than one character would break the alignment
    width = max(len(str(cols - 1)), 1)

    def cell_text(value) -> str:
        return str(Player(int(value))).rjust(width)

    border = "|" + "-" * (cols * (width + 1) - 1) + "|"
    result = [border]
    for row in range(rows):
        result.append("|" + " ".join(cell_text(board[row, col]) for col in range(cols)) + "|")
    result.append(border)
    result.append("|" + " ".join(str(i).rjust(width) for i in range(cols)) + "|")

    return "\n".join(result)
