"""
connectn.game - Core game mechanics for ConnectN

This package contains the board representation, the observer contract,
and the game engine that ties turn order, rules and notifications together.
"""

from connectn.game.board import Board
from connectn.game.observer import GameObserver
from connectn.game.engine import GameEngine

__all__ = ['Board', 'GameObserver', 'GameEngine']
