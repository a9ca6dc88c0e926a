"""
connectn.data - Game statistics and their persistence

GameStats is an observer that numbers, tallies and logs finished games
and can save its history to a JSON file.
"""

from connectn.data.stats import GameStats

__all__ = ['GameStats']
