"""
connectn - Turn-based connection game engine

This package provides a gravity-fed grid game engine (Connect Four and its
N-in-a-row variants) that validates moves, detects wins and draws, plays a
one-ply automated opponent, and broadcasts every state change to registered
observers such as console views, statistics loggers and gymnasium agents.
"""

# Version number
__version__ = '0.1.0'
