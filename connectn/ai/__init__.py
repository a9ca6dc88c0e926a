"""
connectn.ai - Automated players and learning harnesses

AutomatedOpponent chooses the engine's own moves in single-player games.
The gymnasium environment lives in connectn.ai.env and is not imported
here, to keep gymnasium off the engine's import path.
"""

from connectn.ai.opponent import AutomatedOpponent

__all__ = ['AutomatedOpponent']
