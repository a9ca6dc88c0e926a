"""
observer.py - Observer contract for GameEngine notifications

Views, loggers, statistics keepers and AI harnesses subclass GameObserver
(or provide the same five methods) and register with GameEngine.join_game.
Every callback receives the engine so one observer can follow several games.
"""


class GameObserver:
    """
    Base class for engine observers.

    All callbacks are no-ops; override the ones you care about. Callbacks run
    synchronously on the caller's thread while the engine holds its lock, so
    a slow observer delays the engine and every observer after it.
    """

    def on_game_started(self, turn, mode, engine):
        """
        Called when a game starts, or when this observer joins a running game.

        Args:
            turn: Player whose turn it is
            mode: GameMode of the running game
            engine: The notifying GameEngine
        """

    def on_game_stopped(self, engine):
        """Called on the observer that has just left the game."""

    def on_move_made(self, row, col, owner, engine):
        """
        Called for every placed token, and for every filled cell during
        the replay a late joiner receives.
        """

    def on_game_won(self, row, col, owner, engine):
        """Called with the winning token's position and owner."""

    def on_game_draw(self, engine):
        """Called when the last cell is filled without a win."""
