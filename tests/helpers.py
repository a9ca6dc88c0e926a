"""Shared test doubles for engine tests."""

from connectn.game.observer import GameObserver


class RecordingObserver(GameObserver):
    """Observer that records every callback as a tuple."""

    def __init__(self, name: str = "observer"):
        self.name = name
        self.events = []

    def on_game_started(self, turn, mode, engine):
        self.events.append(("started", turn, mode))

    def on_game_stopped(self, engine):
        self.events.append(("stopped",))

    def on_move_made(self, row, col, owner, engine):
        self.events.append(("move", row, col, owner))

    def on_game_won(self, row, col, owner, engine):
        self.events.append(("won", row, col, owner))

    def on_game_draw(self, engine):
        self.events.append(("draw",))

    def of_kind(self, kind):
        return [event for event in self.events if event[0] == kind]

    @property
    def last_move(self):
        moves = self.of_kind("move")
        return moves[-1] if moves else None


def play_columns(engine, columns):
    """Play a sequence of columns, returning the list of play_move results."""
    return [engine.play_move(col) for col in columns]


# Fills a 6x7 board without ever forming four in a row when played from an
# empty board with Player.ONE to move.
DRAW_SEQUENCE = (
    [0] * 6 + [6] * 6 + [3] * 6
    + [2, 1, 2, 1, 2, 1, 1, 2, 1, 2, 1, 2]
    + [5, 4, 5, 4, 5, 4, 4, 5, 4, 5, 4, 5]
)
