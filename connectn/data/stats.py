"""
stats.py - Statistics-logging observer for ConnectN games

GameStats follows any number of engines at once. It numbers each game as it
starts, keeps a human-readable log of how every game ended, tallies wins and
draws, and can persist that history as JSON using file locking.
"""

import datetime
import json
import os
import shutil
from typing import Any, Dict, List, Optional

import filelock

from connectn.debug import debug
from connectn.game.observer import GameObserver
from connectn.utils import Player


def safe_read_json(file_path: str) -> Optional[Dict]:
    """
    Read a JSON file under a file lock.

    Returns:
        Parsed data, or None if the file is missing or not valid JSON
    """
    if not os.path.exists(file_path):
        return None

    with filelock.FileLock(f"{file_path}.lock"):
        try:
            with open(file_path, 'r') as f:
                return json.load(f)
        except json.JSONDecodeError:
            debug.error(f"Error decoding JSON from {file_path}", "stats")
            return None


def safe_write_json(file_path: str, data: Any):
    """Write JSON atomically (temp file, then move) under a file lock."""
    directory = os.path.dirname(os.path.abspath(file_path))
    os.makedirs(directory, exist_ok=True)

    with filelock.FileLock(f"{file_path}.lock"):
        temp_file = f"{file_path}.tmp"
        with open(temp_file, 'w') as f:
            json.dump(data, f, indent=2)
        shutil.move(temp_file, file_path)


class GameStats(GameObserver):
    """
    Logger observer that keeps track of games across engines.

    Construct one and join it to each engine it should follow; there is no
    shared instance.
    """

    def __init__(self):
        self.game_number = 0
        self.draws = 0
        self.wins: Dict[str, int] = {Player.ONE.name: 0, Player.TWO.name: 0}
        self.history: List[Dict[str, Any]] = []
        self._log: List[str] = []
        self._active: Dict[Any, Dict[str, Any]] = {}  # engine -> record of its running game

    @property
    def games_played(self) -> int:
        """Number of games that ended in a win or a draw."""
        return len([record for record in self.history if record['result'] != 'stopped'])

    def get_log(self) -> str:
        return "\n".join(self._log)

    def _append(self, line: str):
        self._log.append(line)
        debug.info(line, "stats")

    def _finish(self, engine, result: str, winner: Optional[Player] = None) -> Optional[Dict]:
        record = self._active.pop(engine, None)
        if record is None:
            self._append("Engine is already removed.")
            return None

        record['result'] = result
        record['winner'] = winner.name if winner is not None else None
        record['ended_at'] = datetime.datetime.now().isoformat()
        self.history.append(record)
        return record

    def on_game_started(self, turn, mode, engine):
        if engine in self._active:
            number = self._active[engine]['game']
            self._append(f"Engine is already present and accounted for. Engine is related to Game {number}.")
            return

        self.game_number += 1
        self._active[engine] = {
            'game': self.game_number,
            'engine': str(engine),
            'mode': mode.name,
            'moves': 0,
            'started_at': datetime.datetime.now().isoformat(),
        }
        self._append(f"Game {self.game_number}: Started.")

    def on_game_stopped(self, engine):
        record = self._finish(engine, 'stopped')
        if record is not None:
            self._append(f"Game {record['game']}: Stopped.")

    def on_move_made(self, row, col, owner, engine):
        record = self._active.get(engine)
        if record is not None:
            record['moves'] += 1

    def on_game_won(self, row, col, owner, engine):
        record = self._finish(engine, 'won', owner)
        if record is not None:
            self.wins[owner.name] += 1
            self._append(f"{owner.name} won game {record['game']}.")

    def on_game_draw(self, engine):
        record = self._finish(engine, 'draw')
        if record is not None:
            self.draws += 1
            self._append(f"Game {record['game']}: ended in a draw.")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'game_number': self.game_number,
            'draws': self.draws,
            'wins': dict(self.wins),
            'history': list(self.history),
            'log': list(self._log),
        }

    def save(self, file_path: str):
        """Persist finished-game history and the log as JSON."""
        safe_write_json(file_path, self.to_dict())
        debug.debug(f"Saved {len(self.history)} game records to {file_path}", "stats")

    @classmethod
    def load(cls, file_path: str) -> 'GameStats':
        """
        Restore statistics saved with save().

        Missing or corrupt files give empty statistics. Games that were
        running when the file was saved are not restored.
        """
        stats = cls()
        data = safe_read_json(file_path)
        if data is not None and not isinstance(data, dict):
            debug.error(f"Ignoring stats file {file_path}: expected a JSON object", "stats")
            return stats
        if not data:
            return stats

        stats.game_number = data.get('game_number', 0)
        stats.draws = data.get('draws', 0)
        stats.wins.update(data.get('wins', {}))
        stats.history = data.get('history', [])
        stats._log = data.get('log', [])
        debug.debug(f"Loaded {len(stats.history)} game records from {file_path}", "stats")
        return stats
