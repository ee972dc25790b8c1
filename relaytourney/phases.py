"""Tournament phases and their standings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, NamedTuple

from .players import Player, PlayerRace
from .records import Record, RecordNotFound
from .store import JsonStore
from .timing import time_to_seconds

UNKNOWN_PLAYER = "Not Found"


class Standing(NamedTuple):
    """One line of a phase ranking."""

    player_name: str
    time: str


@dataclass
class Phase(Record):
    """A round of the tournament (heats, quarter-final, ...)."""

    TABLE: ClassVar[str] = "Phase"

    name: str = ""

    def standings(self, store: JsonStore) -> list[Standing]:
        """Every time recorded in this phase, fastest first.

        Times that do not parse count as zero seconds.
        """
        races = [race for race in PlayerRace.all(store) if race.phase_id == self.id]
        races.sort(key=lambda race: time_to_seconds(race.time))
        players = {player.id: player.name for player in Player.all(store)}
        return [
            Standing(players.get(race.player_id, UNKNOWN_PLAYER), race.time)
            for race in races
        ]

    @classmethod
    def get_or_none(cls, store: JsonStore, phase_id: int) -> Phase | None:
        """The phase with ``phase_id``, or ``None`` when it does not exist."""
        try:
            return cls.get(store, phase_id)
        except RecordNotFound:
            return None