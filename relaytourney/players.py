"""Players, their group memberships and their race times."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .records import Record
from .store import JsonStore

DEFAULT_TIME = "00:00:00:00"


@dataclass
class GroupPlayer(Record):
    """Membership of a player in a group."""

    TABLE: ClassVar[str] = "GroupeJoueur"

    player_id: int = field(metadata={"key": "idJoueur"})
    group_id: int = field(metadata={"key": "idGroupe"})


@dataclass
class PlayerRace(Record):
    """The time a player ran in one race of one phase."""

    TABLE: ClassVar[str] = "JoueurCourse"
    UPDATED: ClassVar[tuple[str, ...] | None] = ("player_id", "race_id", "time")

    player_id: int = field(metadata={"key": "idJoueur"})
    race_id: int = field(metadata={"key": "idCourse"})
    phase_id: int = field(metadata={"key": "idPhase"})
    time: str = field(default=DEFAULT_TIME, metadata={"key": "temps"})


@dataclass
class Player(Record):
    """A competitor."""

    TABLE: ClassVar[str] = "Joueur"

    name: str = ""

    def group_id(self, store: JsonStore) -> int:
        """Id of the first group this player belongs to, or 0 if none."""
        return next(
            (link.group_id for link in GroupPlayer.all(store) if link.player_id == self.id),
            0,
        )

    def race_time(self, store: JsonStore, phase_id: int) -> str:
        """The player's recorded time in ``phase_id``, or ``"00:00:00:00"``."""
        return next(
            (
                race.time
                for race in PlayerRace.all(store)
                if race.player_id == self.id and race.phase_id == phase_id
            ),
            DEFAULT_TIME,
        )