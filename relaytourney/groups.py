"""Groups of players and how they advance from one phase to the next."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar

from .players import GroupPlayer, Player
from .records import PhaseGroup, Record
from .store import JsonStore
from .timing import next_id, parse_time, time_to_seconds, to_seconds

log = logging.getLogger(__name__)

UNKNOWN_PLAYER = "Not Found"
FINAL_NEIGHBOURHOODS = (41, 42)


@dataclass
class Group(Record):
    """A group of players racing together in one phase.

    Groups sharing a ``neighbour_id`` are paired against each other.
    """

    TABLE: ClassVar[str] = "Groupe"

    neighbour_id: int = field(metadata={"key": "idVoisin"})
    name: str = ""

    def players(self, store: JsonStore) -> list[Player]:
        """Members of this group, in membership order.

        A membership pointing at a missing player yields a placeholder
        player with id 0 and name ``"Not Found"``.
        """
        known = {player.id: player for player in Player.all(store)}
        return [
            known.get(link.player_id, Player(0, UNKNOWN_PLAYER))
            for link in GroupPlayer.all(store)
            if link.group_id == self.id
        ]

    def phase_id(self, store: JsonStore) -> int | None:
        """The phase this group was created for, or ``None``."""
        return next(
            (link.phase_id for link in PhaseGroup.all(store) if link.group_id == self.id),
            None,
        )

    def neighbour(self, store: JsonStore) -> Group | None:
        """The first other group sharing this group's neighbour id."""
        return next(
            (
                group
                for group in Group.all(store)
                if group.neighbour_id == self.neighbour_id and group.id != self.id
            ),
            None,
        )

    def finalist(self, store: JsonStore) -> Group | None:
        """The first other group in a final neighbourhood that has players."""
        return next(
            (
                group
                for group in Group.all(store)
                if group.neighbour_id in FINAL_NEIGHBOURHOODS
                and group.id != self.id
                and group.players(store)
            ),
            None,
        )

    def two_best(self, store: JsonStore, phase_id: int) -> list[Player]:
        """Members with a valid time in ``phase_id``, fastest first.

        Members whose time does not parse are left out.  Members sharing a
        time are listed once for each of them, in membership order.
        """
        timed: list[tuple[float, Player]] = []
        for player in self.players(store):
            try:
                seconds = to_seconds(*parse_time(player.race_time(store, phase_id)))
            except ValueError:
                continue
            timed.append((seconds, player))
        ranked: list[Player] = []
        for target in sorted(seconds for seconds, _ in timed):
            ranked.extend(player for seconds, player in timed if seconds == target)
        return ranked

    def best(self, store: JsonStore, phase_id: int) -> list[Player]:
        """A list holding only the fastest member, or empty."""
        return self.two_best(store, phase_id)[:1]

    def _required_neighbour(self, store: JsonStore) -> Group:
        neighbour = self.neighbour(store)
        if neighbour is None:
            raise LookupError(f"group {self.name!r} has no neighbour")
        return neighbour

    def _qualified(self, store: JsonStore, phase_id: int) -> list[Player] | None:
        if phase_id == 1:
            ranked = self.two_best(store, phase_id)
            if len(ranked) < 2:
                raise ValueError(f"group {self.name!r} needs at least two timed players")
            return ranked[:-2]

        if phase_id == 2:
            ranked = self.two_best(store, phase_id)
            rival = self._required_neighbour(store).two_best(store, phase_id)
            if not ranked or len(rival) < 2:
                raise ValueError(f"not enough timed players around group {self.name!r}")
            return [ranked[0], rival[1]]

        if phase_id == 3:
            leader = self.best(store, phase_id)
            self._required_neighbour(store).two_best(store, phase_id)
            if not leader:
                raise ValueError(f"group {self.name!r} has no timed player")
            return leader

        if phase_id == 4:
            leader = self.best(store, phase_id)
            rival = self._required_neighbour(store).two_best(store, phase_id)
            if not leader or not rival:
                raise ValueError(f"not enough timed players around group {self.name!r}")
            own_time = time_to_seconds(leader[0].race_time(store, phase_id))
            rival_time = time_to_seconds(rival[0].race_time(store, phase_id))
            return leader if own_time < rival_time else []

        if phase_id == 5:
            leader = self.best(store, phase_id)
            opponent = self.finalist(store)
            if opponent is None:
                raise LookupError(f"group {self.name!r} has no opponent in the final")
            log.info("final: %s against %s", self.name, opponent.name)
            rival = opponent.best(store, phase_id)
            own_time = time_to_seconds(leader[0].race_time(store, phase_id)) if leader else 0.0
            rival_time = time_to_seconds(rival[0].race_time(store, phase_id)) if rival else 0.0
            return leader if own_time < rival_time and leader else []

        return None

    def advance(self, store: JsonStore, phase_id: int) -> Group | None:
        """Create the group that follows this one after ``phase_id``.

        The new group is named after this one with a trailing ``'``, is
        linked to ``phase_id`` and holds the players who qualified:

        1. all but the two slowest;
        2. this group's fastest and the neighbour's second fastest;
        3. this group's fastest;
        4. this group's fastest if quicker than the neighbour's fastest;
        5. this group's fastest if quicker than the finalist's fastest.

        Any other phase creates nothing and returns ``None``.
        """
        qualified = self._qualified(store, phase_id)
        if qualified is None:
            return None
        child = Group(next_id(store, Group.TABLE), 0, self.name + "'")
        child.save(store)
        PhaseGroup(next_id(store, PhaseGroup.TABLE), phase_id, child.id).save(store)
        for player in qualified:
            GroupPlayer(next_id(store, GroupPlayer.TABLE), player.id, child.id).save(store)
        return child