"""Running a tournament phase by phase from the current groups."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .groups import Group
from .phases import Phase, Standing
from .players import PlayerRace
from .records import Race
from .store import JsonStore
from .timing import next_id, time_to_seconds

log = logging.getLogger(__name__)

FIRST_PHASE = 1
LAST_PHASE = 5
DEFAULT_DATABASE = "database/data.json"
STANDING_SEPARATOR = "        |        "


@dataclass
class TimeEntry:
    """A time to be recorded for one player of one group."""

    player_id: int
    label: str
    time: str


def random_time(rng: random.Random | None = None) -> str:
    """A random ``hh:mm:ss:ff`` string: hours below 24, other parts below 60."""
    generator = rng if rng is not None else random
    parts = [generator.randrange(24)] + [generator.randrange(60) for _ in range(3)]
    return ":".join(f"{part:02d}" for part in parts)


class TournamentSession:
    """The groups still racing, the current phase and the times to enter."""

    def __init__(self, store: JsonStore) -> None:
        self.store = store
        self.phase_id = FIRST_PHASE
        self.groups: list[Group] = Group.all(store)
        self._entries: list[TimeEntry] = []
        self._prepare_entries()

    def _prepare_entries(self) -> None:
        entries = []
        for group in self.groups:
            players = group.players(self.store)
            log.info("phase%d: %s", self.phase_id, group.name)
            for player in players:
                log.info(
                    "player %d time %s",
                    player.id,
                    time_to_seconds(player.race_time(self.store, self.phase_id)),
                )
                entries.append(
                    TimeEntry(player.id, f"{player.name}-{group.name}", random_time())
                )
        self._entries = entries

    def entries(self) -> list[TimeEntry]:
        """The time entries for the current phase, one per player."""
        return list(self._entries)

    def submit(self, times: Mapping[int, str] | None = None) -> list[Group]:
        """Record the phase's times and advance every group.

        ``times`` maps player ids to times overriding the prepared entries.
        Returns the groups of the next phase.
        """
        if not FIRST_PHASE <= self.phase_id <= LAST_PHASE:
            raise ValueError(f"no phase {self.phase_id} to play")
        overrides = dict(times or {})
        known = {entry.player_id for entry in self._entries}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise KeyError(f"no entry for players {unknown}")

        phase = self.phase_id
        for entry in self._entries:
            race = Race(next_id(self.store, Race.TABLE), f"C{entry.player_id}P{phase}")
            race.save(self.store)
            PlayerRace(
                next_id(self.store, PlayerRace.TABLE),
                entry.player_id,
                race.id,
                phase,
                overrides.get(entry.player_id, entry.time),
            ).save(self.store)

        neighbourhood = 10 * phase
        advanced: list[Group] = []
        for position, group in enumerate(self.groups):
            if position % 2 == 0 and group.players(self.store):
                neighbourhood += 1
            child = group.advance(self.store, phase)
            if child is None:
                raise ValueError(f"no phase {phase} to play")
            child.neighbour_id = neighbourhood
            child.update(self.store)
            advanced.append(child)

        self.groups = advanced
        log.info("idPhase: %d", phase)
        self._prepare_entries()
        self.phase_id += 1
        return list(advanced)

    def standings(self, phase_id: int) -> list[Standing]:
        """The ranking of ``phase_id``; an unknown phase ranks as phase 0."""
        phase = Phase.get_or_none(self.store, phase_id)
        if phase is None:
            phase = Phase(0, "Not Found")
        return phase.standings(self.store)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="relaytourney", description="Run a relay tournament.")
    parser.add_argument("--database", default=DEFAULT_DATABASE, help="JSON data file")
    commands = parser.add_subparsers(dest="command", required=True)
    run = commands.add_parser("run", help="play phases with random times")
    run.add_argument("--phases", type=int, default=1, help="number of phases to play")
    run.add_argument("--seed", type=int, default=None, help="seed for the random times")
    standings = commands.add_parser("standings", help="show a phase ranking")
    standings.add_argument("phase", type=int)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point."""
    args = _build_parser().parse_args(argv)
    store = JsonStore(args.database)
    session = TournamentSession(store)
    try:
        if args.command == "standings":
            for standing in session.standings(args.phase):
                print(f"{standing.player_name}{STANDING_SEPARATOR}{standing.time}")
            return 0
        rng = random.Random(args.seed)
        for _ in range(args.phases):
            phase = session.phase_id
            times = {entry.player_id: random_time(rng) for entry in session.entries()}
            for entry in session.entries():
                print(f"phase {phase} {entry.label}: {times[entry.player_id]}")
            groups = session.submit(times)
            print(f"phase {phase} done: " + ", ".join(group.name for group in groups))
    except (ValueError, LookupError) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())