# relaytourney

A small engine for running a timed knockout race tournament. Players are
split into groups. In every phase each player runs a race and their time is
recorded. The players who qualify from each group then move into a new group
for the next phase, up to the final.

All state is kept in a single JSON file.

## Installing

```
pip install .
```

## The command

```
relaytourney [--database PATH] run [--phases N] [--seed SEED]
relaytourney [--database PATH] standings PHASE
```

`--database` is the JSON file to use. It defaults to `database/data.json`.

`run` opens a session over every group in the file, starting at phase 1, and
plays `N` phases (default 1). For every player it draws a random time, using
`--seed` if one is given. It prints one line per player,
`phase <n> <player>-<group>: <time>`, then records the times and advances the
groups. Last it prints `phase <n> done: ` followed by the names of the new
groups. Each call starts again at phase 1. To play several phases in a row,
use `--phases` in a single call.

`standings` prints every time recorded in a phase, fastest first, one
`<player>        |        <time>` line each. A phase id that is not in the
file is ranked as phase 0.

Errors, such as a phase beyond 5 or a group without a neighbour, are printed
as `error: ...` on standard error, and the exit status is 1.

## Phases

`Group.advance(store, phase_id)` creates the next group. The new group is
named after the old one with a trailing `'`, it is linked to the phase
through a `PhaseGroup` row, and it holds the players who qualified:

1. all members except the two slowest;
2. the group's fastest player and its neighbour's second fastest;
3. the group's fastest player;
4. the group's fastest player, if quicker than the neighbour's fastest;
5. the group's fastest player, if quicker than the fastest player of the
   other group in the final (neighbour ids 41 or 42).

Groups that share a neighbour id are neighbours. After each phase the
session gives the new groups neighbour ids `10 * phase + 1`, `+ 2` and so
on. Two consecutive groups are paired together.

## Times

Times are written `hh:mm:ss:ms`: hours, minutes (0–59), seconds (0–59) and
milliseconds (0–999).

```python
from relaytourney.timing import parse_time, time_to_seconds

parse_time("01:02:03:500")       # (1, 2, 3, 500)
time_to_seconds("00:01:00:250")  # 60.25
time_to_seconds("garbage")       # 0.0
```

`parse_time` raises `ValueError` on text that is not a time. Other helpers:

- `to_seconds` converts the four parts to seconds.
- `sort_times` sorts a sequence of times.
- `next_id(store, table)` returns one more than the largest id in a table.

## The database

The JSON file holds a list under `"models"`. The first element of that list
maps table names to lists of rows, and each row has an `"id"`:

```json
{
    "models": [
        {
            "Joueur": [{"id": 1, "name": "J1"}],
            "Groupe": [{"id": 1, "idVoisin": 1, "name": "A"}],
            "GroupeJoueur": [{"id": 1, "idJoueur": 1, "idGroupe": 1}],
            "Phase": [{"id": 1, "name": "eliminatoire"}]
        }
    ]
}
```

A missing or empty file reads as empty tables. `JsonStore.save` writes the
whole document back, indented by four spaces, with its keys sorted.

## Using the library

```python
from relaytourney.store import JsonStore
from relaytourney.session import TournamentSession

store = JsonStore("database/data.json")
session = TournamentSession(store)

for entry in session.entries():          # TimeEntry(player_id, label, time)
    print(entry)

new_groups = session.submit({1: "00:01:02:300"})  # override some times
print(session.standings(1))              # list of Standing(player_name, time)
```

`submit` raises `KeyError` if it is given a player that has no entry in the
current phase.

Every table is a dataclass derived from `relaytourney.records.Record`. Each
one has these methods:

- `all(store)`;
- `get(store, record_id)`;
- `save(store)`, which appends a row;
- `update(store)`;
- `delete(store)`.

`get`, `update` and `delete` raise `RecordNotFound` when no row has the id.

| Class | Table |
| --- | --- |
| `players.Player` | `Joueur` |
| `groups.Group` | `Groupe` |
| `phases.Phase` | `Phase` |
| `players.GroupPlayer` | `GroupeJoueur` |
| `players.PlayerRace` | `JoueurCourse` |
| `records.Race` | `Course` |
| `records.PhaseGroup` | `PhaseGroupe` |
| `records.Tournament` | `Tournoi` |
| `records.TournamentPhase` | `TournoiPhase` |
| `records.Department` | `dept` |

`Player` and `Group` also have query methods:

- `Player.race_time(store, phase_id)` and `Player.group_id(store)`;
- `Group.players`, `neighbour`, `finalist`, `two_best` and `best`.

## What it does not do

There is no interactive screen for typing in times. The `run` command fills
in a random time for every player. To record real times, pass them to
`TournamentSession.submit`.

Nothing creates the first players and groups for you. Put them in the JSON
file, or add them with the records' `save` methods.

## Tests

```
pip install ".[test]"
pytest
```