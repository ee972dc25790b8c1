import pytest

from relaytourney.phases import Phase, Standing, UNKNOWN_PLAYER
from relaytourney.players import Player, PlayerRace
from relaytourney.records import RecordNotFound
from relaytourney.store import JsonStore


@pytest.fixture
def store(tmp_path):
    return JsonStore(tmp_path / "data.json")


def _seed(store):
    Player(1, "J1").save(store)
    Player(2, "J2").save(store)
    Player(3, "J3").save(store)
    PlayerRace(1, 1, 1, 1, "00:05:00:000").save(store)
    PlayerRace(2, 2, 2, 1, "00:01:00:000").save(store)
    PlayerRace(3, 3, 3, 1, "00:03:00:000").save(store)
    PlayerRace(4, 1, 4, 2, "00:00:01:000").save(store)


def test_phase_round_trip(store):
    Phase(1, "eleminatoir").save(store)
    assert Phase.get(store, 1).name == "eleminatoir"


def test_phase_missing(store):
    with pytest.raises(RecordNotFound):
        Phase.get(store, 3)
    assert Phase.get_or_none(store, 3) is None


def test_standings_fastest_first(store):
    _seed(store)
    assert Phase(1, "eleminatoir").standings(store) == [
        Standing("J2", "00:01:00:000"),
        Standing("J3", "00:03:00:000"),
        Standing("J1", "00:05:00:000"),
    ]


def test_standings_only_this_phase(store):
    _seed(store)
    assert Phase(2, "1/4").standings(store) == [Standing("J1", "00:00:01:000")]


def test_standings_empty_phase(store):
    _seed(store)
    assert Phase(4, "Finale").standings(store) == []


def test_unparsable_time_counts_as_zero(store):
    Player(1, "J1").save(store)
    Player(2, "J2").save(store)
    PlayerRace(1, 1, 1, 1, "00:00:10:000").save(store)
    PlayerRace(2, 2, 2, 1, "garbage").save(store)
    names = [s.player_name for s in Phase(1, "p").standings(store)]
    assert names == ["J2", "J1"]


def test_unknown_player_name(store):
    PlayerRace(1, 42, 1, 1, "00:00:10:000").save(store)
    assert Phase(1, "p").standings(store) == [Standing(UNKNOWN_PLAYER, "00:00:10:000")]


def test_standings_sorted_invariant(store):
    _seed(store)
    PlayerRace(5, 2, 5, 1, "00:02:30:000").save(store)
    times = [s.time for s in Phase(1, "p").standings(store)]
    assert times == sorted(times)
    assert len(times) == 4