import pytest

from relaytourney.groups import Group
from relaytourney.players import GroupPlayer, Player, PlayerRace
from relaytourney.records import PhaseGroup, RecordNotFound
from relaytourney.store import JsonStore
from relaytourney.timing import next_id


@pytest.fixture
def store(tmp_path):
    return JsonStore(tmp_path / "data.json")


def add_group(store, group_id, neighbour_id, name, runners, phase_id=1):
    group = Group(group_id, neighbour_id, name)
    group.save(store)
    for player_id, time in runners:
        Player(player_id, f"J{player_id}").save(store)
        GroupPlayer(next_id(store, "GroupeJoueur"), player_id, group_id).save(store)
        PlayerRace(next_id(store, "JoueurCourse"), player_id, 0, phase_id, time).save(store)
    return group


def ids(players):
    return [player.id for player in players]


def test_save_and_get_round_trip(store):
    Group(7, 3, "A").save(store)
    assert Group.get(store, 7) == Group(7, 3, "A")
    assert store.load("models")[0]["Groupe"] == [{"id": 7, "idVoisin": 3, "name": "A"}]


def test_update_changes_neighbour_and_name(store):
    Group(1, 0, "A").save(store)
    Group(1, 12, "B").update(store)
    assert Group.get(store, 1) == Group(1, 12, "B")


def test_get_missing_group_raises(store):
    with pytest.raises(RecordNotFound):
        Group.get(store, 99)


def test_players_in_membership_order(store):
    add_group(store, 1, 1, "A", [(5, "00:00:01:000"), (3, "00:00:02:000")])
    add_group(store, 2, 1, "B", [(9, "00:00:01:000")])
    assert ids(Group(1, 1, "A").players(store)) == [5, 3]


def test_players_missing_player_is_placeholder(store):
    Group(1, 0, "A").save(store)
    GroupPlayer(1, 42, 1).save(store)
    assert Group(1, 0, "A").players(store) == [Player(0, "Not Found")]


def test_phase_id(store):
    group = add_group(store, 1, 0, "A", [])
    assert group.phase_id(store) is None
    PhaseGroup(1, 3, 1).save(store)
    assert group.phase_id(store) == 3


def test_neighbour(store):
    a = add_group(store, 1, 1, "A", [])
    add_group(store, 2, 1, "B", [])
    c = add_group(store, 3, 2, "C", [])
    assert a.neighbour(store) == Group(2, 1, "B")
    assert c.neighbour(store) is None


def test_finalist_needs_players_and_final_neighbourhood(store):
    a = add_group(store, 1, 41, "A", [(1, "00:00:01:000")])
    add_group(store, 2, 42, "B", [])
    add_group(store, 3, 5, "C", [(3, "00:00:01:000")])
    assert a.finalist(store) is None
    add_group(store, 4, 42, "D", [(4, "00:00:02:000")])
    assert a.finalist(store) == Group(4, 42, "D")


def test_two_best_orders_by_time(store):
    group = add_group(
        store, 1, 1, "A",
        [(1, "00:01:00:000"), (2, "00:00:30:500"), (3, "01:00:00:000"), (4, "00:00:30:400")],
    )
    ranked = ids(group.two_best(store, 1))
    assert ranked == [4, 2, 1, 3]
    assert ids(group.best(store, 1)) == [4]


def test_two_best_skips_unparseable_times(store):
    group = add_group(store, 1, 1, "A", [(1, "bad"), (2, "00:00:05:000")])
    assert ids(group.two_best(store, 1)) == [2]


def test_two_best_repeats_tied_players(store):
    group = add_group(store, 1, 1, "A", [(1, "00:00:05:000"), (2, "00:00:05:000")])
    assert ids(group.two_best(store, 1)) == [1, 2, 1, 2]


def test_best_of_empty_group(store):
    group = add_group(store, 1, 1, "A", [])
    assert group.best(store, 1) == []


def test_advance_phase_one_drops_two_slowest(store):
    group = add_group(
        store, 1, 1, "A",
        [(1, "00:00:04:000"), (2, "00:00:01:000"), (3, "00:00:03:000"), (4, "00:00:02:000")],
    )
    child = group.advance(store, 1)
    assert child == Group(2, 0, "A'")
    assert Group.get(store, child.id) == child
    assert ids(child.players(store)) == [2, 4]
    assert child.phase_id(store) == 1


def test_advance_phase_one_needs_two_players(store):
    group = add_group(store, 1, 1, "A", [(1, "00:00:04:000")])
    with pytest.raises(ValueError):
        group.advance(store, 1)
    assert [g.id for g in Group.all(store)] == [1]


def test_advance_phase_two_takes_own_best_and_neighbours_second(store):
    a = add_group(store, 1, 1, "A", [(1, "00:00:05:000"), (2, "00:00:03:000")], phase_id=2)
    add_group(store, 2, 1, "B", [(3, "00:00:04:000"), (4, "00:00:02:000")], phase_id=2)
    child = a.advance(store, 2)
    assert child.name == "A'"
    assert ids(child.players(store)) == [2, 3]
    assert child.phase_id(store) == 2


def test_advance_phase_two_without_neighbour(store):
    a = add_group(store, 1, 1, "A", [(1, "00:00:05:000")], phase_id=2)
    with pytest.raises(LookupError):
        a.advance(store, 2)


def test_advance_phase_three_keeps_fastest(store):
    a = add_group(store, 1, 1, "A", [(1, "00:00:05:000"), (2, "00:00:03:000")], phase_id=3)
    add_group(store, 2, 1, "B", [(3, "00:00:04:000")], phase_id=3)
    child = a.advance(store, 3)
    assert ids(child.players(store)) == [2]


def test_advance_phase_four_compares_with_neighbour(store):
    a = add_group(store, 1, 1, "A", [(1, "00:00:03:000")], phase_id=4)
    b = add_group(store, 2, 1, "B", [(2, "00:00:02:000")], phase_id=4)
    assert a.advance(store, 4).players(store) == []
    assert ids(b.advance(store, 4).players(store)) == [2]


def test_advance_phase_five_compares_with_finalist(store):
    a = add_group(store, 1, 41, "A", [(1, "00:00:03:000")], phase_id=5)
    b = add_group(store, 2, 42, "B", [(2, "00:00:02:000")], phase_id=5)
    assert a.advance(store, 5).players(store) == []
    child = b.advance(store, 5)
    assert ids(child.players(store)) == [2]
    assert child.phase_id(store) == 5


def test_advance_phase_five_without_finalist(store):
    a = add_group(store, 1, 41, "A", [(1, "00:00:03:000")], phase_id=5)
    with pytest.raises(LookupError):
        a.advance(store, 5)


def test_advance_unknown_phase_creates_nothing(store):
    a = add_group(store, 1, 1, "A", [(1, "00:00:03:000")])
    assert a.advance(store, 6) is None
    assert Group.all(store) == [a]
    assert PhaseGroup.all(store) == []