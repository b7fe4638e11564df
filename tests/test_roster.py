from pokemon_quiz.roster import RosterLoader
from pokemon_quiz.storage import DatabaseManager


def test_failed_species_are_left_out(tmp_path, make_client):
    client = make_client(names={1: "フシギダネ", 2: "フシギソウ", 3: "フシギバナ"},
                         failing={2})
    db = DatabaseManager(tmp_path / "quiz.db")

    roster = RosterLoader(client, db, max_id=3, workers=2).load()

    assert sorted(roster) == [(1, "フシギダネ"), (3, "フシギバナ")]
    # incomplete rosters are not trusted as a cache
    assert not db.is_cache_valid()


def test_complete_roster_is_served_from_cache(tmp_path, make_client):
    names = {1: "フシギダネ", 2: "フシギソウ", 3: "フシギバナ"}
    db = DatabaseManager(tmp_path / "quiz.db")
    RosterLoader(make_client(names=names), db, max_id=3).load()
    assert db.is_cache_valid()

    offline = make_client(names={})
    roster = RosterLoader(offline, db, max_id=3).load()

    assert roster == [(1, "フシギダネ"), (2, "フシギソウ"), (3, "フシギバナ")]
    assert offline.calls == []


def test_nothing_loaded(tmp_path, make_client):
    db = DatabaseManager(tmp_path / "quiz.db")
    assert RosterLoader(make_client(names={}), db, max_id=3).load() == []
    assert db.get_species_names() == []
