"""
Tests for finishing the day (settlement)
"""
import pytest

from scoreboard.core.settlement import finish_day
from scoreboard.core.store import DocumentStore
from scoreboard.errors import PermissionDenied
from conftest import make_entry, put_today


def test_requires_admin(store, player):
    """Non-admins are rejected and nothing is read or cleared"""
    put_today(store, make_entry("amy", 5, 5))
    with pytest.raises(PermissionDenied):
        finish_day(store, player)
    with pytest.raises(PermissionDenied):
        finish_day(store, None)
    assert "amy" in store.list("today")


def test_empty_day_is_noop(store, admin):
    """Empty today -> awarded 0, no writes"""
    commits = []
    store.on_snapshot("points", lambda snap: commits.append(snap))

    result = finish_day(store, admin)

    assert result == {"awarded": 0, "firstsAdded": 0, "lastsAdded": 0}
    assert store.list("points") == {}
    assert len(commits) == 1  # initial snapshot only


def test_awards_points_and_clears_today(store, admin):
    """Ratios [1.0, 1.0, 0.8, 0.5, 0.5] -> 10, 10, 8, 7, 7"""
    put_today(
        store,
        make_entry("a", 10, 10),
        make_entry("b", 5, 5),
        make_entry("c", 8, 10),
        make_entry("d", 5, 10),
        make_entry("e", 1, 2),
    )

    result = finish_day(store, admin)

    assert result == {"awarded": 5, "firstsAdded": 2, "lastsAdded": 2}
    points = store.list("points")
    assert {a: points[a]["points"] for a in "abcde"} == {"a": 10, "b": 10, "c": 8, "d": 7, "e": 7}
    assert {a: points[a]["firsts"] for a in "abcde"} == {"a": 1, "b": 1, "c": 0, "d": 0, "e": 0}
    assert {a: points[a]["lasts"] for a in "abcde"} == {"a": 0, "b": 0, "c": 0, "d": 1, "e": 1}
    assert store.list("today") == {}


def test_accumulates_across_days(store, admin):
    """Second day adds to existing records and keeps untouched fields"""
    store.set("points", "amy", {"alias": "amy", "displayName": "Amy", "points": 5, "firsts": 2, "lasts": 1, "note": "x"})
    put_today(store, make_entry("amy", 9, 10, "Amy B"), make_entry("bob", 1, 10))

    finish_day(store, admin)

    amy = store.get("points", "amy")
    assert amy["points"] == 15
    assert amy["firsts"] == 3
    assert amy["lasts"] == 1
    assert amy["displayName"] == "Amy B"
    assert amy["note"] == "x"


def test_single_entry_gets_first_and_last(store, admin):
    put_today(store, make_entry("solo", 4, 9))

    result = finish_day(store, admin)

    assert result == {"awarded": 1, "firstsAdded": 1, "lastsAdded": 1}
    assert store.get("points", "solo") == {
        "alias": "solo", "displayName": "Solo", "points": 10, "firsts": 1, "lasts": 1
    }


def test_refreshes_user_mirror(store, admin):
    put_today(store, make_entry("amy", 1, 1, "Amy"))
    finish_day(store, admin)

    user = store.get("users", "amy")
    assert user["displayName"] == "Amy"
    assert user["alias"] == "amy"
    assert isinstance(user["updatedAt"], int)


def test_blank_alias_skipped_but_cleared(store, admin):
    """Blank alias takes a rank but gets no record; its row is still removed"""
    put_today(store, make_entry("", 9, 9, "Ghost"), make_entry("real", 1, 9))

    result = finish_day(store, admin)

    assert result["awarded"] == 1
    assert store.get("points", "real")["points"] == 9
    assert "" not in store.list("points")
    assert store.list("today") == {}


def test_low_ranks_still_recorded(store, admin):
    """12 entries: ranks 11-12 get 0 points and are not counted as awarded, but still get a record"""
    put_today(store, *[make_entry(f"p{i:02d}", 20 - i, 20) for i in range(12)])

    result = finish_day(store, admin)

    assert result["awarded"] == 10
    assert len(store.list("points")) == 12
    assert store.get("points", "p10")["points"] == 0
    assert store.get("points", "p11")["points"] == 0
    assert store.get("points", "p11")["lasts"] == 1


def test_rerun_is_noop(store, admin):
    """Second call without new entries changes nothing"""
    put_today(store, make_entry("amy", 1, 1), make_entry("bob", 0, 1))
    finish_day(store, admin)
    before = store.list("points")

    assert finish_day(store, admin)["awarded"] == 0
    assert store.list("points") == before


def test_failed_commit_leaves_store_untouched(store, admin, monkeypatch):
    """A failure while committing applies nothing"""
    put_today(store, make_entry("amy", 1, 1), make_entry("bob", 0, 1))

    def boom(self, data):
        raise OSError("disk full")

    monkeypatch.setattr(DocumentStore, "_persist", boom)
    with pytest.raises(OSError):
        finish_day(store, admin)
    monkeypatch.undo()

    assert store.list("points") == {}
    assert set(store.list("today")) == {"amy", "bob"}
