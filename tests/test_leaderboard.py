"""
Tests for read projections
"""
from scoreboard.models import SeasonAward, StandingRecord
from scoreboard.services.leaderboard import (
    champion_badges,
    hall_of_fame,
    highest_highs,
    playoff_projection,
    playoff_seeds,
    resolve_display_name,
    season_standings,
    today_board,
    wall_of_shame,
)


def points_doc(alias, points=0, firsts=0, lasts=0, display_name=""):
    return {"alias": alias, "displayName": display_name, "points": points, "firsts": firsts, "lasts": lasts}


def test_resolve_display_name():
    assert resolve_display_name({"alias": "grifjom", "displayName": "  Josh "}) == "Josh"
    assert resolve_display_name({"alias": "max winkler", "displayName": " "}) == "Max Winkler"
    assert resolve_display_name(StandingRecord(alias="moghosh")) == "Moghosh"
    assert resolve_display_name({}) == ""


def test_today_board_order():
    """ratio desc, time left desc, numerator desc, name asc"""
    snapshot = {
        "a": {"alias": "a", "displayName": "A", "numerator": 1, "denominator": 2, "ratio": 0.5, "timeLeft": 10},
        "b": {"alias": "b", "displayName": "B", "numerator": 2, "denominator": 4, "ratio": 0.5, "timeLeft": 40},
        "c": {"alias": "c", "displayName": "", "numerator": 9, "denominator": 9, "ratio": 1.0},
    }
    rows = today_board(snapshot)

    assert [r["alias"] for r in rows] == ["c", "b", "a"]
    assert rows[0]["displayName"] == "C"
    assert rows[0]["percentage"] == 100.0
    assert rows[1]["position"] == 2


def test_season_standings_order():
    snapshot = {
        "amy": points_doc("amy", 10, display_name="Amy"),
        "bob": points_doc("bob", 12),
        "cal": points_doc("cal", 10, display_name="Cal"),
    }
    rows = season_standings(snapshot)
    assert [r["alias"] for r in rows] == ["bob", "amy", "cal"]
    assert rows[0]["displayName"] == "Bob"


def test_standings_tolerate_partial_docs():
    """Docs written by merges may lack counters"""
    rows = season_standings({"fresh": {"alias": "fresh", "displayName": "fresh"}})
    assert rows[0]["points"] == 0
    assert rows[0]["firsts"] == 0


def test_wall_of_shame_top_ten():
    snapshot = {f"p{i}": points_doc(f"p{i}", lasts=i) for i in range(12)}
    rows = wall_of_shame(snapshot)
    assert len(rows) == 10
    assert rows[0]["alias"] == "p11"
    assert rows[0]["lasts"] == 11


def test_highest_highs():
    snapshot = {"amy": points_doc("amy", firsts=2), "bob": points_doc("bob", firsts=5)}
    assert [r["alias"] for r in highest_highs(snapshot)] == ["bob", "amy"]


def test_playoff_seeds_pad_with_byes():
    snapshot = {
        "amy": points_doc("amy", 30, display_name="amy"),
        "Bob": points_doc("bob", 30, display_name="Bob"),
        "cal": points_doc("cal", 50),
    }
    seeds = playoff_seeds(snapshot)

    assert len(seeds) == 32
    assert [s["name"] for s in seeds[:3]] == ["cal", "amy", "Bob"]
    assert seeds[3] == {"seed": 4, "name": "Bye", "points": 0, "isBye": True}


def test_playoff_projection_pairings():
    snapshot = {f"p{i:02d}": points_doc(f"p{i:02d}", 100 - i) for i in range(32)}
    projection = playoff_projection(snapshot)

    first_round = projection["rounds"][0]["matches"]
    assert len(first_round) == 16
    assert [first_round[0][0]["seed"], first_round[0][1]["seed"]] == [1, 32]
    assert [first_round[1][0]["seed"], first_round[1][1]["seed"]] == [16, 17]
    assert [len(r["matches"]) for r in projection["rounds"]] == [16, 8, 4, 2, 1, 1]
    assert projection["rounds"][-1]["title"] == "Champion"


SEASON_ONE = {
    1: {
        "highestHighs": SeasonAward(alias="moghosh", display_name="Moon", stat="12 first places"),
        "commissionersTrophy": SeasonAward(alias="grifjom", display_name="Josh", stat="234 points"),
        "sporcleCup": SeasonAward(alias="grifjom", display_name="Josh", stat="Playoff Champion"),
    },
}


def test_hall_of_fame_orders_awards():
    """Awards come out in trophy order regardless of how they were configured"""
    fame = hall_of_fame(SEASON_ONE)

    assert fame["seasons"] == [1]
    assert fame["season"] == 1
    assert [a["key"] for a in fame["awards"]] == ["commissionersTrophy", "sporcleCup", "highestHighs"]
    assert fame["awards"][0]["icon"] == "🏆"
    assert fame["awards"][2]["description"] == "Most first places on daily quizzes"


def test_hall_of_fame_empty():
    assert hall_of_fame({}) == {"seasons": [], "season": None, "awards": []}
    assert hall_of_fame(SEASON_ONE, season=3)["awards"] == []


def test_champion_badges_on_rows():
    badges = champion_badges(SEASON_ONE)
    assert [b["label"] for b in badges["grifjom"]] == ["CT", "SC"]
    assert badges["moghosh"][0]["title"] == "Highest Highs - Season 1"

    rows = season_standings({"GrifJom": points_doc("GrifJom", 5), "bob": points_doc("bob", 3)}, badges)
    assert [b["type"] for b in rows[0]["badges"]] == ["commissioner", "cup"]
    assert rows[1]["badges"] == []
    assert season_standings({"bob": points_doc("bob", 3)})[0]["badges"] == []
