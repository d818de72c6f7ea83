"""
Leaderboard service - Assemble and format read projections

All functions take store snapshots (doc id -> document) and return plain
lists/dicts ready to serialize.
"""
from typing import Dict, List, Mapping, Optional

from scoreboard.models import DailyEntry, SeasonAward, StandingRecord
from scoreboard.utils import title_case


PLAYOFF_SEEDS = 32
PLAYOFF_ROUNDS = ["Round of 32", "Sweet 16", "Elite 8", "Final 4", "Final", "Champion"]

# Standard 32-seed first round: 1v32, 16v17, 8v25, ...
SEEDED_PAIRS_32 = [
    (1, 32), (16, 17), (8, 25), (9, 24),
    (4, 29), (13, 20), (5, 28), (12, 21),
    (2, 31), (15, 18), (7, 26), (10, 23),
    (3, 30), (14, 19), (6, 27), (11, 22),
]

# Season awards in display order
AWARD_TYPES = {
    "commissionersTrophy": {
        "icon": "🏆", "label": "CT", "badge": "commissioner",
        "title": "Commissioner's Trophy",
        "description": "Most points in the regular season",
    },
    "sporcleCup": {
        "icon": "🥇", "label": "SC", "badge": "cup",
        "title": "Sporcle Cup",
        "description": "Playoff champion",
    },
    "h2hDemon": {
        "icon": "👹", "label": "H2H", "badge": "h2h",
        "title": "Head to Head Demon",
        "description": "Most Head to Head victories",
    },
    "highestHighs": {
        "icon": "⭐", "label": "HH", "badge": "highs",
        "title": "Highest Highs",
        "description": "Most first places on daily quizzes",
    },
}

SeasonAwards = Mapping[int, Mapping[str, SeasonAward]]
Badges = Mapping[str, List[Dict]]


def resolve_display_name(record) -> str:
    """
    Name to show for a record: its display name, else the title-cased alias

    Accepts a DailyEntry, StandingRecord or raw document.
    """
    if isinstance(record, Mapping):
        display_name = record.get("displayName")
        alias = record.get("alias")
    else:
        display_name = getattr(record, "display_name", "")
        alias = getattr(record, "alias", "")
    shown = str(display_name or "").strip()
    return shown if shown else title_case(alias)


def _standing_records(snapshot: Dict[str, dict]) -> List[StandingRecord]:
    return [StandingRecord.from_doc(doc_id, data) for doc_id, data in snapshot.items()]


def today_board(snapshot: Dict[str, dict], badges: Optional[Badges] = None) -> List[Dict]:
    """
    Today's entries in display order

    Sorted by ratio (desc), time left (desc), numerator (desc), name (asc).
    Each row carries the alias's champion badges (see champion_badges).
    """
    badges = badges or {}
    entries = [DailyEntry.from_doc(doc_id, data) for doc_id, data in snapshot.items()]
    entries.sort(key=lambda e: (-e.ratio, -e.time_left, -e.numerator, e.display_name))

    rows = []
    for position, entry in enumerate(entries, start=1):
        rows.append({
            "position": position,
            "alias": entry.alias,
            "displayName": resolve_display_name(entry),
            "numerator": entry.numerator,
            "denominator": entry.denominator,
            "percentage": round(entry.ratio * 100, 2),
            "timeLeft": entry.time_left,
            "badges": badges.get(entry.alias.lower(), []),
        })
    return rows


def season_standings(snapshot: Dict[str, dict], badges: Optional[Badges] = None) -> List[Dict]:
    """Standings by points (desc), then name (asc), with champion badges"""
    badges = badges or {}
    records = _standing_records(snapshot)
    records.sort(key=lambda r: (-r.points, r.display_name or r.alias))
    return [
        {
            "position": position,
            "alias": record.alias,
            "displayName": resolve_display_name(record),
            "points": record.points,
            "firsts": record.firsts,
            "lasts": record.lasts,
            "badges": badges.get(record.alias.lower(), []),
        }
        for position, record in enumerate(records, start=1)
    ]


def _top_by(snapshot: Dict[str, dict], field: str, limit: int) -> List[Dict]:
    records = _standing_records(snapshot)
    records.sort(key=lambda r: (-getattr(r, field), r.display_name or r.alias))
    return [
        {
            "position": position,
            "alias": record.alias,
            "displayName": resolve_display_name(record),
            field: getattr(record, field),
        }
        for position, record in enumerate(records[:limit], start=1)
    ]


def wall_of_shame(snapshot: Dict[str, dict], limit: int = 10) -> List[Dict]:
    """Most last-place finishes"""
    return _top_by(snapshot, "lasts", limit)


def highest_highs(snapshot: Dict[str, dict], limit: int = 10) -> List[Dict]:
    """Most first-place finishes"""
    return _top_by(snapshot, "firsts", limit)


def playoff_seeds(snapshot: Dict[str, dict]) -> List[Dict]:
    """
    Top 32 seeds by points, padded with byes

    Ties on points are ordered by the lower-cased name.
    """
    records = _standing_records(snapshot)
    records.sort(key=lambda r: (-r.points, (r.display_name or r.alias).lower()))

    seeds = []
    for seed in range(1, PLAYOFF_SEEDS + 1):
        if seed <= len(records):
            record = records[seed - 1]
            seeds.append({
                "seed": seed,
                "name": record.display_name or record.alias or "Unknown",
                "points": record.points,
                "isBye": False,
            })
        else:
            seeds.append({"seed": seed, "name": "Bye", "points": 0, "isBye": True})
    return seeds


def playoff_projection(snapshot: Dict[str, dict]) -> Dict:
    """Projected bracket: seeded first-round matchups plus empty later rounds"""
    seeds = playoff_seeds(snapshot)
    by_seed = {s["seed"]: s for s in seeds}

    first_round = [[by_seed[a], by_seed[b]] for a, b in SEEDED_PAIRS_32]
    rounds = [{"title": PLAYOFF_ROUNDS[0], "matches": first_round}]
    match_count = len(first_round)
    for title in PLAYOFF_ROUNDS[1:]:
        match_count = max(1, match_count // 2)
        rounds.append({"title": title, "matches": [[] for _ in range(match_count)]})

    return {"seeds": seeds, "rounds": rounds}


def hall_of_fame(season_awards: SeasonAwards, season: Optional[int] = None) -> Dict:
    """
    Award winners for one season (the latest by default)

    Returns:
        {"seasons": [2, 1], "season": 2,
         "awards": [{"key", "icon", "title", "description",
                     "alias", "displayName", "stat"}, ...]}

    Awards follow AWARD_TYPES order; a season with no awards (or an unknown
    season) has an empty list.
    """
    seasons = sorted(season_awards, reverse=True)
    if season is None:
        season = seasons[0] if seasons else None

    winners = season_awards.get(season, {}) if season is not None else {}
    awards = []
    for key, meta in AWARD_TYPES.items():
        award = winners.get(key)
        if award is None:
            continue
        awards.append({
            "key": key,
            "icon": meta["icon"],
            "title": meta["title"],
            "description": meta["description"],
            "alias": award.alias,
            "displayName": resolve_display_name(award) or "TBD",
            "stat": award.stat,
        })
    return {"seasons": seasons, "season": season, "awards": awards}


def champion_badges(season_awards: SeasonAwards) -> Dict[str, List[Dict]]:
    """Badges per lower-cased alias, oldest season first"""
    badges: Dict[str, List[Dict]] = {}
    for season in sorted(season_awards):
        for key, meta in AWARD_TYPES.items():
            award = season_awards[season].get(key)
            if award is None or not award.alias.strip():
                continue
            badges.setdefault(award.alias.strip().lower(), []).append({
                "season": season,
                "type": meta["badge"],
                "label": meta["label"],
                "icon": meta["icon"],
                "title": f"{meta['title']} - Season {season}",
            })
    return badges
