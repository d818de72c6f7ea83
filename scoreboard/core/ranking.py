"""
Daily ranking with tie-sharing

Rules:
  - Sort: ratio desc, numerator desc, display name asc (alias if no name)
  - The name only orders rows for display; scoring ties on ratio alone
  - A tie-group (same ratio) shares one rank and one award
  - Ranks are positional: after a k-way tie at rank r the next group is r + k
  - Award: rank 1..10 -> 10..1 points, rank 11+ -> 0
  - Top tie-group gets a first, bottom tie-group gets a last
    (a single entry gets both)
"""
from itertools import groupby
from operator import attrgetter
from typing import Iterable, List

from scoreboard.models import DailyEntry, RankedEntry


# Points by rank (index 0 = rank 1)
AWARD_TABLE = [10, 9, 8, 7, 6, 5, 4, 3, 2, 1]


def points_for_rank(rank: int) -> int:
    """
    Award for a 1-based rank

    Example:
        >>> points_for_rank(1), points_for_rank(4), points_for_rank(11)
        (10, 7, 0)
    """
    if 1 <= rank <= len(AWARD_TABLE):
        return AWARD_TABLE[rank - 1]
    return 0


def sort_key(entry: DailyEntry):
    """Strict total order: ratio desc, numerator desc, name asc"""
    return (-entry.ratio, -entry.numerator, entry.display_name or entry.alias)


def sort_entries(entries: Iterable[DailyEntry]) -> List[DailyEntry]:
    return sorted(entries, key=sort_key)


def rank_entries(entries: Iterable[DailyEntry]) -> List[RankedEntry]:
    """
    Assign rank, points and first/last flags to a day's entries

    Every entry is returned, including those ranked past the award table and
    those with a blank alias (the caller decides what to persist).

    Args:
        entries: All DailyEntry rows of the day

    Returns:
        RankedEntry list in display order
    """
    ordered = sort_entries(entries)
    if not ordered:
        return []

    top_ratio = ordered[0].ratio
    bottom_ratio = ordered[-1].ratio

    ranked = []
    rank = 1
    for ratio, group in groupby(ordered, key=attrgetter("ratio")):
        members = list(group)
        points = points_for_rank(rank)
        for entry in members:
            ranked.append(RankedEntry(
                entry=entry,
                rank=rank,
                points=points,
                is_first=(ratio == top_ratio),
                is_last=(ratio == bottom_ratio),
            ))
        rank += len(members)

    return ranked
