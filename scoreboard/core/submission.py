"""
Daily entry submission and admin edits of the day's entries
"""
import logging
import math
import re
from typing import Dict, Optional, Tuple

from scoreboard.core.auth import require_admin
from scoreboard.core.store import DocumentStore, TODAY
from scoreboard.errors import InvalidArgument
from scoreboard.models import Caller, DailyEntry
from scoreboard.utils import normalize_alias, now_ms


logger = logging.getLogger(__name__)

FRACTION_RE = re.compile(r"^(-?\d+)\s*/\s*(\d+)$")


def parse_fraction(text) -> Tuple[int, int]:
    """
    Parse a "N/D" score

    Example:
        >>> parse_fraction(" 7 / 9 ")
        (7, 9)

    Raises:
        InvalidArgument: If the text is not a fraction or D is 0
    """
    match = FRACTION_RE.match(str(text or "").strip())
    if not match:
        raise InvalidArgument(f"Score must look like 7/9, got: {text!r}")
    numerator, denominator = int(match.group(1)), int(match.group(2))
    if denominator <= 0:
        raise InvalidArgument("Denominator must be greater than 0")
    return numerator, denominator


def _as_int(value, field: str) -> int:
    if isinstance(value, bool):
        raise InvalidArgument(f"{field} must be an integer")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{field} must be an integer")
    if not math.isfinite(number) or number != int(number):
        raise InvalidArgument(f"{field} must be an integer")
    return int(number)


def build_entry(
    alias,
    display_name,
    numerator=None,
    denominator=None,
    score: Optional[str] = None,
    time_left=None,
) -> DailyEntry:
    """
    Validate submission fields and build a DailyEntry

    The score comes from `score` ("N/D") when given, otherwise from
    numerator/denominator. The ratio is always derived here.
    """
    alias = normalize_alias(alias)
    display_name = str(display_name or "").strip()
    if not alias:
        raise InvalidArgument("alias required")
    if not display_name:
        raise InvalidArgument("displayName required")

    if score is not None and str(score).strip():
        numerator, denominator = parse_fraction(score)
    else:
        if numerator is None or denominator is None:
            raise InvalidArgument("score (N/D) or numerator and denominator required")
        numerator = _as_int(numerator, "numerator")
        denominator = _as_int(denominator, "denominator")
        if denominator <= 0:
            raise InvalidArgument("Denominator must be greater than 0")

    seconds = 0
    if time_left is not None and time_left != "":
        seconds = _as_int(time_left, "timeLeft")
        if seconds < 0:
            raise InvalidArgument("timeLeft must not be negative")

    return DailyEntry(
        alias=alias,
        display_name=display_name,
        numerator=numerator,
        denominator=denominator,
        ratio=numerator / denominator,
        time_left=seconds,
        updated_at=now_ms(),
    )


def submit_entry(store: DocumentStore, **fields) -> DailyEntry:
    """
    Upsert the caller's entry for today (last write wins)

    Args:
        store: Document store
        **fields: alias, display_name, numerator, denominator, score, time_left

    Returns:
        The stored DailyEntry
    """
    entry = build_entry(**fields)
    store.set(TODAY, entry.alias, entry.to_doc())
    logger.info(
        f"📥 Entry {entry.alias} ({entry.display_name}) | "
        f"{entry.numerator}/{entry.denominator} = {entry.ratio:.4f}"
    )
    return entry


def delete_today_entry(store: DocumentStore, caller: Optional[Caller], alias) -> Dict:
    """Admin: remove one of today's entries"""
    require_admin(caller)
    alias = normalize_alias(alias)
    if not alias:
        raise InvalidArgument("alias required")

    with store.transaction() as txn:
        existed = txn.get(TODAY, alias) is not None
        if existed:
            txn.delete(TODAY, alias)

    if existed:
        logger.info(f"🗑️ Today's entry {alias} deleted by {caller.email}")
    return {"deleted": existed, "alias": alias}


def edit_today_entry(
    store: DocumentStore,
    caller: Optional[Caller],
    old_alias,
    new_alias,
    display_name,
    score,
) -> DailyEntry:
    """
    Admin: rewrite one of today's entries, possibly under a new alias

    The old row is removed and the new one written in the same batch.
    """
    require_admin(caller)
    old_alias = normalize_alias(old_alias)
    if not old_alias:
        raise InvalidArgument("oldAlias required")
    entry = build_entry(alias=new_alias, display_name=display_name, score=score)

    with store.transaction() as txn:
        previous = txn.get(TODAY, old_alias)
        if previous and previous.get("timeLeft"):
            entry.time_left = previous["timeLeft"]
        if old_alias != entry.alias:
            txn.delete(TODAY, old_alias)
        txn.set(TODAY, entry.alias, entry.to_doc())

    logger.info(f"✏️ Today's entry {old_alias} -> {entry.alias} edited by {caller.email}")
    return entry
