"""
Day settlement (finish the day)

Converts today's entries into season points in one transaction:
  1. Read all today/* documents
  2. Rank them (ties share rank and points)
  3. Increment points/{alias}: points, firsts, lasts (merge)
  4. Refresh users/{alias} with the latest display name
  5. Delete every today/* document that was read

The read happens inside the transaction, so a submission arriving during
settlement is either part of this day or left for the next one.
"""
import logging
from typing import Dict, Optional

from scoreboard.core.auth import require_admin
from scoreboard.core.ranking import rank_entries
from scoreboard.core.store import DocumentStore, Increment, POINTS, TODAY, USERS
from scoreboard.models import Caller, DailyEntry
from scoreboard.utils import normalize_alias, now_ms


logger = logging.getLogger(__name__)


def finish_day(store: DocumentStore, caller: Optional[Caller]) -> Dict:
    """
    Settle the current day

    Args:
        store: Document store
        caller: Must carry the admin claim

    Returns:
        {"awarded": entries that earned points,
         "firstsAdded": size of the top tie-group,
         "lastsAdded": size of the bottom tie-group}
    """
    require_admin(caller)

    with store.transaction() as txn:
        docs = txn.list(TODAY)
        if not docs:
            logger.info("🏁 Finish day: no entries, nothing to settle")
            return {"awarded": 0, "firstsAdded": 0, "lastsAdded": 0}

        entries = [DailyEntry.from_doc(doc_id, data) for doc_id, data in docs.items()]
        ranked = rank_entries(entries)
        updated_at = now_ms()
        awarded = 0

        for result in ranked:
            alias = normalize_alias(result.entry.alias)
            if not alias:
                logger.warning(f"⚠️ Skipping entry with blank alias: {result.entry.to_doc()}")
                continue
            display_name = result.entry.display_name or alias

            txn.set(POINTS, alias, {
                "alias": alias,
                "displayName": display_name,
                "points": Increment(result.points),
                "firsts": Increment(1 if result.is_first else 0),
                "lasts": Increment(1 if result.is_last else 0),
            }, merge=True)
            txn.set(USERS, alias, {
                "alias": alias,
                "displayName": display_name,
                "updatedAt": updated_at,
            }, merge=True)
            if result.points > 0:
                awarded += 1

        for doc_id in docs:
            txn.delete(TODAY, doc_id)

    firsts_added = sum(1 for r in ranked if r.is_first)
    lasts_added = sum(1 for r in ranked if r.is_last)
    logger.info(
        f"🏁 Day settled by {caller.email} | Awarded: {awarded} | "
        f"Firsts: {firsts_added} | Lasts: {lasts_added}"
    )
    return {"awarded": awarded, "firstsAdded": firsts_added, "lastsAdded": lasts_added}
