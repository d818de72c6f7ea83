"""
Admin maintenance of the season standings (points/* documents)

All operations require the admin claim and fail before touching the store
otherwise. Counters are kept as non-negative integers.
"""
import logging
import math
from typing import Dict, Optional

from scoreboard.core.auth import require_admin
from scoreboard.core.store import DocumentStore, POINTS, USERS
from scoreboard.errors import InvalidArgument
from scoreboard.models import Caller
from scoreboard.utils import normalize_alias, now_ms


logger = logging.getLogger(__name__)

MODES = ("set", "inc")


def _require_id(value, field: str) -> str:
    doc_id = str(value or "").strip()
    if not doc_id:
        raise InvalidArgument(f"{field} required")
    return doc_id


def _parse_mode(value) -> str:
    mode = str(value or "set").strip().lower()
    if mode not in MODES:
        raise InvalidArgument(f"mode must be 'set' or 'inc', got: {value!r}")
    return mode


def _finite(value, field: str) -> float:
    """Coerce a numeric input, rejecting booleans, blanks, NaN and infinity"""
    if isinstance(value, bool) or value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidArgument(f"{field} must be a finite number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{field} must be a finite number")
    if not math.isfinite(number):
        raise InvalidArgument(f"{field} must be a finite number")
    return number


def _apply_mode(current: int, mode: str, value: float) -> int:
    """New counter value for set/inc, floored and clamped to >= 0"""
    if mode == "set":
        return max(0, math.floor(value))
    return max(0, current + math.floor(value))


def reset_all_points(store: DocumentStore, caller: Optional[Caller]) -> Dict:
    """Set points to 0 on every record; firsts, lasts and names are untouched"""
    require_admin(caller)

    with store.transaction() as txn:
        doc_ids = list(txn.list(POINTS))
        for doc_id in doc_ids:
            txn.set(POINTS, doc_id, {"points": 0}, merge=True)

    logger.info(f"🔄 Points reset on {len(doc_ids)} records by {caller.email}")
    return {"reset": len(doc_ids)}


def adjust_points(
    store: DocumentStore,
    caller: Optional[Caller],
    doc_id,
    mode,
    value,
    display_name=None,
    alias=None,
) -> Dict:
    """
    Set or increment a record's points

    A missing record is created with 0 points before the update. When an
    alias is given the users/{alias} mirror is refreshed too.

    Args:
        doc_id: points document id
        mode: "set" (points = value) or "inc" (points += value)
        value: finite number; floored, and the result is clamped to >= 0
        display_name: optional new display name
        alias: optional alias to store on the record

    Returns:
        {"ok": True, "id", "mode", "value", "points"}
    """
    require_admin(caller)
    doc_id = _require_id(doc_id, "docId")
    mode = _parse_mode(mode)
    value = _finite(value, "value")
    display_name = str(display_name or "").strip()
    alias = normalize_alias(alias)

    with store.transaction() as txn:
        current = txn.get(POINTS, doc_id) or {}
        points = _apply_mode(int(current.get("points") or 0), mode, value)

        update = {"points": points}
        if display_name:
            update["displayName"] = display_name
        if alias:
            update["alias"] = alias
        txn.set(POINTS, doc_id, update, merge=True)

        if alias:
            txn.set(USERS, alias, {
                "alias": alias,
                "displayName": display_name or current.get("displayName", ""),
                "updatedAt": now_ms(),
            }, merge=True)

    logger.info(f"✏️ Points {mode} {value:g} on {doc_id} -> {points} by {caller.email}")
    return {"ok": True, "id": doc_id, "mode": mode, "value": value, "points": points}


def adjust_finishes(
    store: DocumentStore,
    caller: Optional[Caller],
    doc_id,
    mode,
    firsts=None,
    lasts=None,
    display_name=None,
) -> Dict:
    """
    Set or increment the firsts and/or lasts counters

    Each counter is optional and handled independently, but at least one
    must be provided. Values are floored and results clamped to >= 0.
    """
    require_admin(caller)
    doc_id = _require_id(doc_id, "docId")
    mode = _parse_mode(mode)

    deltas = {}
    if firsts is not None and firsts != "":
        deltas["firsts"] = _finite(firsts, "firsts")
    if lasts is not None and lasts != "":
        deltas["lasts"] = _finite(lasts, "lasts")
    if not deltas:
        raise InvalidArgument("Provide firsts or lasts")
    display_name = str(display_name or "").strip()

    with store.transaction() as txn:
        current = txn.get(POINTS, doc_id) or {}
        update = {
            field: _apply_mode(int(current.get(field) or 0), mode, value)
            for field, value in deltas.items()
        }
        if display_name:
            update["displayName"] = display_name
        txn.set(POINTS, doc_id, update, merge=True)

    logger.info(f"✏️ Finishes {mode} on {doc_id}: {update} by {caller.email}")
    return {"ok": True, "id": doc_id, "mode": mode, "applied": update}


def set_alias_fields(
    store: DocumentStore,
    caller: Optional[Caller],
    doc_id,
    alias,
    display_name=None,
) -> Dict:
    """Rewrite alias/displayName on a record without touching its counters"""
    require_admin(caller)
    doc_id = _require_id(doc_id, "docId")
    alias = normalize_alias(alias)
    if not alias:
        raise InvalidArgument("alias required")
    display_name = str(display_name or "").strip()

    update = {"alias": alias}
    if display_name:
        update["displayName"] = display_name

    with store.transaction() as txn:
        current = txn.get(POINTS, doc_id) or {}
        txn.set(POINTS, doc_id, update, merge=True)
        txn.set(USERS, alias, {
            "alias": alias,
            "displayName": display_name or current.get("displayName", ""),
            "updatedAt": now_ms(),
        }, merge=True)

    logger.info(f"✏️ Alias fields on {doc_id}: {update} by {caller.email}")
    return {"updated": doc_id, "alias": alias, "displayName": display_name}


def delete_record(store: DocumentStore, caller: Optional[Caller], doc_id) -> Dict:
    """
    Delete one standings record and its users/{alias} mirror

    A missing record is reported, not raised.
    """
    require_admin(caller)
    doc_id = _require_id(doc_id, "docId")

    with store.transaction() as txn:
        record = txn.get(POINTS, doc_id)
        if record is None:
            return {"deleted": False, "reason": "not-found"}

        alias = normalize_alias(record.get("alias"))
        txn.delete(POINTS, doc_id)
        if alias and txn.get(USERS, alias) is not None:
            txn.delete(USERS, alias)

    logger.info(f"🗑️ Standings record {doc_id} deleted by {caller.email}")
    return {"deleted": True, "id": doc_id, "alias": alias}


def merge_alias(
    store: DocumentStore,
    caller: Optional[Caller],
    old_id,
    new_alias,
    new_display_name=None,
) -> Dict:
    """
    Fold the record at old_id into the record at new_alias

    points, firsts and lasts are summed into the target, which is created if
    absent; the source record is deleted. Without a source record the target
    is only ensured to exist. Display name: new_display_name, else the
    target's, else the source's, else the alias.

    old_id is matched lower-cased like every alias; a legacy mixed-case
    document id is used only when no lower-cased record exists.

    Returns:
        {"movedFrom": old_id, "to": new_alias, "merged": bool}
    """
    require_admin(caller)
    raw_old_id = str(old_id or "").strip()
    old_id = normalize_alias(raw_old_id)
    new_alias = normalize_alias(new_alias)
    if not old_id or not new_alias:
        raise InvalidArgument("oldId and newAlias required")
    new_display_name = str(new_display_name or "").strip()

    with store.transaction() as txn:
        source = txn.get(POINTS, old_id)
        if source is None and raw_old_id != old_id:
            # legacy record stored under a mixed-case id
            source = txn.get(POINTS, raw_old_id)
            if source is not None:
                old_id = raw_old_id
        target = txn.get(POINTS, new_alias) or {}
        merged = source is not None and old_id != new_alias

        display_name = (
            new_display_name
            or target.get("displayName")
            or (source or {}).get("displayName")
            or new_alias
        )
        update = {"alias": new_alias, "displayName": display_name}
        if merged:
            for field in ("points", "firsts", "lasts"):
                update[field] = int(source.get(field) or 0) + int(target.get(field) or 0)
        txn.set(POINTS, new_alias, update, merge=True)
        if merged:
            txn.delete(POINTS, old_id)

        txn.set(USERS, new_alias, {
            "alias": new_alias,
            "displayName": display_name,
            "updatedAt": now_ms(),
        }, merge=True)

    logger.info(
        f"🔀 Merge {old_id} -> {new_alias} "
        f"({'combined' if merged else 'no source record'}) by {caller.email}"
    )
    return {"movedFrom": old_id, "to": new_alias, "merged": merged}
