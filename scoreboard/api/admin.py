"""
Admin endpoints for settling days and maintaining standings

Every endpoint requires a bearer token whose caller carries the admin claim;
the core operations reject anyone else with 403 before reading the store.
"""
from typing import Optional

from fastapi import APIRouter, Depends

from scoreboard.api.deps import current_caller, get_store
from scoreboard.core import standings
from scoreboard.core.quiz_link import set_quiz_link
from scoreboard.core.settlement import finish_day
from scoreboard.core.store import DocumentStore
from scoreboard.core.submission import delete_today_entry, edit_today_entry
from scoreboard.models import Caller


router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/finish-day")
async def finish_day_endpoint(
    caller: Optional[Caller] = Depends(current_caller),
    store: DocumentStore = Depends(get_store),
):
    """
    Admin: Finish the day and award points (ties share rank)

    Response:
        {"awarded": 5, "firstsAdded": 2, "lastsAdded": 1}
    """
    return finish_day(store, caller)


@router.post("/reset-points")
async def reset_points(
    caller: Optional[Caller] = Depends(current_caller),
    store: DocumentStore = Depends(get_store),
):
    """Admin: Reset ALL cumulative points back to 0"""
    return standings.reset_all_points(store, caller)


@router.post("/points")
async def update_points(
    payload: dict,
    caller: Optional[Caller] = Depends(current_caller),
    store: DocumentStore = Depends(get_store),
):
    """
    Admin: Set or increment a participant's points

    Request:
        {
            "docId": "grifjom",
            "mode": "set" | "inc",
            "value": 12,
            "displayName": "Josh",   # optional
            "alias": "grifjom"       # optional
        }
    """
    return standings.adjust_points(
        store,
        caller,
        doc_id=payload.get("docId"),
        mode=payload.get("mode", "set"),
        value=payload.get("value"),
        display_name=payload.get("displayName"),
        alias=payload.get("alias"),
    )


@router.post("/finishes")
async def update_finishes(
    payload: dict,
    caller: Optional[Caller] = Depends(current_caller),
    store: DocumentStore = Depends(get_store),
):
    """
    Admin: Set or increment first/last place counts

    Request:
        {"docId": "grifjom", "mode": "set" | "inc", "firsts": 3, "lasts": 0}
    """
    return standings.adjust_finishes(
        store,
        caller,
        doc_id=payload.get("docId"),
        mode=payload.get("mode", "set"),
        firsts=payload.get("firsts"),
        lasts=payload.get("lasts"),
        display_name=payload.get("displayName"),
    )


@router.post("/alias-fields")
async def update_alias_fields(
    payload: dict,
    caller: Optional[Caller] = Depends(current_caller),
    store: DocumentStore = Depends(get_store),
):
    """
    Admin: Rewrite alias/displayName on a standings record

    Request:
        {"docId": "Josh", "alias": "grifjom", "displayName": "Josh"}
    """
    return standings.set_alias_fields(
        store,
        caller,
        doc_id=payload.get("docId"),
        alias=payload.get("alias"),
        display_name=payload.get("displayName"),
    )


@router.post("/delete-record")
async def delete_record(
    payload: dict,
    caller: Optional[Caller] = Depends(current_caller),
    store: DocumentStore = Depends(get_store),
):
    """
    Admin: Delete one standings record

    Request:
        {"docId": "grifjom"}

    Response:
        {"deleted": true, "id": "grifjom", "alias": "grifjom"}
        {"deleted": false, "reason": "not-found"}
    """
    return standings.delete_record(store, caller, doc_id=payload.get("docId"))


@router.post("/merge-alias")
async def merge_alias(
    payload: dict,
    caller: Optional[Caller] = Depends(current_caller),
    store: DocumentStore = Depends(get_store),
):
    """
    Admin: Merge one standings record into another alias

    Request:
        {"oldId": "Josh", "newAlias": "grifjom", "newDisplayName": "Josh"}
    """
    return standings.merge_alias(
        store,
        caller,
        old_id=payload.get("oldId"),
        new_alias=payload.get("newAlias"),
        new_display_name=payload.get("newDisplayName"),
    )


@router.post("/today/delete")
async def delete_today(
    payload: dict,
    caller: Optional[Caller] = Depends(current_caller),
    store: DocumentStore = Depends(get_store),
):
    """Admin: Delete one of today's entries. Request: {"alias": "grifjom"}"""
    return delete_today_entry(store, caller, payload.get("alias"))


@router.post("/today/edit")
async def edit_today(
    payload: dict,
    caller: Optional[Caller] = Depends(current_caller),
    store: DocumentStore = Depends(get_store),
):
    """
    Admin: Rewrite one of today's entries

    Request:
        {"oldAlias": "grifjom", "newAlias": "grifjom", "displayName": "Josh", "score": "7/9"}
    """
    entry = edit_today_entry(
        store,
        caller,
        old_alias=payload.get("oldAlias"),
        new_alias=payload.get("newAlias") or payload.get("oldAlias"),
        display_name=payload.get("displayName"),
        score=payload.get("score"),
    )
    return {"success": True, "entry": entry.to_doc()}


@router.post("/quiz-link")
async def update_quiz_link(
    payload: dict,
    caller: Optional[Caller] = Depends(current_caller),
    store: DocumentStore = Depends(get_store),
):
    """Admin: Publish today's quiz URL. Request: {"url": "https://..."}"""
    return set_quiz_link(store, caller, payload.get("url"))
