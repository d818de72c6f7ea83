"""
Submission endpoint for daily scores
"""
from fastapi import APIRouter, Depends, Request
import logging

from scoreboard.api.deps import get_store
from scoreboard.core.store import DocumentStore
from scoreboard.core.submission import submit_entry


router = APIRouter(tags=["submission"])
logger = logging.getLogger(__name__)


@router.post("/submit")
async def submit(payload: dict, request: Request, store: DocumentStore = Depends(get_store)):
    """
    Submit (or resubmit) today's score

    Request:
        {
            "alias": "grifjom",
            "displayName": "Josh",
            "score": "7/9",          # or "numerator": 7, "denominator": 9
            "timeLeft": 42           # optional, seconds
        }

    Response:
        {"success": true, "entry": {...}}
    """
    client_ip = request.client.host if request.client else "unknown"
    logger.info(f"📥 Submission from {client_ip} | Alias: {payload.get('alias')}")

    entry = submit_entry(
        store,
        alias=payload.get("alias"),
        display_name=payload.get("displayName") or payload.get("display_name"),
        numerator=payload.get("numerator"),
        denominator=payload.get("denominator"),
        score=payload.get("score"),
        time_left=payload.get("timeLeft"),
    )
    return {"success": True, "entry": entry.to_doc()}
