"""
Health check and system status endpoints
"""
from fastapi import APIRouter
from scoreboard import state


router = APIRouter(tags=["health"])


@router.get("/")
async def health_check():
    """Health check endpoint"""
    counts = state.STORE.counts() if state.STORE else {}
    return {
        "status": "ok",
        "message": f"{state.SETTINGS.title} - Scoreboard Server",
        "version": "1.0.0",
        "today_entries": counts.get("today", 0),
        "standings_records": counts.get("points", 0),
    }
