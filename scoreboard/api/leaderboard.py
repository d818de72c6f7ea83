"""
Leaderboard read endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends

from scoreboard import state
from scoreboard.api.deps import get_store
from scoreboard.core.quiz_link import get_quiz_link
from scoreboard.core.store import DocumentStore, POINTS, TODAY
from scoreboard.services import leaderboard


router = APIRouter(prefix="/api", tags=["leaderboard"])


@router.get("/today")
async def get_today(store: DocumentStore = Depends(get_store)):
    """Today's entries in display order"""
    badges = leaderboard.champion_badges(state.SETTINGS.season_awards)
    rows = leaderboard.today_board(store.list(TODAY), badges)
    return {"entries": rows, "total": len(rows)}


@router.get("/standings")
async def get_standings(store: DocumentStore = Depends(get_store)):
    """Season standings by cumulative points"""
    badges = leaderboard.champion_badges(state.SETTINGS.season_awards)
    rows = leaderboard.season_standings(store.list(POINTS), badges)
    return {"standings": rows, "total": len(rows)}


@router.get("/shame")
async def get_shame(store: DocumentStore = Depends(get_store)):
    """Wall of shame: most last places (top 10)"""
    return {"shame": leaderboard.wall_of_shame(store.list(POINTS))}


@router.get("/highs")
async def get_highs(store: DocumentStore = Depends(get_store)):
    """Highest highs: most first places (top 10)"""
    return {"highs": leaderboard.highest_highs(store.list(POINTS))}


@router.get("/playoffs")
async def get_playoffs(store: DocumentStore = Depends(get_store)):
    """Projected 32-seed playoff bracket from current standings"""
    return leaderboard.playoff_projection(store.list(POINTS))


@router.get("/hall-of-fame")
async def get_hall_of_fame(season: Optional[int] = None):
    """
    Hall of Champions: award winners for a season (latest by default)

    Response:
        {"seasons": [1], "season": 1, "awards": [{"key": "commissionersTrophy", ...}]}
    """
    return leaderboard.hall_of_fame(state.SETTINGS.season_awards, season)


@router.get("/quiz-link")
async def get_quiz(store: DocumentStore = Depends(get_store)):
    return {"url": get_quiz_link(store)}
