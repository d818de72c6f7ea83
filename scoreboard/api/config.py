"""
Configuration endpoints
"""
from fastapi import APIRouter

from scoreboard import state
from scoreboard.core.ranking import AWARD_TABLE


router = APIRouter(tags=["config"])


@router.get("/config")
async def get_config():
    """Public settings: title, award table and the admin identity provider"""
    return {
        "title": state.SETTINGS.title,
        "award_table": {rank: points for rank, points in enumerate(AWARD_TABLE, start=1)},
        "admin_provider": state.SETTINGS.admin_provider,
        "persistent": bool(state.SETTINGS.data_file),
    }
