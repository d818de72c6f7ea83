"""
Sign-in and admin grant endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends

from scoreboard import state
from scoreboard.api.deps import current_caller
from scoreboard.core.auth import grant_admin
from scoreboard.errors import Unauthenticated
from scoreboard.models import Caller
from scoreboard.services.identity import sign_in


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/sign-in")
async def sign_in_endpoint(payload: dict):
    """
    Open a development session (dev_sign_in only, 403 otherwise)

    Request:
        {"email": "someone@example.com", "provider": "google.com"}

    Response:
        {"uid": "...", "email": "...", "provider": "...", "token": "<bearer token>"}
    """
    return sign_in(payload.get("email"), payload.get("provider"))


@router.post("/grant-admin")
async def grant_admin_endpoint(caller: Optional[Caller] = Depends(current_caller)):
    """One-time admin grant for allow-listed identities"""
    return grant_admin(
        caller,
        allowed_emails=state.SETTINGS.admin_emails,
        required_provider=state.SETTINGS.admin_provider,
        claims=state.CLAIMS,
    )


@router.get("/me")
async def me(caller: Optional[Caller] = Depends(current_caller)):
    """Current caller and claims"""
    if caller is None:
        raise Unauthenticated("Sign in first.")
    return caller.model_dump()
