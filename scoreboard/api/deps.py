"""
Shared FastAPI dependencies
"""
from typing import Optional

from fastapi import Header, HTTPException

from scoreboard import state
from scoreboard.core.store import DocumentStore
from scoreboard.models import Caller
from scoreboard.services.identity import get_caller


def get_store() -> DocumentStore:
    if state.STORE is None:
        raise HTTPException(status_code=500, detail="Document store is not initialized")
    return state.STORE


def current_caller(authorization: Optional[str] = Header(None)) -> Optional[Caller]:
    """
    Caller from an "Authorization: Bearer <token>" header

    Returns None when no (or an unknown) token is presented; each operation
    decides whether that is acceptable.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return get_caller(token.strip())
