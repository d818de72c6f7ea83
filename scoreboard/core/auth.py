"""
Admin capability checks and the one-time admin grant
"""
import logging
from typing import Dict, Iterable, Optional

from scoreboard.errors import PermissionDenied, Unauthenticated
from scoreboard.models import Caller


logger = logging.getLogger(__name__)


def require_admin(caller: Optional[Caller]) -> Caller:
    """
    Fail fast unless the caller carries the admin claim

    Raised before any store access, for anonymous callers too.
    """
    if caller is None or not caller.admin:
        who = caller.email if caller else "anonymous"
        logger.warning(f"⛔ Admin operation rejected for {who}")
        raise PermissionDenied("Admins only")
    return caller


def grant_admin(
    caller: Optional[Caller],
    allowed_emails: Iterable[str],
    required_provider: str,
    claims: Dict[str, Dict[str, bool]],
) -> Dict:
    """
    Grant the admin claim to the caller

    Only callers signed in through `required_provider` whose email is on the
    allow-list qualify.

    Args:
        caller: Verified caller identity (None if no token was presented)
        allowed_emails: Configured allow-list
        required_provider: Identity provider the caller must have used
        claims: Claims table keyed by uid, updated in place

    Returns:
        {"ok": True}
    """
    if caller is None:
        raise Unauthenticated("Sign in first.")

    if caller.provider != required_provider:
        logger.warning(f"⛔ Admin grant refused for {caller.email}: provider {caller.provider}")
        raise PermissionDenied(f"Use {required_provider} sign-in.")

    allowed = {email.strip().lower() for email in allowed_emails}
    if caller.email.strip().lower() not in allowed:
        logger.warning(f"⛔ Admin grant refused for {caller.email}: not on allow-list")
        raise PermissionDenied("Not authorized.")

    claims.setdefault(caller.uid, {})["admin"] = True
    logger.info(f"🔑 Admin granted to {caller.email}")
    return {"ok": True}
