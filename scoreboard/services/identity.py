"""
Identity resolution for bearer tokens

A request's bearer token is turned into a Caller by the verifier installed
in state.VERIFY_IDENTITY at startup:
- settings.identity_verifier: "package.module:function" taking the token and
  returning a Caller (or None), e.g. a wrapper around the provider's
  ID-token verification
- settings.dev_sign_in: tokens issued by POST /auth/sign-in, where the client
  names its own email and provider (local development only)
- neither: every token is rejected
"""
import hashlib
import importlib
import logging
import uuid
from typing import Callable, Optional

from scoreboard import state
from scoreboard.errors import InvalidArgument, PermissionDenied
from scoreboard.models import Caller, Settings


logger = logging.getLogger(__name__)

Verifier = Callable[[str], Optional[Caller]]


def _uid_for(email: str, provider: str) -> str:
    digest = hashlib.sha1(f"{provider}:{email}".encode("utf-8")).hexdigest()
    return f"user-{digest[:16]}"


def sign_in(email: str, provider: str) -> dict:
    """
    Open a development session for a self-declared account

    Only available with dev_sign_in enabled. The uid is stable per
    (provider, email) so claims granted earlier survive a new sign-in.
    """
    if not state.SETTINGS.dev_sign_in:
        raise PermissionDenied("Development sign-in is disabled.")

    clean_email = str(email or "").strip().lower()
    clean_provider = str(provider or "").strip()
    if not clean_email or "@" not in clean_email:
        raise InvalidArgument("email required")
    if not clean_provider:
        raise InvalidArgument("provider required")

    uid = _uid_for(clean_email, clean_provider)
    token = uuid.uuid4().hex
    state.SESSIONS[token] = Caller(uid=uid, email=clean_email, provider=clean_provider)

    return {"uid": uid, "email": clean_email, "provider": clean_provider, "token": token}


def verify_dev_session(token: str) -> Optional[Caller]:
    """Verifier for tokens issued by sign_in()"""
    return state.SESSIONS.get(token)


def reject_all(token: str) -> Optional[Caller]:
    return None


def build_verifier(settings: Settings) -> Verifier:
    """Pick the token verifier for these settings"""
    if settings.identity_verifier:
        module_name, _, func_name = settings.identity_verifier.partition(":")
        if not func_name:
            raise ValueError(
                f"identity_verifier must look like 'module:function', got {settings.identity_verifier!r}"
            )
        verifier = getattr(importlib.import_module(module_name), func_name)
        logger.info(f"🔐 Using identity verifier {settings.identity_verifier}")
        return verifier

    if settings.dev_sign_in:
        logger.warning("⚠️ Development sign-in enabled: identities are self-declared, do not expose publicly")
        return verify_dev_session

    logger.warning("⚠️ No identity verifier configured: all bearer tokens will be rejected")
    return reject_all


def get_caller(token: Optional[str]) -> Optional[Caller]:
    """Resolve a bearer token to a Caller with its current claims"""
    if not token or state.VERIFY_IDENTITY is None:
        return None
    caller = state.VERIFY_IDENTITY(token)
    if caller is None:
        return None
    claims = state.CLAIMS.get(caller.uid, {})
    return caller.model_copy(update={"admin": bool(claims.get("admin"))})
