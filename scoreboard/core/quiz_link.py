"""
Link to the day's quiz (meta/quiz)
"""
import logging
from typing import Dict, Optional

from scoreboard.core.auth import require_admin
from scoreboard.core.store import DocumentStore, META
from scoreboard.errors import InvalidArgument
from scoreboard.models import Caller
from scoreboard.utils import now_ms


logger = logging.getLogger(__name__)

QUIZ_DOC = "quiz"


def get_quiz_link(store: DocumentStore) -> Optional[str]:
    doc = store.get(META, QUIZ_DOC) or {}
    return doc.get("url") or None


def set_quiz_link(store: DocumentStore, caller: Optional[Caller], url) -> Dict:
    """Admin: publish the quiz URL for today"""
    require_admin(caller)
    url = str(url or "").strip()
    if not url.startswith(("http://", "https://")):
        raise InvalidArgument("Enter a valid URL (http:// or https://)")

    store.set(META, QUIZ_DOC, {"url": url, "updatedAt": now_ms()})
    logger.info(f"🔗 Quiz link set to {url} by {caller.email}")
    return {"ok": True, "url": url}
