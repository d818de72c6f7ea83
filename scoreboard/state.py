"""
Global application state
Shared resources accessible across all modules
"""
from typing import Callable, Dict, Optional

from scoreboard.core.store import DocumentStore
from scoreboard.models import Caller, Settings

# Document store holding the today / points / users / meta collections
# Created at startup from SETTINGS.data_file
STORE: Optional[DocumentStore] = None

# Settings loaded at startup
SETTINGS: Settings = Settings()

# Signed-in sessions: bearer token -> Caller
SESSIONS: Dict[str, Caller] = {}

# Custom claims by uid, kept across sign-ins (e.g. {"admin": True})
CLAIMS: Dict[str, Dict[str, bool]] = {}

# Bearer token -> Caller (None when the token does not verify)
# Installed at startup by services.identity.build_verifier(SETTINGS)
VERIFY_IDENTITY: Optional[Callable[[str], Optional[Caller]]] = None
