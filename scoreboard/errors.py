"""
Typed error kinds raised by the scoring engine

Routers never build HTTP errors for these themselves: main.py registers one
handler that maps every ScoreboardError to its status code.
"""


class ScoreboardError(Exception):
    """Base class for failures returned to the caller"""
    kind = "internal"
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.detail}


class Unauthenticated(ScoreboardError):
    """No caller identity was presented"""
    kind = "unauthenticated"
    status_code = 401


class PermissionDenied(ScoreboardError):
    """Caller is known but lacks the admin capability (or may not be granted it)"""
    kind = "permission-denied"
    status_code = 403


class InvalidArgument(ScoreboardError):
    """Missing, blank or malformed request field"""
    kind = "invalid-argument"
    status_code = 400
