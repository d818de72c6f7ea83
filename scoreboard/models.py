"""
Data models for the scoreboard server

Documents are stored with camelCase keys (alias, displayName, numerator, ...);
the models below read and write that shape through field aliases.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional


class DailyEntry(BaseModel):
    """One participant's score for the current day (today/{alias})"""
    model_config = ConfigDict(populate_by_name=True)

    alias: str = ""
    display_name: str = Field("", alias="displayName")
    numerator: int
    denominator: int
    ratio: float
    time_left: int = Field(0, alias="timeLeft")  # seconds left on the quiz clock, display only
    updated_at: Optional[int] = Field(None, alias="updatedAt")  # epoch ms

    @classmethod
    def from_doc(cls, doc_id: str, data: dict) -> "DailyEntry":
        """Build from a stored document, falling back to the doc id for the alias"""
        payload = dict(data)
        payload.setdefault("alias", doc_id)
        return cls.model_validate(payload)

    def to_doc(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class StandingRecord(BaseModel):
    """Cumulative season counters for one alias (points/{alias})"""
    model_config = ConfigDict(populate_by_name=True)

    alias: str = ""
    display_name: str = Field("", alias="displayName")
    points: int = 0
    firsts: int = 0
    lasts: int = 0

    @classmethod
    def from_doc(cls, doc_id: str, data: dict) -> "StandingRecord":
        payload = {k: v for k, v in data.items() if v is not None}
        if not payload.get("alias"):
            payload["alias"] = doc_id
        return cls.model_validate(payload)


class UserProfile(BaseModel):
    """Denormalized alias/displayName mirror (users/{alias})"""
    model_config = ConfigDict(populate_by_name=True)

    alias: str
    display_name: str = Field("", alias="displayName")
    updated_at: Optional[int] = Field(None, alias="updatedAt")


class RankedEntry(BaseModel):
    """A daily entry with its settled rank and award"""
    entry: DailyEntry
    rank: int
    points: int
    is_first: bool = False  # member of the top tie-group
    is_last: bool = False   # member of the bottom tie-group


class Caller(BaseModel):
    """Verified identity attached to a request"""
    uid: str
    email: str
    provider: str               # identity provider, e.g. "google.com"
    admin: bool = False         # admin capability claim


class SeasonAward(BaseModel):
    """Winner of one season award"""
    model_config = ConfigDict(populate_by_name=True)

    alias: str
    display_name: str = Field("", alias="displayName")
    stat: str = ""          # e.g. "234 points"


class Settings(BaseModel):
    """Server settings loaded from YAML"""
    title: str = "Quiz League Scoreboard"
    admin_emails: List[str] = []          # identities allowed to grant themselves admin
    admin_provider: str = "google.com"    # identity provider required for the grant
    data_file: Optional[str] = None       # JSON snapshot of the document store; None = memory only
    dev_sign_in: bool = False             # enable POST /auth/sign-in (self-asserted identities)
    identity_verifier: Optional[str] = None  # "module:function" turning a bearer token into a Caller
    # season -> award key (commissionersTrophy, sporcleCup, h2hDemon, highestHighs) -> winner
    season_awards: Dict[int, Dict[str, SeasonAward]] = {}
