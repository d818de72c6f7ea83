"""
Shared fixtures: a fresh store and settings for every test
"""
import pytest

from scoreboard import state
from scoreboard.core.store import DocumentStore
from scoreboard.models import Caller, DailyEntry, Settings
from scoreboard.services.identity import verify_dev_session


ADMIN_EMAIL = "commissioner@example.com"


@pytest.fixture(autouse=True)
def fresh_state():
    state.STORE = DocumentStore()
    state.SETTINGS = Settings(admin_emails=[ADMIN_EMAIL], admin_provider="google.com", dev_sign_in=True)
    state.VERIFY_IDENTITY = verify_dev_session
    state.SESSIONS.clear()
    state.CLAIMS.clear()
    yield
    state.STORE = None
    state.VERIFY_IDENTITY = None


@pytest.fixture
def store():
    return state.STORE


@pytest.fixture
def admin():
    return Caller(uid="user-admin", email=ADMIN_EMAIL, provider="google.com", admin=True)


@pytest.fixture
def player():
    return Caller(uid="user-player", email="player@example.com", provider="google.com")


def make_entry(alias, numerator, denominator, display_name=None, time_left=0):
    return DailyEntry(
        alias=alias,
        display_name=display_name if display_name is not None else alias.title(),
        numerator=numerator,
        denominator=denominator,
        ratio=numerator / denominator,
        time_left=time_left,
    )


def put_today(store, *entries):
    for e in entries:
        store.set("today", e.alias or "blank", e.to_doc())
