import pytest

from setlist.settings import Settings, get_settings
from tests.fakes import FakePlaylistClient, FakeSheetRepository


SETTINGS_KEYS = [
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "SESSION_SECRET",
    "SPREADSHEET_ID",
    "YOUTUBE_PLAYLIST_ID",
    "EMAIL_TO_NAME_MAPPING",
    "SUBMISSION_SHEET",
    "SUBMISSION_START_ROW",
    "SUBMISSION_FIRST_COLUMN",
    "PLAYLIST_LINK_COLUMN",
    "RATING_HEADER_START",
    "RATING_HEADER_END",
    "RATING_TOKENS",
    "LEADERBOARD_SHEET_MARKER",
    "TOKEN_EXPIRY_MARGIN_SECONDS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """
    Ensure tests don't pick up a developer's environment or cached settings.
    """
    for k in SETTINGS_KEYS:
        monkeypatch.delenv(k, raising=False)

    monkeypatch.setenv("GOOGLE_CLIENT_ID", "client-id")
    monkeypatch.setenv("GOOGLE_CLIENT_SECRET", "client-secret")
    monkeypatch.setenv("SESSION_SECRET", "test-secret")
    monkeypatch.setenv("SPREADSHEET_ID", "SHEET123")
    monkeypatch.setenv("YOUTUBE_PLAYLIST_ID", "PL123")
    monkeypatch.setenv(
        "EMAIL_TO_NAME_MAPPING",
        '{"minji@example.com": "민지", "alex@example.com": "Alex"}',
    )

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def repo() -> FakeSheetRepository:
    return FakeSheetRepository()


@pytest.fixture
def playlist() -> FakePlaylistClient:
    return FakePlaylistClient()
