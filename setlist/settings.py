"""
Application settings and configuration.
Loads environment variables and provides typed config objects.
"""

import json
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from setlist.log import get_logger
from setlist.sheets.a1 import offset_column

load_dotenv()

DEFAULT_RATING_TOKENS = "유잼,가능,노잼,불가,불참"

DEFAULT_SCOPES = [
    "openid",
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
    "https://www.googleapis.com/auth/youtube",
    "https://www.googleapis.com/auth/spreadsheets",
]


def _parse_name_mapping(raw: str) -> dict[str, str]:
    """Parse the EMAIL_TO_NAME_MAPPING JSON object. Invalid input maps nobody."""
    if not raw:
        return {}
    try:
        mapping = json.loads(raw)
    except ValueError as e:
        get_logger(__name__).error(f"Invalid EMAIL_TO_NAME_MAPPING: {e}")
        return {}
    if not isinstance(mapping, dict):
        get_logger(__name__).error("EMAIL_TO_NAME_MAPPING must be a JSON object")
        return {}
    return {str(k): str(v) for k, v in mapping.items()}


def _split(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        # Google OAuth client
        self.GOOGLE_CLIENT_ID: str = os.getenv("GOOGLE_CLIENT_ID", "")
        self.GOOGLE_CLIENT_SECRET: str = os.getenv("GOOGLE_CLIENT_SECRET", "")
        self.OAUTH_REDIRECT_URI: str = os.getenv(
            "OAUTH_REDIRECT_URI", "http://localhost:8000/auth/callback"
        )
        self.OAUTH_SCOPES: list[str] = _split(os.getenv("OAUTH_SCOPES", "")) or list(DEFAULT_SCOPES)
        self.TOKEN_URI: str = os.getenv("TOKEN_URI", "https://oauth2.googleapis.com/token")
        self.TOKEN_EXPIRY_MARGIN_SECONDS: int = int(os.getenv("TOKEN_EXPIRY_MARGIN_SECONDS", "300"))

        # Session cookie
        self.SESSION_SECRET: str = os.getenv("SESSION_SECRET", "")

        # Spreadsheet / playlist targets
        self.SPREADSHEET_ID: str = os.getenv("SPREADSHEET_ID", "")
        self.YOUTUBE_PLAYLIST_ID: str = os.getenv("YOUTUBE_PLAYLIST_ID", "")

        # Submission sheet layout
        self.SUBMISSION_SHEET: str = os.getenv("SUBMISSION_SHEET", "선곡")
        self.SUBMISSION_START_ROW: int = int(os.getenv("SUBMISSION_START_ROW", "3"))
        self.SUBMISSION_FIRST_COLUMN: str = os.getenv("SUBMISSION_FIRST_COLUMN", "A")
        self.SUBMISSION_HEADER: list[str] = ["선곡자", "아티스트", "곡명", "유튜브 링크"]
        self.PLAYLIST_LINK_COLUMN: str = os.getenv("PLAYLIST_LINK_COLUMN", "E")

        # Ratings region of the submission sheet (header lives in row 1)
        self.RATING_HEADER_START: str = os.getenv("RATING_HEADER_START", "U")
        self.RATING_HEADER_END: str = os.getenv("RATING_HEADER_END", "ZY")
        self.RATING_TOKENS: list[str] = _split(os.getenv("RATING_TOKENS", DEFAULT_RATING_TOKENS))

        # Leaderboard sheets
        self.LEADERBOARD_SHEET_MARKER: str = os.getenv("LEADERBOARD_SHEET_MARKER", "Leaderboard")
        self.LEADERBOARD_FIRST_COLUMN: str = os.getenv("LEADERBOARD_FIRST_COLUMN", "C")
        self.LEADERBOARD_LAST_COLUMN: str = os.getenv("LEADERBOARD_LAST_COLUMN", "AE")
        self.LEADERBOARD_RATING_START: str = os.getenv("LEADERBOARD_RATING_START", "V")
        self.LEADERBOARD_ORIGINAL_ROW_COLUMN: str = os.getenv("LEADERBOARD_ORIGINAL_ROW_COLUMN", "AE")

        # Identity
        self.EMAIL_TO_NAME_MAPPING: dict[str, str] = _parse_name_mapping(
            os.getenv("EMAIL_TO_NAME_MAPPING", "")
        )

        # Web
        self.ALLOWED_ORIGINS: list[str] = _split(
            os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:8000")
        )
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def valid_ratings(self) -> set[str]:
        """Closed set of accepted rating tokens. The empty string clears a rating."""
        return set(self.RATING_TOKENS) | {""}

    @property
    def link_column_in_submissions(self) -> bool:
        """Whether playlist sync reads the link column that saves write to."""
        link_column = offset_column(self.SUBMISSION_FIRST_COLUMN, len(self.SUBMISSION_HEADER) - 1)
        return self.PLAYLIST_LINK_COLUMN.upper() == link_column

    def display_name_for(self, email: Optional[str]) -> str:
        """Map a user's email to the name used in the sheet."""
        if not email:
            return ""
        return self.EMAIL_TO_NAME_MAPPING.get(email) or email.split("@")[0]

    def validate(self) -> list[str]:
        """Check for missing required settings. Returns list of missing keys."""
        missing = []
        if not self.GOOGLE_CLIENT_ID:
            missing.append("GOOGLE_CLIENT_ID")
        if not self.GOOGLE_CLIENT_SECRET:
            missing.append("GOOGLE_CLIENT_SECRET")
        if not self.SESSION_SECRET:
            missing.append("SESSION_SECRET")
        if not self.SPREADSHEET_ID:
            missing.append("SPREADSHEET_ID")
        return missing


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
