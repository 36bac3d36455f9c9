"""
Pydantic schemas for API request/response models.
"""

from typing import Optional
from pydantic import BaseModel, Field


# --- Song Schemas ---

class ParseRequest(BaseModel):
    """A URL to resolve to track metadata."""
    url: str = Field(min_length=1)


class TrackOut(BaseModel):
    """Track metadata as stored in the sheet."""
    artist: str
    title: str
    url: str


class ParseResponse(TrackOut):
    video_id: str


class SaveRequest(BaseModel):
    artist: str = Field(min_length=1)
    title: str = Field(min_length=1)
    url: str = Field(min_length=1)


class SyncOut(BaseModel):
    """Result of a playlist reconciliation."""
    deleted: int
    added: int
    total: int
    failed: list[str] = Field(default_factory=list)

    class Config:
        from_attributes = True


class SaveResponse(TrackOut):
    row: int
    user_name: str
    playlist_sync: Optional[SyncOut] = None


# --- Leaderboard Schemas ---

class LeaderboardEntryOut(BaseModel):
    artist: str
    title: str
    youtube_url: str
    rating: str
    original_row: int
    sheet_name: str

    class Config:
        from_attributes = True


class LeaderboardResponse(BaseModel):
    entries: list[LeaderboardEntryOut]
    playlist_id: Optional[str] = None
    message: Optional[str] = None


class RateRequest(BaseModel):
    """A rating for one submission row. An empty rating clears it."""
    row: int = Field(ge=1)
    rating: str


class RateResponse(BaseModel):
    row: int
    rating: str
    column: str

    class Config:
        from_attributes = True


# --- Session Schemas ---

class SessionOut(BaseModel):
    email: str
    display_name: str


# --- Generic Schemas ---

class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    code: str
    details: Optional[object] = None


def request_body(model: type[BaseModel]) -> dict:
    """OpenAPI request body for a route whose dependency parses the JSON itself."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }
