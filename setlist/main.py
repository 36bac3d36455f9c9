"""
FastAPI application entry point.

Setlist API - members submit YouTube links to a shared spreadsheet, rate
each other's picks, and keep a YouTube playlist in the sheet's order.
"""

import secrets

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from setlist.errors import InvalidInput, SetlistError
from setlist.log import get_logger, init_logging
from setlist.settings import Settings, get_settings
from setlist.routers import auth_router, leaderboard_router, songs_router

settings = get_settings()
init_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)

missing = settings.validate()
if missing:
    logger.warning(f"Missing configuration: {', '.join(missing)}")

if not settings.link_column_in_submissions:
    logger.warning(
        f"PLAYLIST_LINK_COLUMN={settings.PLAYLIST_LINK_COLUMN} is not the column saves write links to; "
        "playlist sync only sees links placed there by the sheet itself"
    )


def session_secret_key(settings: Settings) -> str:
    """
    Key that signs the session cookie.

    Without SESSION_SECRET a random key is generated, so sessions end on
    restart and are not shared between worker processes.
    """
    if settings.SESSION_SECRET:
        return settings.SESSION_SECRET
    logger.warning(
        "SESSION_SECRET is not set: using a random per-process key. "
        "Sessions will not survive a restart or work across multiple workers."
    )
    return secrets.token_urlsafe(32)


# Create FastAPI app
app = FastAPI(
    title="Setlist API",
    description="""
API for the shared song ledger.

## Features
- Resolve a YouTube link to artist/title
- Append submissions to the shared spreadsheet
- Leaderboard with per-member ratings
- Rebuild the YouTube playlist in sheet order

## Authentication
Sign in with Google at `/auth/signin`. All `/v1` endpoints require a session.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(
    SessionMiddleware,
    secret_key=session_secret_key(settings),
    same_site="lax",
)


@app.exception_handler(SetlistError)
async def handle_setlist_error(request: Request, exc: SetlistError):
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    error = InvalidInput("Invalid request", details=exc.errors())
    return JSONResponse(status_code=error.status_code, content=jsonable_encoder(error.to_dict()))


# Include routers
app.include_router(auth_router)
app.include_router(songs_router)
app.include_router(leaderboard_router)


@app.get("/", tags=["root"])
def root():
    """
    Root endpoint - API health check and info.
    """
    return {
        "name": "Setlist API",
        "version": "1.0.0",
        "status": "healthy",
        "docs": "/docs",
    }


@app.get("/health", tags=["root"])
def health_check():
    """
    Health check endpoint for monitoring.
    """
    return {"status": "ok"}
