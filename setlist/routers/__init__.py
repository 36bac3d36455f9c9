# API Routers
from setlist.routers.auth import router as auth_router
from setlist.routers.leaderboard import router as leaderboard_router
from setlist.routers.songs import router as songs_router

__all__ = ["auth_router", "leaderboard_router", "songs_router"]
