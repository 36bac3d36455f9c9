# OAuth sign-in and token lifecycle
from setlist.auth.oauth import authorization_url, exchange_code
from setlist.auth.tokens import TokenManager, TokenSet, TokenState

__all__ = [
    "authorization_url",
    "exchange_code",
    "TokenManager",
    "TokenSet",
    "TokenState",
]
