"""OAuth token handling for the MyAnimeList client."""

from __future__ import annotations

from MyAnimeList.auth.authenticator import (
    Authenticator,
    RefreshableAuthenticator,
    StaticTokenAuthenticator,
    TokenPair,
)
from MyAnimeList.auth.oauth import authorization_url, generate_code_verifier

__all__ = [
    "Authenticator",
    "RefreshableAuthenticator",
    "StaticTokenAuthenticator",
    "TokenPair",
    "authorization_url",
    "generate_code_verifier",
]
