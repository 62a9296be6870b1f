"""Helpers for the OAuth2 authorization-code flow with PKCE.

MyAnimeList only supports the `plain` code challenge method, so the code
challenge sent to the authorization page is the verifier itself.
"""

from __future__ import annotations

import secrets
from typing import Final, Optional
from urllib.parse import urlencode

AUTHORIZE_URL: Final[str] = "https://myanimelist.net/v1/oauth2/authorize"

_MIN_VERIFIER_LENGTH = 43
_MAX_VERIFIER_LENGTH = 128


def generate_code_verifier(length: int = _MAX_VERIFIER_LENGTH) -> str:
    """Generate a random PKCE code verifier.

    Args:
        length: Verifier length, 43 to 128 characters.

    Returns:
        URL-safe random string of exactly `length` characters.

    Raises:
        ValueError: If `length` is out of range.
    """
    if not _MIN_VERIFIER_LENGTH <= length <= _MAX_VERIFIER_LENGTH:
        raise ValueError(f"length must be between {_MIN_VERIFIER_LENGTH} and {_MAX_VERIFIER_LENGTH}")
    return secrets.token_urlsafe(length)[:length]


def authorization_url(
    client_id: str,
    code_challenge: str,
    *,
    state: Optional[str] = None,
    redirect_uri: Optional[str] = None,
    authorize_url: str = AUTHORIZE_URL,
) -> str:
    """Build the URL of the page where the user grants access.

    Args:
        client_id: Registered application client id.
        code_challenge: PKCE challenge, equal to the verifier for `plain`.
        state: Opaque value echoed back on the redirect.
        redirect_uri: Redirect URI, required if several are registered.
        authorize_url: Authorization page URL.

    Returns:
        Full authorization URL.
    """
    params = {
        "response_type": "code",
        "client_id": client_id,
        "code_challenge": code_challenge,
        "code_challenge_method": "plain",
    }
    if state:
        params["state"] = state
    if redirect_uri:
        params["redirect_uri"] = redirect_uri
    return f"{authorize_url}?{urlencode(params)}"
