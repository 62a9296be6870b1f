"""Bearer token holders.

Two variants share one contract: `current_token()` returns the token to put
in the `Authorization` header and `refresh()` tries to obtain a new one.
Refreshing is always caller-triggered; nothing here refreshes on expiry.
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Final, Mapping, Optional, Protocol

from MyAnimeList.api.request import HttpRequest
from MyAnimeList.api.transport import HttpTransport, Transport
from MyAnimeList.core.errors import AuthRefreshFailedError, FailedRequestError, InvalidAuthError
from MyAnimeList.utils.log import log

TOKEN_URL: Final[str] = "https://myanimelist.net/v1/oauth2/token"


class Authenticator(Protocol):
    """Protocol for bearer token providers."""

    def current_token(self) -> str:
        """Return the access token.

        Raises:
            InvalidAuthError: If no token is held.
        """
        raise NotImplementedError

    def refresh(self) -> None:
        """Replace the held token with a fresh one when the variant supports it.

        Raises:
            AuthRefreshFailedError: If the token endpoint exchange failed.
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release resources held for token endpoint calls."""
        raise NotImplementedError


class StaticTokenAuthenticator:
    """Caller-supplied access token without expiry tracking."""

    def __init__(self, token: str) -> None:
        self._token = (token or "").strip()

    def current_token(self) -> str:
        if not self._token:
            raise InvalidAuthError("No OAuth token was supplied")
        return self._token

    def refresh(self) -> None:
        """Do nothing: a static token cannot be refreshed."""
        log.debug("refresh() on a static token is a no-op")

    def close(self) -> None:
        return


@dataclass(frozen=True, slots=True)
class TokenPair:
    """Result of one token endpoint exchange.

    Attributes:
        access_token: Bearer token.
        refresh_token: Refresh token to use next time.
        expires_at: Access token expiry (UTC) if the server reported one.
        token_type: Token type reported by the server, normally "Bearer".
    """

    access_token: str
    refresh_token: str
    expires_at: Optional[datetime] = None
    token_type: str = "Bearer"


class RefreshableAuthenticator:
    """OAuth2 client credentials plus a refresh token.

    The held token pair is replaced as a whole under a lock, so readers never
    observe a half-updated credential. Serializing concurrent `refresh()`
    calls is the caller's job.
    """

    def __init__(
        self,
        client_id: str,
        refresh_token: str,
        *,
        client_secret: str = "",
        access_token: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        token_url: str = TOKEN_URL,
        transport: Optional[Transport] = None,
    ) -> None:
        """Initialize the authenticator.

        Args:
            client_id: Registered application client id.
            refresh_token: Refresh token; must not be empty.
            client_secret: Client secret, empty for public clients.
            access_token: Access token already obtained, if any.
            expires_at: Expiry of `access_token`, if known.
            token_url: Token endpoint URL.
            transport: Transport for token endpoint calls. When omitted a
                private one is created and released by `close()`.

        Raises:
            ValueError: If `client_id` or `refresh_token` is empty.
        """
        if not (client_id or "").strip():
            raise ValueError("client_id must not be empty")
        if not (refresh_token or "").strip():
            raise ValueError("refresh_token must not be empty")

        self.client_id = client_id.strip()
        self.client_secret = client_secret or ""
        self.token_url = token_url
        self._owns_transport = transport is None
        self._transport = transport or HttpTransport()
        self._lock = threading.Lock()
        self._access_token = (access_token or "").strip() or None
        self._refresh_token = refresh_token.strip()
        self._expires_at = expires_at

    @classmethod
    def from_authorization_code(
        cls,
        client_id: str,
        code: str,
        code_verifier: str,
        *,
        client_secret: str = "",
        redirect_uri: Optional[str] = None,
        token_url: str = TOKEN_URL,
        transport: Optional[Transport] = None,
    ) -> RefreshableAuthenticator:
        """Exchange an authorization code for the first token pair.

        Args:
            client_id: Registered application client id.
            code: Code received on the redirect URI.
            code_verifier: PKCE verifier used to build the authorization URL.
            client_secret: Client secret, empty for public clients.
            redirect_uri: Redirect URI, required if several are registered.
            token_url: Token endpoint URL.
            transport: Transport for token endpoint calls.

        Returns:
            Authenticator holding the issued tokens.

        Raises:
            AuthRefreshFailedError: If the exchange failed.
        """
        owns_transport = transport is None
        transport = transport or HttpTransport()
        form = {
            "grant_type": "authorization_code",
            "client_id": client_id,
            "code": code,
            "code_verifier": code_verifier,
        }
        if client_secret:
            form["client_secret"] = client_secret
        if redirect_uri:
            form["redirect_uri"] = redirect_uri

        try:
            pair = request_token(transport, token_url, form)
            if not pair.refresh_token:
                raise AuthRefreshFailedError("Token endpoint response has no refresh_token")
        except AuthRefreshFailedError:
            if owns_transport:
                transport.close()
            raise
        log.info("Authorization code exchanged for client %s", client_id)
        authenticator = cls(
            client_id,
            pair.refresh_token,
            client_secret=client_secret,
            access_token=pair.access_token,
            expires_at=pair.expires_at,
            token_url=token_url,
            transport=transport,
        )
        authenticator._owns_transport = owns_transport
        return authenticator

    def close(self) -> None:
        """Close the token endpoint transport if this authenticator created it."""
        if self._owns_transport:
            self._transport.close()

    @property
    def refresh_token(self) -> str:
        with self._lock:
            return self._refresh_token

    @property
    def expires_at(self) -> Optional[datetime]:
        with self._lock:
            return self._expires_at

    @property
    def is_expired(self) -> bool:
        """Whether the known expiry has passed; informational only."""
        expires_at = self.expires_at
        return expires_at is not None and datetime.now(timezone.utc) >= expires_at

    def current_token(self) -> str:
        with self._lock:
            token = self._access_token
        if not token:
            raise InvalidAuthError("No access token held; call refresh() first")
        return token

    def refresh(self) -> None:
        """Mint a new access token with the refresh token.

        On failure the previously held token stays in place.

        Raises:
            AuthRefreshFailedError: If the token endpoint could not be reached or
                rejected the refresh token.
        """
        form = {
            "grant_type": "refresh_token",
            "client_id": self.client_id,
            "refresh_token": self.refresh_token,
        }
        if self.client_secret:
            form["client_secret"] = self.client_secret

        pair = request_token(self._transport, self.token_url, form)
        with self._lock:
            self._access_token = pair.access_token
            self._refresh_token = pair.refresh_token or self._refresh_token
            self._expires_at = pair.expires_at
        log.info("OAuth token refreshed for client %s (expires_at=%s)", self.client_id, pair.expires_at)


def request_token(transport: Transport, token_url: str, form: Mapping[str, str]) -> TokenPair:
    """POST `form` to the token endpoint and parse the issued token pair.

    Args:
        transport: Transport used for the call.
        token_url: Token endpoint URL.
        form: Grant parameters.

    Returns:
        Parsed TokenPair.

    Raises:
        AuthRefreshFailedError: On transport failure, non-2xx status or an
            unusable response body.
    """
    request = HttpRequest(method="POST", url=token_url, data=form)
    try:
        response = transport.send(request)
    except FailedRequestError as e:
        log.warning("Token endpoint unreachable: %s", e)
        raise AuthRefreshFailedError(f"Could not contact token endpoint: {e}") from e

    payload = _load_json(response.body)
    if not 200 <= response.status < 300:
        message = _token_error_message(payload) or f"HTTP {response.status}"
        log.warning("Token endpoint rejected the grant: HTTP %s %s", response.status, message)
        raise AuthRefreshFailedError(f"Token endpoint rejected the request: {message}", status=response.status)

    access_token = payload.get("access_token") if isinstance(payload, Mapping) else None
    if not isinstance(access_token, str) or not access_token.strip():
        raise AuthRefreshFailedError("Token endpoint response has no access_token", status=response.status)

    refresh_token = payload.get("refresh_token")
    expires_in = payload.get("expires_in")
    expires_at = None
    if isinstance(expires_in, (int, float)) and not isinstance(expires_in, bool):
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)

    return TokenPair(
        access_token=access_token.strip(),
        refresh_token=refresh_token.strip() if isinstance(refresh_token, str) else "",
        expires_at=expires_at,
        token_type=str(payload.get("token_type") or "Bearer"),
    )


def _load_json(body: bytes) -> Any:
    try:
        return json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None


def _token_error_message(payload: Any) -> str:
    if not isinstance(payload, Mapping):
        return ""
    for key in ("message", "hint", "error"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""
