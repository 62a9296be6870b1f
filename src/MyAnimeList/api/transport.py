"""HTTP transport over a reusable requests session.

The transport performs exactly one round trip per call. Retries, backoff and
rate limiting are the caller's concern.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Optional, Protocol

import requests

from MyAnimeList.api.request import HttpRequest
from MyAnimeList.core.errors import FailedRequestError
from MyAnimeList.utils.log import log

DEFAULT_TIMEOUT: Final[float] = 30.0

HEADERS: Final[dict[str, str]] = {
    "User-Agent": "myanimelist-client/1.0",
    "Accept": "application/json",
}


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Status code and raw body of a completed round trip."""

    status: int
    body: bytes


class Transport(Protocol):
    """Protocol for anything able to send an HttpRequest."""

    def send(self, request: HttpRequest) -> HttpResponse:
        """Send one request and return its response.

        Raises:
            FailedRequestError: If no response could be obtained.
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release held connections."""
        raise NotImplementedError


class HttpTransport:
    """`requests`-backed transport.

    Responsible only for moving bytes; status interpretation happens in the
    response decoder.
    """

    def __init__(
        self,
        *,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the transport with a reusable HTTP session.

        Args:
            timeout: Per-request timeout in seconds.
            user_agent: Overrides the default User-Agent header.
            session: Session to use instead of a private one.
        """
        self.timeout = timeout or DEFAULT_TIMEOUT
        self._session = session or requests.Session()
        self._headers = dict(HEADERS)
        if user_agent:
            self._headers["User-Agent"] = user_agent

    def close(self) -> None:
        """Close the underlying HTTP session and release pooled connections.
        """
        self._session.close()

    def __enter__(self) -> HttpTransport:
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager and close session."""
        self.close()

    def send(self, request: HttpRequest) -> HttpResponse:
        """Send `request` once.

        Args:
            request: Request to send.

        Returns:
            HttpResponse with the upstream status and body, whatever the status.

        Raises:
            FailedRequestError: On timeouts, connection errors and other
                `requests` failures.
        """
        headers = dict(self._headers)
        headers.update(request.headers)
        log.debug("%s %s params=%s", request.method, request.url, dict(request.params))
        try:
            resp = self._session.request(
                request.method,
                request.url,
                params=dict(request.params) or None,
                data=dict(request.data) or None,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.warning("%s %s failed: %s", request.method, request.url, type(e).__name__)
            raise FailedRequestError(f"{request.method} {request.url} failed: {e}") from e

        log.debug("Response status=%s bytes=%s", resp.status_code, len(resp.content))
        return HttpResponse(status=resp.status_code, body=resp.content)
