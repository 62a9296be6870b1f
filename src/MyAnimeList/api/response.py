"""Response decoding: HTTP status and body to entity, page, or typed error.

Decoding is pure. It never retries and never touches the authenticator;
those decisions belong to the caller.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any, Mapping, TypeVar

from MyAnimeList.api.paging import Page
from MyAnimeList.core.errors import ApiError, FailedRequestError, error_for_status

T = TypeVar("T")

_MAX_MESSAGE_CHARS = 500


class ResponseDecoder:
    """Classify responses and parse successful bodies."""

    def decode_entity(self, status: int, body: bytes, parse: Callable[[Mapping[str, Any]], T]) -> T:
        """Decode a single-entity response.

        Args:
            status: HTTP status code.
            body: Raw response body.
            parse: Maps the decoded JSON object to the entity.

        Returns:
            The parsed entity.

        Raises:
            InvalidParametersError: On HTTP 400.
            InvalidAuthError: On HTTP 401.
            ConnectionForbiddenError: On HTTP 403.
            FailedRequestError: On any other non-2xx status or a malformed body.
        """
        self._raise_for_status(status, body)
        payload = self._load_object(status, body)
        try:
            return parse(payload)
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise FailedRequestError(f"Malformed response body: {e!r}", status=status) from e

    def decode_page(self, status: int, body: bytes, parse_item: Callable[[Mapping[str, Any]], T]) -> Page[T]:
        """Decode a listing response shaped `{data: [...], paging: {previous?, next?}}`.

        Raises:
            Same as `decode_entity`.
        """
        self._raise_for_status(status, body)
        payload = self._load_object(status, body)

        data = payload.get("data")
        if not isinstance(data, list):
            raise FailedRequestError("Malformed listing body: 'data' is not a list", status=status)
        paging = payload.get("paging")
        if paging is None:
            paging = {}
        if not isinstance(paging, Mapping):
            raise FailedRequestError("Malformed listing body: 'paging' is not an object", status=status)

        try:
            items = [parse_item(item) for item in data]
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise FailedRequestError(f"Malformed listing item: {e!r}", status=status) from e

        return Page(
            items=items,
            previous=_link(paging.get("previous")),
            next=_link(paging.get("next")),
        )

    def decode_empty(self, status: int, body: bytes) -> None:
        """Check a response whose body carries no result (e.g. DELETE)."""
        self._raise_for_status(status, body)

    @staticmethod
    def classify_error(status: int, body: bytes) -> ApiError | None:
        """Return the error a response represents, or None for 2xx statuses."""
        if 200 <= status < 300:
            return None
        return error_for_status(status, _error_message(status, body))

    def _raise_for_status(self, status: int, body: bytes) -> None:
        error = self.classify_error(status, body)
        if error is not None:
            raise error

    @staticmethod
    def _load_object(status: int, body: bytes) -> Mapping[str, Any]:
        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise FailedRequestError(f"Response body is not valid JSON: {e}", status=status) from e
        if not isinstance(payload, Mapping):
            raise FailedRequestError("Response body is not a JSON object", status=status)
        return payload


def _error_message(status: int, body: bytes) -> str:
    """Extract the upstream message from an error body.

    The API answers errors with `{"error": "...", "message": "..."}`; other
    bodies are reported as raw text.
    """
    text = body.decode("utf-8", errors="replace").strip()
    try:
        payload = json.loads(text) if text else None
    except json.JSONDecodeError:
        payload = None

    if isinstance(payload, Mapping):
        message = payload.get("message") or payload.get("error")
        if isinstance(message, str) and message.strip():
            return message.strip()
    if text:
        return text[:_MAX_MESSAGE_CHARS]
    return f"HTTP {status}"


def _link(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
