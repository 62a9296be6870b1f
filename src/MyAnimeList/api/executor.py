"""Shared execution pipeline for every query.

token -> request builder -> transport -> response decoder. One call here is
one HTTP round trip; nothing is retried and the token is never refreshed
implicitly, so an `InvalidAuthError` reaches the caller who decides whether to
refresh and re-run the query.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Mapping, TypeVar

from MyAnimeList.api.paging import Page, PagedResults
from MyAnimeList.api.request import RequestBuilder
from MyAnimeList.api.response import ResponseDecoder
from MyAnimeList.api.transport import HttpResponse, Transport
from MyAnimeList.auth.authenticator import Authenticator
from MyAnimeList.core.query import QuerySpec
from MyAnimeList.utils.log import log

T = TypeVar("T")

Parser = Callable[[Mapping[str, Any]], T]


class QueryExecutor:
    """Run QuerySpecs through the authenticated request pipeline."""

    def __init__(
        self,
        authenticator: Authenticator,
        transport: Transport,
        builder: RequestBuilder,
        decoder: ResponseDecoder,
    ) -> None:
        self.authenticator = authenticator
        self.transport = transport
        self.builder = builder
        self.decoder = decoder

    def fetch(self, spec: QuerySpec, parse: Parser[T]) -> T:
        """Execute a single-entity query."""
        response = self._send(spec)
        return self.decoder.decode_entity(response.status, response.body, parse)

    def fetch_page(self, spec: QuerySpec, parse_item: Parser[T]) -> Page[T]:
        """Execute one listing request and return its page."""
        response = self._send(spec)
        return self.decoder.decode_page(response.status, response.body, parse_item)

    def fetch_pages(self, spec: QuerySpec, parse_item: Parser[T]) -> PagedResults[T]:
        """Execute a listing query and return its lazy result sequence.

        The first page is requested immediately, so errors in the query itself
        surface here. Later pages are requested one at a time as the sequence
        is advanced, always from the same spec with the server's cursor.
        """
        first_page = self.fetch_page(spec, parse_item)
        log.debug(
            "%s first page: %d items next=%s",
            spec.endpoint.value,
            len(first_page),
            bool(first_page.next),
        )

        def fetch_next(cursor: str) -> Page[T]:
            return self.fetch_page(spec.with_cursor(cursor), parse_item)

        return PagedResults(first_page, fetch_next)

    def execute(self, spec: QuerySpec) -> None:
        """Execute a query whose response body is not needed (DELETE)."""
        response = self._send(spec)
        self.decoder.decode_empty(response.status, response.body)

    def _send(self, spec: QuerySpec) -> HttpResponse:
        token = self.authenticator.current_token()
        log.debug("Execute %s %s query (%s)", spec.method, spec.kind.value, spec.endpoint.value)
        request = self.builder.build(spec, token)
        return self.transport.send(request)
