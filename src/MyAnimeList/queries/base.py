"""Field-restrictable search capability shared by the listing queries."""

from __future__ import annotations

from typing import Any, Generic, Mapping, TypeVar

from MyAnimeList.api.executor import Parser, QueryExecutor
from MyAnimeList.api.paging import PagedResults
from MyAnimeList.core.query import Endpoint, QueryOptions, QuerySpec

T = TypeVar("T")


class FieldSearch(Generic[T]):
    """Fields/limit/offset/nsfw state plus execution for one listing endpoint.

    Resource queries own one instance and add their own filters at execution
    time. Every `search()` call takes a fresh QuerySpec snapshot and starts an
    independent result sequence.
    """

    def __init__(self, executor: QueryExecutor, endpoint: Endpoint, parse_item: Parser[T]) -> None:
        self.executor = executor
        self.endpoint = endpoint
        self.parse_item = parse_item
        self.options = QueryOptions()

    def spec(self, **filters: Any) -> QuerySpec:
        return self.options.snapshot(self.endpoint, **filters)

    def search(self, **filters: Any) -> PagedResults[T]:
        return self.executor.fetch_pages(self.spec(**filters), self.parse_item)


def drop_unset(filters: Mapping[str, Any]) -> dict[str, Any]:
    """Remove None values from a filter mapping."""
    return {key: value for key, value in filters.items() if value is not None}
