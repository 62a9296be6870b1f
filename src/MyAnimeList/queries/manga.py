"""Manga listing queries: search and ranking."""

from __future__ import annotations

from MyAnimeList.api.executor import QueryExecutor
from MyAnimeList.api.paging import PagedResults
from MyAnimeList.api.parser import parse_manga_node, parse_manga_ranking
from MyAnimeList.core.models import Manga, MangaRanking
from MyAnimeList.core.query import Endpoint, MangaRankingType, QuerySpec, option_value
from MyAnimeList.queries.base import FieldSearch


class MangaSearchQuery:
    """Search manga by title text."""

    def __init__(self, executor: QueryExecutor) -> None:
        self._search: FieldSearch[Manga] = FieldSearch(executor, Endpoint.MANGA_SEARCH, parse_manga_node)
        self._query: str | None = None

    def with_query(self, query: str) -> MangaSearchQuery:
        self._query = query
        return self

    def with_fields(self, *fields: str) -> MangaSearchQuery:
        self._search.options.add_fields(fields)
        return self

    def with_limit(self, limit: int) -> MangaSearchQuery:
        self._search.options.limit = limit
        return self

    def with_offset(self, offset: int) -> MangaSearchQuery:
        self._search.options.offset = offset
        return self

    def include_nsfw(self, nsfw: bool = True) -> MangaSearchQuery:
        self._search.options.nsfw = nsfw
        return self

    def spec(self) -> QuerySpec:
        return self._search.spec(query=self._query)

    def search(self) -> PagedResults[Manga]:
        return self._search.search(query=self._query)


class MangaRankingQuery:
    """Manga ranked by the given ranking type."""

    def __init__(self, executor: QueryExecutor, ranking_type: MangaRankingType | str) -> None:
        self._search: FieldSearch[MangaRanking] = FieldSearch(
            executor, Endpoint.MANGA_RANKING, parse_manga_ranking
        )
        self.ranking_type = option_value(ranking_type)

    def with_fields(self, *fields: str) -> MangaRankingQuery:
        self._search.options.add_fields(fields)
        return self

    def with_limit(self, limit: int) -> MangaRankingQuery:
        self._search.options.limit = limit
        return self

    def with_offset(self, offset: int) -> MangaRankingQuery:
        self._search.options.offset = offset
        return self

    def spec(self) -> QuerySpec:
        return self._search.spec(ranking_type=self.ranking_type)

    def search(self) -> PagedResults[MangaRanking]:
        return self._search.search(ranking_type=self.ranking_type)
