"""Anime listing queries: search, ranking, season and suggestions."""

from __future__ import annotations

import warnings

from MyAnimeList.api.executor import QueryExecutor
from MyAnimeList.api.paging import PagedResults
from MyAnimeList.api.parser import parse_anime_node, parse_anime_ranking
from MyAnimeList.core.models import Anime, AnimeRanking
from MyAnimeList.core.query import (
    AnimeRankingType,
    AnimeSeasonSort,
    Endpoint,
    QuerySpec,
    Season,
    option_value,
)
from MyAnimeList.queries.base import FieldSearch


class AnimeSearchQuery:
    """Search anime by title text.

    Example:
        >>> results = mal.search_anime().with_query("frieren").with_limit(10).search()
        >>> first = next(results)
    """

    def __init__(self, executor: QueryExecutor) -> None:
        self._search: FieldSearch[Anime] = FieldSearch(executor, Endpoint.ANIME_SEARCH, parse_anime_node)
        self._query: str | None = None

    def with_query(self, query: str) -> AnimeSearchQuery:
        self._query = query
        return self

    def with_fields(self, *fields: str) -> AnimeSearchQuery:
        self._search.options.add_fields(fields)
        return self

    def with_limit(self, limit: int) -> AnimeSearchQuery:
        self._search.options.limit = limit
        return self

    def with_offset(self, offset: int) -> AnimeSearchQuery:
        self._search.options.offset = offset
        return self

    def include_nsfw(self, nsfw: bool = True) -> AnimeSearchQuery:
        self._search.options.nsfw = nsfw
        return self

    def spec(self) -> QuerySpec:
        """Snapshot of the current query state."""
        return self._search.spec(query=self._query)

    def search(self) -> PagedResults[Anime]:
        """Run the search and return a lazy sequence of Anime.

        Raises:
            ApiError: If the first page request fails.
        """
        return self._search.search(query=self._query)


class AnimeRankingQuery:
    """Anime ranked by the given ranking type."""

    def __init__(self, executor: QueryExecutor, ranking_type: AnimeRankingType | str) -> None:
        self._search: FieldSearch[AnimeRanking] = FieldSearch(
            executor, Endpoint.ANIME_RANKING, parse_anime_ranking
        )
        self.ranking_type = option_value(ranking_type)

    def with_fields(self, *fields: str) -> AnimeRankingQuery:
        self._search.options.add_fields(fields)
        return self

    def with_limit(self, limit: int) -> AnimeRankingQuery:
        self._search.options.limit = limit
        return self

    def with_offset(self, offset: int) -> AnimeRankingQuery:
        self._search.options.offset = offset
        return self

    def include_nsfw(self, nsfw: bool = True) -> AnimeRankingQuery:
        """Set the nsfw flag.

        Deprecated: the ranking endpoint accepts the flag but ignores it.
        """
        warnings.warn(
            "The ranking endpoint ignores the nsfw flag",
            DeprecationWarning,
            stacklevel=2,
        )
        self._search.options.nsfw = nsfw
        return self

    def spec(self) -> QuerySpec:
        return self._search.spec(ranking_type=self.ranking_type)

    def search(self) -> PagedResults[AnimeRanking]:
        return self._search.search(ranking_type=self.ranking_type)


class AnimeSeasonQuery:
    """Anime that started airing in one season of one year."""

    def __init__(self, executor: QueryExecutor, year: int, season: Season | str) -> None:
        self._search: FieldSearch[Anime] = FieldSearch(executor, Endpoint.ANIME_SEASON, parse_anime_node)
        self.year = year
        self.season = option_value(season)
        self._sort: str | None = None

    def with_sort(self, sort: AnimeSeasonSort | str) -> AnimeSeasonQuery:
        self._sort = option_value(sort)
        return self

    def with_fields(self, *fields: str) -> AnimeSeasonQuery:
        self._search.options.add_fields(fields)
        return self

    def with_limit(self, limit: int) -> AnimeSeasonQuery:
        self._search.options.limit = limit
        return self

    def with_offset(self, offset: int) -> AnimeSeasonQuery:
        self._search.options.offset = offset
        return self

    def include_nsfw(self, nsfw: bool = True) -> AnimeSeasonQuery:
        self._search.options.nsfw = nsfw
        return self

    def spec(self) -> QuerySpec:
        return self._search.spec(year=self.year, season=self.season, sort=self._sort)

    def search(self) -> PagedResults[Anime]:
        return self._search.search(year=self.year, season=self.season, sort=self._sort)


class AnimeSuggestionQuery:
    """Anime suggested for the authenticated user."""

    def __init__(self, executor: QueryExecutor) -> None:
        self._search: FieldSearch[Anime] = FieldSearch(executor, Endpoint.ANIME_SUGGESTIONS, parse_anime_node)

    def with_fields(self, *fields: str) -> AnimeSuggestionQuery:
        self._search.options.add_fields(fields)
        return self

    def with_limit(self, limit: int) -> AnimeSuggestionQuery:
        self._search.options.limit = limit
        return self

    def with_offset(self, offset: int) -> AnimeSuggestionQuery:
        self._search.options.offset = offset
        return self

    def include_nsfw(self, nsfw: bool = True) -> AnimeSuggestionQuery:
        self._search.options.nsfw = nsfw
        return self

    def spec(self) -> QuerySpec:
        return self._search.spec()

    def search(self) -> PagedResults[Anime]:
        return self._search.search()
