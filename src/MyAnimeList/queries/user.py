"""Queries over a user's anime and manga lists."""

from __future__ import annotations

from MyAnimeList.api.executor import QueryExecutor
from MyAnimeList.api.paging import PagedResults
from MyAnimeList.api.parser import parse_anime_list_entry, parse_manga_list_entry
from MyAnimeList.core.models import AnimeListEntry, MangaListEntry
from MyAnimeList.core.query import (
    AnimeStatus,
    Endpoint,
    MangaStatus,
    QuerySpec,
    UserAnimeSort,
    UserMangaSort,
    option_value,
)
from MyAnimeList.queries.base import FieldSearch

SELF_USER = "@me"


class UserAnimeListQuery:
    """Entries of a user's anime list, `@me` for the authenticated user."""

    def __init__(self, executor: QueryExecutor, username: str = SELF_USER) -> None:
        self._search: FieldSearch[AnimeListEntry] = FieldSearch(
            executor, Endpoint.USER_ANIME_LIST, parse_anime_list_entry
        )
        self.username = username or SELF_USER
        self._status: str | None = None
        self._sort: str | None = None

    def with_status(self, status: AnimeStatus | str) -> UserAnimeListQuery:
        self._status = option_value(status)
        return self

    def with_sort(self, sort: UserAnimeSort | str) -> UserAnimeListQuery:
        self._sort = option_value(sort)
        return self

    def with_fields(self, *fields: str) -> UserAnimeListQuery:
        self._search.options.add_fields(fields)
        return self

    def with_limit(self, limit: int) -> UserAnimeListQuery:
        self._search.options.limit = limit
        return self

    def with_offset(self, offset: int) -> UserAnimeListQuery:
        self._search.options.offset = offset
        return self

    def include_nsfw(self, nsfw: bool = True) -> UserAnimeListQuery:
        self._search.options.nsfw = nsfw
        return self

    def spec(self) -> QuerySpec:
        return self._search.spec(target=self.username, status=self._status, sort=self._sort)

    def search(self) -> PagedResults[AnimeListEntry]:
        return self._search.search(target=self.username, status=self._status, sort=self._sort)


class UserMangaListQuery:
    """Entries of a user's manga list, `@me` for the authenticated user."""

    def __init__(self, executor: QueryExecutor, username: str = SELF_USER) -> None:
        self._search: FieldSearch[MangaListEntry] = FieldSearch(
            executor, Endpoint.USER_MANGA_LIST, parse_manga_list_entry
        )
        self.username = username or SELF_USER
        self._status: str | None = None
        self._sort: str | None = None

    def with_status(self, status: MangaStatus | str) -> UserMangaListQuery:
        self._status = option_value(status)
        return self

    def with_sort(self, sort: UserMangaSort | str) -> UserMangaListQuery:
        self._sort = option_value(sort)
        return self

    def with_fields(self, *fields: str) -> UserMangaListQuery:
        self._search.options.add_fields(fields)
        return self

    def with_limit(self, limit: int) -> UserMangaListQuery:
        self._search.options.limit = limit
        return self

    def with_offset(self, offset: int) -> UserMangaListQuery:
        self._search.options.offset = offset
        return self

    def include_nsfw(self, nsfw: bool = True) -> UserMangaListQuery:
        self._search.options.nsfw = nsfw
        return self

    def spec(self) -> QuerySpec:
        return self._search.spec(target=self.username, status=self._status, sort=self._sort)

    def search(self) -> PagedResults[MangaListEntry]:
        return self._search.search(target=self.username, status=self._status, sort=self._sort)
