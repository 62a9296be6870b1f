"""Typed client for the MyAnimeList v2 API."""

from __future__ import annotations

from MyAnimeList.api.fields import (
    ANIME_FIELDS,
    ANIME_LIST_FIELDS,
    MANGA_FIELDS,
    MANGA_LIST_FIELDS,
    USER_FIELDS,
)
from MyAnimeList.api.paging import Page, PagedResults
from MyAnimeList.auth import RefreshableAuthenticator, StaticTokenAuthenticator
from MyAnimeList.client import MyAnimeList
from MyAnimeList.core.errors import (
    ApiError,
    AuthRefreshFailedError,
    ConnectionForbiddenError,
    ErrorKind,
    FailedRequestError,
    InvalidAuthError,
    InvalidParametersError,
    MyAnimeListError,
)
from MyAnimeList.core.query import (
    AnimeRankingType,
    AnimeSeasonSort,
    AnimeStatus,
    ForumTopicSort,
    MangaRankingType,
    MangaStatus,
    Season,
    UserAnimeSort,
    UserMangaSort,
)

__version__ = "1.0.0"

__all__ = [
    "ANIME_FIELDS",
    "ANIME_LIST_FIELDS",
    "MANGA_FIELDS",
    "MANGA_LIST_FIELDS",
    "USER_FIELDS",
    "AnimeRankingType",
    "AnimeSeasonSort",
    "AnimeStatus",
    "ApiError",
    "AuthRefreshFailedError",
    "ConnectionForbiddenError",
    "ErrorKind",
    "FailedRequestError",
    "ForumTopicSort",
    "InvalidAuthError",
    "InvalidParametersError",
    "MangaRankingType",
    "MangaStatus",
    "MyAnimeList",
    "MyAnimeListError",
    "Page",
    "PagedResults",
    "RefreshableAuthenticator",
    "Season",
    "StaticTokenAuthenticator",
    "UserAnimeSort",
    "UserMangaSort",
]
