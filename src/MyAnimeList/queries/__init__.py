"""Fluent query builders returned by the MyAnimeList facade."""

from __future__ import annotations

from MyAnimeList.queries.anime import (
    AnimeRankingQuery,
    AnimeSearchQuery,
    AnimeSeasonQuery,
    AnimeSuggestionQuery,
)
from MyAnimeList.queries.forum import ForumSearchQuery
from MyAnimeList.queries.listing import AnimeListUpdate, MangaListUpdate
from MyAnimeList.queries.manga import MangaRankingQuery, MangaSearchQuery
from MyAnimeList.queries.user import UserAnimeListQuery, UserMangaListQuery

__all__ = [
    "AnimeListUpdate",
    "AnimeRankingQuery",
    "AnimeSearchQuery",
    "AnimeSeasonQuery",
    "AnimeSuggestionQuery",
    "ForumSearchQuery",
    "MangaListUpdate",
    "MangaRankingQuery",
    "MangaSearchQuery",
    "UserAnimeListQuery",
    "UserMangaListQuery",
]
