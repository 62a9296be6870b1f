"""Single-shot updates of the authenticated user's list entries.

Each updater accumulates the attributes to change and sends them as one
form-encoded PATCH when `update()` is called; unset attributes are left
untouched on the server.
"""

from __future__ import annotations

from typing import Any

from MyAnimeList.api.executor import QueryExecutor
from MyAnimeList.api.parser import parse_anime_list_status, parse_manga_list_status
from MyAnimeList.core.models import AnimeListStatus, MangaListStatus
from MyAnimeList.core.query import AnimeStatus, Endpoint, MangaStatus, QuerySpec, option_value


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return option_value(value)


class AnimeListUpdate:
    """Create or change the list entry of one anime."""

    def __init__(self, executor: QueryExecutor, anime_id: int) -> None:
        self._executor = executor
        self.anime_id = anime_id
        self._form: dict[str, Any] = {}

    def status(self, status: AnimeStatus | str) -> AnimeListUpdate:
        self._form["status"] = status
        return self

    def rewatching(self, rewatching: bool) -> AnimeListUpdate:
        self._form["is_rewatching"] = rewatching
        return self

    def score(self, score: int) -> AnimeListUpdate:
        """Score from 0 (unscored) to 10."""
        self._form["score"] = score
        return self

    def episodes_watched(self, episodes: int) -> AnimeListUpdate:
        self._form["num_watched_episodes"] = episodes
        return self

    def priority(self, priority: int) -> AnimeListUpdate:
        """Priority from 0 (low) to 2 (high)."""
        self._form["priority"] = priority
        return self

    def times_rewatched(self, times: int) -> AnimeListUpdate:
        self._form["num_times_rewatched"] = times
        return self

    def rewatch_value(self, value: int) -> AnimeListUpdate:
        """Rewatch value from 0 to 5."""
        self._form["rewatch_value"] = value
        return self

    def tags(self, *tags: str) -> AnimeListUpdate:
        self._form["tags"] = tags
        return self

    def comments(self, comments: str) -> AnimeListUpdate:
        self._form["comments"] = comments
        return self

    def spec(self) -> QuerySpec:
        return QuerySpec(
            endpoint=Endpoint.ANIME_LIST_STATUS,
            method="PATCH",
            target=str(self.anime_id),
            form={key: _form_value(value) for key, value in self._form.items()},
        )

    def update(self) -> AnimeListStatus:
        """Send the update and return the list entry as stored by the server.

        Raises:
            ApiError: If the request fails.
        """
        return self._executor.fetch(self.spec(), parse_anime_list_status)


class MangaListUpdate:
    """Create or change the list entry of one manga."""

    def __init__(self, executor: QueryExecutor, manga_id: int) -> None:
        self._executor = executor
        self.manga_id = manga_id
        self._form: dict[str, Any] = {}

    def status(self, status: MangaStatus | str) -> MangaListUpdate:
        self._form["status"] = status
        return self

    def rereading(self, rereading: bool) -> MangaListUpdate:
        self._form["is_rereading"] = rereading
        return self

    def score(self, score: int) -> MangaListUpdate:
        self._form["score"] = score
        return self

    def volumes_read(self, volumes: int) -> MangaListUpdate:
        self._form["num_volumes_read"] = volumes
        return self

    def chapters_read(self, chapters: int) -> MangaListUpdate:
        self._form["num_chapters_read"] = chapters
        return self

    def priority(self, priority: int) -> MangaListUpdate:
        self._form["priority"] = priority
        return self

    def times_reread(self, times: int) -> MangaListUpdate:
        self._form["num_times_reread"] = times
        return self

    def reread_value(self, value: int) -> MangaListUpdate:
        self._form["reread_value"] = value
        return self

    def tags(self, *tags: str) -> MangaListUpdate:
        self._form["tags"] = tags
        return self

    def comments(self, comments: str) -> MangaListUpdate:
        self._form["comments"] = comments
        return self

    def spec(self) -> QuerySpec:
        return QuerySpec(
            endpoint=Endpoint.MANGA_LIST_STATUS,
            method="PATCH",
            target=str(self.manga_id),
            form={key: _form_value(value) for key, value in self._form.items()},
        )

    def update(self) -> MangaListStatus:
        return self._executor.fetch(self.spec(), parse_manga_list_status)
