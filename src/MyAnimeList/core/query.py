from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from MyAnimeList.utils.log import log


class ResourceKind(str, Enum):
    ANIME = "anime"
    MANGA = "manga"
    USER = "user"
    FORUM = "forum"


class Endpoint(str, Enum):
    """Every API operation the client can address.

    The path template of each endpoint lives in the request builder; this enum
    only carries what the query layer needs (resource kind and page size cap).
    """

    ANIME_SEARCH = "anime_search"
    ANIME_DETAIL = "anime_detail"
    ANIME_RANKING = "anime_ranking"
    ANIME_SEASON = "anime_season"
    ANIME_SUGGESTIONS = "anime_suggestions"
    ANIME_LIST_STATUS = "anime_list_status"
    USER_ANIME_LIST = "user_anime_list"
    MANGA_SEARCH = "manga_search"
    MANGA_DETAIL = "manga_detail"
    MANGA_RANKING = "manga_ranking"
    MANGA_LIST_STATUS = "manga_list_status"
    USER_MANGA_LIST = "user_manga_list"
    USER_DETAIL = "user_detail"
    FORUM_BOARDS = "forum_boards"
    FORUM_TOPIC = "forum_topic"
    FORUM_TOPICS = "forum_topics"

    @property
    def kind(self) -> ResourceKind:
        if self is Endpoint.USER_DETAIL:
            return ResourceKind.USER
        if self.name.startswith("FORUM"):
            return ResourceKind.FORUM
        if "MANGA" in self.name:
            return ResourceKind.MANGA
        return ResourceKind.ANIME

    @property
    def max_limit(self) -> int | None:
        """Largest page size the API accepts, None for non-paginated endpoints."""
        return _MAX_LIMITS.get(self)


_MAX_LIMITS: dict[Endpoint, int] = {
    Endpoint.ANIME_SEARCH: 100,
    Endpoint.ANIME_RANKING: 500,
    Endpoint.ANIME_SEASON: 500,
    Endpoint.ANIME_SUGGESTIONS: 100,
    Endpoint.USER_ANIME_LIST: 1000,
    Endpoint.MANGA_SEARCH: 100,
    Endpoint.MANGA_RANKING: 500,
    Endpoint.USER_MANGA_LIST: 1000,
    Endpoint.FORUM_TOPIC: 100,
    Endpoint.FORUM_TOPICS: 100,
}


class AnimeRankingType(str, Enum):
    ALL = "all"
    AIRING = "airing"
    UPCOMING = "upcoming"
    TV = "tv"
    OVA = "ova"
    MOVIE = "movie"
    SPECIAL = "special"
    BY_POPULARITY = "bypopularity"
    FAVORITE = "favorite"


class MangaRankingType(str, Enum):
    ALL = "all"
    MANGA = "manga"
    NOVELS = "novels"
    ONE_SHOTS = "oneshots"
    DOUJIN = "doujin"
    MANHWA = "manhwa"
    MANHUA = "manhua"
    BY_POPULARITY = "bypopularity"
    FAVORITE = "favorite"


class Season(str, Enum):
    WINTER = "winter"
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"


class AnimeSeasonSort(str, Enum):
    SCORE = "anime_score"
    USERS = "anime_num_list_users"


class AnimeStatus(str, Enum):
    WATCHING = "watching"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    DROPPED = "dropped"
    PLAN_TO_WATCH = "plan_to_watch"


class MangaStatus(str, Enum):
    READING = "reading"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    DROPPED = "dropped"
    PLAN_TO_READ = "plan_to_read"


class UserAnimeSort(str, Enum):
    LIST_SCORE = "list_score"
    LIST_UPDATED_AT = "list_updated_at"
    ANIME_TITLE = "anime_title"
    ANIME_START_DATE = "anime_start_date"


class UserMangaSort(str, Enum):
    LIST_SCORE = "list_score"
    LIST_UPDATED_AT = "list_updated_at"
    MANGA_TITLE = "manga_title"
    MANGA_START_DATE = "manga_start_date"


class ForumTopicSort(str, Enum):
    RECENT = "recent"


def option_value(value: object) -> str:
    """Return the wire value of an enum member or plain value."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


@dataclass(frozen=True, slots=True)
class QuerySpec:
    """Immutable snapshot of everything needed to build one HTTP request.

    Attributes:
        endpoint: Addressed API operation.
        method: HTTP method.
        target: Path identifier (anime/manga/topic id or username).
        year: Season year for seasonal listings.
        season: Season name for seasonal listings.
        query: Free-text search term (`q`).
        fields: Requested field names; empty means API default fields.
        limit: Page size, already clamped to the endpoint maximum.
        offset: Manual page offset, never combined with `cursor`.
        cursor: Opaque next/previous page URL returned by the server.
        ranking_type: Ranking type name.
        sort: Sort order name.
        status: List status filter.
        nsfw: NSFW flag, sent as `true`/`false` when set.
        params: Additional query parameters (forum filters).
        form: Form body for PATCH requests.
    """

    endpoint: Endpoint
    method: str = "GET"
    target: str | None = None
    year: int | None = None
    season: str | None = None
    query: str | None = None
    fields: frozenset[str] = frozenset()
    limit: int | None = None
    offset: int | None = None
    cursor: str | None = None
    ranking_type: str | None = None
    sort: str | None = None
    status: str | None = None
    nsfw: bool | None = None
    params: Mapping[str, str] = field(default_factory=dict)
    form: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", frozenset(self.fields))
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))
        object.__setattr__(self, "form", MappingProxyType(dict(self.form)))

    @property
    def kind(self) -> ResourceKind:
        return self.endpoint.kind

    def with_cursor(self, cursor: str) -> QuerySpec:
        """Return a copy addressing `cursor`; the cursor supersedes any offset."""
        return replace(self, cursor=cursor, offset=None)


class QueryOptions:
    """Mutable accumulator for the options every field-restrictable query shares.

    Query objects compose one of these with their own filters and call
    `snapshot` at execution time, so later setter calls never leak into a
    request that was already built.
    """

    def __init__(self) -> None:
        self.fields: set[str] = set()
        self.limit: int | None = None
        self.offset: int | None = None
        self.nsfw: bool | None = None

    def add_fields(self, fields: Iterable[str]) -> None:
        for name in fields:
            name = str(name).strip()
            if name:
                self.fields.add(name)

    def snapshot(self, endpoint: Endpoint, **filters: object) -> QuerySpec:
        """Freeze the accumulated options plus `filters` into a QuerySpec.

        Args:
            endpoint: Endpoint the spec addresses.
            **filters: Remaining QuerySpec attributes (target, sort, ...).

        Returns:
            A new QuerySpec; the limit is clamped to the endpoint maximum.
        """
        limit = self.limit
        max_limit = endpoint.max_limit
        if limit is not None and max_limit is not None and limit > max_limit:
            log.debug("Clamp limit %d to %s maximum %d", limit, endpoint.value, max_limit)
            limit = max_limit
        return QuerySpec(
            endpoint=endpoint,
            fields=frozenset(self.fields),
            limit=limit,
            offset=self.offset,
            nsfw=self.nsfw,
            **filters,  # type: ignore[arg-type]
        )
