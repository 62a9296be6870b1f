from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence


def _freeze_extra(instance: object) -> None:
    # Keep a stable read-only mapping of the raw payload so fields that are
    # not modeled stay reachable without risking accidental mutation.
    object.__setattr__(instance, "extra", MappingProxyType(dict(instance.extra)))  # type: ignore[attr-defined]


@dataclass(frozen=True, slots=True)
class Picture:
    """Image URLs in two sizes."""

    medium: Optional[str] = None
    large: Optional[str] = None


@dataclass(frozen=True, slots=True)
class AlternativeTitles:
    """Synonyms plus English and Japanese titles."""

    synonyms: Sequence[str] = ()
    en: Optional[str] = None
    ja: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Genre:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class Studio:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class AnimeSeason:
    """Year and season an anime started airing."""

    year: Optional[int] = None
    season: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Broadcast:
    day_of_the_week: Optional[str] = None
    start_time: Optional[str] = None


@dataclass(frozen=True, slots=True)
class MangaAuthor:
    id: int
    first_name: str = ""
    last_name: str = ""
    role: str = ""


@dataclass(frozen=True, slots=True)
class Statistics:
    """List-status distribution for an anime.

    Attributes:
        num_list_users: Total users contributing to the statistic.
    """

    num_list_users: int = 0
    watching: int = 0
    completed: int = 0
    on_hold: int = 0
    dropped: int = 0
    plan_to_watch: int = 0


@dataclass(frozen=True, slots=True)
class AnimeListStatus:
    """The authenticated user's list entry for one anime."""

    status: Optional[str] = None
    score: int = 0
    num_episodes_watched: int = 0
    is_rewatching: bool = False
    start_date: Optional[str] = None
    finish_date: Optional[str] = None
    priority: int = 0
    num_times_rewatched: int = 0
    rewatch_value: int = 0
    tags: Sequence[str] = ()
    comments: str = ""
    updated_at: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class MangaListStatus:
    """The authenticated user's list entry for one manga."""

    status: Optional[str] = None
    score: int = 0
    num_volumes_read: int = 0
    num_chapters_read: int = 0
    is_rereading: bool = False
    start_date: Optional[str] = None
    finish_date: Optional[str] = None
    priority: int = 0
    num_times_reread: int = 0
    reread_value: int = 0
    tags: Sequence[str] = ()
    comments: str = ""
    updated_at: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class Anime:
    """Anime record, fully or partially populated depending on the fields requested.

    Only `id` and `title` are always present. Calendar dates (`start_date`,
    `end_date`) stay strings because the API returns partial dates such as
    "2017" or "2017-10".

    Attributes:
        extra: Raw payload, including fields that are not modeled here
            (e.g. `related_anime`, `recommendations`, `pictures`).
    """

    id: int
    title: str
    main_picture: Optional[Picture] = None
    alternative_titles: Optional[AlternativeTitles] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    synopsis: Optional[str] = None
    mean: Optional[float] = None
    rank: Optional[int] = None
    popularity: Optional[int] = None
    num_list_users: Optional[int] = None
    num_scoring_users: Optional[int] = None
    nsfw: Optional[str] = None
    genres: Sequence[Genre] = ()
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    media_type: Optional[str] = None
    status: Optional[str] = None
    my_list_status: Optional[AnimeListStatus] = None
    num_episodes: Optional[int] = None
    start_season: Optional[AnimeSeason] = None
    broadcast: Optional[Broadcast] = None
    source: Optional[str] = None
    average_episode_duration: Optional[int] = None
    rating: Optional[str] = None
    background: Optional[str] = None
    studios: Sequence[Studio] = ()
    statistics: Optional[Statistics] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _freeze_extra(self)


@dataclass(frozen=True, slots=True)
class Manga:
    """Manga record, fully or partially populated depending on the fields requested."""

    id: int
    title: str
    main_picture: Optional[Picture] = None
    alternative_titles: Optional[AlternativeTitles] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    synopsis: Optional[str] = None
    mean: Optional[float] = None
    rank: Optional[int] = None
    popularity: Optional[int] = None
    num_list_users: Optional[int] = None
    num_scoring_users: Optional[int] = None
    nsfw: Optional[str] = None
    genres: Sequence[Genre] = ()
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    media_type: Optional[str] = None
    status: Optional[str] = None
    my_list_status: Optional[MangaListStatus] = None
    num_volumes: Optional[int] = None
    num_chapters: Optional[int] = None
    authors: Sequence[MangaAuthor] = ()
    background: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _freeze_extra(self)


@dataclass(frozen=True, slots=True)
class AnimeRanking:
    anime: Anime
    rank: int
    previous_rank: Optional[int] = None


@dataclass(frozen=True, slots=True)
class MangaRanking:
    manga: Manga
    rank: int
    previous_rank: Optional[int] = None


@dataclass(frozen=True, slots=True)
class AnimeListEntry:
    """One row of a user's anime list."""

    anime: Anime
    list_status: Optional[AnimeListStatus] = None


@dataclass(frozen=True, slots=True)
class MangaListEntry:
    """One row of a user's manga list."""

    manga: Manga
    list_status: Optional[MangaListStatus] = None


@dataclass(frozen=True, slots=True)
class UserAnimeStatistics:
    """Aggregated anime list statistics of a user."""

    num_items_watching: int = 0
    num_items_completed: int = 0
    num_items_on_hold: int = 0
    num_items_dropped: int = 0
    num_items_plan_to_watch: int = 0
    num_items: int = 0
    num_days_watched: float = 0.0
    num_days_watching: float = 0.0
    num_days_completed: float = 0.0
    num_days_on_hold: float = 0.0
    num_days_dropped: float = 0.0
    num_days: float = 0.0
    num_episodes: int = 0
    num_times_rewatched: int = 0
    mean_score: float = 0.0


@dataclass(frozen=True, slots=True)
class User:
    id: int
    name: str
    picture: Optional[str] = None
    gender: Optional[str] = None
    birthday: Optional[str] = None
    location: Optional[str] = None
    joined_at: Optional[datetime] = None
    anime_statistics: Optional[UserAnimeStatistics] = None
    time_zone: Optional[str] = None
    is_supporter: Optional[bool] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _freeze_extra(self)


@dataclass(frozen=True, slots=True)
class ForumSubBoard:
    id: int
    title: str


@dataclass(frozen=True, slots=True)
class ForumBoard:
    id: int
    title: str
    description: str = ""
    subboards: Sequence[ForumSubBoard] = ()


@dataclass(frozen=True, slots=True)
class ForumCategory:
    """Top level forum grouping of boards."""

    title: str
    boards: Sequence[ForumBoard] = ()


@dataclass(frozen=True, slots=True)
class ForumUser:
    id: Optional[int] = None
    name: str = ""
    forum_avatar: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ForumTopic:
    """Forum topic as listed by a topic search."""

    id: int
    title: str
    created_at: Optional[datetime] = None
    created_by: Optional[ForumUser] = None
    number_of_posts: int = 0
    last_post_created_at: Optional[datetime] = None
    last_post_created_by: Optional[ForumUser] = None
    is_locked: bool = False


@dataclass(frozen=True, slots=True)
class ForumPost:
    id: int
    number: int
    created_at: Optional[datetime] = None
    created_by: Optional[ForumUser] = None
    body: str = ""
    signature: str = ""


@dataclass(frozen=True, slots=True)
class PollOption:
    id: int
    text: str
    votes: int = 0


@dataclass(frozen=True, slots=True)
class Poll:
    id: int
    question: str
    closed: bool = False
    options: Sequence[PollOption] = ()


@dataclass(frozen=True, slots=True)
class ForumTopicDetail:
    """A forum topic with its posts and optional poll."""

    title: str
    posts: Sequence[ForumPost] = ()
    poll: Optional[Poll] = None
