"""MyAnimeList payload parser.

Maps decoded JSON mappings to entity dataclasses. Parsers tolerate missing
optional keys (partial field projections) but require `id`/`title` style
identity keys; a missing identity key raises KeyError, which the response
decoder reports as a malformed body.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from dateutil import parser as dt_parser

from MyAnimeList.core.models import (
    AlternativeTitles,
    Anime,
    AnimeListEntry,
    AnimeListStatus,
    AnimeRanking,
    AnimeSeason,
    Broadcast,
    ForumBoard,
    ForumCategory,
    ForumPost,
    ForumSubBoard,
    ForumTopic,
    ForumTopicDetail,
    ForumUser,
    Genre,
    Manga,
    MangaAuthor,
    MangaListEntry,
    MangaListStatus,
    MangaRanking,
    Picture,
    Poll,
    PollOption,
    Statistics,
    Studio,
    User,
    UserAnimeStatistics,
)


def parse_anime(item: Mapping[str, Any]) -> Anime:
    """Parse an anime object (detail body or listing `node`)."""
    return Anime(
        id=int(item["id"]),
        title=_safe_str(item.get("title")),
        main_picture=_parse_picture(item.get("main_picture")),
        alternative_titles=_parse_alternative_titles(item.get("alternative_titles")),
        start_date=_optional_str(item.get("start_date")),
        end_date=_optional_str(item.get("end_date")),
        synopsis=_optional_str(item.get("synopsis")),
        mean=_optional_float(item.get("mean")),
        rank=_optional_int(item.get("rank")),
        popularity=_optional_int(item.get("popularity")),
        num_list_users=_optional_int(item.get("num_list_users")),
        num_scoring_users=_optional_int(item.get("num_scoring_users")),
        nsfw=_optional_str(item.get("nsfw")),
        genres=tuple(Genre(id=int(g["id"]), name=_safe_str(g.get("name"))) for g in _mappings(item.get("genres"))),
        created_at=_parse_datetime(item.get("created_at")),
        updated_at=_parse_datetime(item.get("updated_at")),
        media_type=_optional_str(item.get("media_type")),
        status=_optional_str(item.get("status")),
        my_list_status=_parse_optional(item.get("my_list_status"), parse_anime_list_status),
        num_episodes=_optional_int(item.get("num_episodes")),
        start_season=_parse_season(item.get("start_season")),
        broadcast=_parse_broadcast(item.get("broadcast")),
        source=_optional_str(item.get("source")),
        average_episode_duration=_optional_int(item.get("average_episode_duration")),
        rating=_optional_str(item.get("rating")),
        background=_optional_str(item.get("background")),
        studios=tuple(Studio(id=int(s["id"]), name=_safe_str(s.get("name"))) for s in _mappings(item.get("studios"))),
        statistics=_parse_statistics(item.get("statistics")),
        extra=item,
    )


def parse_manga(item: Mapping[str, Any]) -> Manga:
    """Parse a manga object (detail body or listing `node`)."""
    return Manga(
        id=int(item["id"]),
        title=_safe_str(item.get("title")),
        main_picture=_parse_picture(item.get("main_picture")),
        alternative_titles=_parse_alternative_titles(item.get("alternative_titles")),
        start_date=_optional_str(item.get("start_date")),
        end_date=_optional_str(item.get("end_date")),
        synopsis=_optional_str(item.get("synopsis")),
        mean=_optional_float(item.get("mean")),
        rank=_optional_int(item.get("rank")),
        popularity=_optional_int(item.get("popularity")),
        num_list_users=_optional_int(item.get("num_list_users")),
        num_scoring_users=_optional_int(item.get("num_scoring_users")),
        nsfw=_optional_str(item.get("nsfw")),
        genres=tuple(Genre(id=int(g["id"]), name=_safe_str(g.get("name"))) for g in _mappings(item.get("genres"))),
        created_at=_parse_datetime(item.get("created_at")),
        updated_at=_parse_datetime(item.get("updated_at")),
        media_type=_optional_str(item.get("media_type")),
        status=_optional_str(item.get("status")),
        my_list_status=_parse_optional(item.get("my_list_status"), parse_manga_list_status),
        num_volumes=_optional_int(item.get("num_volumes")),
        num_chapters=_optional_int(item.get("num_chapters")),
        authors=tuple(_parse_author(a) for a in _mappings(item.get("authors"))),
        background=_optional_str(item.get("background")),
        extra=item,
    )


def parse_anime_list_status(item: Mapping[str, Any]) -> AnimeListStatus:
    """Parse `my_list_status` / `list_status` of an anime, or a PATCH response."""
    return AnimeListStatus(
        status=_optional_str(item.get("status")),
        score=_int_or_zero(item.get("score")),
        num_episodes_watched=_int_or_zero(item.get("num_episodes_watched")),
        is_rewatching=bool(item.get("is_rewatching", False)),
        start_date=_optional_str(item.get("start_date")),
        finish_date=_optional_str(item.get("finish_date")),
        priority=_int_or_zero(item.get("priority")),
        num_times_rewatched=_int_or_zero(item.get("num_times_rewatched")),
        rewatch_value=_int_or_zero(item.get("rewatch_value")),
        tags=_collect_str_list(item.get("tags")),
        comments=_safe_str(item.get("comments")),
        updated_at=_parse_datetime(item.get("updated_at")),
    )


def parse_manga_list_status(item: Mapping[str, Any]) -> MangaListStatus:
    """Parse `my_list_status` / `list_status` of a manga, or a PATCH response."""
    return MangaListStatus(
        status=_optional_str(item.get("status")),
        score=_int_or_zero(item.get("score")),
        num_volumes_read=_int_or_zero(item.get("num_volumes_read")),
        num_chapters_read=_int_or_zero(item.get("num_chapters_read")),
        is_rereading=bool(item.get("is_rereading", False)),
        start_date=_optional_str(item.get("start_date")),
        finish_date=_optional_str(item.get("finish_date")),
        priority=_int_or_zero(item.get("priority")),
        num_times_reread=_int_or_zero(item.get("num_times_reread")),
        reread_value=_int_or_zero(item.get("reread_value")),
        tags=_collect_str_list(item.get("tags")),
        comments=_safe_str(item.get("comments")),
        updated_at=_parse_datetime(item.get("updated_at")),
    )


def parse_anime_node(item: Mapping[str, Any]) -> Anime:
    """Parse one `{node: {...}}` listing element into an Anime."""
    return parse_anime(item["node"])


def parse_manga_node(item: Mapping[str, Any]) -> Manga:
    """Parse one `{node: {...}}` listing element into a Manga."""
    return parse_manga(item["node"])


def parse_anime_ranking(item: Mapping[str, Any]) -> AnimeRanking:
    """Parse one `{node, ranking: {rank, previous_rank}}` element."""
    ranking = _mapping(item.get("ranking"))
    return AnimeRanking(
        anime=parse_anime(item["node"]),
        rank=int(ranking["rank"]),
        previous_rank=_optional_int(ranking.get("previous_rank")),
    )


def parse_manga_ranking(item: Mapping[str, Any]) -> MangaRanking:
    ranking = _mapping(item.get("ranking"))
    return MangaRanking(
        manga=parse_manga(item["node"]),
        rank=int(ranking["rank"]),
        previous_rank=_optional_int(ranking.get("previous_rank")),
    )


def parse_anime_list_entry(item: Mapping[str, Any]) -> AnimeListEntry:
    """Parse one `{node, list_status}` element of a user's anime list."""
    return AnimeListEntry(
        anime=parse_anime(item["node"]),
        list_status=_parse_optional(item.get("list_status"), parse_anime_list_status),
    )


def parse_manga_list_entry(item: Mapping[str, Any]) -> MangaListEntry:
    """Parse one `{node, list_status}` element of a user's manga list."""
    return MangaListEntry(
        manga=parse_manga(item["node"]),
        list_status=_parse_optional(item.get("list_status"), parse_manga_list_status),
    )


def parse_user(item: Mapping[str, Any]) -> User:
    return User(
        id=int(item["id"]),
        name=_safe_str(item.get("name")),
        picture=_optional_str(item.get("picture")),
        gender=_optional_str(item.get("gender")),
        birthday=_optional_str(item.get("birthday")),
        location=_optional_str(item.get("location")),
        joined_at=_parse_datetime(item.get("joined_at")),
        anime_statistics=_parse_optional(item.get("anime_statistics"), _parse_user_anime_statistics),
        time_zone=_optional_str(item.get("time_zone")),
        is_supporter=item.get("is_supporter") if isinstance(item.get("is_supporter"), bool) else None,
        extra=item,
    )


def parse_forum_boards(body: Mapping[str, Any]) -> list[ForumCategory]:
    """Parse the `{categories: [...]}` body of the forum boards endpoint."""
    categories: list[ForumCategory] = []
    for category in _mappings(body["categories"]):
        boards = tuple(
            ForumBoard(
                id=int(board["id"]),
                title=_safe_str(board.get("title")),
                description=_safe_str(board.get("description")),
                subboards=tuple(
                    ForumSubBoard(id=int(sub["id"]), title=_safe_str(sub.get("title")))
                    for sub in _mappings(board.get("subboards"))
                ),
            )
            for board in _mappings(category.get("boards"))
        )
        categories.append(ForumCategory(title=_safe_str(category.get("title")), boards=boards))
    return categories


def parse_forum_topic(item: Mapping[str, Any]) -> ForumTopic:
    """Parse one element of a forum topic search."""
    return ForumTopic(
        id=int(item["id"]),
        title=_safe_str(item.get("title")),
        created_at=_parse_datetime(item.get("created_at")),
        created_by=_parse_optional(item.get("created_by"), _parse_forum_user),
        number_of_posts=_int_or_zero(item.get("number_of_posts")),
        last_post_created_at=_parse_datetime(item.get("last_post_created_at")),
        last_post_created_by=_parse_optional(item.get("last_post_created_by"), _parse_forum_user),
        is_locked=bool(item.get("is_locked", False)),
    )


def parse_forum_topic_detail(body: Mapping[str, Any]) -> ForumTopicDetail:
    """Parse the `{data: {title, posts, poll}, paging}` body of a topic."""
    data = _mapping(body["data"])
    posts = tuple(
        ForumPost(
            id=int(post["id"]),
            number=_int_or_zero(post.get("number")),
            created_at=_parse_datetime(post.get("created_at")),
            created_by=_parse_optional(post.get("created_by"), _parse_forum_user),
            body=_safe_str(post.get("body")),
            signature=_safe_str(post.get("signature")),
        )
        for post in _mappings(data.get("posts"))
    )
    return ForumTopicDetail(
        title=_safe_str(data.get("title")),
        posts=posts,
        poll=_parse_optional(data.get("poll"), _parse_poll),
    )


def _parse_user_anime_statistics(item: Mapping[str, Any]) -> UserAnimeStatistics:
    return UserAnimeStatistics(
        num_items_watching=_int_or_zero(item.get("num_items_watching")),
        num_items_completed=_int_or_zero(item.get("num_items_completed")),
        num_items_on_hold=_int_or_zero(item.get("num_items_on_hold")),
        num_items_dropped=_int_or_zero(item.get("num_items_dropped")),
        num_items_plan_to_watch=_int_or_zero(item.get("num_items_plan_to_watch")),
        num_items=_int_or_zero(item.get("num_items")),
        num_days_watched=_float_or_zero(item.get("num_days_watched")),
        num_days_watching=_float_or_zero(item.get("num_days_watching")),
        num_days_completed=_float_or_zero(item.get("num_days_completed")),
        num_days_on_hold=_float_or_zero(item.get("num_days_on_hold")),
        num_days_dropped=_float_or_zero(item.get("num_days_dropped")),
        num_days=_float_or_zero(item.get("num_days")),
        num_episodes=_int_or_zero(item.get("num_episodes")),
        num_times_rewatched=_int_or_zero(item.get("num_times_rewatched")),
        mean_score=_float_or_zero(item.get("mean_score")),
    )


def _parse_statistics(value: Any) -> Statistics | None:
    if not isinstance(value, Mapping):
        return None
    status = _mapping(value.get("status"))
    return Statistics(
        num_list_users=_int_or_zero(value.get("num_list_users")),
        watching=_int_or_zero(status.get("watching")),
        completed=_int_or_zero(status.get("completed")),
        on_hold=_int_or_zero(status.get("on_hold")),
        dropped=_int_or_zero(status.get("dropped")),
        plan_to_watch=_int_or_zero(status.get("plan_to_watch")),
    )


def _parse_picture(value: Any) -> Picture | None:
    if not isinstance(value, Mapping):
        return None
    return Picture(medium=_optional_str(value.get("medium")), large=_optional_str(value.get("large")))


def _parse_alternative_titles(value: Any) -> AlternativeTitles | None:
    if not isinstance(value, Mapping):
        return None
    return AlternativeTitles(
        synonyms=_collect_str_list(value.get("synonyms")),
        en=_optional_str(value.get("en")),
        ja=_optional_str(value.get("ja")),
    )


def _parse_season(value: Any) -> AnimeSeason | None:
    if not isinstance(value, Mapping):
        return None
    return AnimeSeason(year=_optional_int(value.get("year")), season=_optional_str(value.get("season")))


def _parse_broadcast(value: Any) -> Broadcast | None:
    if not isinstance(value, Mapping):
        return None
    return Broadcast(
        day_of_the_week=_optional_str(value.get("day_of_the_week")),
        start_time=_optional_str(value.get("start_time")),
    )


def _parse_author(item: Mapping[str, Any]) -> MangaAuthor:
    """Parse `{node: {id, first_name, last_name}, role}` author elements."""
    node = _mapping(item.get("node"))
    return MangaAuthor(
        id=int(node["id"]),
        first_name=_safe_str(node.get("first_name")),
        last_name=_safe_str(node.get("last_name")),
        role=_safe_str(item.get("role")),
    )


def _parse_forum_user(item: Mapping[str, Any]) -> ForumUser:
    return ForumUser(
        id=_optional_int(item.get("id")),
        name=_safe_str(item.get("name")),
        forum_avatar=_optional_str(item.get("forum_avator") or item.get("forum_avatar")),
    )


def _parse_poll(item: Mapping[str, Any]) -> Poll:
    return Poll(
        id=int(item["id"]),
        question=_safe_str(item.get("question")),
        closed=bool(item.get("close", item.get("closed", False))),
        options=tuple(
            PollOption(id=int(opt["id"]), text=_safe_str(opt.get("text")), votes=_int_or_zero(opt.get("votes")))
            for opt in _mappings(item.get("options"))
        ),
    )


def _parse_optional(value: Any, parse):
    """Apply `parse` to a mapping value, None otherwise."""
    if not isinstance(value, Mapping):
        return None
    return parse(value)


def _parse_datetime(value: Any) -> datetime | None:
    """Parse ISO datetime text into timezone-aware datetime."""
    text = _safe_str(value)
    if not text:
        return None
    try:
        parsed = dt_parser.isoparse(text)
    except (TypeError, ValueError):
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _mapping(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    return {}


def _mappings(value: Any) -> list[Mapping[str, Any]]:
    """Keep only mapping elements of a list value."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _collect_str_list(value: Any) -> tuple[str, ...]:
    """Collect non-empty strings from list-like values."""
    if not isinstance(value, list):
        return ()

    out: list[str] = []
    for item in value:
        text = _safe_str(item)
        if text:
            out.append(text)
    return tuple(out)


def _optional_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def _int_or_zero(value: Any) -> int:
    parsed = _optional_int(value)
    return parsed if parsed is not None else 0


def _optional_float(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _float_or_zero(value: Any) -> float:
    parsed = _optional_float(value)
    return parsed if parsed is not None else 0.0


def _optional_str(value: Any) -> str | None:
    text = _safe_str(value)
    return text or None


def _safe_str(value: Any) -> str:
    """Convert scalar value to stripped string."""
    if isinstance(value, str):
        return value.strip()
    return ""
