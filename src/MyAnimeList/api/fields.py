"""Field projection encoding for the `fields` query parameter.

The API returns only `id`, `title` and `main_picture` unless more fields are
requested. The constants below list every documented field so callers can ask
for a complete record.
"""

from __future__ import annotations

from typing import Final, Iterable

FIELD_SEPARATOR: Final[str] = ","

ANIME_FIELDS: Final[tuple[str, ...]] = (
    "id",
    "title",
    "main_picture",
    "alternative_titles",
    "start_date",
    "end_date",
    "synopsis",
    "mean",
    "rank",
    "popularity",
    "num_list_users",
    "num_scoring_users",
    "nsfw",
    "genres",
    "created_at",
    "updated_at",
    "media_type",
    "status",
    "my_list_status",
    "num_episodes",
    "start_season",
    "broadcast",
    "source",
    "average_episode_duration",
    "rating",
    "background",
    "related_anime",
    "related_manga",
    "recommendations",
    "studios",
    "statistics",
)

MANGA_FIELDS: Final[tuple[str, ...]] = (
    "id",
    "title",
    "main_picture",
    "alternative_titles",
    "start_date",
    "end_date",
    "synopsis",
    "mean",
    "rank",
    "popularity",
    "num_list_users",
    "num_scoring_users",
    "nsfw",
    "genres",
    "created_at",
    "updated_at",
    "media_type",
    "status",
    "my_list_status",
    "num_volumes",
    "num_chapters",
    "authors{first_name,last_name}",
    "background",
    "related_anime",
    "related_manga",
    "recommendations",
    "serialization",
)

USER_FIELDS: Final[tuple[str, ...]] = (
    "id",
    "name",
    "picture",
    "gender",
    "birthday",
    "location",
    "joined_at",
    "anime_statistics",
    "time_zone",
    "is_supporter",
)

ANIME_LIST_FIELDS: Final[tuple[str, ...]] = (
    "list_status{status,score,num_episodes_watched,is_rewatching,start_date,finish_date,"
    "priority,num_times_rewatched,rewatch_value,tags,comments,updated_at}",
)

MANGA_LIST_FIELDS: Final[tuple[str, ...]] = (
    "list_status{status,score,num_volumes_read,num_chapters_read,is_rereading,start_date,"
    "finish_date,priority,num_times_reread,reread_value,tags,comments,updated_at}",
)


def encode_fields(fields: Iterable[str]) -> str:
    """Encode requested field names into the `fields` parameter value.

    Names are deduplicated and sorted so the same set always encodes to the
    same string. Spelling is not validated; the API ignores or rejects unknown
    names itself.

    Args:
        fields: Requested field names, e.g. {"id", "title"}.

    Returns:
        Comma-separated names, or "" for an empty set (omit the parameter).
    """
    unique = {str(name).strip() for name in fields}
    unique.discard("")
    return FIELD_SEPARATOR.join(sorted(unique))
