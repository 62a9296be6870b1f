"""HTTP request composition from query snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, Mapping
from urllib.parse import quote

from MyAnimeList.api.fields import encode_fields
from MyAnimeList.core.query import Endpoint, QuerySpec

DEFAULT_BASE_URL: Final[str] = "https://api.myanimelist.net/v2"

_PATH_TEMPLATES: Final[dict[Endpoint, str]] = {
    Endpoint.ANIME_SEARCH: "/anime",
    Endpoint.ANIME_DETAIL: "/anime/{target}",
    Endpoint.ANIME_RANKING: "/anime/ranking",
    Endpoint.ANIME_SEASON: "/anime/season/{year}/{season}",
    Endpoint.ANIME_SUGGESTIONS: "/anime/suggestions",
    Endpoint.ANIME_LIST_STATUS: "/anime/{target}/my_list_status",
    Endpoint.USER_ANIME_LIST: "/users/{target}/animelist",
    Endpoint.MANGA_SEARCH: "/manga",
    Endpoint.MANGA_DETAIL: "/manga/{target}",
    Endpoint.MANGA_RANKING: "/manga/ranking",
    Endpoint.MANGA_LIST_STATUS: "/manga/{target}/my_list_status",
    Endpoint.USER_MANGA_LIST: "/users/{target}/mangalist",
    Endpoint.USER_DETAIL: "/users/{target}",
    Endpoint.FORUM_BOARDS: "/forum/boards",
    Endpoint.FORUM_TOPIC: "/forum/topic/{target}",
    Endpoint.FORUM_TOPICS: "/forum/topics",
}


@dataclass(frozen=True, slots=True)
class HttpRequest:
    """Transport-neutral description of one HTTP call.

    Attributes:
        method: HTTP method (GET/POST/PATCH/DELETE).
        url: Absolute URL without the query string.
        params: Query parameters.
        headers: Request headers.
        data: Form-encoded body, empty for bodiless requests.
    """

    method: str
    url: str
    params: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    data: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))


class RequestBuilder:
    """Turn a QuerySpec and bearer token into an HttpRequest.

    The builder never validates values the server would reject; it only
    guarantees a well-formed request.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL) -> None:
        self.base_url = base_url.rstrip("/")

    def build(self, spec: QuerySpec, token: str) -> HttpRequest:
        """Build the request for `spec`.

        When the spec carries a cursor, the cursor URL is used verbatim: the
        server's paging links already repeat every query parameter, and
        no offset may be sent next to a cursor.

        Args:
            spec: Query snapshot.
            token: Current bearer token.

        Returns:
            The HTTP request to send.
        """
        headers = {"Authorization": f"Bearer {token}"}
        if spec.cursor:
            return HttpRequest(method=spec.method, url=spec.cursor, headers=headers, data=spec.form)

        return HttpRequest(
            method=spec.method,
            url=self.base_url + self.path_for(spec),
            params=self.params_for(spec),
            headers=headers,
            data=spec.form,
        )

    @staticmethod
    def path_for(spec: QuerySpec) -> str:
        """Fill the endpoint path template from the spec."""
        template = _PATH_TEMPLATES[spec.endpoint]
        return template.format(
            target=quote(str(spec.target or ""), safe="@"),
            year=spec.year if spec.year is not None else "",
            season=quote(str(spec.season or ""), safe=""),
        )

    @staticmethod
    def params_for(spec: QuerySpec) -> dict[str, str]:
        """Collect query parameters; unset values are omitted."""
        params: dict[str, str] = {}
        if spec.query is not None:
            params["q"] = spec.query
        if spec.ranking_type is not None:
            params["ranking_type"] = spec.ranking_type
        if spec.sort is not None:
            params["sort"] = spec.sort
        if spec.status is not None:
            params["status"] = spec.status

        encoded_fields = encode_fields(spec.fields)
        if encoded_fields:
            params["fields"] = encoded_fields

        if spec.limit is not None:
            params["limit"] = str(spec.limit)
        if spec.offset is not None:
            params["offset"] = str(spec.offset)
        if spec.nsfw is not None:
            params["nsfw"] = "true" if spec.nsfw else "false"

        for key, value in spec.params.items():
            params[key] = str(value)
        return params
