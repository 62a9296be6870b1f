"""The MyAnimeList API facade.

Owns the authenticator and the shared request pipeline, and hands out
resource-specific query builders.
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Optional

from MyAnimeList.api.executor import QueryExecutor
from MyAnimeList.api.parser import (
    parse_anime,
    parse_forum_boards,
    parse_forum_topic_detail,
    parse_manga,
    parse_user,
)
from MyAnimeList.api.request import DEFAULT_BASE_URL, RequestBuilder
from MyAnimeList.api.response import ResponseDecoder
from MyAnimeList.api.transport import HttpTransport, Transport
from MyAnimeList.auth.authenticator import Authenticator, RefreshableAuthenticator, StaticTokenAuthenticator
from MyAnimeList.core.models import Anime, ForumCategory, ForumTopicDetail, Manga, User
from MyAnimeList.core.query import (
    AnimeRankingType,
    Endpoint,
    MangaRankingType,
    QueryOptions,
    QuerySpec,
    Season,
)
from MyAnimeList.queries import (
    AnimeListUpdate,
    AnimeRankingQuery,
    AnimeSearchQuery,
    AnimeSeasonQuery,
    AnimeSuggestionQuery,
    ForumSearchQuery,
    MangaListUpdate,
    MangaRankingQuery,
    MangaSearchQuery,
    UserAnimeListQuery,
    UserMangaListQuery,
)
from MyAnimeList.queries.user import SELF_USER
from MyAnimeList.utils.log import configure_logging, log

if TYPE_CHECKING:
    from MyAnimeList.config import ClientConfig


class MyAnimeList:
    """Entry point to the MyAnimeList v2 API.

    Every method that returns an entity performs one blocking request and may
    raise `InvalidParametersError`, `InvalidAuthError`,
    `ConnectionForbiddenError` or `FailedRequestError`. Nothing is retried: on
    `InvalidAuthError` call `refresh_oauth_token()` and run the call again.

    Example:
        >>> with MyAnimeList.with_oauth_token(token) as mal:
        ...     anime = mal.get_anime(5114, "id", "title", "mean")
    """

    def __init__(
        self,
        authenticator: Authenticator,
        *,
        transport: Optional[Transport] = None,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        """Create a client around an authenticator.

        Args:
            authenticator: Token provider owned by this client.
            transport: Transport to send requests with; a requests-backed one
                is created when omitted.
            base_url: API root URL.
        """
        self._authenticator = authenticator
        self._transport = transport or HttpTransport()
        self._executor = QueryExecutor(
            authenticator=authenticator,
            transport=self._transport,
            builder=RequestBuilder(base_url),
            decoder=ResponseDecoder(),
        )

    @classmethod
    def with_oauth_token(cls, token: str, **kwargs) -> MyAnimeList:
        """Create a client with a pre-issued access token."""
        return cls(StaticTokenAuthenticator(token), **kwargs)

    @classmethod
    def with_authorization(cls, authenticator: Authenticator, **kwargs) -> MyAnimeList:
        """Create a client with an authenticator, typically a RefreshableAuthenticator."""
        return cls(authenticator, **kwargs)

    @classmethod
    def from_config(cls, config: ClientConfig, *, transport: Optional[Transport] = None) -> MyAnimeList:
        """Create a client from loaded configuration.

        Installs the console/file logging described by the `log` section.
        Refreshable credentials (client id and refresh token) win over a bare
        access token.

        Raises:
            ValueError: If the configuration resolves no credentials.
        """
        configure_logging(
            level=config.runtime.level,
            log_to_file=config.runtime.to_file,
            log_dir=config.runtime.dir,
        )
        api = config.api
        transport = transport or HttpTransport(timeout=api.timeout, user_agent=api.user_agent or None)
        authenticator: Authenticator
        if api.refreshable:
            authenticator = RefreshableAuthenticator(
                api.client_id,
                api.refresh_token,
                client_secret=api.client_secret,
                access_token=api.access_token or None,
                token_url=api.token_url,
                transport=transport,
            )
        elif api.access_token:
            authenticator = StaticTokenAuthenticator(api.access_token)
        else:
            raise ValueError(
                f"No credentials configured: set {api.access_token_env}, "
                f"or {api.client_id_env} and {api.refresh_token_env}"
            )
        log.debug("Client created from config: base_url=%s refreshable=%s", api.base_url, api.refreshable)
        return cls(authenticator, transport=transport, base_url=api.base_url)

    def close(self) -> None:
        """Close the underlying transport and the authenticator.

        An authenticator built with its own transport releases it here; a
        transport shared with the client is closed once.
        """
        self._transport.close()
        self._authenticator.close()

    def __enter__(self) -> MyAnimeList:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # auth

    def refresh_oauth_token(self) -> None:
        """Refresh the access token; a no-op for static tokens.

        Raises:
            AuthRefreshFailedError: If the token endpoint could not be contacted
                or rejected the refresh token.
        """
        self._authenticator.refresh()

    def current_token(self) -> str:
        return self._authenticator.current_token()

    # anime

    def search_anime(self) -> AnimeSearchQuery:
        return AnimeSearchQuery(self._executor)

    def get_anime(self, anime_id: int, *fields: str) -> Anime:
        """Return one anime; with no `fields` the API default projection is used."""
        spec = QuerySpec(endpoint=Endpoint.ANIME_DETAIL, target=str(anime_id), fields=frozenset(fields))
        return self._executor.fetch(spec, parse_anime)

    def get_anime_ranking(self, ranking_type: AnimeRankingType | str = AnimeRankingType.ALL) -> AnimeRankingQuery:
        return AnimeRankingQuery(self._executor, ranking_type)

    def get_anime_season(self, year: int, season: Season | str) -> AnimeSeasonQuery:
        return AnimeSeasonQuery(self._executor, year, season)

    def get_anime_suggestions(self) -> AnimeSuggestionQuery:
        return AnimeSuggestionQuery(self._executor)

    # anime list

    def update_anime_listing(self, anime_id: int) -> AnimeListUpdate:
        return AnimeListUpdate(self._executor, anime_id)

    def delete_anime_listing(self, anime_id: int) -> None:
        """Remove an anime from the authenticated user's list.

        Raises:
            FailedRequestError: HTTP 404 when the anime is not on the list.
        """
        spec = QuerySpec(endpoint=Endpoint.ANIME_LIST_STATUS, method="DELETE", target=str(anime_id))
        self._executor.execute(spec)

    def get_user_anime_listing(self, username: str = SELF_USER) -> UserAnimeListQuery:
        return UserAnimeListQuery(self._executor, username)

    # forum

    def get_forum_boards(self) -> list[ForumCategory]:
        """Return the top level forum categories and their boards."""
        return self._executor.fetch(QuerySpec(endpoint=Endpoint.FORUM_BOARDS), parse_forum_boards)

    def get_forum_topic_detail(
        self,
        topic_id: int,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> ForumTopicDetail:
        """Return a forum topic with its posts.

        `limit` and `offset` are listed by the API but have no effect; they are
        still sent when given.
        """
        if limit is not None or offset is not None:
            warnings.warn(
                "limit and offset are ignored by the forum topic endpoint",
                DeprecationWarning,
                stacklevel=2,
            )
        options = QueryOptions()
        options.limit = limit
        options.offset = offset
        spec = options.snapshot(Endpoint.FORUM_TOPIC, target=str(topic_id))
        return self._executor.fetch(spec, parse_forum_topic_detail)

    def search_forum_topics(self) -> ForumSearchQuery:
        return ForumSearchQuery(self._executor)

    # manga

    def search_manga(self) -> MangaSearchQuery:
        return MangaSearchQuery(self._executor)

    def get_manga(self, manga_id: int, *fields: str) -> Manga:
        """Return one manga; with no `fields` the API default projection is used."""
        spec = QuerySpec(endpoint=Endpoint.MANGA_DETAIL, target=str(manga_id), fields=frozenset(fields))
        return self._executor.fetch(spec, parse_manga)

    def get_manga_ranking(self, ranking_type: MangaRankingType | str = MangaRankingType.ALL) -> MangaRankingQuery:
        return MangaRankingQuery(self._executor, ranking_type)

    # manga list

    def update_manga_listing(self, manga_id: int) -> MangaListUpdate:
        return MangaListUpdate(self._executor, manga_id)

    def delete_manga_listing(self, manga_id: int) -> None:
        spec = QuerySpec(endpoint=Endpoint.MANGA_LIST_STATUS, method="DELETE", target=str(manga_id))
        self._executor.execute(spec)

    def get_user_manga_listing(self, username: str = SELF_USER) -> UserMangaListQuery:
        return UserMangaListQuery(self._executor, username)

    # user

    def get_myself(self, *fields: str) -> User:
        """Return the authenticated user."""
        return self.get_user(SELF_USER, *fields)

    def get_user(self, username: str, *fields: str) -> User:
        """Return a user by name.

        The v2 API currently only serves `@me`; other names are sent as given
        and rejected server-side.
        """
        spec = QuerySpec(endpoint=Endpoint.USER_DETAIL, target=username, fields=frozenset(fields))
        return self._executor.fetch(spec, parse_user)
