"""Forum topic search."""

from __future__ import annotations

from MyAnimeList.api.executor import QueryExecutor
from MyAnimeList.api.paging import PagedResults
from MyAnimeList.api.parser import parse_forum_topic
from MyAnimeList.core.models import ForumTopic
from MyAnimeList.core.query import Endpoint, ForumTopicSort, QuerySpec, option_value
from MyAnimeList.queries.base import FieldSearch, drop_unset


class ForumSearchQuery:
    """Search forum topics by board, text and author."""

    def __init__(self, executor: QueryExecutor) -> None:
        self._search: FieldSearch[ForumTopic] = FieldSearch(executor, Endpoint.FORUM_TOPICS, parse_forum_topic)
        self._query: str | None = None
        self._sort: str | None = None
        self._board_id: int | None = None
        self._subboard_id: int | None = None
        self._topic_user_name: str | None = None
        self._user_name: str | None = None

    def with_query(self, query: str) -> ForumSearchQuery:
        self._query = query
        return self

    def with_board_id(self, board_id: int) -> ForumSearchQuery:
        self._board_id = board_id
        return self

    def with_subboard_id(self, subboard_id: int) -> ForumSearchQuery:
        self._subboard_id = subboard_id
        return self

    def with_topic_user_name(self, username: str) -> ForumSearchQuery:
        """Only topics started by `username`."""
        self._topic_user_name = username
        return self

    def with_user_name(self, username: str) -> ForumSearchQuery:
        """Only topics `username` posted in."""
        self._user_name = username
        return self

    def with_sort(self, sort: ForumTopicSort | str) -> ForumSearchQuery:
        self._sort = option_value(sort)
        return self

    def with_limit(self, limit: int) -> ForumSearchQuery:
        self._search.options.limit = limit
        return self

    def with_offset(self, offset: int) -> ForumSearchQuery:
        self._search.options.offset = offset
        return self

    def spec(self) -> QuerySpec:
        return self._search.spec(query=self._query, sort=self._sort, params=self._params())

    def search(self) -> PagedResults[ForumTopic]:
        return self._search.search(query=self._query, sort=self._sort, params=self._params())

    def _params(self) -> dict[str, str]:
        params = drop_unset(
            {
                "board_id": self._board_id,
                "subboard_id": self._subboard_id,
                "topic_user_name": self._topic_user_name,
                "user_name": self._user_name,
            }
        )
        return {key: str(value) for key, value in params.items()}
