"""End-to-end facade tests over a stub transport."""

import json
import sys
import unittest
import warnings
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from MyAnimeList import (
    AnimeRankingType,
    AnimeSeasonSort,
    AnimeStatus,
    FailedRequestError,
    InvalidAuthError,
    MyAnimeList,
    RefreshableAuthenticator,
    Season,
)
from MyAnimeList.api.request import DEFAULT_BASE_URL
from MyAnimeList.api.transport import HttpResponse


class _StubTransport:
    """Replay queued (status, payload) responses and record every request."""

    def __init__(self, *responses: tuple[int, object]) -> None:
        self._responses = list(responses)
        self.requests = []
        self.closed = False

    def send(self, request):
        self.requests.append(request)
        status, payload = self._responses.pop(0)
        body = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
        return HttpResponse(status=status, body=body)

    def close(self) -> None:
        self.closed = True


class TestAnimeEndpoints(unittest.TestCase):
    def test_get_anime_builds_request_and_decodes(self) -> None:
        transport = _StubTransport((200, {"id": 42, "title": "X"}))
        mal = MyAnimeList.with_oauth_token("tok", transport=transport)

        anime = mal.get_anime(42, "id", "title")

        self.assertEqual(anime.id, 42)
        self.assertEqual(anime.title, "X")
        request = transport.requests[0]
        self.assertEqual(request.method, "GET")
        self.assertEqual(request.url, f"{DEFAULT_BASE_URL}/anime/42")
        self.assertEqual(dict(request.params), {"fields": "id,title"})
        self.assertEqual(request.headers["Authorization"], "Bearer tok")

    def test_get_anime_unauthorized(self) -> None:
        transport = _StubTransport((401, {"error": "invalid_token"}))
        mal = MyAnimeList.with_oauth_token("expired", transport=transport)

        with self.assertRaises(InvalidAuthError):
            mal.get_anime(42)

    def test_search_anime_pages_lazily(self) -> None:
        transport = _StubTransport(
            (200, {"data": [{"node": {"id": 1, "title": "A"}}], "paging": {"next": "https://next/page"}}),
            (200, {"data": [{"node": {"id": 2, "title": "B"}}], "paging": {}}),
        )
        mal = MyAnimeList.with_oauth_token("tok", transport=transport)

        results = mal.search_anime().with_query("frieren").with_fields("mean").with_limit(1).search()

        self.assertEqual(dict(transport.requests[0].params), {"q": "frieren", "fields": "mean", "limit": "1"})
        self.assertEqual([anime.title for anime in results], ["A", "B"])
        self.assertEqual(transport.requests[1].url, "https://next/page")

    def test_search_twice_starts_independent_sequences(self) -> None:
        page = {"data": [{"node": {"id": 1, "title": "A"}}], "paging": {}}
        transport = _StubTransport((200, page), (200, page))
        query = MyAnimeList.with_oauth_token("tok", transport=transport).search_anime().with_query("a")

        first = list(query.search())
        second = list(query.search())

        self.assertEqual([a.id for a in first], [1])
        self.assertEqual([a.id for a in second], [1])
        self.assertEqual(len(transport.requests), 2)

    def test_ranking_entries_carry_rank(self) -> None:
        transport = _StubTransport(
            (200, {"data": [{"node": {"id": 5114, "title": "FMA"}, "ranking": {"rank": 1, "previous_rank": 2}}]})
        )
        mal = MyAnimeList.with_oauth_token("tok", transport=transport)

        entry = next(mal.get_anime_ranking(AnimeRankingType.AIRING).with_limit(900).search())

        self.assertEqual(entry.anime.id, 5114)
        self.assertEqual(entry.rank, 1)
        self.assertEqual(entry.previous_rank, 2)
        self.assertEqual(transport.requests[0].params["ranking_type"], "airing")
        self.assertEqual(transport.requests[0].params["limit"], "500")

    def test_ranking_nsfw_is_deprecated_but_sent(self) -> None:
        transport = _StubTransport((200, {"data": []}))
        mal = MyAnimeList.with_oauth_token("tok", transport=transport)

        with self.assertWarns(DeprecationWarning):
            query = mal.get_anime_ranking().include_nsfw()
        list(query.search())

        self.assertEqual(transport.requests[0].params["nsfw"], "true")

    def test_season_query(self) -> None:
        transport = _StubTransport((200, {"data": []}))
        mal = MyAnimeList.with_oauth_token("tok", transport=transport)

        results = mal.get_anime_season(2023, Season.FALL).with_sort(AnimeSeasonSort.SCORE).search()

        self.assertEqual(list(results), [])
        self.assertEqual(transport.requests[0].url, f"{DEFAULT_BASE_URL}/anime/season/2023/fall")
        self.assertEqual(transport.requests[0].params["sort"], "anime_score")


class TestListEndpoints(unittest.TestCase):
    def test_update_anime_listing_sends_form(self) -> None:
        transport = _StubTransport((200, {"status": "watching", "score": 8, "num_episodes_watched": 3}))
        mal = MyAnimeList.with_oauth_token("tok", transport=transport)

        status = (
            mal.update_anime_listing(21)
            .status(AnimeStatus.WATCHING)
            .score(8)
            .episodes_watched(3)
            .rewatching(False)
            .tags("a", "b")
            .update()
        )

        self.assertEqual(status.status, "watching")
        self.assertEqual(status.score, 8)
        request = transport.requests[0]
        self.assertEqual(request.method, "PATCH")
        self.assertEqual(request.url, f"{DEFAULT_BASE_URL}/anime/21/my_list_status")
        self.assertEqual(
            dict(request.data),
            {
                "status": "watching",
                "score": "8",
                "num_watched_episodes": "3",
                "is_rewatching": "false",
                "tags": "a,b",
            },
        )

    def test_delete_listing(self) -> None:
        transport = _StubTransport((200, b""))
        mal = MyAnimeList.with_oauth_token("tok", transport=transport)

        self.assertIsNone(mal.delete_manga_listing(2))
        self.assertEqual(transport.requests[0].method, "DELETE")
        self.assertEqual(transport.requests[0].url, f"{DEFAULT_BASE_URL}/manga/2/my_list_status")

    def test_delete_missing_listing_raises(self) -> None:
        transport = _StubTransport((404, {"error": "not_found"}))
        mal = MyAnimeList.with_oauth_token("tok", transport=transport)

        with self.assertRaises(FailedRequestError) as ctx:
            mal.delete_anime_listing(2)
        self.assertEqual(ctx.exception.status, 404)

    def test_user_anime_listing_defaults_to_self(self) -> None:
        transport = _StubTransport(
            (
                200,
                {
                    "data": [
                        {"node": {"id": 1, "title": "A"}, "list_status": {"status": "completed", "score": 10}}
                    ]
                },
            )
        )
        mal = MyAnimeList.with_oauth_token("tok", transport=transport)

        entry = next(mal.get_user_anime_listing().with_status("completed").search())

        self.assertEqual(entry.anime.id, 1)
        self.assertEqual(entry.list_status.score, 10)
        self.assertEqual(transport.requests[0].url, f"{DEFAULT_BASE_URL}/users/@me/animelist")


class TestForumAndUser(unittest.TestCase):
    def test_forum_boards(self) -> None:
        body = {
            "categories": [
                {
                    "title": "MyAnimeList",
                    "boards": [
                        {
                            "id": 17,
                            "title": "MAL Guidelines & FAQ",
                            "description": "Site rules",
                            "subboards": [{"id": 2, "title": "Anime DB"}],
                        }
                    ],
                }
            ]
        }
        mal = MyAnimeList.with_oauth_token("tok", transport=_StubTransport((200, body)))

        categories = mal.get_forum_boards()

        self.assertEqual(len(categories), 1)
        self.assertEqual(categories[0].boards[0].id, 17)
        self.assertEqual(categories[0].boards[0].subboards[0].title, "Anime DB")

    def test_forum_topic_detail_limit_is_deprecated(self) -> None:
        body = {"data": {"title": "Topic", "posts": [{"id": 1, "number": 1, "body": "hi"}]}}
        transport = _StubTransport((200, body), (200, body))
        mal = MyAnimeList.with_oauth_token("tok", transport=transport)

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            detail = mal.get_forum_topic_detail(481)
        with self.assertWarns(DeprecationWarning):
            mal.get_forum_topic_detail(481, limit=5000)

        self.assertEqual(detail.title, "Topic")
        self.assertEqual(detail.posts[0].body, "hi")
        self.assertEqual(transport.requests[1].params["limit"], "100")
        self.assertNotIn("limit", transport.requests[0].params)

    def test_forum_topic_search_filters(self) -> None:
        transport = _StubTransport((200, {"data": [{"id": 9, "title": "T", "number_of_posts": 3}]}))
        mal = MyAnimeList.with_oauth_token("tok", transport=transport)

        topic = next(mal.search_forum_topics().with_query("naruto").with_board_id(1).search())

        self.assertEqual(topic.id, 9)
        self.assertEqual(topic.number_of_posts, 3)
        params = dict(transport.requests[0].params)
        self.assertEqual(params["q"], "naruto")
        self.assertEqual(params["board_id"], "1")

    def test_get_myself(self) -> None:
        transport = _StubTransport((200, {"id": 7, "name": "me", "anime_statistics": {"num_items": 3}}))
        mal = MyAnimeList.with_oauth_token("tok", transport=transport)

        user = mal.get_myself("anime_statistics")

        self.assertEqual(user.name, "me")
        self.assertEqual(user.anime_statistics.num_items, 3)
        self.assertEqual(transport.requests[0].url, f"{DEFAULT_BASE_URL}/users/@me")


class TestLifecycle(unittest.TestCase):
    def test_context_manager_closes_transport(self) -> None:
        transport = _StubTransport()
        with MyAnimeList.with_oauth_token("tok", transport=transport):
            pass
        self.assertTrue(transport.closed)

    def test_close_releases_authenticator_transport(self) -> None:
        api_transport = _StubTransport()
        with patch("MyAnimeList.auth.authenticator.HttpTransport") as transport_cls:
            auth = RefreshableAuthenticator("client", "r1", access_token="a")

        with MyAnimeList.with_authorization(auth, transport=api_transport):
            pass

        self.assertTrue(api_transport.closed)
        transport_cls.return_value.close.assert_called_once()

    def test_refresh_then_rerun(self) -> None:
        token_transport = _StubTransport((200, {"access_token": "fresh", "refresh_token": "r2"}))
        api_transport = _StubTransport((401, {"error": "invalid_token"}), (200, {"id": 1, "title": "A"}))
        auth = RefreshableAuthenticator("client", "r1", access_token="stale", transport=token_transport)
        mal = MyAnimeList.with_authorization(auth, transport=api_transport)

        with self.assertRaises(InvalidAuthError):
            mal.get_anime(1)
        mal.refresh_oauth_token()
        anime = mal.get_anime(1)

        self.assertEqual(anime.id, 1)
        self.assertEqual(mal.current_token(), "fresh")
        self.assertEqual(api_transport.requests[1].headers["Authorization"], "Bearer fresh")


if __name__ == "__main__":
    unittest.main()
