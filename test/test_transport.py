"""Tests for the requests-backed transport."""

import sys
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import requests

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from MyAnimeList.api.request import HttpRequest
from MyAnimeList.api.transport import HttpTransport
from MyAnimeList.core.errors import FailedRequestError


class TestHttpTransport(unittest.TestCase):
    def test_send_passes_request_and_returns_raw_response(self) -> None:
        session = MagicMock()
        session.request.return_value = MagicMock(status_code=404, content=b'{"error":"not_found"}')
        transport = HttpTransport(timeout=5, user_agent="tests/1.0", session=session)

        response = transport.send(
            HttpRequest(
                method="GET",
                url="https://api.myanimelist.net/v2/anime/1",
                params={"fields": "id"},
                headers={"Authorization": "Bearer tok"},
            )
        )

        self.assertEqual(response.status, 404)
        self.assertEqual(response.body, b'{"error":"not_found"}')
        _, kwargs = session.request.call_args
        self.assertEqual(kwargs["params"], {"fields": "id"})
        self.assertIsNone(kwargs["data"])
        self.assertEqual(kwargs["timeout"], 5)
        self.assertEqual(kwargs["headers"]["User-Agent"], "tests/1.0")
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer tok")

    def test_network_error_becomes_failed_request(self) -> None:
        session = MagicMock()
        session.request.side_effect = requests.ConnectionError("refused")
        transport = HttpTransport(session=session)

        with self.assertRaises(FailedRequestError) as ctx:
            transport.send(HttpRequest(method="GET", url="https://api.myanimelist.net/v2/anime"))

        self.assertIsNone(ctx.exception.status)
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)

    def test_context_manager_closes_session(self) -> None:
        session = MagicMock()
        with HttpTransport(session=session):
            pass
        session.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
