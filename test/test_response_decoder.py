"""Tests for status classification and body decoding."""

import json
import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from MyAnimeList.api.parser import parse_anime, parse_anime_node
from MyAnimeList.api.response import ResponseDecoder
from MyAnimeList.core.errors import (
    ConnectionForbiddenError,
    ErrorKind,
    FailedRequestError,
    InvalidAuthError,
    InvalidParametersError,
)


def _body(payload: object) -> bytes:
    return json.dumps(payload).encode("utf-8")


class TestDecodeEntity(unittest.TestCase):
    def setUp(self) -> None:
        self.decoder = ResponseDecoder()

    def test_200_parses_entity(self) -> None:
        anime = self.decoder.decode_entity(200, _body({"id": 42, "title": "X"}), parse_anime)
        self.assertEqual(anime.id, 42)
        self.assertEqual(anime.title, "X")

    def test_error_statuses_map_to_typed_errors(self) -> None:
        cases = {
            400: (InvalidParametersError, ErrorKind.INVALID_PARAMETERS),
            401: (InvalidAuthError, ErrorKind.INVALID_AUTH),
            403: (ConnectionForbiddenError, ErrorKind.FORBIDDEN),
        }
        for status, (error_cls, kind) in cases.items():
            with self.subTest(status=status):
                with self.assertRaises(error_cls) as ctx:
                    self.decoder.decode_entity(status, _body({"id": 1, "title": "never"}), parse_anime)
                self.assertEqual(ctx.exception.kind, kind)
                self.assertEqual(ctx.exception.status, status)

    def test_other_status_is_failed_request_with_upstream_message(self) -> None:
        body = _body({"error": "not_found", "message": "anime not found"})
        with self.assertRaises(FailedRequestError) as ctx:
            self.decoder.decode_entity(404, body, parse_anime)
        self.assertEqual(ctx.exception.status, 404)
        self.assertEqual(ctx.exception.message, "anime not found")

    def test_error_code_used_when_message_missing(self) -> None:
        with self.assertRaises(InvalidAuthError) as ctx:
            self.decoder.decode_entity(401, _body({"error": "invalid_token"}), parse_anime)
        self.assertEqual(ctx.exception.message, "invalid_token")

    def test_raw_text_kept_for_non_json_error(self) -> None:
        with self.assertRaises(FailedRequestError) as ctx:
            self.decoder.decode_entity(502, b"Bad Gateway", parse_anime)
        self.assertEqual(ctx.exception.message, "Bad Gateway")

    def test_malformed_json_on_200_is_failed_request(self) -> None:
        with self.assertRaises(FailedRequestError) as ctx:
            self.decoder.decode_entity(200, b"{not json", parse_anime)
        self.assertEqual(ctx.exception.status, 200)

    def test_missing_identity_key_on_200_is_failed_request(self) -> None:
        with self.assertRaises(FailedRequestError):
            self.decoder.decode_entity(200, _body({"title": "no id"}), parse_anime)

    def test_non_finite_number_on_200_is_failed_request(self) -> None:
        with self.assertRaises(FailedRequestError) as ctx:
            self.decoder.decode_entity(200, b'{"id": 1, "title": "X", "rank": 1e400}', parse_anime)
        self.assertEqual(ctx.exception.status, 200)

    def test_classify_error_is_none_for_success(self) -> None:
        self.assertIsNone(ResponseDecoder.classify_error(200, b""))
        self.assertIsInstance(ResponseDecoder.classify_error(403, b""), ConnectionForbiddenError)


class TestDecodePage(unittest.TestCase):
    def setUp(self) -> None:
        self.decoder = ResponseDecoder()

    def test_listing_with_paging_links(self) -> None:
        body = _body(
            {
                "data": [{"node": {"id": 1, "title": "A"}}, {"node": {"id": 2, "title": "B"}}],
                "paging": {"previous": "https://x/prev", "next": "https://x/next"},
            }
        )
        page = self.decoder.decode_page(200, body, parse_anime_node)

        self.assertEqual([anime.id for anime in page.items], [1, 2])
        self.assertEqual(page.previous, "https://x/prev")
        self.assertEqual(page.next, "https://x/next")

    def test_listing_without_paging(self) -> None:
        page = self.decoder.decode_page(200, _body({"data": []}), parse_anime_node)
        self.assertEqual(len(page), 0)
        self.assertIsNone(page.next)
        self.assertIsNone(page.previous)

    def test_data_must_be_a_list(self) -> None:
        with self.assertRaises(FailedRequestError):
            self.decoder.decode_page(200, _body({"data": {"node": {}}}), parse_anime_node)

    def test_non_finite_id_in_listing_is_failed_request(self) -> None:
        body = b'{"data": [{"node": {"id": 1e400, "title": "A"}}], "paging": {}}'
        with self.assertRaises(FailedRequestError):
            self.decoder.decode_page(200, body, parse_anime_node)

    def test_listing_error_status(self) -> None:
        with self.assertRaises(InvalidParametersError):
            self.decoder.decode_page(400, _body({"error": "invalid_parameters"}), parse_anime_node)


class TestDecodeEmpty(unittest.TestCase):
    def test_success_returns_none(self) -> None:
        self.assertIsNone(ResponseDecoder().decode_empty(200, b""))

    def test_not_found_raises(self) -> None:
        with self.assertRaises(FailedRequestError):
            ResponseDecoder().decode_empty(404, b"")


if __name__ == "__main__":
    unittest.main()
