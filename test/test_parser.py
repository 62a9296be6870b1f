"""Tests for payload to entity mapping."""

import sys
import unittest
from datetime import timezone
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from MyAnimeList.api.parser import (
    parse_anime,
    parse_forum_topic_detail,
    parse_manga,
    parse_manga_ranking,
    parse_user,
)


class TestParseAnime(unittest.TestCase):
    def test_full_detail_payload(self) -> None:
        anime = parse_anime(
            {
                "id": 5114,
                "title": " Fullmetal Alchemist: Brotherhood ",
                "main_picture": {"medium": "m.jpg", "large": "l.jpg"},
                "alternative_titles": {"synonyms": ["FMA:B", ""], "en": "FMA", "ja": "鋼の錬金術師"},
                "start_date": "2009-04",
                "mean": 9.1,
                "rank": 1,
                "genres": [{"id": 1, "name": "Action"}, "junk"],
                "updated_at": "2023-01-02T03:04:05+00:00",
                "start_season": {"year": 2009, "season": "spring"},
                "broadcast": {"day_of_the_week": "sunday", "start_time": "17:00"},
                "studios": [{"id": 4, "name": "Bones"}],
                "my_list_status": {"status": "completed", "score": 10, "is_rewatching": False},
                "statistics": {"num_list_users": 3, "status": {"watching": "1", "completed": 2}},
                "related_anime": [],
            }
        )

        self.assertEqual(anime.title, "Fullmetal Alchemist: Brotherhood")
        self.assertEqual(anime.main_picture.large, "l.jpg")
        self.assertEqual(anime.alternative_titles.synonyms, ("FMA:B",))
        self.assertEqual(anime.start_date, "2009-04")
        self.assertEqual(anime.mean, 9.1)
        self.assertEqual([g.name for g in anime.genres], ["Action"])
        self.assertEqual(anime.updated_at.year, 2023)
        self.assertEqual(anime.start_season.season, "spring")
        self.assertEqual(anime.broadcast.start_time, "17:00")
        self.assertEqual(anime.studios[0].name, "Bones")
        self.assertEqual(anime.my_list_status.score, 10)
        self.assertEqual(anime.statistics.watching, 0)
        self.assertEqual(anime.statistics.completed, 2)
        self.assertIn("related_anime", anime.extra)

    def test_partial_projection_leaves_defaults(self) -> None:
        anime = parse_anime({"id": 1})

        self.assertEqual(anime.title, "")
        self.assertIsNone(anime.mean)
        self.assertEqual(anime.genres, ())
        self.assertIsNone(anime.my_list_status)

    def test_naive_timestamp_is_utc(self) -> None:
        anime = parse_anime({"id": 1, "created_at": "2020-05-01T10:00:00"})
        self.assertEqual(anime.created_at.tzinfo, timezone.utc)

    def test_extra_is_read_only(self) -> None:
        anime = parse_anime({"id": 1, "pictures": []})
        with self.assertRaises(TypeError):
            anime.extra["pictures"] = None  # type: ignore[index]

    def test_missing_id_raises_key_error(self) -> None:
        with self.assertRaises(KeyError):
            parse_anime({"title": "no id"})


class TestParseManga(unittest.TestCase):
    def test_authors_and_counts(self) -> None:
        manga = parse_manga(
            {
                "id": 2,
                "title": "Berserk",
                "num_volumes": 41,
                "authors": [{"node": {"id": 1868, "first_name": "Kentarou", "last_name": "Miura"}, "role": "Story & Art"}],
            }
        )

        self.assertEqual(manga.num_volumes, 41)
        self.assertIsNone(manga.num_chapters)
        self.assertEqual(manga.authors[0].last_name, "Miura")
        self.assertEqual(manga.authors[0].role, "Story & Art")

    def test_ranking_element(self) -> None:
        ranking = parse_manga_ranking({"node": {"id": 2, "title": "Berserk"}, "ranking": {"rank": 1}})

        self.assertEqual(ranking.manga.id, 2)
        self.assertEqual(ranking.rank, 1)
        self.assertIsNone(ranking.previous_rank)


class TestParseUserAndForum(unittest.TestCase):
    def test_user_statistics(self) -> None:
        user = parse_user(
            {
                "id": 7,
                "name": "someone",
                "joined_at": "2012-01-01T00:00:00+00:00",
                "is_supporter": True,
                "anime_statistics": {"num_items_watching": 2, "num_days": 10.5, "mean_score": 7.2},
            }
        )

        self.assertEqual(user.joined_at.year, 2012)
        self.assertTrue(user.is_supporter)
        self.assertEqual(user.anime_statistics.num_items_watching, 2)
        self.assertEqual(user.anime_statistics.num_days, 10.5)
        self.assertEqual(user.anime_statistics.num_items_completed, 0)

    def test_topic_detail_with_poll(self) -> None:
        detail = parse_forum_topic_detail(
            {
                "data": {
                    "title": "Poll topic",
                    "posts": [
                        {
                            "id": 1,
                            "number": 1,
                            "created_by": {"id": 3, "name": "op", "forum_avator": "a.png"},
                            "body": "text",
                        }
                    ],
                    "poll": {
                        "id": 5,
                        "question": "Best?",
                        "close": True,
                        "options": [{"id": 1, "text": "Yes", "votes": 4}],
                    },
                },
                "paging": {},
            }
        )

        self.assertEqual(detail.title, "Poll topic")
        self.assertEqual(detail.posts[0].created_by.forum_avatar, "a.png")
        self.assertTrue(detail.poll.closed)
        self.assertEqual(detail.poll.options[0].votes, 4)


if __name__ == "__main__":
    unittest.main()
