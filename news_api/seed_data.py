"""
Sample dataset used by ``scripts/seed.py`` and the test suite.

Shape worth knowing when writing tests:

- 3 topics; ``gardening`` has 12 articles, ``cats`` has 1, ``paper`` none.
- 4 users; ``lurker`` has written nothing.
- 13 articles with distinct ``created_at`` values; article 1 starts on
  100 votes, every other article on 0.
- 18 comments; article 1 has 11 of them (ids 2-9, 12, 13, 18), articles
  2, 4, 7, 8 and 10-13 have none.

Rows are inserted in list order, so ids on a fresh schema are the
1-based list positions.
"""
from datetime import datetime

_IMG = "https://images.pexels.com/photos/158651/news-newsletter-newspaper-information-158651.jpeg?w=700&h=700"

TOPICS = [
    {"slug": "gardening", "description": "Soil, seeds and the occasional shed"},
    {"slug": "cats", "description": "Small, furry and in charge"},
    {"slug": "paper", "description": "What books are made of"},
]

USERS = [
    {
        "username": "weegembump",
        "name": "gemma",
        "avatar_url": "https://avatars.example.com/weegembump.png",
    },
    {
        "username": "happyamy2016",
        "name": "amy",
        "avatar_url": "https://avatars.example.com/happyamy2016.png",
    },
    {
        "username": "cooljmessy",
        "name": "peter",
        "avatar_url": "https://avatars.example.com/cooljmessy.png",
    },
    {
        "username": "lurker",
        "name": "do_nothing",
        "avatar_url": "https://avatars.example.com/lurker.png",
    },
]


def _article(title, topic, author, body, created_at, votes=0):
    return {
        "title": title,
        "topic": topic,
        "author": author,
        "body": body,
        "created_at": created_at,
        "votes": votes,
        "article_img_url": _IMG,
    }


ARTICLES = [
    _article(
        "Living with a hundred tomato plants", "gardening", "weegembump",
        "It started with one seedling.", datetime(2020, 7, 9, 20, 11), votes=100,
    ),
    _article(
        "Compost, explained badly", "gardening", "happyamy2016",
        "Put things in a pile and wait.", datetime(2020, 10, 16, 5, 3),
    ),
    _article(
        "Eight sheds that changed my life", "gardening", "happyamy2016",
        "some sheds", datetime(2020, 11, 3, 9, 12),
    ),
    _article(
        "Allotment waiting lists are out of control", "gardening", "cooljmessy",
        "Twelve years and counting.", datetime(2020, 5, 6, 1, 14),
    ),
    _article(
        "Cats versus the vegetable patch", "cats", "cooljmessy",
        "The cats are winning.", datetime(2020, 8, 3, 13, 14),
    ),
    _article("A", "gardening", "happyamy2016", "Delicious tin of beans", datetime(2020, 10, 18, 1, 0)),
    _article("Z", "gardening", "happyamy2016", "I was hungry.", datetime(2020, 1, 7, 14, 8)),
    _article(
        "Do worms sleep?", "gardening", "happyamy2016",
        "Nobody has asked them.", datetime(2020, 4, 17, 1, 8),
    ),
    _article(
        "Slugs are not your friends", "gardening", "weegembump",
        "Whatever they tell you.", datetime(2020, 6, 6, 9, 10),
    ),
    _article(
        "Seven hedges from Manchester worth a visit", "gardening", "cooljmessy",
        "Hedge number one is a privet.", datetime(2020, 5, 14, 4, 15),
    ),
    _article(
        "Am I a gardener yet?", "gardening", "happyamy2016",
        "Having run out of windowsills, probably.", datetime(2020, 1, 15, 22, 21),
    ),
    _article("Moss", "gardening", "weegembump", "Have you seen the size of that moss?", datetime(2020, 10, 11, 11, 24)),
    _article(
        "Another article about tomatoes", "gardening", "weegembump",
        "There will never be enough articles about tomatoes!", datetime(2020, 10, 12, 8, 30),
    ),
]


def _comment(article_id, author, body, votes, created_at):
    return {
        "article_id": article_id,
        "author": author,
        "body": body,
        "votes": votes,
        "created_at": created_at,
    }


COMMENTS = [
    _comment(9, "happyamy2016", "Oh, I've got compost for days.", 16, datetime(2020, 4, 6, 12, 17)),
    _comment(1, "weegembump", "The beautiful thing about tomatoes is that they exist.", 14, datetime(2020, 10, 31, 3, 3)),
    _comment(1, "happyamy2016", "Replacing the lawn with beds was the right call.", 100, datetime(2020, 3, 1, 1, 13)),
    _comment(1, "happyamy2016", "I carry a log of my watering schedule.", -100, datetime(2020, 2, 23, 12, 1)),
    _comment(1, "happyamy2016", "I hate streaming noses", 0, datetime(2020, 11, 3, 21, 0)),
    _comment(1, "happyamy2016", "I hate streaming eyes even more", 0, datetime(2020, 4, 11, 21, 2)),
    _comment(1, "happyamy2016", "Lobster pot", 0, datetime(2020, 5, 15, 20, 19)),
    _comment(1, "happyamy2016", "Delicious crackerbreads", 0, datetime(2020, 4, 14, 20, 19)),
    _comment(1, "happyamy2016", "Superficially charming", 0, datetime(2020, 1, 1, 3, 8)),
    _comment(3, "happyamy2016", "git push origin main", 0, datetime(2020, 6, 20, 7, 24)),
    _comment(3, "happyamy2016", "Ambidextrous marsupial", 0, datetime(2020, 9, 19, 23, 10)),
    _comment(1, "happyamy2016", "Massive intercranial brain haemorrhage", 0, datetime(2020, 3, 2, 7, 10)),
    _comment(1, "happyamy2016", "Fruit pastilles", 0, datetime(2020, 6, 15, 10, 25)),
    _comment(5, "cooljmessy", "What do you see? I have no idea where this will lead us.", 16, datetime(2020, 6, 9, 5, 0)),
    _comment(5, "weegembump", "I am 100% sure that we're not completely sure.", 1, datetime(2020, 11, 24, 0, 8)),
    _comment(6, "weegembump", "This is a bad article name", 1, datetime(2020, 10, 11, 15, 23)),
    _comment(9, "happyamy2016", "The owls are not what they seem.", 20, datetime(2020, 3, 14, 17, 2)),
    _comment(1, "weegembump", "This morning, I showered for nine minutes.", 16, datetime(2020, 7, 21, 0, 20)),
]

SAMPLE_DATA = {
    "topics": TOPICS,
    "users": USERS,
    "articles": ARTICLES,
    "comments": COMMENTS,
}
