from datetime import date

import pytest

from catalog import create_app
from catalog.config import TestConfig
from catalog.repository import authors, book_instances, books, genres


@pytest.fixture
def app():
    yield create_app(TestConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def seeded(app):
    """Two authors, two genres, one book by Austen with one copy. Returns ids."""
    with app.app_context():
        austen = authors.create({"first_name": "Jane", "family_name": "Austen",
                                 "date_of_birth": date(1775, 12, 16), "date_of_death": None})
        bronte = authors.create({"first_name": "Emily", "family_name": "Bronte",
                                 "date_of_birth": None, "date_of_death": None})
        fiction = genres.create({"name": "Fiction"})
        romance = genres.create({"name": "Romance"})
        emma = books.create({"title": "Emma", "summary": "Matchmaking.", "isbn": "9780141439587",
                             "author_id": austen.id, "genre_ids": [romance.id]})
        copy = book_instances.create({"book_id": emma.id, "imprint": "Penguin, 2003",
                                      "status": "Available", "due_back": None})
        return {
            "austen": austen.id,
            "bronte": bronte.id,
            "fiction": fiction.id,
            "romance": romance.id,
            "emma": emma.id,
            "copy": copy.id,
        }
