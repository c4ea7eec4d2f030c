import pytest

from library_catalog.models import Genre
from library_catalog.store import CatalogStore


class FailingSession:
    def __init__(self):
        self.added = []
        self.rolled_back = False

    def add(self, record):
        self.added.append(record)

    def commit(self):
        raise RuntimeError("connection lost")

    def rollback(self):
        self.rolled_back = True


def test_failed_commit_rolls_back_and_propagates():
    session = FailingSession()
    store = CatalogStore(session)
    with pytest.raises(RuntimeError):
        store.insert(Genre(name="Poetry"))
    assert session.rolled_back


def test_insert_and_delete(store):
    genre = store.insert(Genre(name="Poetry"))
    assert store.get(Genre, genre.id) is genre
    assert store.find_one(Genre, name="Poetry") is genre
    store.delete(genre)
    assert store.count(Genre) == 0


def test_get_without_id(store):
    assert store.get(Genre, "") is None
    assert store.get_many(Genre, []) == []
