import pytest

from library_catalog import create_app
from library_catalog.config import TestingConfig
from library_catalog.extensions import db
from library_catalog.models import Author, Book, BookInstance, Genre
from library_catalog.store import CatalogStore


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return CatalogStore()


@pytest.fixture
def make_author(store):
    def make(first_name="Ursula", family_name="LeGuin", **kw):
        return store.insert(Author(first_name=first_name, family_name=family_name, **kw))
    return make


@pytest.fixture
def make_genre(store):
    def make(name="Fantasy"):
        return store.insert(Genre(name=name))
    return make


@pytest.fixture
def make_book(store, make_author):
    def make(title="A Wizard of Earthsea", author=None, genres=(), **kw):
        author = author or make_author()
        kw.setdefault('summary', "A young wizard learns his true name.")
        kw.setdefault('isbn', "9780547773742")
        return store.insert(Book(title=title, author=author, genres=list(genres), **kw))
    return make


@pytest.fixture
def make_copy(store):
    def make(book, imprint="Parnassus, 1968", status='Available', **kw):
        return store.insert(BookInstance(book_id=book.id, imprint=imprint, status=status, **kw))
    return make
