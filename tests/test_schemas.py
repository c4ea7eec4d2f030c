import pytest

from library_catalog.models import STATUS_CHOICES
from library_catalog.schemas import DATE, REFERENCE, describe, field_names


def test_describe_lists_form_fields_in_order():
    assert field_names('author') == ['first_name', 'family_name', 'date_of_birth', 'date_of_death']
    assert field_names('genre') == ['name']
    assert field_names('book') == ['title', 'author', 'summary', 'isbn', 'genre']
    assert field_names('bookinstance') == ['book', 'imprint', 'status', 'due_back']


def test_author_constraints():
    specs = {spec.name: spec for spec in describe('author')}
    assert specs['first_name'].required and specs['first_name'].alphanumeric
    assert specs['family_name'].required and specs['family_name'].alphanumeric
    assert specs['date_of_birth'].kind == DATE and not specs['date_of_birth'].required


def test_genre_name_needs_three_characters():
    (name,) = describe('genre')
    assert name.required
    assert name.min_length == 3


def test_book_references():
    specs = {spec.name: spec for spec in describe('book')}
    assert specs['author'].kind == REFERENCE and specs['author'].ref == 'author'
    assert specs['genre'].many and not specs['genre'].required


def test_status_choices():
    status = {spec.name: spec for spec in describe('bookinstance')}['status']
    assert status.choices == STATUS_CHOICES == ('Available', 'Maintenance', 'Loaned', 'Reserved')


def test_unknown_entity():
    with pytest.raises(ValueError):
        describe('publisher')
