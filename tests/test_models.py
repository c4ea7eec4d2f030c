from datetime import date

from library_catalog.models import Author


def test_full_name_needs_both_parts():
    assert Author(first_name="Jane", family_name="Austen").full_name == "Austen, Jane"
    assert Author(first_name="Jane", family_name="").full_name == ""


def test_lifespan():
    assert Author().lifespan == ""
    assert Author(date_of_birth=date(1775, 12, 16),
                  date_of_death=date(1817, 7, 18)).lifespan == "Dec 16, 1775 - Jul 18, 1817"
    assert Author(date_of_birth=date(1775, 12, 16)).lifespan == "Dec 16, 1775 -"
    assert Author(date_of_death=date(1817, 7, 18)).lifespan == "? - Jul 18, 1817"


def test_text_columns_hold_escaped_input():
    for column, longest in ((Author.__table__.c.first_name, 100), (Author.__table__.c.family_name, 100)):
        assert column.type.length >= len("&amp;") * longest
