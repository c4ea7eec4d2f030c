import pytest

from library_catalog.contracts import PAGE_CONTRACTS, missing_keys
from library_catalog.entities import catalog_summary, workflow_for
from library_catalog.workflow import Rendered


@pytest.fixture
def catalog(make_book, make_copy, make_genre):
    genre = make_genre()
    book = make_book(genres=[genre])
    copy = make_copy(book)
    return {'author': book.author, 'genre': genre, 'book': book, 'bookinstance': copy}


def rendered_pages(store, catalog):
    yield catalog_summary(store)
    for name, record in catalog.items():
        workflow = workflow_for(name, store)
        yield workflow.list()
        yield workflow.detail(record.id)
        yield workflow.create_form()
        yield workflow.create({})
        yield workflow.update_form(record.id)
        yield workflow.update(record.id, {})
        yield workflow.delete_form(record.id)


def test_every_rendered_page_gets_the_data_it_declares(store, catalog):
    seen = set()
    for outcome in rendered_pages(store, catalog):
        assert isinstance(outcome, Rendered)
        assert missing_keys(outcome.template, outcome.data) == [], outcome.template
        seen.add(outcome.template)
    assert seen == set(PAGE_CONTRACTS)


def test_blocked_delete_page_satisfies_contract(store, catalog):
    for name in ('author', 'genre'):
        outcome = workflow_for(name, store).delete(catalog[name].id)
        assert missing_keys(outcome.template, outcome.data) == []


def test_failed_forms_carry_errors(store, catalog):
    for name, record in catalog.items():
        workflow = workflow_for(name, store)
        assert workflow.create({}).data['errors']
        assert workflow.update(record.id, {}).data['errors']


def test_unknown_template_has_no_contract():
    with pytest.raises(KeyError):
        missing_keys('publisher_list.html', {})
