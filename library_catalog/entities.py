"""What differs between Author, Genre, Book and BookInstance flows."""

from __future__ import annotations

from datetime import date

from .models import DEFAULT_STATUS, STATUS_CHOICES, Author, Book, BookInstance, Genre
from .store import CatalogStore
from .validation import ErrorItem
from .workflow import CrudWorkflow, EntityDescriptor, Rendered


# --- Author ---
def assign_author(store, author, values):
    author.first_name = values['first_name']
    author.family_name = values['family_name']
    author.date_of_birth = values['date_of_birth']
    author.date_of_death = values['date_of_death']


def books_by_author(store, author):
    return store.find(Book, Book.author_id == author.id, order_by=Book.title)


AUTHOR = EntityDescriptor(
    name='author',
    label='Author',
    model=Author,
    list_title="Author List",
    list_path='/authors',
    list_order=lambda: Author.family_name,
    assign=assign_author,
    related=lambda store, author: {'author_books': books_by_author(store, author)},
    dependents=books_by_author,
    dependents_key='author_books',
)


# --- Genre ---
def assign_genre(store, genre, values):
    genre.name = values['name']


def books_in_genre(store, genre):
    return store.find(Book, Book.genres.any(Genre.id == genre.id), order_by=Book.title)


GENRE = EntityDescriptor(
    name='genre',
    label='Genre',
    model=Genre,
    list_title="Genre List",
    list_path='/genres',
    list_order=lambda: Genre.name,
    assign=assign_genre,
    related=lambda store, genre: {'genre_books': books_in_genre(store, genre)},
    dependents=books_in_genre,
    dependents_key='genre_books',
    unique_key='name',
)


# --- Book ---
def assign_book(store, book, values):
    book.title = values['title']
    book.author_id = values['author']
    book.summary = values['summary']
    book.isbn = values['isbn']
    book.genres = store.get_many(Genre, values['genre'])


def book_form_values(book):
    return {
        'title': book.title,
        'author': book.author_id,
        'summary': book.summary,
        'isbn': book.isbn,
        'genre': [genre.id for genre in book.genres],
    }


def book_references(store, values):
    errors = []
    if values['author'] and store.get(Author, values['author']) is None:
        errors.append(ErrorItem('author', "Author not found"))
    wanted = set(values['genre'])
    if wanted:
        found = {genre.id for genre in store.get_many(Genre, wanted)}
        for missing in sorted(wanted - found):
            # ids were escaped by validation
            errors.append(ErrorItem('genre', f"Genre not found: {missing}"))
    return errors


BOOK = EntityDescriptor(
    name='book',
    label='Book',
    model=Book,
    list_title="Book List",
    list_path='/books',
    assign=assign_book,
    detail_title=lambda book: book.title,
    related=lambda store, book: {
        'book_instances': store.find(BookInstance, BookInstance.book_id == book.id),
    },
    form_context=lambda store: {
        'authors': store.find(Author, order_by=Author.family_name),
        'genres': store.find(Genre, order_by=Genre.name),
    },
    selected=lambda values: {
        'selected_author': values.get('author') or "",
        'selected_genres': list(values.get('genre') or []),
    },
    form_values=book_form_values,
    check_references=book_references,
)


# --- BookInstance ---
def assign_bookinstance(store, instance, values):
    instance.book_id = values['book']
    instance.imprint = values['imprint']
    instance.status = values['status']
    instance.due_back = values['due_back'] or date.today()


def bookinstance_form_values(instance):
    return {
        'book': instance.book_id,
        'imprint': instance.imprint,
        'status': instance.status,
        'due_back': instance.due_back,
    }


def bookinstance_references(store, values):
    if values['book'] and store.get(Book, values['book']) is None:
        return [ErrorItem('book', "Book not found")]
    return []


BOOKINSTANCE = EntityDescriptor(
    name='bookinstance',
    label='BookInstance',
    model=BookInstance,
    list_title="Book Instance List",
    list_path='/bookinstances',
    assign=assign_bookinstance,
    detail_title=lambda instance: "Book Instance Detail",
    form_context=lambda store: {
        'book_list': store.find(Book, order_by=Book.title),
        'status_choices': STATUS_CHOICES,
    },
    selected=lambda values: {'selected_book': values.get('book') or ""},
    form_values=bookinstance_form_values,
    defaults={'status': DEFAULT_STATUS},
    check_references=bookinstance_references,
)


ENTITIES = {entity.name: entity for entity in (AUTHOR, GENRE, BOOK, BOOKINSTANCE)}


def workflow_for(name: str, store: CatalogStore) -> CrudWorkflow:
    return CrudWorkflow(ENTITIES[name], store)


def catalog_summary(store: CatalogStore) -> Rendered:
    return Rendered('index.html', {
        'title': "Local Library Home",
        'book_count': store.count(Book),
        'book_instance_count': store.count(BookInstance),
        'book_instance_available_count': store.count(BookInstance, BookInstance.status == 'Available'),
        'author_count': store.count(Author),
        'genre_count': store.count(Genre),
    })
