from datetime import date

import click
import structlog
from flask.cli import with_appcontext

from .extensions import db
from .models import Author, Book, BookInstance, Genre

log = structlog.get_logger()


def seed_sample_data():
    austen = Author(first_name="Jane", family_name="Austen", date_of_birth=date(1775, 12, 16),
                    date_of_death=date(1817, 7, 18))
    twain = Author(first_name="Mark", family_name="Twain", date_of_birth=date(1835, 11, 30),
                   date_of_death=date(1910, 4, 21))
    fiction = Genre(name="Fiction")
    satire = Genre(name="Satire")
    db.session.add_all([austen, twain, fiction, satire])
    db.session.flush()

    pride = Book(title="Pride and Prejudice", author=austen, summary="A classic novel.",
                 isbn="9780141439518", genres=[fiction])
    finn = Book(title="Adventures of Huckleberry Finn", author=twain,
                summary="A classic American novel.", isbn="9780486280615", genres=[fiction, satire])
    db.session.add_all([pride, finn])
    db.session.flush()

    db.session.add_all([
        BookInstance(book_id=pride.id, imprint="Penguin Classics, 2003", status='Available'),
        BookInstance(book_id=pride.id, imprint="Penguin Classics, 2003", status='Loaned',
                     due_back=date.today()),
        BookInstance(book_id=finn.id, imprint="Dover Thrift, 1994", status='Maintenance'),
    ])
    db.session.commit()


@click.command('init-db')
@click.option('--drop', is_flag=True, help="Drop existing tables first.")
@with_appcontext
def init_db(drop):
    """Initialize the database and add sample data (for dev only)."""
    if drop:
        db.drop_all()
    db.create_all()
    if not Author.query.first():
        seed_sample_data()
        log.info("database_seeded")
        click.echo("Initialized DB with sample data.")
    else:
        click.echo("DB already initialized.")
