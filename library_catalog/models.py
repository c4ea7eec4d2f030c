import uuid
from datetime import date

from .extensions import db

STATUS_CHOICES = ('Available', 'Maintenance', 'Loaned', 'Reserved')
DEFAULT_STATUS = 'Maintenance'


def new_id() -> str:
    return uuid.uuid4().hex


def format_date(value):
    if not value:
        return ""
    return value.strftime("%b %d, %Y")


book_genres = db.Table(
    'book_genres',
    db.Column('book_id', db.String(32), db.ForeignKey('books.id'), primary_key=True),
    db.Column('genre_id', db.String(32), db.ForeignKey('genres.id'), primary_key=True),
)


# --- Models ---
# Text columns hold escaped values, so they are five times the longest accepted input
class Author(db.Model):
    __tablename__ = 'authors'
    id = db.Column(db.String(32), primary_key=True, default=new_id)
    first_name = db.Column(db.String(500), nullable=False)
    family_name = db.Column(db.String(500), nullable=False, index=True)
    date_of_birth = db.Column(db.Date)
    date_of_death = db.Column(db.Date)

    books = db.relationship('Book', back_populates='author')

    @property
    def full_name(self):
        if self.first_name and self.family_name:
            return f"{self.family_name}, {self.first_name}"
        return ""

    @property
    def lifespan(self):
        if not self.date_of_birth and not self.date_of_death:
            return ""
        return f"{format_date(self.date_of_birth) or '?'} - {format_date(self.date_of_death)}".rstrip()

    @property
    def url(self):
        return f"/author/{self.id}"


class Genre(db.Model):
    __tablename__ = 'genres'
    id = db.Column(db.String(32), primary_key=True, default=new_id)
    name = db.Column(db.String(500), nullable=False, unique=True, index=True)

    books = db.relationship('Book', secondary=book_genres, back_populates='genres')

    @property
    def url(self):
        return f"/genre/{self.id}"


class Book(db.Model):
    __tablename__ = 'books'
    id = db.Column(db.String(32), primary_key=True, default=new_id)
    title = db.Column(db.String(1250), nullable=False, index=True)
    author_id = db.Column(db.String(32), db.ForeignKey('authors.id'), nullable=False, index=True)
    summary = db.Column(db.Text, nullable=False)
    isbn = db.Column(db.String(200), nullable=False)

    author = db.relationship('Author', back_populates='books')
    genres = db.relationship('Genre', secondary=book_genres, back_populates='books')

    @property
    def url(self):
        return f"/book/{self.id}"


class BookInstance(db.Model):
    __tablename__ = 'book_instances'
    id = db.Column(db.String(32), primary_key=True, default=new_id)
    # Reference only: copies keep their stored book id when the book is deleted
    book_id = db.Column(db.String(32), nullable=False, index=True)
    imprint = db.Column(db.String(1250), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=DEFAULT_STATUS)
    due_back = db.Column(db.Date, default=date.today)

    book = db.relationship(
        'Book',
        primaryjoin='foreign(BookInstance.book_id) == Book.id',
        viewonly=True,
    )

    @property
    def due_back_formatted(self):
        return format_date(self.due_back)

    @property
    def url(self):
        return f"/bookinstance/{self.id}"
