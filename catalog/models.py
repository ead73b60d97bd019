from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

STATUS_AVAILABLE = "Available"
STATUS_MAINTENANCE = "Maintenance"
STATUS_LOANED = "Loaned"
STATUS_RESERVED = "Reserved"
STATUSES = (STATUS_AVAILABLE, STATUS_MAINTENANCE, STATUS_LOANED, STATUS_RESERVED)


def format_date(value):
    """Render a date as 'Dec 16, 1775', or '' when missing."""
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


book_genres = db.Table(
    'book_genres',
    db.Column('book_id', db.Integer, db.ForeignKey('books.id'), primary_key=True),
    db.Column('genre_id', db.Integer, db.ForeignKey('genres.id'), primary_key=True),
)


# --- Models ---
class Author(db.Model):
    __tablename__ = 'authors'
    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    family_name = db.Column(db.String(100), nullable=False, index=True)
    date_of_birth = db.Column(db.Date, nullable=True)
    date_of_death = db.Column(db.Date, nullable=True)

    books = db.relationship('Book', back_populates='author')

    @property
    def name(self):
        if not self.first_name or not self.family_name:
            return ""
        return f"{self.family_name}, {self.first_name}"

    @property
    def lifespan(self):
        if self.date_of_birth is None and self.date_of_death is None:
            return "Unknown"
        birth = format_date(self.date_of_birth) or "Unknown"
        if self.date_of_death is None:
            return birth
        return f"{birth} - {format_date(self.date_of_death)}"

    @property
    def url(self):
        return f"/catalog/author/{self.id}"

    def __repr__(self):
        return f"<Author id={self.id} name='{self.name}'>"


class Genre(db.Model):
    __tablename__ = 'genres'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False, unique=True, index=True)

    books = db.relationship('Book', secondary=book_genres, back_populates='genres')

    @property
    def url(self):
        return f"/catalog/genre/{self.id}"

    def __repr__(self):
        return f"<Genre id={self.id} name='{self.name}'>"


class Book(db.Model):
    __tablename__ = 'books'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.Text, nullable=False, index=True)
    summary = db.Column(db.Text, nullable=False)
    isbn = db.Column(db.Text, nullable=False)
    author_id = db.Column(db.Integer, db.ForeignKey('authors.id'), nullable=False)

    author = db.relationship('Author', back_populates='books')
    genres = db.relationship('Genre', secondary=book_genres, back_populates='books')
    instances = db.relationship('BookInstance', back_populates='book')

    @property
    def genre_ids(self):
        return {genre.id for genre in self.genres}

    @property
    def url(self):
        return f"/catalog/book/{self.id}"

    def __repr__(self):
        return f"<Book id={self.id} title='{self.title}'>"


class BookInstance(db.Model):
    """A physical copy of a book that can be borrowed."""
    __tablename__ = 'book_instances'
    id = db.Column(db.Integer, primary_key=True)
    book_id = db.Column(db.Integer, db.ForeignKey('books.id'), nullable=False)
    imprint = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=STATUS_MAINTENANCE, index=True)
    due_back = db.Column(db.Date, nullable=True)

    book = db.relationship('Book', back_populates='instances')

    @property
    def due_back_formatted(self):
        return format_date(self.due_back)

    @property
    def url(self):
        return f"/catalog/bookinstance/{self.id}"

    def __repr__(self):
        return f"<BookInstance id={self.id} status='{self.status}'>"
