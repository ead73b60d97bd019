"""Validation layer: one form per entity, each yielding sanitized entity fields.

Free-text fields are trimmed and HTML-escaped, so the values a form hands back
(and the values redisplayed after a failed submission) are always the sanitized
ones. Genre names are escaped only after their length has been checked.
"""
from dateutil.parser import isoparse
from flask_wtf import FlaskForm
from markupsafe import escape
from wtforms import Field, SelectField, SelectMultipleField, StringField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional, Regexp, ValidationError
from wtforms.widgets import DateInput

from .models import STATUS_MAINTENANCE, STATUSES, Author, Book, Genre, db

ALPHANUMERIC = r"^[A-Za-z0-9]+$"


# --- Filters ---
def strip_value(value):
    return value.strip() if isinstance(value, str) else value


# Characters beyond what markupsafe escapes.
EXTRA_ENTITIES = {"/": "&#x2F;", "\\": "&#x5C;", "`": "&#96;"}


def escape_value(value):
    if not isinstance(value, str):
        return value
    escaped = str(escape(value))
    for char, entity in EXTRA_ENTITIES.items():
        escaped = escaped.replace(char, entity)
    return escaped


SANITIZE = [strip_value, escape_value]


def to_identity(value):
    """Coerce a submitted reference to an integer id, or None."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


# --- Fields ---
class IsoDateField(Field):
    """Optional ISO-8601 calendar date; blank input leaves ``data`` as None."""
    widget = DateInput()

    def __init__(self, label=None, validators=None, message="Invalid date", **kwargs):
        super().__init__(label, validators, **kwargs)
        self.message = message

    def _value(self):
        if self.raw_data:
            return " ".join(self.raw_data)
        return self.data.isoformat() if self.data else ""

    def process_formdata(self, valuelist):
        if not valuelist or not valuelist[0] or not valuelist[0].strip():
            self.data = None
            return
        try:
            self.data = isoparse(valuelist[0].strip()).date()
        except (ValueError, OverflowError):
            self.data = None
            raise ValueError(self.message)


def exists(model, message):
    def _exists(form, field):
        identity = to_identity(field.data)
        if identity is None or db.session.get(model, identity) is None:
            raise ValidationError(message)
    return _exists


# --- Forms ---
class CatalogForm(FlaskForm):
    """Base form exposing errors as a flat ``[{field, message}]`` list."""

    def error_list(self):
        return [
            {"field": name, "message": message}
            for name, messages in self.errors.items()
            for message in messages
        ]

    def entity_fields(self):
        raise NotImplementedError


class AuthorForm(CatalogForm):
    first_name = StringField('First name', filters=SANITIZE, validators=[
        DataRequired("First name must be specified."),
        Length(max=100),
        Regexp(ALPHANUMERIC, message="First name has non-alphanumeric characters."),
    ])
    family_name = StringField('Family name', filters=SANITIZE, validators=[
        DataRequired("Family name must be specified."),
        Length(max=100),
        Regexp(ALPHANUMERIC, message="Family name has non-alphanumeric characters."),
    ])
    date_of_birth = IsoDateField('Date of birth', validators=[Optional()], message="Invalid date of birth")
    date_of_death = IsoDateField('Date of death', validators=[Optional()], message="Invalid date of death")

    def entity_fields(self):
        return {
            "first_name": self.first_name.data,
            "family_name": self.family_name.data,
            "date_of_birth": self.date_of_birth.data,
            "date_of_death": self.date_of_death.data,
        }


class GenreForm(CatalogForm):
    # Length is measured on the trimmed text; escaping happens on the way out.
    name = StringField('Genre', filters=[strip_value], validators=[
        Length(min=3, max=100, message="Genre name must contain at least 3 characters"),
    ])

    def entity_fields(self):
        return {"name": escape_value(self.name.data or "")}


class BookForm(CatalogForm):
    title = StringField('Title', filters=SANITIZE, validators=[
        DataRequired("Title must not be empty."),
    ])
    author = StringField('Author', filters=SANITIZE, validators=[
        DataRequired("Author must not be empty."),
        exists(Author, "Author does not exist."),
    ])
    summary = TextAreaField('Summary', filters=SANITIZE, validators=[
        DataRequired("Summary must not be empty."),
    ])
    isbn = StringField('ISBN', filters=SANITIZE, validators=[
        DataRequired("ISBN must not be empty"),
    ])
    genre = SelectMultipleField('Genre', coerce=int, validate_choice=False)

    def validate_genre(self, field):
        wanted = set(field.data or [])
        if not wanted:
            return
        found = set(db.session.scalars(db.select(Genre.id).where(Genre.id.in_(wanted))))
        if wanted - found:
            raise ValidationError("Genre does not exist.")

    def entity_fields(self):
        return {
            "title": self.title.data,
            "author_id": to_identity(self.author.data),
            "summary": self.summary.data,
            "isbn": self.isbn.data,
            "genre_ids": list(self.genre.data or []),
        }


class BookInstanceForm(CatalogForm):
    book = StringField('Book', filters=SANITIZE, validators=[
        DataRequired("Book must be specified"),
        exists(Book, "Book does not exist."),
    ])
    imprint = StringField('Imprint', filters=SANITIZE, validators=[
        DataRequired("Imprint must be specified"),
    ])
    status = SelectField('Status', choices=[(s, s) for s in STATUSES], default=STATUS_MAINTENANCE)
    due_back = IsoDateField('Date when book available', validators=[Optional()])

    def entity_fields(self):
        return {
            "book_id": to_identity(self.book.data),
            "imprint": self.imprint.data,
            "status": self.status.data or STATUS_MAINTENANCE,
            "due_back": self.due_back.data,
        }
