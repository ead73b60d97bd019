"""Entity repositories over the Flask-SQLAlchemy session.

Repositories never check dependents before deleting; go through
:func:`catalog.guard.guarded_delete` for that.
"""
import logging

from sqlalchemy import func
from sqlalchemy.orm import load_only, selectinload

from .errors import NotFoundError
from .models import Author, Book, BookInstance, Genre, db

logger = logging.getLogger(__name__)


class Repository:
    model = None
    sort_key = "id"
    relations = ()

    @property
    def entity(self):
        return self.model.__name__

    def _relation_options(self):
        return [selectinload(getattr(self.model, name)) for name in self.relations]

    def list(self, sort_key=None, with_relations=False):
        column = getattr(self.model, sort_key or self.sort_key)
        stmt = db.select(self.model).order_by(column.asc(), self.model.id.asc())
        if with_relations:
            stmt = stmt.options(*self._relation_options())
        return list(db.session.scalars(stmt))

    def get(self, entity_id):
        obj = db.session.get(self.model, entity_id)
        if obj is None:
            raise NotFoundError(self.entity, entity_id)
        return obj

    def get_with_relations(self, entity_id):
        stmt = (
            db.select(self.model)
            .where(self.model.id == entity_id)
            .options(*self._relation_options())
        )
        obj = db.session.scalars(stmt).first()
        if obj is None:
            raise NotFoundError(self.entity, entity_id)
        return obj

    def find(self, entity_id):
        """Like :meth:`get` but returns None instead of raising."""
        return db.session.get(self.model, entity_id)

    def find_dependents(self, parent_id):
        return []

    def count(self, **filters):
        stmt = db.select(func.count()).select_from(self.model).filter_by(**filters)
        return db.session.scalar(stmt)

    def build(self, fields, entity_id=None):
        """Return an unsaved instance carrying ``fields``."""
        obj = self.model(id=entity_id)
        self._assign(obj, fields)
        return obj

    def _assign(self, obj, fields):
        for key, value in fields.items():
            setattr(obj, key, value)

    def create(self, fields):
        obj = self.model()
        self._assign(obj, fields)
        db.session.add(obj)
        db.session.commit()
        logger.info("Created %s %s", self.entity, obj.id)
        return obj

    def update(self, entity_id, fields):
        obj = self.get(entity_id)
        self._assign(obj, fields)
        db.session.commit()
        logger.info("Updated %s %s", self.entity, entity_id)
        return obj

    def delete(self, entity_id, commit=True):
        obj = self.get(entity_id)
        db.session.delete(obj)
        if commit:
            db.session.commit()
        logger.info("Deleted %s %s", self.entity, entity_id)


class AuthorRepository(Repository):
    model = Author
    sort_key = "family_name"

    def find_dependents(self, parent_id):
        stmt = (
            db.select(Book)
            .where(Book.author_id == parent_id)
            .options(load_only(Book.id, Book.title, Book.summary))
            .order_by(Book.title.asc(), Book.id.asc())
        )
        return list(db.session.scalars(stmt))


class GenreRepository(Repository):
    model = Genre
    sort_key = "name"

    def find_by_name(self, name):
        stmt = db.select(Genre).where(func.lower(Genre.name) == (name or "").lower())
        return db.session.scalars(stmt).first()

    def find_dependents(self, parent_id):
        stmt = (
            db.select(Book)
            .where(Book.genres.any(Genre.id == parent_id))
            .options(load_only(Book.id, Book.title, Book.summary))
            .order_by(Book.title.asc(), Book.id.asc())
        )
        return list(db.session.scalars(stmt))


class BookRepository(Repository):
    model = Book
    sort_key = "title"
    relations = ("author", "genres")

    def build(self, fields, entity_id=None):
        book = Book(id=entity_id)
        fields = dict(fields)
        # Transient genres only carry ids; nothing here touches the session.
        book.genres = [Genre(id=genre_id) for genre_id in fields.pop("genre_ids", [])]
        for key, value in fields.items():
            setattr(book, key, value)
        return book

    def _assign(self, obj, fields):
        fields = dict(fields)
        genre_ids = fields.pop("genre_ids", None)
        super()._assign(obj, fields)
        if genre_ids is not None:
            if genre_ids:
                stmt = db.select(Genre).where(Genre.id.in_(set(genre_ids)))
                obj.genres = list(db.session.scalars(stmt))
            else:
                obj.genres = []

    def find_dependents(self, parent_id):
        stmt = (
            db.select(BookInstance)
            .where(BookInstance.book_id == parent_id)
            .order_by(BookInstance.id.asc())
        )
        return list(db.session.scalars(stmt))


class BookInstanceRepository(Repository):
    model = BookInstance
    relations = ("book",)


authors = AuthorRepository()
genres = GenreRepository()
books = BookRepository()
book_instances = BookInstanceRepository()

REPOSITORIES = {
    "author": authors,
    "genre": genres,
    "book": books,
    "bookinstance": book_instances,
}
