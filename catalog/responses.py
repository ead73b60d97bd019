"""Turn controller decisions into responses: a rendered view or a redirect."""
from flask import redirect, render_template

from .models import STATUSES
from .repository import authors, books, genres


def render_view(view, **bag):
    return render_template(f"{view}.html", **bag)


def redirect_to(target):
    return redirect(target)


def genre_checks(all_genres, book=None):
    """Map every genre id to whether ``book`` carries it.

    Request-scoped view data only; stored genres are never touched.
    """
    selected = book.genre_ids if book is not None else set()
    return {genre.id: genre.id in selected for genre in all_genres}


def render_author_form(title, author=None, errors=None):
    return render_view("author_form", title=title, author=author, errors=errors or [])


def render_genre_form(title, genre=None, errors=None):
    return render_view("genre_form", title=title, genre=genre, errors=errors or [])


def render_book_form(title, book=None, errors=None):
    all_authors = authors.list()
    all_genres = genres.list()
    return render_view(
        "book_form",
        title=title,
        book=book,
        authors=all_authors,
        genres=all_genres,
        checked=genre_checks(all_genres, book),
        errors=errors or [],
    )


def render_bookinstance_form(title, bookinstance=None, errors=None, selected_book=None):
    if bookinstance is not None:
        selected_book = bookinstance.book_id
    return render_view(
        "bookinstance_form",
        title=title,
        bookinstance=bookinstance,
        book_list=books.list(),
        selected_book=selected_book,
        statuses=STATUSES,
        errors=errors or [],
    )
