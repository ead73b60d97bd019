from flask import Blueprint, redirect, request, url_for

from .candidates import candidate_from_form
from .errors import NotFoundError
from .forms import AuthorForm, BookForm, BookInstanceForm, GenreForm, to_identity
from .guard import guarded_delete
from .models import STATUS_AVAILABLE
from .repository import authors, book_instances, books, genres
from .responses import (
    redirect_to, render_author_form, render_book_form, render_bookinstance_form,
    render_genre_form, render_view,
)

bp = Blueprint('catalog', __name__, url_prefix='/catalog')


@bp.route('/')
def index():
    return render_view(
        "index",
        title="Local Library Home",
        book_count=books.count(),
        book_instance_count=book_instances.count(),
        book_instance_available_count=book_instances.count(status=STATUS_AVAILABLE),
        author_count=authors.count(),
        genre_count=genres.count(),
    )


# --- Authors ---
@bp.route('/authors')
def author_list():
    return render_view("author_list", title="Author List", author_list=authors.list())


@bp.route('/author/<int:author_id>')
def author_detail(author_id):
    author = authors.get(author_id)
    return render_view(
        "author_detail",
        title="Author Detail",
        author=author,
        author_books=authors.find_dependents(author_id),
    )


@bp.route('/author/create', methods=['GET', 'POST'])
def author_create():
    if request.method == 'GET':
        return render_author_form("Create Author")
    form = AuthorForm()
    if not form.validate():
        author = candidate_from_form("author", form)
        return render_author_form("Create Author", author, form.error_list())
    author = authors.create(form.entity_fields())
    return redirect_to(author.url)


@bp.route('/author/<int:author_id>/delete', methods=['GET', 'POST'])
def author_delete(author_id):
    author = authors.find(author_id)
    if author is None:
        return redirect(url_for('catalog.author_list'))
    if request.method == 'GET':
        return render_view(
            "author_delete",
            title="Delete Author",
            author=author,
            author_books=authors.find_dependents(author_id),
        )
    outcome = guarded_delete("author", author_id)
    if outcome.blocked:
        return render_view(
            "author_delete", title="Delete Author", author=author, author_books=outcome.dependents
        )
    return redirect(url_for('catalog.author_list'))


@bp.route('/author/<int:author_id>/update', methods=['GET', 'POST'])
def author_update(author_id):
    if request.method == 'GET':
        return render_author_form("Update Author", authors.get(author_id))
    form = AuthorForm()
    if not form.validate():
        author = candidate_from_form("author", form, entity_id=author_id)
        return render_author_form("Update Author", author, form.error_list())
    author = authors.update(author_id, form.entity_fields())
    return redirect_to(author.url)


# --- Genres ---
@bp.route('/genres')
def genre_list():
    return render_view("genre_list", title="Genre List", genre_list=genres.list())


@bp.route('/genre/<int:genre_id>')
def genre_detail(genre_id):
    genre = genres.get(genre_id)
    return render_view(
        "genre_detail",
        title="Genre Detail",
        genre=genre,
        genre_books=genres.find_dependents(genre_id),
    )


@bp.route('/genre/create', methods=['GET', 'POST'])
def genre_create():
    if request.method == 'GET':
        return render_genre_form("Create Genre")
    form = GenreForm()
    if not form.validate():
        genre = candidate_from_form("genre", form)
        return render_genre_form("Create Genre", genre, form.error_list())
    existing = genres.find_by_name(form.entity_fields()["name"])
    if existing is not None:
        return redirect_to(existing.url)
    genre = genres.create(form.entity_fields())
    return redirect_to(genre.url)


@bp.route('/genre/<int:genre_id>/delete', methods=['GET', 'POST'])
def genre_delete(genre_id):
    genre = genres.find(genre_id)
    if genre is None:
        return redirect(url_for('catalog.genre_list'))
    if request.method == 'GET':
        return render_view(
            "genre_delete",
            title="Delete Genre",
            genre=genre,
            genre_books=genres.find_dependents(genre_id),
        )
    guarded_delete("genre", genre_id)
    return redirect(url_for('catalog.genre_list'))


@bp.route('/genre/<int:genre_id>/update', methods=['GET', 'POST'])
def genre_update(genre_id):
    if request.method == 'GET':
        return render_genre_form("Update Genre", genres.get(genre_id))
    form = GenreForm()
    errors = form.error_list() if not form.validate() else []
    if not errors:
        existing = genres.find_by_name(form.entity_fields()["name"])
        if existing is not None and existing.id != genre_id:
            errors = [{"field": "name", "message": "Genre name already exists."}]
    if errors:
        genre = candidate_from_form("genre", form, entity_id=genre_id)
        return render_genre_form("Update Genre", genre, errors)
    genre = genres.update(genre_id, form.entity_fields())
    return redirect_to(genre.url)


# --- Books ---
@bp.route('/books')
def book_list():
    return render_view("book_list", title="Book List", book_list=books.list(with_relations=True))


@bp.route('/book/<int:book_id>')
def book_detail(book_id):
    book = books.get_with_relations(book_id)
    return render_view(
        "book_detail",
        title=book.title,
        book=book,
        book_instances=books.find_dependents(book_id),
    )


@bp.route('/book/create', methods=['GET', 'POST'])
def book_create():
    if request.method == 'GET':
        return render_book_form("Create Book")
    form = BookForm()
    if not form.validate():
        book = candidate_from_form("book", form)
        return render_book_form("Create Book", book, form.error_list())
    book = books.create(form.entity_fields())
    return redirect_to(book.url)


@bp.route('/book/<int:book_id>/delete', methods=['GET', 'POST'])
def book_delete(book_id):
    try:
        book = books.get_with_relations(book_id)
    except NotFoundError:
        return redirect(url_for('catalog.book_list'))
    if request.method == 'GET':
        return render_view(
            "book_delete",
            title="Delete Book",
            book=book,
            book_instances=books.find_dependents(book_id),
        )
    outcome = guarded_delete("book", book_id)
    if outcome.blocked:
        return render_view(
            "book_delete", title="Delete Book", book=book, book_instances=outcome.dependents
        )
    return redirect(url_for('catalog.book_list'))


@bp.route('/book/<int:book_id>/update', methods=['GET', 'POST'])
def book_update(book_id):
    if request.method == 'GET':
        return render_book_form("Update Book", books.get_with_relations(book_id))
    form = BookForm()
    if not form.validate():
        book = candidate_from_form("book", form, entity_id=book_id)
        return render_book_form("Update Book", book, form.error_list())
    book = books.update(book_id, form.entity_fields())
    return redirect_to(book.url)


# --- Book instances ---
@bp.route('/bookinstances')
def bookinstance_list():
    return render_view(
        "bookinstance_list",
        title="Book Instance List",
        bookinstance_list=book_instances.list(with_relations=True),
    )


@bp.route('/bookinstance/<int:bookinstance_id>')
def bookinstance_detail(bookinstance_id):
    bookinstance = book_instances.get_with_relations(bookinstance_id)
    return render_view(
        "bookinstance_detail",
        title=f"Copy: {bookinstance.book.title}",
        bookinstance=bookinstance,
    )


@bp.route('/bookinstance/create', methods=['GET', 'POST'])
def bookinstance_create():
    if request.method == 'GET':
        return render_bookinstance_form(
            "Create BookInstance", selected_book=to_identity(request.args.get('book'))
        )
    form = BookInstanceForm()
    if not form.validate():
        bookinstance = candidate_from_form("bookinstance", form)
        return render_bookinstance_form("Create BookInstance", bookinstance, form.error_list())
    bookinstance = book_instances.create(form.entity_fields())
    return redirect_to(bookinstance.url)


@bp.route('/bookinstance/<int:bookinstance_id>/delete', methods=['GET', 'POST'])
def bookinstance_delete(bookinstance_id):
    try:
        bookinstance = book_instances.get_with_relations(bookinstance_id)
    except NotFoundError:
        return redirect(url_for('catalog.bookinstance_list'))
    if request.method == 'GET':
        return render_view(
            "bookinstance_delete", title="Delete BookInstance", bookinstance=bookinstance
        )
    guarded_delete("bookinstance", bookinstance_id)
    return redirect(url_for('catalog.bookinstance_list'))


@bp.route('/bookinstance/<int:bookinstance_id>/update', methods=['GET', 'POST'])
def bookinstance_update(bookinstance_id):
    if request.method == 'GET':
        return render_bookinstance_form(
            "Update BookInstance", book_instances.get(bookinstance_id)
        )
    form = BookInstanceForm()
    if not form.validate():
        bookinstance = candidate_from_form("bookinstance", form, entity_id=bookinstance_id)
        return render_bookinstance_form("Update BookInstance", bookinstance, form.error_list())
    bookinstance = book_instances.update(bookinstance_id, form.entity_fields())
    return redirect_to(bookinstance.url)
