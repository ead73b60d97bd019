from datetime import date

from catalog.models import Author, Book, Genre
from catalog.repository import authors, books, genres


def test_root_redirects_to_catalog(client):
    response = client.get('/')
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/catalog/')


def test_index_shows_counts(client, seeded):
    response = client.get('/catalog/')
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "<strong>Books:</strong> 1" in body
    assert "<strong>Copies available:</strong> 1" in body
    assert "<strong>Authors:</strong> 2" in body


def test_lists_render(client, seeded):
    for path in ('/catalog/authors', '/catalog/genres', '/catalog/books', '/catalog/bookinstances'):
        assert client.get(path).status_code == 200
    body = client.get('/catalog/authors').get_data(as_text=True)
    assert body.index("Austen, Jane") < body.index("Bronte, Emily")


def test_detail_pages(client, seeded):
    assert "Emma" in client.get(f"/catalog/author/{seeded['austen']}").get_data(as_text=True)
    assert "Romance" in client.get(f"/catalog/book/{seeded['emma']}").get_data(as_text=True)
    assert "Emma" in client.get(f"/catalog/genre/{seeded['romance']}").get_data(as_text=True)
    assert "Penguin, 2003" in client.get(f"/catalog/bookinstance/{seeded['copy']}").get_data(as_text=True)


def test_detail_not_found(client):
    for path in ('/catalog/author/99', '/catalog/book/99', '/catalog/genre/99',
                 '/catalog/bookinstance/99', '/catalog/book/99/update'):
        assert client.get(path).status_code == 404


def test_create_author_redirects_to_detail(client, app):
    response = client.post('/catalog/author/create', data={
        "first_name": "Jane", "family_name": "Austen",
        "date_of_birth": "1775-12-16", "date_of_death": "",
    })
    assert response.status_code == 302
    with app.app_context():
        author = Author.query.one()
        assert response.headers['Location'] == f"/catalog/author/{author.id}"
        assert author.date_of_birth == date(1775, 12, 16)
        assert author.date_of_death is None


def test_create_author_invalid_rerenders(client, app):
    response = client.post('/catalog/author/create', data={"first_name": "Jo-hn", "family_name": "Smith"})
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "First name has non-alphanumeric characters." in body
    assert 'value="Jo-hn"' in body
    with app.app_context():
        assert authors.count() == 0


def test_create_book_empty_title(client, app, seeded):
    response = client.post('/catalog/book/create', data={
        "title": "", "author": str(seeded["austen"]), "summary": "s", "isbn": "1",
        "genre": [str(seeded["fiction"])],
    })
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert 'data-field="title"' in body
    assert "Title must not be empty." in body
    assert f'id="genre-{seeded["fiction"]}" value="{seeded["fiction"]}" checked>' in body
    with app.app_context():
        assert books.count() == 1


def test_create_book_redirects(client, app, seeded):
    response = client.post('/catalog/book/create', data={
        "title": "Persuasion", "author": str(seeded["austen"]), "summary": "Second chances.",
        "isbn": "9780141439686", "genre": [str(seeded["fiction"]), str(seeded["romance"])],
    })
    assert response.status_code == 302
    with app.app_context():
        book = Book.query.filter_by(title="Persuasion").one()
        assert response.headers['Location'] == book.url
        assert book.genre_ids == {seeded["fiction"], seeded["romance"]}


def test_update_book_replaces_genres(client, app, seeded):
    with app.app_context():
        poetry = genres.create({"name": "Poetry"}).id
    response = client.post(f"/catalog/book/{seeded['emma']}/update", data={
        "title": "Emma", "author": str(seeded["austen"]), "summary": "Matchmaking.",
        "isbn": "9780141439587", "genre": [str(seeded["fiction"]), str(poetry)],
    })
    assert response.status_code == 302
    assert response.headers['Location'] == f"/catalog/book/{seeded['emma']}"
    with app.app_context():
        assert books.get(seeded["emma"]).genre_ids == {seeded["fiction"], poetry}


def test_update_form_prechecks_genres(client, seeded):
    body = client.get(f"/catalog/book/{seeded['emma']}/update").get_data(as_text=True)
    assert f'id="genre-{seeded["romance"]}" value="{seeded["romance"]}" checked>' in body
    assert f'id="genre-{seeded["fiction"]}" value="{seeded["fiction"]}">' in body


def test_update_author(client, app, seeded):
    response = client.post(f"/catalog/author/{seeded['bronte']}/update", data={
        "first_name": "Charlotte", "family_name": "Bronte",
    })
    assert response.status_code == 302
    with app.app_context():
        assert authors.get(seeded["bronte"]).first_name == "Charlotte"


def test_delete_author_without_books(client, app, seeded):
    url = f"/catalog/author/{seeded['bronte']}/delete"
    assert client.get(url).status_code == 200
    response = client.post(url)
    assert response.status_code == 302
    assert response.headers['Location'] == "/catalog/authors"
    with app.app_context():
        assert authors.find(seeded["bronte"]) is None


def test_delete_author_with_books_is_blocked(client, app, seeded):
    response = client.post(f"/catalog/author/{seeded['austen']}/delete")
    assert response.status_code == 200
    assert "Delete the following books" in response.get_data(as_text=True)
    with app.app_context():
        assert authors.get(seeded["austen"]).family_name == "Austen"


def test_delete_missing_redirects_to_list(client):
    response = client.get('/catalog/book/99/delete')
    assert response.status_code == 302
    assert response.headers['Location'] == "/catalog/books"
    response = client.post('/catalog/author/99/delete')
    assert response.headers['Location'] == "/catalog/authors"


def test_delete_book_blocked_by_copies(client, seeded):
    response = client.post(f"/catalog/book/{seeded['emma']}/delete")
    assert response.status_code == 200
    assert "Delete the following copies" in response.get_data(as_text=True)


def test_genre_create_duplicate_redirects_to_existing(client, app, seeded):
    response = client.post('/catalog/genre/create', data={"name": "fiction"})
    assert response.status_code == 302
    assert response.headers['Location'] == f"/catalog/genre/{seeded['fiction']}"
    with app.app_context():
        assert genres.count() == 2


def test_genre_update_rejects_existing_name(client, seeded):
    response = client.post(f"/catalog/genre/{seeded['fiction']}/update", data={"name": "Romance"})
    assert response.status_code == 200
    assert "Genre name already exists." in response.get_data(as_text=True)


def test_genre_delete_keeps_books(client, app, seeded):
    response = client.post(f"/catalog/genre/{seeded['romance']}/delete")
    assert response.status_code == 302
    with app.app_context():
        assert Genre.query.count() == 1
        assert books.get(seeded["emma"]).genres == []


def test_bookinstance_create_and_delete(client, app, seeded):
    response = client.post('/catalog/bookinstance/create', data={
        "book": str(seeded["emma"]), "imprint": "Oxford, 2008", "due_back": "2030-01-01",
        "status": "Loaned",
    })
    assert response.status_code == 302
    location = response.headers['Location']
    assert "Jan 1, 2030" in client.get(location).get_data(as_text=True)
    assert client.post(f"{location}/delete").headers['Location'] == "/catalog/bookinstances"


def test_bookinstance_create_form_preselects_book(client, seeded):
    body = client.get(f"/catalog/bookinstance/create?book={seeded['emma']}").get_data(as_text=True)
    assert f'<option value="{seeded["emma"]}" selected>' in body


def test_method_not_allowed(client):
    assert client.put('/catalog/authors').status_code == 405


def test_create_book_with_long_title_and_isbn(client, app, seeded):
    response = client.post('/catalog/book/create', data={
        "title": "A" * 300, "author": str(seeded["austen"]), "summary": "Long.",
        "isbn": "9" * 60,
    })
    assert response.status_code == 302
    with app.app_context():
        book = Book.query.filter_by(isbn="9" * 60).one()
        assert book.title == "A" * 300
        assert response.headers['Location'] == book.url


def test_genre_create_short_name_with_ampersand(client, app):
    response = client.post('/catalog/genre/create', data={"name": "a&"})
    assert response.status_code == 200
    assert "Genre name must contain at least 3 characters" in response.get_data(as_text=True)
    with app.app_context():
        assert genres.count() == 0


def test_update_book_invalid_keeps_stored_values(client, app, seeded):
    response = client.post(f"/catalog/book/{seeded['emma']}/update", data={
        "title": "", "author": str(seeded["austen"]), "summary": "Changed.",
        "isbn": "1", "genre": [str(seeded["fiction"])],
    })
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Title must not be empty." in body
    assert "Changed." in body
    assert f'id="genre-{seeded["fiction"]}" value="{seeded["fiction"]}" checked>' in body
    assert f'id="genre-{seeded["romance"]}" value="{seeded["romance"]}">' in body
    assert f'<option value="{seeded["bronte"]}" >' in body
    with app.app_context():
        book = books.get(seeded["emma"])
        assert book.title == "Emma"
        assert book.summary == "Matchmaking."
        assert book.genre_ids == {seeded["romance"]}


def test_update_author_invalid_rerenders(client, app, seeded):
    response = client.post(f"/catalog/author/{seeded['bronte']}/update", data={
        "first_name": "Char-lotte", "family_name": "Bronte",
    })
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "First name has non-alphanumeric characters." in body
    assert 'value="Char-lotte"' in body
    with app.app_context():
        assert authors.get(seeded["bronte"]).first_name == "Emily"


def test_page_title_is_not_double_escaped(client, app, seeded):
    with app.app_context():
        book_id = books.create({"title": "Tom &amp; Jerry", "summary": "s", "isbn": "1",
                                "author_id": seeded["austen"], "genre_ids": []}).id
    body = client.get(f"/catalog/book/{book_id}").get_data(as_text=True)
    assert "<title>Tom &amp; Jerry</title>" in body
    assert "&amp;amp;" not in body
