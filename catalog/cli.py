from datetime import date

import click

from .models import STATUS_AVAILABLE, STATUS_LOANED, STATUS_MAINTENANCE, db
from .repository import authors, book_instances, books, genres


def seed_catalog():
    """Add a handful of sample records. Returns False if data already exists."""
    if authors.count():
        return False
    austen = authors.create({"first_name": "Jane", "family_name": "Austen",
                             "date_of_birth": date(1775, 12, 16), "date_of_death": date(1817, 7, 18)})
    twain = authors.create({"first_name": "Mark", "family_name": "Twain",
                            "date_of_birth": date(1835, 11, 30), "date_of_death": date(1910, 4, 21)})
    fiction = genres.create({"name": "Fiction"})
    satire = genres.create({"name": "Satire"})
    pride = books.create({
        "title": "Pride and Prejudice", "summary": "A classic novel of manners.",
        "isbn": "9780141439518", "author_id": austen.id, "genre_ids": [fiction.id],
    })
    finn = books.create({
        "title": "Adventures of Huckleberry Finn", "summary": "A classic American novel.",
        "isbn": "9780486280615", "author_id": twain.id, "genre_ids": [fiction.id, satire.id],
    })
    book_instances.create({"book_id": pride.id, "imprint": "Penguin Classics, 2002",
                           "status": STATUS_AVAILABLE, "due_back": None})
    book_instances.create({"book_id": finn.id, "imprint": "Dover Thrift, 1994",
                           "status": STATUS_LOANED, "due_back": date(2030, 1, 1)})
    book_instances.create({"book_id": finn.id, "imprint": "Dover Thrift, 1994",
                           "status": STATUS_MAINTENANCE, "due_back": None})
    return True


def register_cli(app):
    @app.cli.command("init-db")
    @click.option("--seed", is_flag=True, help="Load sample authors, genres, books and copies.")
    def init_db(seed):
        """Create the catalog tables."""
        db.create_all()
        click.echo("Initialized the catalog database.")
        if seed:
            if seed_catalog():
                click.echo("Loaded sample data.")
            else:
                click.echo("Catalog already has data, skipping sample data.")
