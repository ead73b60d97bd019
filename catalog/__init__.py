"""
Local Library catalog — Flask app for authors, genres, books and their copies.

Features:
- List, detail, create, update and delete pages for every entity
- Server-side validation and sanitization with Flask-WTF
- Deletion blocked while other records still reference an entity
- CSRF protection and security headers

Run:
  flask --app catalog init-db --seed
  flask --app catalog run
"""
import logging

from flask import Flask, redirect, url_for
from flask_talisman import Talisman
from flask_wtf import CSRFProtect

from .cli import register_cli
from .config import Config
from .errors import register_error_handlers
from .models import db

csrf = CSRFProtect()


def configure_logging(app):
    level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger('catalog').setLevel(level)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    configure_logging(app)
    db.init_app(app)
    csrf.init_app(app)
    Talisman(
        app,
        force_https=app.config['FORCE_HTTPS'],
        session_cookie_secure=app.config['FORCE_HTTPS'],
        content_security_policy={
            'default-src': ["'self'"],
            'style-src': ["'self'", "https://cdn.jsdelivr.net"],
        },
    )

    from .views import bp
    app.register_blueprint(bp)

    @app.route('/')
    def home():
        return redirect(url_for('catalog.index'))

    register_error_handlers(app)
    register_cli(app)

    with app.app_context():
        db.create_all()

    app.logger.debug("Catalog app created with %s", config_object.__name__)
    return app
