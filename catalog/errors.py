import logging

from flask import render_template
from flask_wtf.csrf import CSRFError
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class NotFoundError(Exception):
    """Raised when an entity identity does not resolve to a stored row."""

    def __init__(self, entity, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


def render_error(message, status):
    return render_template('error.html', message=message, status=status), status


def register_error_handlers(app):
    @app.errorhandler(NotFoundError)
    def entity_not_found(e):
        logger.info("%s %s not found", e.entity, e.entity_id)
        return render_error(str(e), 404)

    @app.errorhandler(404)
    def not_found(e):
        return render_error("The requested resource was not found.", 404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return render_error("Method not allowed.", 405)

    @app.errorhandler(CSRFError)
    def csrf_failed(e):
        return render_error(e.description, 400)

    @app.errorhandler(SQLAlchemyError)
    def store_failed(e):
        logger.exception("Unhandled store error")
        return render_error("Something went wrong while talking to the database.", 500)

    @app.errorhandler(500)
    def internal_error(e):
        return render_error("Internal server error.", 500)
