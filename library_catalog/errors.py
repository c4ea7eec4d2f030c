import structlog
from flask import current_app, render_template
from werkzeug.exceptions import HTTPException, InternalServerError

from .extensions import db

log = structlog.get_logger()


def _render_error(status, message, detail=None):
    return render_template('error.html', title=f"Error {status}", status=status,
                           message=message, detail=detail), status


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def http_error(e):
        return _render_error(e.code, e.description)

    @app.errorhandler(Exception)
    def unhandled_error(e):
        # Store failures and bugs end up here; the session may be mid-transaction
        db.session.rollback()
        log.exception("unhandled_error", error=repr(e))
        detail = None if current_app.config.get('PRODUCTION') else repr(e)
        return _render_error(500, InternalServerError.description, detail)
