"""Library catalog web app (Flask + SQLAlchemy).

Librarians manage authors, genres, books and book copies through HTML forms.

Run:
  flask --app library_catalog init-db
  flask --app library_catalog run
"""

import time

import structlog
from flask import Flask, g, request
from flask_talisman import Talisman

from .cli import init_db
from .config import config_from_env
from .errors import register_error_handlers
from .extensions import csrf, db
from .logs import configure_logging
from .views import bp

log = structlog.get_logger()

# Bootstrap is loaded from its CDN by base.html
CSP = {
    'default-src': ["'self'"],
    'script-src': ["'self'", "https://cdn.jsdelivr.net"],
    'style-src': ["'self'", "https://cdn.jsdelivr.net"],
    'img-src': ["'self'", "data:"],
}


def create_app(config=None):
    app = Flask(__name__)
    app.config.from_object(config or config_from_env())

    configure_logging(app.config['LOG_LEVEL'], app.config['LOG_JSON'])

    db.init_app(app)
    csrf.init_app(app)
    Talisman(app, content_security_policy=CSP, force_https=app.config['FORCE_HTTPS'],
             session_cookie_secure=app.config['FORCE_HTTPS'])

    app.register_blueprint(bp)
    register_error_handlers(app)
    app.cli.add_command(init_db)

    @app.before_request
    def start_timer():
        g.started = time.perf_counter()

    @app.after_request
    def log_request(response):
        started = g.pop('started', None)
        duration_ms = round((time.perf_counter() - started) * 1000, 2) if started else None
        log.info("request_completed", method=request.method, path=request.path,
                 status=response.status_code, duration_ms=duration_ms)
        return response

    return app
