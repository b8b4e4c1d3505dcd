from flask import Flask, request
import logging
from logging.handlers import RotatingFileHandler
import os
from flask_compress import Compress
from flask_cors import CORS
from marshmallow import ValidationError
from werkzeug.middleware.proxy_fix import ProxyFix

from bulk_user_admin.security_utils import log_structured

from .commands.user_commands import create_user, seed_directory, seed_demo_users

from bulk_user_admin.routes import register_blueprints

from .config import Config
from .errors import BulkUserAdminError
from .extensions import jwt, db, migrate, ma
from .security import init_jwt_callbacks
from .models import *
from .utils.api_helper import error, error_from


def configure_logging(app):
    log_dir = app.config.get("LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)

    if not app.logger.handlers:
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "app.log"),
            maxBytes=10240,
            backupCount=5
        )
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        app.logger.addHandler(file_handler)

    app.logger.setLevel(logging.DEBUG)
    app.logger.info("Logging configured.")

    # Wire internal module loggers to use the same handlers/formatting.
    # Propagation is disabled so records are not emitted twice.
    def _wire_logger(name: str, level: int | None = None):
        lg = logging.getLogger(name)
        lg.propagate = False
        lg.handlers = []
        for h in app.logger.handlers:
            lg.addHandler(h)
        lg.setLevel(level if level is not None else app.logger.level)
        app.logger.debug("Logger wired: %s", name)

    # Add here when new modules introduce their own named loggers.
    names_levels = {
        'bulk_users': logging.INFO,
        'user_directory': logging.INFO,
        'security_utils': logging.INFO,
    }
    # Allow env overrides: APP_LOG_LEVEL_<LOGGER>=DEBUG|INFO|WARNING|ERROR|CRITICAL
    lvl_map = {
        'CRITICAL': logging.CRITICAL,
        'ERROR': logging.ERROR,
        'WARNING': logging.WARNING,
        'INFO': logging.INFO,
        'DEBUG': logging.DEBUG,
        'NOTSET': logging.NOTSET,
    }
    for k, v in os.environ.items():
        if not k.startswith('APP_LOG_LEVEL_'):
            continue
        name = k[len('APP_LOG_LEVEL_'):].strip().lower()
        level = lvl_map.get((v or '').strip().upper())
        if not name or level is None:
            continue
        names_levels[name] = level
    for name, lvl in names_levels.items():
        _wire_logger(name, lvl)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app)
    app.logger.info("Using config: %s", config_class.__name__)

    # Optional proxy fix: enable when running behind a trusted proxy by setting PROXY_FIX_NUM
    try:
        num_proxies = int(os.environ.get('PROXY_FIX_NUM', '0'))
    except ValueError:
        num_proxies = 0
    if num_proxies > 0:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=num_proxies, x_proto=num_proxies, x_host=num_proxies, x_port=num_proxies, x_prefix=num_proxies)
        app.logger.info("ProxyFix enabled for %d proxies", num_proxies)

    db.init_app(app)
    migrate.init_app(app, db)
    ma.init_app(app)
    jwt.init_app(app)
    init_jwt_callbacks(jwt)
    app.cli.add_command(seed_directory)
    app.cli.add_command(create_user)
    app.cli.add_command(seed_demo_users)

    # ------------------------------------------------------------------
    # Logging & Access log middleware
    # ------------------------------------------------------------------
    @app.before_request
    def _log_request():
        log_structured("request", method=request.method, path=request.path, ip=request.remote_addr, args=dict(request.args))

    @app.after_request
    def _log_response(resp):
        log_structured("response", method=request.method, path=request.path, status=resp.status_code)
        resp.headers.setdefault('X-Content-Type-Options', 'nosniff')
        resp.headers.setdefault('X-Frame-Options', 'DENY')
        resp.headers.setdefault('Referrer-Policy', 'no-referrer')
        resp.headers.setdefault('Cache-Control', 'no-store')
        return resp

    # ------------------------------------------------------------------
    # Error Handlers (generic safe messages)
    # ------------------------------------------------------------------
    @app.errorhandler(BulkUserAdminError)
    def _service_error(e):
        if e.status_code >= 500:
            app.logger.error("Bulk user admin failure: %s", e.message)
        else:
            app.logger.info("Bulk user admin request rejected: %s (%s)", e.code, e.message)
        return error_from(e)

    @app.errorhandler(ValidationError)
    def _validation_error(e):
        return error("Invalid request", 400, code="validation_error", messages=e.messages)

    @app.errorhandler(404)
    def _not_found(e):
        return error("not_found", 404, code="not_found")

    @app.errorhandler(405)
    def _method_not_allowed(e):
        return error("method_not_allowed", 405, code="method_not_allowed")

    @app.errorhandler(500)
    def _server_error(e):
        app.logger.exception("Unhandled server error")
        return error("internal_server_error", 500, code="internal_server_error")

    Compress(app)
    CORS(app, supports_credentials=True)
    app.logger.info("Middleware loaded: Compress, CORS")

    register_blueprints(app)

    app.logger.info("✅ Flask app created successfully.")
    return app
