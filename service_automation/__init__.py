"""
Service request automation — Flask application factory.
"""
import logging

from flask import Flask, request, jsonify
from flask_cors import CORS

from . import config
from .database import SupabaseMirror, create_supabase_client, init_database
from .errors import ServiceAutomationError
from .extensions import limiter
from .services.catalog_store import CatalogStore
from .services.notifier import Notifier
from .services.option_service import ServiceOptionSource
from .services.request_store import RequestStore

logger = logging.getLogger(__name__)


def create_app(config_overrides=None):
    """Build the app and the collaborators it owns (store, notifier, option source)."""
    app = Flask(__name__)
    app.config.update(config.as_dict())
    app.json.sort_keys = False
    if config_overrides:
        app.config.update(config_overrides)

    CORS(app)
    limiter.init_app(app)

    db_path = app.config['DB_PATH']
    init_database(db_path)

    supabase = create_supabase_client(app.config['SUPABASE_URL'], app.config['SUPABASE_KEY'])
    mirror = SupabaseMirror(supabase) if supabase else None

    app.extensions['request_store'] = RequestStore(db_path, mirror=mirror)
    app.extensions['catalog_store'] = CatalogStore(db_path)
    app.extensions['notifier'] = Notifier(
        host=app.config['SMTP_HOST'],
        port=app.config['SMTP_PORT'],
        sender=app.config['SMTP_FROM'],
        username=app.config['SMTP_USER'],
        password=app.config['SMTP_PASSWORD'],
        use_tls=app.config['SMTP_USE_TLS'],
        enabled=app.config['EMAIL_ENABLED'],
    )
    app.extensions['option_source'] = ServiceOptionSource(
        app.config['SERVICE_OPTIONS_CSV_URL'],
        timeout=app.config['SHEET_FETCH_TIMEOUT'],
    )

    from .routes.health import health_bp
    from .routes.options import options_bp
    from .routes.service_requests import requests_bp
    app.register_blueprint(health_bp)
    app.register_blueprint(requests_bp)
    app.register_blueprint(options_bp)

    _register_hooks(app)
    return app


def _register_hooks(app):
    @app.before_request
    def log_request():
        logger.info(f"{request.method} {request.path}")

    @app.errorhandler(ServiceAutomationError)
    def service_error(error):
        if error.status_code >= 500:
            logger.error(f"{error.code}: {error.message}")
        else:
            logger.warning(f"{error.code}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Endpoint not found", "code": "NOT_FOUND"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"error": "Method not allowed", "code": "METHOD_NOT_ALLOWED"}), 405

    @app.errorhandler(429)
    def rate_limited(error):
        return jsonify({"error": "Too many requests", "code": "RATE_LIMITED"}), 429

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal server error: {error}")
        return jsonify({"error": "Internal server error", "code": "INTERNAL_ERROR"}), 500
