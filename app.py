#!/usr/bin/env python3
"""
Waitlist - Main application entry point
"""
import os
import sys
import logging

# Add the project root directory to Python's path before any imports
project_root = os.path.dirname(os.path.abspath(__file__))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from flask import Flask, request, jsonify, current_app
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

import config
from config import ConfigError, resolve_database_url, engine_options
from extensions import cors, limiter, migrate
from models.waitlist import db
from models.analytics import WaitlistAnalytics  # noqa: F401  (registers the table)
from migrations.bootstrap import ensure_schema
from services.database import wait_for_database
from services.errors import DatabaseUnavailableError, SchemaBootstrapError
from routes.api import api_bp
from routes.health import health_bp
from routes.frontend import frontend_bp

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'SAMEORIGIN',
    'Referrer-Policy': 'no-referrer',
}


def configure_logging(level='INFO'):
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(config_overrides=None):
    """Create and configure the Flask application"""
    app = Flask(__name__, static_folder=None)

    # Configure app
    app.config.from_object(config)
    if config_overrides:
        app.config.update(config_overrides)

    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        app.config['SQLALCHEMY_DATABASE_URI'] = resolve_database_url(
            app.config.get('DATABASE_URL'), app.config['IS_PRODUCTION'])
    app.config.setdefault(
        'SQLALCHEMY_ENGINE_OPTIONS',
        engine_options(app.config['SQLALCHEMY_DATABASE_URI'], app.config['IS_PRODUCTION']))

    # Behind a reverse proxy the peer address is the proxy's
    if app.config['TRUST_PROXY_HOPS']:
        hops = app.config['TRUST_PROXY_HOPS']
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db, directory=os.path.join(project_root, 'alembic'))
    cors.init_app(app)
    limiter.init_app(app)

    # Register blueprints
    app.register_blueprint(health_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(frontend_bp)

    register_hooks(app)
    register_error_handlers(app)

    @app.cli.command('init-db')
    def init_db_command():
        """Create the waitlist tables if they are missing."""
        summary = ensure_schema(db)
        print(f"Created tables: {summary['created_tables'] or 'none'}")

    return app


def register_hooks(app):
    @app.before_request
    def log_request():
        if not current_app.config['IS_PRODUCTION']:
            current_app.logger.debug(f"{request.method} {request.path}")

    @app.after_request
    def add_security_headers(response):
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        if request.path.startswith('/api/') or request.path == '/health':
            response.headers.setdefault('Cache-Control', 'no-store')
        return response


def register_error_handlers(app):
    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'success': False, 'error': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({'success': False, 'error': 'Method not allowed'}), 405

    @app.errorhandler(429)
    def rate_limited(e):
        return jsonify({'success': False, 'error': 'Too many requests, please try again later.'}), 429

    @app.errorhandler(Exception)
    def unhandled(e):
        if isinstance(e, HTTPException):
            return jsonify({'success': False, 'error': e.description}), e.code
        current_app.logger.exception("Unhandled error")
        db.session.rollback()
        return jsonify({'success': False, 'error': 'Server error. Please try again later.'}), 500


def start(app):
    """Wait for the store and bootstrap the schema before serving."""
    with app.app_context():
        wait_for_database(
            db,
            max_retries=app.config['DB_CONNECT_RETRIES'],
            retry_delay=app.config['DB_CONNECT_RETRY_DELAY'],
        )
        ensure_schema(db)


def main():
    configure_logging(config.LOG_LEVEL)
    logger.info("Starting Waitlist Application...")

    try:
        app = create_app()
        start(app)
    except (ConfigError, DatabaseUnavailableError, SchemaBootstrapError) as e:
        logger.error(f"Startup failed: {e}")
        sys.exit(1)

    logger.info(f"Server running on port {app.config['PORT']}")
    try:
        app.run(host='0.0.0.0', port=app.config['PORT'], debug=False)
    except KeyboardInterrupt:
        pass
    logger.info("Server shutting down...")


# This allows you to run the app directly with `python app.py`
if __name__ == '__main__':
    main()
