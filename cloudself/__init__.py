import os
import logging
import time

import click
from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from cloudself.config import config_by_name
from cloudself.errors import OperationalError
from cloudself.extensions import db, migrate, limiter

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """Application factory."""

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # --- Validate required env vars (skip in testing) ---
    if config_name != "testing":
        try:
            config_by_name[config_name].validate()
        except RuntimeError as e:
            app.logger.warning(f"Config validation: {e}")

    # --- Init extensions ---
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    # --- Import models so Alembic can discover them ---
    with app.app_context():
        from cloudself import models  # noqa: F401

    # --- Identity middleware ---
    from cloudself.middleware.identity import init_identity_middleware
    init_identity_middleware(app)

    # --- Register blueprints ---
    from cloudself.blueprints.websites import websites_bp
    from cloudself.blueprints.provisioner import provisioner_bp
    from cloudself.blueprints.health import health_bp

    app.register_blueprint(websites_bp)
    app.register_blueprint(provisioner_bp)
    app.register_blueprint(health_bp)

    # --- Error handlers ---
    register_error_handlers(app)

    # --- CLI commands ---
    register_cli(app)

    # --- Request logging ---
    @app.before_request
    def start_timer():
        g.request_started_at = time.perf_counter()

    @app.after_request
    def log_request(response):
        started = g.get("request_started_at")
        duration_ms = (time.perf_counter() - started) * 1000 if started else 0
        logger.info(
            f"{request.method} {request.path} - {response.status_code} - {duration_ms:.0f}ms"
        )
        return response

    # --- Security headers ---
    @app.after_request
    def add_security_headers(response):
        """Add security headers to every response."""
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response

    # --- Logging ---
    if not app.debug:
        logging.basicConfig(level=logging.INFO)

    return app


def _error_response(message, status_code):
    return jsonify(success=False, error={"message": message}), status_code


def register_error_handlers(app):
    """Render every error as {success: false, error: {message}}."""

    @app.errorhandler(OperationalError)
    def operational_error(e):
        db.session.rollback()
        return _error_response(e.message, e.status_code)

    @app.errorhandler(HTTPException)
    def http_error(e):
        if e.code == 404:
            return _error_response(f"Route {request.path} not found", 404)
        return _error_response(e.description, e.code)

    @app.errorhandler(Exception)
    def internal_error(e):
        # Full detail stays in the server log; the caller gets nothing internal.
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        db.session.rollback()
        return _error_response("Internal Server Error", 500)


def register_cli(app):
    """Register custom CLI commands with the Flask app."""

    @app.cli.command("seed-demo")
    @click.option("--user-id", default=None, help="Owner of the demo request")
    @click.option("--name", default="demo-site", help="Website name (DNS label)")
    def seed_demo(user_id, name):
        """Create a demo website request in "pending" state.

        Usage:
            flask seed-demo
            flask seed-demo --user-id alice --name alice-site
        """
        from cloudself.services import website_service

        user_id = user_id or app.config["DEFAULT_USER_ID"]
        try:
            website = website_service.create_request(
                user_id=user_id,
                website_name=name,
                website_title="Demo Site",
                html_content="<html><body><h1>Hello from CloudSelf</h1></body></html>",
            )
        except OperationalError as e:
            raise click.ClickException(e.message)
        db.session.commit()

        click.echo(f"Created website request: {website.website_name} (id: {website.id})")

    @app.cli.command("pending-queue")
    def pending_queue():
        """Print the provisioner's pending queue, oldest first."""
        from cloudself.services import provisioner_service

        websites = provisioner_service.get_pending_queue()
        if not websites:
            click.echo("No pending websites.")
            return
        for website in websites:
            click.echo(
                f"{website.id}\t{website.website_name}\t{website.user_id}\t"
                f"{website.created_at.isoformat()}"
            )

    @app.cli.command("set-status")
    @click.argument("website_id", type=int)
    @click.argument("status")
    @click.option("--pod-ip", default=None, help="Pod IP (required for provisioned)")
    @click.option("--error-message", default=None, help="Reason (required for failed)")
    def set_status(website_id, status, pod_ip, error_message):
        """Apply a status transition as the provisioner would.

        Usage:
            flask set-status 12 provisioned --pod-ip 10.0.0.5
            flask set-status 12 failed --error-message "image pull failed"
        """
        from cloudself.services import provisioner_service

        try:
            website = provisioner_service.update_status(
                website_id,
                status,
                pod_ip_address=pod_ip,
                error_message=error_message,
            )
        except OperationalError as e:
            db.session.rollback()
            raise click.ClickException(e.message)
        db.session.commit()

        click.echo(f"{website.website_name} (id: {website.id}) is now {website.status}")
