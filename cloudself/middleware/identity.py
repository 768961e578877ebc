"""Identity middleware: resolves the calling user.

Runs before every request. Sets g.user_id from the configured header
(X-User-Id by default). A missing or blank header falls back to
DEFAULT_USER_ID; this is a placeholder for real authentication.
"""

from flask import current_app, g, request


def resolve_identity():
    """Before-request hook that sets g.user_id."""
    header = current_app.config["USER_ID_HEADER"]
    user_id = (request.headers.get(header) or "").strip()
    g.user_id = user_id or current_app.config["DEFAULT_USER_ID"]


def init_identity_middleware(app):
    """Register the identity resolver as a before_request hook."""
    app.before_request(resolve_identity)
