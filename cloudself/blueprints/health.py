"""Health blueprint: /health

Reports API liveness and database reachability. 200 when the database
answers, 503 otherwise.
"""

import logging
import os
import time
from datetime import datetime, timezone

from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from cloudself.extensions import db

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)

_started_at = time.monotonic()


@health_bp.route("/health", methods=["GET"])
def health():
    body = {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _started_at, 3),
        "environment": os.environ.get("FLASK_ENV", "development"),
        "services": {
            "api": "healthy",
            "database": "unknown",
        },
    }

    try:
        db.session.execute(text("SELECT 1"))
        body["services"]["database"] = "healthy"
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.warning(f"Health check: database unreachable: {e}")
        body["status"] = "degraded"
        body["services"]["database"] = "unhealthy"

    status_code = 200 if body["status"] == "ok" else 503
    return jsonify(body), status_code
