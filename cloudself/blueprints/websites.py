"""Websites blueprint: /api/websites/*

User-facing API. The caller's identity comes from g.user_id (set by the
identity middleware); every read is scoped to it.

Route Map:
  POST /api/websites      : Submit a new website request (201)
  GET  /api/websites      : List the caller's requests, newest first
  GET  /api/websites/<id> : One of the caller's requests (404 otherwise)
"""

from flask import Blueprint, current_app, g, jsonify, make_response, request

from cloudself.extensions import db, limiter
from cloudself.services import website_service

websites_bp = Blueprint("websites", __name__, url_prefix="/api/websites")


def _create_rate_limit():
    return current_app.config["WEBSITE_CREATE_RATE_LIMIT"]


@websites_bp.after_request
def add_cors_headers(response):
    """Allow the frontend origin to call the user API."""
    response.headers["Access-Control-Allow-Origin"] = current_app.config["FRONTEND_URL"]
    response.headers["Access-Control-Allow-Credentials"] = "true"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = (
        f"Content-Type, {current_app.config['USER_ID_HEADER']}"
    )
    return response


@websites_bp.route("", methods=["OPTIONS"])
@websites_bp.route("/<int:website_id>", methods=["OPTIONS"])
def preflight(website_id=None):
    """Handle CORS preflight requests."""
    return make_response("", 204)


@websites_bp.route("", methods=["POST"])
@limiter.limit(_create_rate_limit)
def create_website():
    """Create a website request in "pending" state.

    Body: { websiteName, websiteTitle, htmlContent }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    website = website_service.create_request(
        user_id=g.user_id,
        website_name=data.get("websiteName"),
        website_title=data.get("websiteTitle"),
        html_content=data.get("htmlContent"),
    )
    db.session.commit()

    return jsonify(success=True, data=website.to_dict()), 201


@websites_bp.route("", methods=["GET"])
def list_websites():
    websites = website_service.list_requests(g.user_id)
    return jsonify(
        success=True,
        data=[w.to_dict() for w in websites],
        count=len(websites),
    )


@websites_bp.route("/<int:website_id>", methods=["GET"])
def get_website(website_id):
    website = website_service.get_request(website_id, g.user_id)
    return jsonify(success=True, data=website.to_dict())
