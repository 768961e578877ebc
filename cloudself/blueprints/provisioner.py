"""Provisioner blueprint: /api/provisioner/*

Polled by the external provisioner agent. Not scoped to a user.

Route Map:
  GET /api/provisioner/websites/pending     : Pending queue, oldest first
  PUT /api/provisioner/websites/<id>/status : Report provisioned / failed
"""

import logging

from flask import Blueprint, jsonify, request

from cloudself.extensions import db
from cloudself.services import provisioner_service

logger = logging.getLogger(__name__)

provisioner_bp = Blueprint("provisioner", __name__, url_prefix="/api/provisioner")


@provisioner_bp.route("/websites/pending", methods=["GET"])
def pending_websites():
    websites = provisioner_service.get_pending_queue()
    return jsonify(
        success=True,
        data=[w.to_dict() for w in websites],
        count=len(websites),
    )


@provisioner_bp.route("/websites/<int:website_id>/status", methods=["PUT"])
def update_website_status(website_id):
    """Apply a status report.

    Body: { status, podIpAddress?, errorMessage? }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    website = provisioner_service.update_status(
        website_id,
        data.get("status"),
        pod_ip_address=data.get("podIpAddress"),
        error_message=data.get("errorMessage"),
    )
    db.session.commit()

    return jsonify(success=True, data=website.to_dict())
