"""Provisioner service: pending queue and status reports.

Not scoped to any user: the provisioner sees every pending request.
There is no claim/lease on queue entries, so a single provisioner
instance is assumed.
"""

from cloudself.models.website import Website
from cloudself.services import lifecycle, website_store


def get_pending_queue():
    """Return all pending website requests, oldest first."""
    return website_store.list_by_status(Website.PENDING)


def update_status(website_id, status, pod_ip_address=None, error_message=None):
    """Apply a provisioner status report via the lifecycle engine.

    Raises:
        InvalidStatusError: If status is unknown (message lists valid values).
        MissingFieldError: If the field the status requires is missing.
        NotFoundError: If the website does not exist.
    """
    return lifecycle.transition(
        website_id,
        status,
        pod_ip_address=pod_ip_address,
        error_message=error_message,
    )
