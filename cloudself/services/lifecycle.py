"""Lifecycle engine: status transitions for website requests.

Transitions are not restricted by the current status: a failed site may
later be reported provisioned and vice versa. What is enforced is the
payload of the *target* status:

    provisioned -> podIpAddress required
    failed      -> errorMessage required
    pending     -> nothing extra

podIpAddress and errorMessage are only ever overwritten with non-empty
values, so a failure after a successful provisioning keeps the old IP.

Everything is checked before the row is touched; a rejected transition
leaves the record as it was.
"""

import logging
from datetime import datetime, timezone

from cloudself.errors import InvalidStatusError, MissingFieldError, NotFoundError
from cloudself.models.website import Website
from cloudself.services import website_store

logger = logging.getLogger(__name__)

# Field each target status requires, as named in the API.
REQUIRED_FIELDS = {
    Website.PROVISIONED: "podIpAddress",
    Website.FAILED: "errorMessage",
}


def _present(value):
    return isinstance(value, str) and bool(value.strip())


def validate_transition(status, pod_ip_address=None, error_message=None):
    """Check a requested transition without touching the store.

    Raises:
        InvalidStatusError: If status is not a known value.
        MissingFieldError: If the target status needs a field that is
            absent or blank.
    """
    if status not in Website.STATUSES:
        raise InvalidStatusError(
            f"Invalid status. Must be one of: {', '.join(Website.STATUSES)}"
        )

    supplied = {
        "podIpAddress": pod_ip_address,
        "errorMessage": error_message,
    }
    field = REQUIRED_FIELDS.get(status)
    if field is not None and not _present(supplied[field]):
        raise MissingFieldError(field, status)


def transition(website_id, status, pod_ip_address=None, error_message=None):
    """Move a website to a new status.

    Args:
        website_id: Website integer id.
        status: Target status (one of Website.STATUSES).
        pod_ip_address: Required for "provisioned".
        error_message: Required for "failed".

    Returns:
        The updated Website.

    Raises:
        InvalidStatusError, MissingFieldError: On a malformed request.
        NotFoundError: If the website does not exist.
    """
    validate_transition(status, pod_ip_address, error_message)

    values = {
        "status": status,
        "updated_at": datetime.now(timezone.utc),
    }
    if _present(pod_ip_address):
        values["pod_ip_address"] = pod_ip_address.strip()
    if _present(error_message):
        values["error_message"] = error_message

    website = website_store.update_status(website_id, values)
    if website is None:
        raise NotFoundError()

    logger.info(
        f"Website {website.website_name} (id={website.id}) -> {status}"
    )
    return website
