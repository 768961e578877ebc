"""Website service: user-facing create / list / get.

Every operation is scoped to the requesting user id. A website owned by
someone else is reported exactly like a missing one.

Functions flush but do NOT commit; the caller commits.
"""

import logging

from cloudself.errors import NotFoundError
from cloudself.services import website_store
from cloudself.services.validation import validate_website_request

logger = logging.getLogger(__name__)


def create_request(user_id, website_name, website_title, html_content):
    """Validate and store a new website request in "pending" state.

    Returns:
        The created Website.

    Raises:
        ValidationError: On the first invalid field (name, title, content).
        DuplicateNameError: If the name is already taken.
    """
    validate_website_request(website_name, website_title, html_content)

    website = website_store.insert(
        user_id=user_id,
        website_name=website_name,
        website_title=website_title,
        html_content=html_content,
    )
    logger.info(
        f"Website request created: {website_name} (id={website.id}, user={user_id})"
    )
    return website


def list_requests(user_id):
    """List the user's website requests, newest first."""
    return website_store.list_by_owner(user_id)


def get_request(website_id, user_id):
    """Load one of the user's website requests.

    Raises:
        NotFoundError: If missing or owned by another user.
    """
    website = website_store.find_by_id(website_id, user_id=user_id)
    if website is None:
        raise NotFoundError()
    return website
