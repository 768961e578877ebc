"""Website store: persistence of website request rows.

Uniqueness of website_name is enforced by the database constraint, not
by a lookup before insert: two concurrent creations of the same name
both reach the INSERT and the second one fails with IntegrityError,
which surfaces here as DuplicateNameError.

Functions flush but do NOT commit; the caller commits.
"""

import logging

from sqlalchemy.exc import IntegrityError

from cloudself.errors import DuplicateNameError
from cloudself.extensions import db
from cloudself.models.website import Website

logger = logging.getLogger(__name__)


def insert(user_id, website_name, website_title, html_content):
    """Insert a new pending website request.

    Returns:
        The created Website.

    Raises:
        DuplicateNameError: If website_name is already taken.
    """
    website = Website(
        user_id=user_id,
        website_name=website_name,
        website_title=website_title,
        html_content=html_content,
        status=Website.PENDING,
    )
    db.session.add(website)
    try:
        db.session.flush()
    except IntegrityError as e:
        db.session.rollback()
        if "website_name" not in str(e.orig):
            raise
        logger.warning(f"Rejected duplicate website name: {website_name}")
        raise DuplicateNameError(website_name) from e
    return website


def find_by_id(website_id, user_id=None):
    """Load a website by id, optionally restricted to one owner.

    Returns None when the row is missing or owned by someone else.
    """
    query = Website.query.filter_by(id=website_id)
    if user_id is not None:
        query = query.filter_by(user_id=user_id)
    return query.first()


def list_by_owner(user_id):
    """List a user's websites, newest first."""
    return (
        Website.query
        .filter_by(user_id=user_id)
        .order_by(Website.created_at.desc(), Website.id.desc())
        .all()
    )


def list_by_status(status):
    """List websites in a status, oldest first (FIFO for the provisioner)."""
    return (
        Website.query
        .filter_by(status=status)
        .order_by(Website.created_at.asc(), Website.id.asc())
        .all()
    )


def update_status(website_id, values):
    """Apply column values to one website row.

    Args:
        website_id: Website integer id.
        values: Mapping of column name -> new value, already checked by
            the lifecycle engine.

    Returns:
        The updated Website, or None if the id does not exist.
    """
    website = db.session.get(Website, website_id)
    if website is None:
        return None

    for column, value in values.items():
        setattr(website, column, value)
    db.session.flush()
    return website
