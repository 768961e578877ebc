"""Validation for website request fields.

Each check is pure and returns (ok: bool, error: str|None).
validate_website_request() is the single entry point the create flow
uses: it runs name, title, then content and raises ValidationError on
the first failure, so error messages are deterministic.
"""

import re

from cloudself.errors import ValidationError
from cloudself.models.website import Website

# DNS label: lowercase alphanumerics and interior hyphens, 1-63 chars.
DNS_LABEL_RE = re.compile(r"[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?")


def validate_name(name):
    """Check a website name is a valid DNS label."""
    if not isinstance(name, str) or not name:
        return False, "Website name is required"

    if len(name) > Website.NAME_MAX_LENGTH:
        return False, (
            f"Website name must be {Website.NAME_MAX_LENGTH} characters or less"
        )

    if not DNS_LABEL_RE.fullmatch(name):
        return False, (
            "Website name must be lowercase, start and end with alphanumeric, "
            "and contain only alphanumeric and hyphens"
        )

    return True, None


def validate_title(title):
    if not isinstance(title, str) or not title.strip():
        return False, "Website title is required"

    if len(title) > Website.TITLE_MAX_LENGTH:
        return False, (
            f"Website title must be {Website.TITLE_MAX_LENGTH} characters or less"
        )

    return True, None


def validate_content(html):
    """Check HTML content is present and at most 100KB of UTF-8.

    Size is measured in encoded bytes, not characters, so multi-byte
    content hits the ceiling with fewer than 102400 characters.
    """
    if not isinstance(html, str) or not html:
        return False, "HTML content is required"

    max_size = Website.CONTENT_MAX_BYTES
    byte_size = len(html.encode("utf-8"))
    if byte_size > max_size:
        return False, (
            f"HTML content must be {max_size} bytes (100KB) or less. "
            f"Current size: {byte_size} bytes"
        )

    return True, None


def validate_website_request(name, title, html):
    """Run every field check in order; raise on the first failure.

    Raises:
        ValidationError: naming the offending field and constraint.
    """
    for check, value in (
        (validate_name, name),
        (validate_title, title),
        (validate_content, html),
    ):
        ok, error = check(value)
        if not ok:
            raise ValidationError(error)
