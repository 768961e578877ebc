"""Shared test fixtures for the CloudSelf API test suite.

Provides:
- app: Flask app configured for testing (in-memory SQLite, rate limits off)
- client: Flask test client
- cli_runner: Flask CLI runner
- db_session: clean database per test (tables created/dropped)
- seed_data: a few website requests in different states, two owners
"""

from datetime import datetime, timedelta, timezone

import pytest

from cloudself import create_app
from cloudself.extensions import db as _db
from cloudself.models.website import Website


@pytest.fixture(scope="session")
def app():
    """Create the Flask application configured for testing."""
    app = create_app("testing")
    yield app


@pytest.fixture(autouse=True)
def db_session(app):
    """Create all tables before each test, drop after."""
    with app.app_context():
        _db.create_all()
        yield _db.session
        _db.session.rollback()
        _db.drop_all()


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def cli_runner(app):
    """Flask CLI runner."""
    return app.test_cli_runner()


@pytest.fixture
def make_website(db_session):
    """Factory that creates a website row directly in the DB."""

    def _make(**kwargs):
        defaults = {
            "user_id": "alice",
            "website_name": "alice-site",
            "website_title": "Alice Site",
            "html_content": "<html><body>alice</body></html>",
            "status": Website.PENDING,
        }
        defaults.update(kwargs)
        website = Website(**defaults)
        db_session.add(website)
        db_session.flush()
        return website

    return _make


@pytest.fixture
def seed_data(app, db_session, make_website):
    """Seed websites for two owners with explicit creation times.

    Returns a dict of plain ids so tests can use them across app contexts.
    """
    base = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    alice_old = make_website(
        website_name="alice-old",
        created_at=base,
    )
    alice_new = make_website(
        website_name="alice-new",
        created_at=base + timedelta(hours=2),
    )
    alice_live = make_website(
        website_name="alice-live",
        status=Website.PROVISIONED,
        pod_ip_address="10.0.0.7",
        created_at=base + timedelta(hours=1),
    )
    bob_site = make_website(
        user_id="bob",
        website_name="bob-site",
        website_title="Bob Site",
        created_at=base + timedelta(minutes=30),
    )
    db_session.commit()

    return {
        "alice_old_id": alice_old.id,
        "alice_new_id": alice_new.id,
        "alice_live_id": alice_live.id,
        "bob_site_id": bob_site.id,
    }
