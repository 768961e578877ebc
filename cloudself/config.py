import os


class Config:
    """Base configuration. Shared across all environments."""

    # --- Required ---
    SECRET_KEY = os.environ.get("SECRET_KEY")

    # Handle DATABASE_URL: some PaaS providers (Railway, Heroku) use
    # "postgres://" which SQLAlchemy 1.4+ doesn't accept.
    _db_url = os.environ.get("DATABASE_URL", "")
    if _db_url.startswith("postgres://"):
        _db_url = _db_url.replace("postgres://", "postgresql://", 1)
    SQLALCHEMY_DATABASE_URI = _db_url or None

    # --- Transport ---
    # Kept above the 100KB content ceiling so oversized HTML reaches the
    # validator and gets a descriptive error instead of a bare 413.
    MAX_CONTENT_LENGTH = 150 * 1024
    FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:5173")

    # --- Identity (stand-in until real auth exists) ---
    USER_ID_HEADER = "X-User-Id"
    DEFAULT_USER_ID = os.environ.get("DEFAULT_USER_ID", "demo-user")

    # --- Provisioner ---
    BACKEND_URL = os.environ.get("BACKEND_URL", "http://localhost:5000")
    PROVISIONER_POLL_INTERVAL = int(os.environ.get("PROVISIONER_POLL_INTERVAL", 30))

    # --- Rate limiting ---
    WEBSITE_CREATE_RATE_LIMIT = os.environ.get(
        "WEBSITE_CREATE_RATE_LIMIT", "30 per minute"
    )

    # --- SQLAlchemy ---
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": 300,
    }

    @staticmethod
    def validate():
        """Fail fast if required env vars are missing."""
        required = [
            "SECRET_KEY",
            "DATABASE_URL",
        ]
        missing = [v for v in required if not os.environ.get(v)]
        if missing:
            raise RuntimeError(
                f"Missing required environment variables: {', '.join(missing)}"
            )


class DevConfig(Config):
    """Local development."""

    DEBUG = True
    SQLALCHEMY_DATABASE_URI = Config.SQLALCHEMY_DATABASE_URI or "sqlite:///cloudself.db"


class TestConfig(Config):
    """Testing: in-memory SQLite, rate limits off."""

    TESTING = True
    DEBUG = True
    SECRET_KEY = "test-secret-key-not-for-production"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    DEFAULT_USER_ID = "demo-user"
    FRONTEND_URL = "http://localhost:5173"
    BACKEND_URL = "http://backend.test"
    PROVISIONER_POLL_INTERVAL = 1
    RATELIMIT_ENABLED = False  # disable rate limiting in tests

    @staticmethod
    def validate():
        """Skip validation in test mode, everything is hardcoded."""
        pass


class ProdConfig(Config):
    """Production."""

    DEBUG = False


config_by_name = {
    "development": DevConfig,
    "production": ProdConfig,
    "testing": TestConfig,
}
