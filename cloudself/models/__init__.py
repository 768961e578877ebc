# Models package: import all models here so Alembic can discover them.

from cloudself.models.website import Website  # noqa: F401
