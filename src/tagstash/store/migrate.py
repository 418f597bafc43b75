"""Helper module for running Alembic migrations programmatically.

This module provides a simple interface for running database migrations
without requiring the alembic CLI or configuration files.

Example:
    from tagstash.store.migrate import upgrade, get_current_revision

    upgrade("sqlite:///data.sqlite")
    revision = get_current_revision("sqlite:///data.sqlite")
"""

from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine


def sqlite_url(path: Path | str) -> str:
    """Build a SQLAlchemy URL for a SQLite database file."""
    return f"sqlite:///{path}"


def _get_alembic_config(db_url: str) -> Config:
    """Create an Alembic Config object for programmatic use."""
    alembic_dir = Path(__file__).parent / "alembic"

    config = Config()
    config.set_main_option("script_location", str(alembic_dir))
    config.set_main_option("sqlalchemy.url", db_url)

    return config


def upgrade(db_url: str, revision: str = "head") -> None:
    """Run Alembic upgrade to the specified revision.

    Args:
        db_url: SQLAlchemy database URL (e.g., "sqlite:///path/to/db.sqlite").
        revision: Target revision, defaults to "head" (latest).

    Raises:
        alembic.util.exc.CommandError: If migration fails.
    """
    config = _get_alembic_config(db_url)

    engine = create_engine(db_url)
    try:
        with engine.connect() as connection:
            config.attributes["connection"] = connection
            command.upgrade(config, revision)
            connection.commit()
    finally:
        engine.dispose()


def downgrade(db_url: str, revision: str) -> None:
    """Run Alembic downgrade to the specified revision.

    Args:
        db_url: SQLAlchemy database URL.
        revision: Target revision (e.g., "-1" for one step back, or "base").
    """
    config = _get_alembic_config(db_url)

    engine = create_engine(db_url)
    try:
        with engine.connect() as connection:
            config.attributes["connection"] = connection
            command.downgrade(config, revision)
            connection.commit()
    finally:
        engine.dispose()


def get_current_revision(db_url: str) -> str | None:
    """Get the current Alembic revision of the database, or None."""
    engine = create_engine(db_url)
    try:
        with engine.connect() as connection:
            context = MigrationContext.configure(connection)
            return context.get_current_revision()
    finally:
        engine.dispose()


def get_head_revision(db_url: str) -> str | None:
    """Get the head (latest) revision available."""
    config = _get_alembic_config(db_url)
    script = ScriptDirectory.from_config(config)
    return script.get_current_head()


def is_up_to_date(db_url: str) -> bool:
    """Check if the database is at the latest migration revision."""
    return get_current_revision(db_url) == get_head_revision(db_url)
