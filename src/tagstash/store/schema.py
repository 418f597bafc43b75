"""Database schema definitions for tagstash.

The script creates the same schema as the Alembic migrations up to
SCHEMA_REVISION and records that revision, so databases opened through
Database.connect can later be upgraded with tagstash.store.migrate.
"""

SCHEMA_REVISION = "0001"

SCHEMA_SQL = f"""\
-- Value-tag associations
CREATE TABLE IF NOT EXISTS entries (
    id INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,
    tag TEXT NOT NULL,
    value TEXT NOT NULL,
    tag_index INTEGER NOT NULL,
    CONSTRAINT uq_entries_tag_value UNIQUE(tag, value)
);

-- Reverse lookup of a value's tags
CREATE INDEX IF NOT EXISTS idx_entries_value ON entries(value);

-- Alembic revision the tables above correspond to
CREATE TABLE IF NOT EXISTS alembic_version (
    version_num VARCHAR(32) NOT NULL,
    CONSTRAINT alembic_version_pkc PRIMARY KEY (version_num)
);

INSERT INTO alembic_version (version_num)
SELECT '{SCHEMA_REVISION}'
WHERE NOT EXISTS (SELECT 1 FROM alembic_version);
"""


def get_schema() -> str:
    """Get the SQL schema string."""
    return SCHEMA_SQL
