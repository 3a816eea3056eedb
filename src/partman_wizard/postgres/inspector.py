"""Read-only catalog queries.

Every method issues a single query on the wizard's connection and returns
plain Python values. Nothing here prompts, prints, or mutates; failures
propagate as SQLAlchemy ``DBAPIError``.
"""

from __future__ import annotations

from sqlalchemy import Connection, bindparam, text

from partman_wizard.core.logging import get_logger

logger = get_logger(__name__)

EXTENSION_NAME = "pg_partman"

# information_schema.columns.data_type values usable as a range partition key
DATE_LIKE_TYPES = ("date", "timestamp without time zone", "timestamp with time zone")


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class CatalogInspector:
    """Queries PostgreSQL catalogs on behalf of the wizard steps."""

    def __init__(self, conn: Connection, schema: str = "public"):
        self.conn = conn
        self.schema = schema

    def extension_available(self) -> bool:
        """Whether pg_partman can be installed on this server."""
        query = text(
            """
            SELECT EXISTS (
                SELECT 1
                FROM pg_available_extensions
                WHERE name = :name
            ) AS available
            """
        )
        available = bool(self.conn.execute(query, {"name": EXTENSION_NAME}).scalar())
        logger.debug("extension_availability_checked", available=available)
        return available

    def extension_enabled(self) -> bool:
        """Whether pg_partman is installed in the current database."""
        query = text(
            """
            SELECT extname
            FROM pg_extension
            WHERE extname = :name
            """
        )
        return self.conn.execute(query, {"name": EXTENSION_NAME}).first() is not None

    def schema_exists(self, schema: str) -> bool:
        query = text(
            """
            SELECT schema_name
            FROM information_schema.schemata
            WHERE schema_name = :schema
            """
        )
        return self.conn.execute(query, {"schema": schema}).first() is not None

    def list_partitionable_tables(self) -> list[str]:
        """List base tables that are not themselves partition children.

        Children of an existing partition set are registered in
        ``pg_inherits`` and must not be offered for re-partitioning.
        """
        query = text(
            """
            SELECT t.table_name
            FROM information_schema.tables t
            WHERE t.table_schema = :schema
            AND t.table_type = 'BASE TABLE'
            AND NOT EXISTS (
                SELECT 1
                FROM pg_inherits i
                JOIN pg_class c ON c.oid = i.inhrelid
                JOIN pg_namespace n ON n.oid = c.relnamespace
                WHERE n.nspname = t.table_schema
                AND c.relname = t.table_name
            )
            ORDER BY t.table_name
            """
        )
        tables = list(self.conn.execute(query, {"schema": self.schema}).scalars())
        logger.debug("partitionable_tables_listed", count=len(tables))
        return tables

    def list_date_like_columns(self, table: str) -> list[str]:
        """List columns of *table* typed date, timestamp or timestamptz."""
        query = text(
            """
            SELECT column_name
            FROM information_schema.columns
            WHERE table_schema = :schema
            AND table_name = :table
            AND data_type IN :types
            ORDER BY ordinal_position
            """
        ).bindparams(bindparam("types", expanding=True))
        result = self.conn.execute(
            query, {"schema": self.schema, "table": table, "types": list(DATE_LIKE_TYPES)}
        )
        return list(result.scalars())

    def list_sequences_for_table(self, table: str) -> list[str]:
        """List sequences whose name starts with *table*.

        Discovery follows the naming convention only; sequence ownership is
        not consulted.
        """
        query = text(
            """
            SELECT sequence_name
            FROM information_schema.sequences
            WHERE sequence_schema = :schema
            AND sequence_name LIKE :pattern ESCAPE '\\'
            ORDER BY sequence_name
            """
        )
        result = self.conn.execute(
            query, {"schema": self.schema, "pattern": f"{_escape_like(table)}%"}
        )
        return list(result.scalars())

    def is_name_free(self, table: str) -> bool:
        """True if no table called *table* exists in the default schema."""
        query = text(
            """
            SELECT table_name
            FROM information_schema.tables
            WHERE table_schema = :schema
            AND table_name = :table
            """
        )
        return self.conn.execute(query, {"schema": self.schema, "table": table}).first() is None

