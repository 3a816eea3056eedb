"""Schema and data mutations.

These operations are irreversible and none of them is safe to repeat blindly.
The wizard calls each one at most once, after the operator confirmed it.
Failures are not caught here: a half-applied change stays as it is and the
error reaches the CLI.
"""

from __future__ import annotations

from sqlalchemy import Connection, text

from partman_wizard.core.logging import get_logger, log_context
from partman_wizard.postgres.inspector import EXTENSION_NAME, CatalogInspector
from partman_wizard.postgres.naming import ensure_safe_identifier, qualified_name

logger = get_logger(__name__)


class PartitionExecutor:
    """Runs the DDL and pg_partman calls that build a partition set.

    Args:
        conn: AUTOCOMMIT connection owned by the wizard
        schema: Schema holding the source and destination tables
        extension_schema: Schema pg_partman lives in
    """

    def __init__(self, conn: Connection, schema: str = "public", extension_schema: str = "partman"):
        self.conn = conn
        self.schema = schema
        self.extension_schema = extension_schema

    def _quote(self, name: str, strict: bool = False) -> str:
        ensure_safe_identifier(name, strict=strict)
        return self.conn.dialect.identifier_preparer.quote(name)

    def _table(self, name: str, strict: bool = False) -> str:
        return f"{self._quote(self.schema)}.{self._quote(name, strict=strict)}"

    def enable_extension(self) -> None:
        """Install pg_partman into its own schema, creating the schema if needed."""
        schema = self._quote(self.extension_schema)
        if not CatalogInspector(self.conn).schema_exists(self.extension_schema):
            self.conn.execute(text(f"CREATE SCHEMA {schema}"))
            logger.info("extension_schema_created", schema=self.extension_schema)

        self.conn.execute(text(f"CREATE EXTENSION {EXTENSION_NAME} SCHEMA {schema}"))
        logger.info("extension_enabled", extension=EXTENSION_NAME, schema=self.extension_schema)

    def create_partitioned_table(self, source: str, destination: str, column: str) -> None:
        """Clone *source* into *destination*, range-partitioned on *column*.

        ``LIKE ... INCLUDING ALL`` copies columns, defaults, constraints,
        indexes, identity and storage settings; rows are not copied.
        """
        query = text(
            f"CREATE TABLE {self._table(destination, strict=True)} "
            f"(LIKE {self._table(source)} INCLUDING ALL) "
            f"PARTITION BY RANGE ({self._quote(column)})"
        )
        with log_context(source_table=source, destination_table=destination):
            self.conn.execute(query)
            logger.info("partitioned_table_created", partition_column=column)

    def register_partition_parent(self, destination: str, column: str, interval: str) -> None:
        """Hand *destination* to pg_partman so it creates children of width *interval*."""
        ensure_safe_identifier(destination)
        query = text(
            f"""
            SELECT {self._quote(self.extension_schema)}.create_parent(
                p_parent_table := :parent_table,
                p_control := :control,
                p_interval := :interval
            )
            """
        )
        with log_context(destination_table=destination):
            self.conn.execute(
                query,
                {
                    "parent_table": qualified_name(self.schema, destination),
                    "control": column,
                    "interval": interval,
                },
            )
            logger.info("partition_parent_registered", partition_column=column, interval=interval)

    def resync_sequence(self, source: str, column: str, sequence: str) -> None:
        """Advance *sequence* to ``MAX(column)`` of *source*.

        An empty source leaves the sequence untouched (``setval`` ignores NULL).
        """
        query = text(
            f"SELECT setval(:sequence, (SELECT MAX({self._quote(column)}) FROM {self._table(source)}))"
        )
        value = self.conn.execute(
            query, {"sequence": qualified_name(self.schema, sequence)}
        ).scalar()
        logger.info("sequence_resynced", sequence=sequence, source_table=source, value=value)

    def migrate_data(self, source: str, destination: str) -> None:
        """Move every row of *source* into the partitions of *destination*.

        ``partition_data_proc`` deletes the rows it moves, so *source* is
        empty afterwards.
        """
        ensure_safe_identifier(destination)
        ensure_safe_identifier(source, strict=False)
        query = text(
            f"""
            CALL {self._quote(self.extension_schema)}.partition_data_proc(
                p_parent_table := :parent_table,
                p_source_table := :source_table
            )
            """
        )
        with log_context(source_table=source, destination_table=destination):
            self.conn.execute(
                query,
                {
                    "parent_table": qualified_name(self.schema, destination),
                    "source_table": qualified_name(self.schema, source),
                },
            )
            logger.info("data_migrated")

    def refresh_statistics(self, table: str) -> None:
        """Run ``VACUUM ANALYZE`` on *table*."""
        self.conn.execute(text(f"VACUUM ANALYZE {self._table(table)}"))
        logger.info("statistics_refreshed", table=table)
