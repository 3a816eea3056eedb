"""Identifier safety and naming conventions.

DDL cannot take table or column names as bind parameters, so every name that
is spliced into SQL passes through here first. Names read from the catalog are
trusted but still quoted; names typed by the operator must also match a
conservative allow-list.

Sequences are matched to columns purely by PostgreSQL's default naming
convention ``<table>_<column>_seq``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from partman_wizard.core.exceptions import UnsafeIdentifierError

# PostgreSQL truncates identifiers to NAMEDATALEN - 1 bytes
MAX_IDENTIFIER_BYTES = 63

# Unquoted identifiers that survive case folding unchanged
SAFE_IDENTIFIER_PATTERN = re.compile(r"^[a-z_][a-z0-9_]*$")

SEQUENCE_SUFFIX = "_seq"


def identifier_problem(name: str, strict: bool = True) -> str | None:
    """Describe why *name* cannot be used as an identifier.

    Args:
        name: Candidate table or column name
        strict: Also require lowercase letters, digits and underscores only

    Returns:
        None if the name is acceptable, otherwise a human-readable reason.
    """
    if not name:
        return "the name is empty"
    if "\x00" in name:
        return "the name contains a NUL character"
    if len(name.encode("utf-8")) > MAX_IDENTIFIER_BYTES:
        return f"the name is longer than {MAX_IDENTIFIER_BYTES} bytes"
    if strict and not SAFE_IDENTIFIER_PATTERN.match(name):
        return (
            "use lowercase letters, digits and underscores only, "
            "starting with a letter or underscore"
        )
    return None


def ensure_safe_identifier(name: str, strict: bool = True) -> str:
    """Return *name* unchanged or raise if it may not reach generated SQL.

    Raises:
        UnsafeIdentifierError: If the name is rejected
    """
    problem = identifier_problem(name, strict=strict)
    if problem is not None:
        raise UnsafeIdentifierError(name, problem)
    return name


def qualified_name(schema: str, table: str) -> str:
    """Build the ``schema.table`` text pg_partman expects for its parameters."""
    return f"{schema}.{table}"


@dataclass(frozen=True)
class SequenceRename:
    """A source sequence and the destination sequence derived from it."""

    source_sequence: str
    column: str
    destination_sequence: str


def derive_destination_sequence(
    source_table: str, destination_table: str, sequence_name: str
) -> SequenceRename | None:
    """Map ``<source>_<column>_seq`` onto ``<destination>_<column>_seq``.

    Example:
        >>> derive_destination_sequence("orders", "orders_partitioned", "orders_id_seq")
        SequenceRename(source_sequence='orders_id_seq', column='id',
                       destination_sequence='orders_partitioned_id_seq')

    Returns:
        None when *sequence_name* does not follow the naming convention.
    """
    prefix = f"{source_table}_"
    if not sequence_name.startswith(prefix) or not sequence_name.endswith(SEQUENCE_SUFFIX):
        return None

    column = sequence_name[len(prefix) : -len(SEQUENCE_SUFFIX)]
    if not column:
        return None

    return SequenceRename(
        source_sequence=sequence_name,
        column=column,
        destination_sequence=f"{destination_table}_{column}{SEQUENCE_SUFFIX}",
    )


def plan_sequence_resyncs(
    source_table: str,
    destination_table: str,
    source_sequences: list[str],
    destination_sequences: list[str],
) -> list[SequenceRename]:
    """Pick the destination sequences that need to catch up with the source data.

    Prefix discovery for ``orders`` also returns sequences belonging to
    ``orders_partitioned`` or any other table sharing the prefix. When both
    table names prefix a sequence, it belongs to the longer name, so
    ``orders_partitioned_id_seq`` is skipped for source ``orders`` while
    ``events_log_id_seq`` is kept for source ``events_log`` and destination
    ``events``. A rename is kept only when the derived destination sequence
    exists, i.e. when the clone created its own sequence for the column.
    """
    existing = set(destination_sequences)
    destination_prefix = f"{destination_table}_"
    destination_is_longer = len(destination_table) > len(source_table)

    renames: list[SequenceRename] = []
    for sequence_name in source_sequences:
        if destination_is_longer and sequence_name.startswith(destination_prefix):
            continue
        rename = derive_destination_sequence(source_table, destination_table, sequence_name)
        if rename is None or rename.destination_sequence not in existing:
            continue
        renames.append(rename)
    return renames
