"""PostgreSQL catalog inspection, mutations, and naming rules."""

from partman_wizard.postgres.executor import PartitionExecutor
from partman_wizard.postgres.inspector import DATE_LIKE_TYPES, EXTENSION_NAME, CatalogInspector
from partman_wizard.postgres.naming import (
    SequenceRename,
    derive_destination_sequence,
    ensure_safe_identifier,
    identifier_problem,
    plan_sequence_resyncs,
)

__all__ = [
    "DATE_LIKE_TYPES",
    "EXTENSION_NAME",
    "CatalogInspector",
    "PartitionExecutor",
    "SequenceRename",
    "derive_destination_sequence",
    "ensure_safe_identifier",
    "identifier_problem",
    "plan_sequence_resyncs",
]
