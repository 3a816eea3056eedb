"""Shared pytest fixtures for all tests.

The fakes here stand in for the database and the terminal so the wizard can
be driven end to end without PostgreSQL.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any
from unittest.mock import MagicMock

import pytest

from partman_wizard.postgres.inspector import DATE_LIKE_TYPES
from partman_wizard.wizard.base import PartitioningPlan
from partman_wizard.wizard.interaction import Choice, Validator
from partman_wizard.wizard.sequencer import PartitionWizard


@dataclass
class FakeTable:
    """A table in the fake catalog."""

    columns: dict[str, str]
    rows: list[dict[str, Any]] = field(default_factory=list)
    partitioned_on: str | None = None
    interval: str | None = None


@dataclass
class FakeDatabase:
    """In-memory stand-in for the catalog and the tables it describes."""

    extension_available: bool = True
    extension_enabled: bool = False
    schemas: set[str] = field(default_factory=lambda: {"public"})
    tables: dict[str, FakeTable] = field(default_factory=dict)
    partition_children: set[str] = field(default_factory=set)
    sequences: dict[str, int] = field(default_factory=dict)
    calls: list[tuple[Any, ...]] = field(default_factory=list)

    def add_table(self, name: str, columns: dict[str, str], rows: list[dict[str, Any]] | None = None):
        self.tables[name] = FakeTable(columns=dict(columns), rows=list(rows or []))
        for column, data_type in columns.items():
            if data_type == "serial":
                self.sequences[f"{name}_{column}_seq"] = 0


class FakeInspector:
    """Answers CatalogInspector queries from a FakeDatabase."""

    def __init__(self, db: FakeDatabase):
        self.db = db

    def extension_available(self) -> bool:
        self.db.calls.append(("extension_available",))
        return self.db.extension_available

    def extension_enabled(self) -> bool:
        self.db.calls.append(("extension_enabled",))
        return self.db.extension_enabled

    def schema_exists(self, schema: str) -> bool:
        return schema in self.db.schemas

    def list_partitionable_tables(self) -> list[str]:
        self.db.calls.append(("list_partitionable_tables",))
        return sorted(t for t in self.db.tables if t not in self.db.partition_children)

    def list_date_like_columns(self, table: str) -> list[str]:
        columns = self.db.tables[table].columns
        return [c for c, data_type in columns.items() if data_type in DATE_LIKE_TYPES]

    def list_sequences_for_table(self, table: str) -> list[str]:
        return sorted(s for s in self.db.sequences if s.startswith(table))

    def is_name_free(self, table: str) -> bool:
        return table not in self.db.tables


class FakeExecutor:
    """Applies PartitionExecutor mutations to a FakeDatabase."""

    def __init__(self, db: FakeDatabase):
        self.db = db

    def enable_extension(self) -> None:
        self.db.calls.append(("enable_extension",))
        self.db.schemas.add("partman")
        self.db.extension_enabled = True

    def create_partitioned_table(self, source: str, destination: str, column: str) -> None:
        self.db.calls.append(("create_partitioned_table", source, destination, column))
        columns = self.db.tables[source].columns
        self.db.add_table(destination, columns)
        self.db.tables[destination].partitioned_on = column

    def register_partition_parent(self, destination: str, column: str, interval: str) -> None:
        self.db.calls.append(("register_partition_parent", destination, column, interval))
        self.db.tables[destination].interval = interval

    def resync_sequence(self, source: str, column: str, sequence: str) -> None:
        self.db.calls.append(("resync_sequence", source, column, sequence))
        values = [row[column] for row in self.db.tables[source].rows]
        if values:
            self.db.sequences[sequence] = max(values)

    def migrate_data(self, source: str, destination: str) -> None:
        self.db.calls.append(("migrate_data", source, destination))
        self.db.tables[destination].rows.extend(self.db.tables[source].rows)
        self.db.tables[source].rows = []

    def refresh_statistics(self, table: str) -> None:
        self.db.calls.append(("refresh_statistics", table))


class ScriptedPrompter:
    """Answers prompts from pre-recorded answers, in order.

    Text answers rejected by a validator are recorded in ``rejections`` and
    the next scripted answer is tried, like an operator re-typing.
    """

    def __init__(
        self,
        texts: Sequence[str] = (),
        confirms: Sequence[bool] = (),
        choices: Sequence[Any] = (),
    ):
        self.texts = list(texts)
        self.confirms = list(confirms)
        self.choices = list(choices)
        self.asked: list[tuple[str, str, Any]] = []
        self.rejections: list[str] = []

    def text(
        self,
        message: str,
        default: str | None = None,
        validate: Validator | None = None,
    ) -> str:
        self.asked.append(("text", message, default))
        while True:
            answer = self.texts.pop(0)
            if answer == "":
                assert default is not None, f"No default for {message!r}"
                answer = default
            if validate is None:
                return answer
            verdict = validate(answer)
            if verdict is True:
                return answer
            self.rejections.append(str(verdict))

    def confirm(self, message: str, default: bool = False) -> bool:
        self.asked.append(("confirm", message, default))
        return self.confirms.pop(0)

    def choose(self, message: str, choices: Sequence[Choice]) -> Any:
        self.asked.append(("choose", message, [c.value for c in choices]))
        answer = self.choices.pop(0)
        assert answer in [c.value for c in choices], f"{answer!r} is not offered"
        return answer


class RecordingDisplay:
    """Collects everything the wizard would print."""

    def __init__(self):
        self.events: list[tuple[str, Any]] = []

    def welcome(self) -> None:
        self.events.append(("welcome", None))

    def info(self, message: str) -> None:
        self.events.append(("info", message))

    def success(self, message: str) -> None:
        self.events.append(("success", message))

    def failure(self, message: str) -> None:
        self.events.append(("failure", message))

    def change_set(self, plan: PartitioningPlan) -> None:
        self.events.append(("change_set", plan))

    def footer(self) -> None:
        self.events.append(("footer", None))

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.events]


class FakeWizard(PartitionWizard):
    """PartitionWizard wired to a FakeDatabase instead of PostgreSQL."""

    def __init__(self, db: FakeDatabase, prompter: ScriptedPrompter, display: RecordingDisplay):
        self.connection = MagicMock(name="connection")
        super().__init__(
            prompter,
            display,
            connect=lambda _: self.connection,
            check=lambda _: None,
        )
        self.db = db

    def make_inspector(self, conn):
        return FakeInspector(self.db)

    def make_executor(self, conn):
        return FakeExecutor(self.db)


@pytest.fixture
def fake_db() -> FakeDatabase:
    """An empty database where pg_partman is available but not installed."""
    return FakeDatabase()


@pytest.fixture
def events_db() -> FakeDatabase:
    """A database with pg_partman enabled and an ``events`` table."""
    db = FakeDatabase(extension_enabled=True, schemas={"public", "partman"})
    db.add_table(
        "events",
        {
            "id": "serial",
            "name": "text",
            "created_at": "timestamp with time zone",
        },
        rows=[
            {"id": 1, "name": "signup", "created_at": "2024-01-03"},
            {"id": 2, "name": "login", "created_at": "2024-02-11"},
            {"id": 3, "name": "logout", "created_at": "2024-03-20"},
        ],
    )
    return db


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture
def scripted_prompter() -> type[ScriptedPrompter]:
    """Factory for scripted prompters."""
    return ScriptedPrompter


@pytest.fixture
def fake_inspector() -> type[FakeInspector]:
    return FakeInspector


@pytest.fixture
def fake_executor() -> type[FakeExecutor]:
    return FakeExecutor


@pytest.fixture
def fake_wizard() -> type[FakeWizard]:
    """Factory for wizards backed by a FakeDatabase."""
    return FakeWizard
