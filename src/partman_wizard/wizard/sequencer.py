"""Wizard sequencer.

Runs the steps in their fixed order, threading each ongoing payload into the
plan and stopping at the first completed or error response. The sequencer
never exits the process: ``PartitionWizard.run`` returns a ``WizardOutcome``
and the CLI turns it into an exit code.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from sqlalchemy import Connection

from partman_wizard.core.connections import check_connection, close, connect
from partman_wizard.core.exceptions import WizardContractError
from partman_wizard.core.logging import get_logger
from partman_wizard.postgres.executor import PartitionExecutor
from partman_wizard.postgres.inspector import CatalogInspector
from partman_wizard.wizard import steps
from partman_wizard.wizard.base import PartitioningPlan, WizardResponse, WizardStatus
from partman_wizard.wizard.interaction import Display, Prompter

logger = get_logger(__name__)


@dataclass(frozen=True)
class WizardOutcome:
    """Terminal response of a wizard run and the plan built up to that point."""

    response: WizardResponse
    plan: PartitioningPlan

    @property
    def exit_code(self) -> int:
        return 0 if self.response.status is WizardStatus.COMPLETED else 1


@dataclass(frozen=True)
class WizardStep:
    """A named step and what to do with its payload."""

    name: str
    run: Callable[[], WizardResponse]
    accept: Callable[[Any], None] | None = None


class PartitionWizard:
    """Interactive pipeline that partitions one table.

    Args:
        prompter: Operator interaction
        display: Output rendering
        connect: Opens the wizard's connection from a connection string
        check: Trial-connects, returning None on success or the error text
        default_connection_string: Suggested answer for the first prompt
        schema: Schema holding the table to partition
        extension_schema: Schema pg_partman is (or will be) installed into
    """

    def __init__(
        self,
        prompter: Prompter,
        display: Display,
        connect: Callable[[str], Connection] = connect,
        check: Callable[[str], str | None] = check_connection,
        default_connection_string: str = steps.DEFAULT_CONNECTION_STRING,
        schema: str = "public",
        extension_schema: str = "partman",
    ):
        self.prompter = prompter
        self.display = display
        self._connect = connect
        self._check = check
        self.default_connection_string = default_connection_string
        self.schema = schema
        self.extension_schema = extension_schema

        self.plan = PartitioningPlan()
        self.conn: Connection | None = None
        self._inspector: CatalogInspector | None = None
        self._executor: PartitionExecutor | None = None

    @property
    def inspector(self) -> CatalogInspector:
        if self._inspector is None:
            raise WizardContractError("No database connection has been established")
        return self._inspector

    @property
    def executor(self) -> PartitionExecutor:
        if self._executor is None:
            raise WizardContractError("No database connection has been established")
        return self._executor

    def run(self) -> WizardOutcome:
        """Run every step until one of them finishes the wizard.

        Mutation failures are not caught and leave the database as the
        failing statement left it.
        """
        self.display.welcome()

        for step in self._pipeline():
            logger.debug("step_started", step=step.name)
            response = step.run()
            logger.info("step_finished", step=step.name, status=response.status.value)

            payload = self.handle_response(response)
            if response.is_terminal:
                return WizardOutcome(response=response, plan=self.plan)
            if step.accept is not None:
                step.accept(payload)

        raise WizardContractError("The wizard ran out of steps without finishing")

    def handle_response(self, response: WizardResponse) -> Any:
        """Show a step's message and return the payload of an ongoing response."""
        match response.status:
            case WizardStatus.ONGOING:
                if response.message:
                    self.display.info(response.message)
                return response.payload
            case WizardStatus.COMPLETED:
                if response.message:
                    self.display.success(response.message)
                self.display.footer()
                return None
            case WizardStatus.ERROR:
                if response.message:
                    self.display.failure(response.message)
                return None
            case _:
                raise WizardContractError(f"Unsupported status: {response.status!r}")

    def close(self) -> None:
        """Release the database connection, if one was opened."""
        if self.conn is not None:
            close(self.conn)
            self.conn = None

    def _pipeline(self) -> Iterator[WizardStep]:
        yield WizardStep(
            "connect",
            lambda: steps.establish_connection(
                self.prompter, self._connect, self._check, self.default_connection_string
            ),
            self._attach,
        )
        yield WizardStep(
            "configure_extension",
            lambda: steps.configure_extension(self.inspector, self.executor, self.prompter),
        )
        yield WizardStep(
            "select_source_table",
            lambda: steps.select_source_table(self.inspector, self.prompter),
            self._set("source_table"),
        )
        yield WizardStep(
            "select_partition_column",
            lambda: steps.select_partition_column(
                self.inspector, self.prompter, self._require("source_table")
            ),
            self._set("partition_column"),
        )
        yield WizardStep(
            "select_partition_interval",
            lambda: steps.select_partition_interval(self.prompter),
            self._set("interval"),
        )
        yield WizardStep(
            "enter_destination_table_name",
            lambda: steps.enter_destination_table_name(
                self.inspector, self.prompter, self._require("source_table")
            ),
            self._set("destination_table"),
        )
        yield WizardStep("create_partitions", self._create_partitions)
        yield WizardStep(
            "copy_data",
            lambda: steps.copy_data_to_partitioned_table(self.executor, self.prompter, self.plan),
        )

    def _create_partitions(self) -> WizardResponse:
        if not self.plan.is_complete:
            raise WizardContractError(f"Partitioning plan is incomplete: {self.plan}")
        self.display.change_set(self.plan)
        return steps.create_partitions(self.inspector, self.executor, self.prompter, self.plan)

    def make_inspector(self, conn: Connection) -> CatalogInspector:
        return CatalogInspector(conn, schema=self.schema)

    def make_executor(self, conn: Connection) -> PartitionExecutor:
        return PartitionExecutor(conn, schema=self.schema, extension_schema=self.extension_schema)

    def _attach(self, conn: Connection) -> None:
        self.conn = conn
        self._inspector = self.make_inspector(conn)
        self._executor = self.make_executor(conn)

    def _set(self, field: str) -> Callable[[Any], None]:
        def accept(value: Any) -> None:
            self.plan = self.plan.with_value(field, value)

        return accept

    def _require(self, field: str) -> str:
        value = getattr(self.plan, field)
        if value is None:
            raise WizardContractError(f"Plan field {field} has not been chosen yet")
        return value
