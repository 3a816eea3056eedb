"""Wizard step types.

Defines the response envelope every step returns and the plan the sequencer
threads from one step to the next.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any

from partman_wizard.core.exceptions import WizardContractError


class WizardStatus(str, Enum):
    """Outcome of a wizard step."""

    ONGOING = "ongoing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class WizardResponse:
    """Result of a single wizard step.

    ``payload`` carries the value the next step consumes and is only kept for
    ongoing responses. ``message`` is shown to the operator as-is.
    """

    status: WizardStatus
    message: str | None = None
    payload: Any = None

    def __post_init__(self) -> None:
        try:
            status = WizardStatus(self.status)
        except ValueError as e:
            raise WizardContractError(f"Unsupported status: {self.status!r}") from e
        object.__setattr__(self, "status", status)

        if status is not WizardStatus.ONGOING and self.payload is not None:
            raise WizardContractError(f"A {status.value} response cannot carry a payload")

    @classmethod
    def ongoing(cls, message: str | None = None, payload: Any = None) -> WizardResponse:
        """Continue with the next step."""
        return cls(status=WizardStatus.ONGOING, message=message, payload=payload)

    @classmethod
    def completed(cls, message: str | None = None) -> WizardResponse:
        """Stop the wizard successfully."""
        return cls(status=WizardStatus.COMPLETED, message=message)

    @classmethod
    def error(cls, message: str | None = None) -> WizardResponse:
        """Stop the wizard with a failure."""
        return cls(status=WizardStatus.ERROR, message=message)

    @property
    def is_terminal(self) -> bool:
        return self.status is not WizardStatus.ONGOING


@dataclass(frozen=True)
class PartitioningPlan:
    """Decisions accumulated while the wizard runs.

    Each field is filled by exactly one step and never changes afterwards.
    """

    source_table: str | None = None
    partition_column: str | None = None
    interval: str | None = None
    destination_table: str | None = None

    def with_value(self, name: str, value: str) -> PartitioningPlan:
        """Return a copy with *name* set to *value*.

        Raises:
            WizardContractError: If the field is unknown or already set
        """
        if name not in {f.name for f in fields(self)}:
            raise WizardContractError(f"Unknown plan field: {name}")
        if getattr(self, name) is not None:
            raise WizardContractError(f"Plan field {name} is already set")
        if not isinstance(value, str):
            raise WizardContractError(f"Plan field {name} expects a string, got {value!r}")
        return replace(self, **{name: value})

    @property
    def is_complete(self) -> bool:
        return all(getattr(self, f.name) is not None for f in fields(self))
