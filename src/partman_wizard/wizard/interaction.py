"""Operator interaction protocols.

Steps only see these shapes. The terminal implementations live in
``partman_wizard.cli``; tests substitute scripted ones.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from partman_wizard.wizard.base import PartitioningPlan

# Returns True to accept the answer, or the message explaining the rejection
Validator = Callable[[str], bool | str]


@dataclass(frozen=True)
class Choice:
    """One entry of a single-choice list."""

    label: str
    value: Any

    @classmethod
    def of(cls, value: str) -> Choice:
        """Choice whose label is its value."""
        return cls(label=value, value=value)


class Prompter(Protocol):
    """Collects decisions from the operator."""

    def text(
        self,
        message: str,
        default: str | None = None,
        validate: Validator | None = None,
    ) -> str:
        """Ask for free text, re-asking until *validate* accepts the answer."""
        ...

    def confirm(self, message: str, default: bool = False) -> bool:
        """Ask a yes/no question."""
        ...

    def choose(self, message: str, choices: Sequence[Choice]) -> Any:
        """Ask the operator to pick one of *choices* and return its value."""
        ...


class Display(Protocol):
    """Renders wizard output for the operator."""

    def welcome(self) -> None: ...

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def failure(self, message: str) -> None: ...

    def change_set(self, plan: PartitioningPlan) -> None: ...

    def footer(self) -> None: ...
