"""Exception hierarchy.

Expected outcomes (missing extension, no tables, declined confirmations) are
reported through ``WizardResponse``. Exceptions are reserved for programming
errors and for input that must never reach the database.
"""


class WizardError(Exception):
    """Base class for wizard errors."""


class WizardContractError(WizardError):
    """A step or plan broke the wizard's internal contract."""


class UnsafeIdentifierError(WizardError, ValueError):
    """A table or column name is not allowed in generated SQL."""

    def __init__(self, identifier: str, reason: str):
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Unsafe identifier {identifier!r}: {reason}")
