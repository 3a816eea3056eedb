"""Core module - configuration, connections, logging, and exceptions."""

from partman_wizard.core.config import Settings, get_settings
from partman_wizard.core.connections import (
    ConnectionConfig,
    check_connection,
    close,
    connect,
    to_sqlalchemy_url,
)
from partman_wizard.core.exceptions import (
    UnsafeIdentifierError,
    WizardContractError,
    WizardError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Connections
    "ConnectionConfig",
    "check_connection",
    "close",
    "connect",
    "to_sqlalchemy_url",
    # Exceptions
    "UnsafeIdentifierError",
    "WizardContractError",
    "WizardError",
]
