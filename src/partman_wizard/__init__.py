"""partman-wizard.

Interactive wizard that converts an existing PostgreSQL table into a
range-partitioned table managed by pg_partman and migrates its data.

Example:
    from partman_wizard import PartitionWizard

    outcome = PartitionWizard(prompter, display).run()
    outcome.exit_code
"""

__version__ = "0.1.0"

from partman_wizard.wizard.base import WizardResponse, WizardStatus
from partman_wizard.wizard.sequencer import PartitionWizard, WizardOutcome

__all__ = [
    "PartitionWizard",
    "WizardOutcome",
    "WizardResponse",
    "WizardStatus",
    "__version__",
]
