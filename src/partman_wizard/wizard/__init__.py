"""Partitioning wizard: step protocol, steps, and sequencer."""

from partman_wizard.wizard.base import PartitioningPlan, WizardResponse, WizardStatus
from partman_wizard.wizard.interaction import Choice, Display, Prompter, Validator
from partman_wizard.wizard.sequencer import PartitionWizard, WizardOutcome, WizardStep

__all__ = [
    "Choice",
    "Display",
    "PartitionWizard",
    "PartitioningPlan",
    "Prompter",
    "Validator",
    "WizardOutcome",
    "WizardResponse",
    "WizardStatus",
    "WizardStep",
]
