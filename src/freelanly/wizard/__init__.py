"""Multi-step resume wizard."""

from freelanly.wizard.sections import SECTIONS
from freelanly.wizard.sequencer import STEPS, StepSequencer, WizardState, WizardStep
from freelanly.wizard.session import PendingAction, WizardSession
from freelanly.wizard.store import FieldStore

__all__ = [
    "SECTIONS",
    "STEPS",
    "FieldStore",
    "PendingAction",
    "StepSequencer",
    "WizardSession",
    "WizardState",
    "WizardStep",
]
