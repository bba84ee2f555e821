"""Linear step sequencer for the resume wizard."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from freelanly.wizard.store import FieldStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WizardStep:
    id: str
    label: str
    required: tuple[str, ...] = ()
    optional: bool = False


STEPS: tuple[WizardStep, ...] = (
    WizardStep("basic-info", "Basic Information", ("name", "email", "professional_title")),
    WizardStep("project-selection", "Select Projects"),
    WizardStep("skills-experience", "Skills & Experience", ("skills",)),
    WizardStep("target-position", "Target Position", ("target_position",)),
    WizardStep("preview-export", "Preview & Export"),
    WizardStep("cover-letter", "Cover Letter (Optional)", optional=True),
)


@dataclass
class WizardState:
    current: int = 0
    completed: list[bool] = field(default_factory=lambda: [False] * len(STEPS))
    complete: bool = False

    @property
    def highest_completed(self) -> int:
        """Last index of the unbroken run of completed steps from 0, or -1."""
        highest = -1
        for done in self.completed:
            if not done:
                break
            highest += 1
        return highest


def is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


class StepSequencer:
    """Tracks the active step and gates navigation on step validation.

    Only touches its own state and the field store it wraps; saving is the
    wizard session's job.
    """

    def __init__(self, store: FieldStore, steps: tuple[WizardStep, ...] = STEPS):
        self.store = store
        self.steps = steps
        self.state = WizardState(completed=[False] * len(steps))

    @property
    def current(self) -> int:
        return self.state.current

    @property
    def current_step(self) -> WizardStep:
        return self.steps[self.state.current]

    @property
    def is_complete(self) -> bool:
        return self.state.complete

    @property
    def progress(self) -> float:
        return (self.state.current + 1) / len(self.steps)

    def missing_fields(self, index: int | None = None) -> list[str]:
        step = self.steps[self.state.current if index is None else index]
        return [name for name in step.required if not is_present(self.store.get(name))]

    def can_advance(self) -> bool:
        return not self.missing_fields()

    def go_to_step(self, n: int) -> bool:
        """Jump to step ``n``; a no-op unless every earlier step is complete."""
        if not 0 <= n < len(self.steps):
            return False
        if n > self.state.highest_completed + 1:
            logger.debug("Step %d not reachable yet", n)
            return False
        self.state.current = n
        return True

    def mark_step_complete(self, n: int) -> None:
        if not 0 <= n < len(self.steps):
            raise IndexError(f"No wizard step {n}")
        self.state.completed[n] = True
        if n == len(self.steps) - 1 and self.state.highest_completed == n:
            self.state.complete = True

    def next_step(self) -> bool:
        """Complete the current step and move forward if it validates."""
        if not self.can_advance():
            return False
        self.mark_step_complete(self.state.current)
        if self.state.current < len(self.steps) - 1:
            self.state.current += 1
        return True

    def previous_step(self) -> bool:
        if self.state.current == 0:
            return False
        self.state.current -= 1
        return True

    def update_field(self, name: str, value: Any) -> None:
        self.store.update_field(name, value)

    def update_fields(self, fields: Mapping[str, Any]) -> None:
        self.store.update_fields(fields)

    def restore(self, state: WizardState) -> None:
        self.state = WizardState(
            current=state.current,
            completed=list(state.completed),
            complete=state.complete,
        )
