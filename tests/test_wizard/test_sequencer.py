"""Tests for step navigation."""

from __future__ import annotations

import pytest

from freelanly.wizard.sequencer import STEPS, StepSequencer, WizardState, is_present
from freelanly.wizard.store import FieldStore


@pytest.fixture
def sequencer() -> StepSequencer:
    return StepSequencer(FieldStore())


class TestGoToStep:
    @pytest.mark.parametrize("n", range(1, len(STEPS)))
    def test_reachable_after_previous_step_completed(self, sequencer: StepSequencer, n: int):
        for i in range(n - 1):
            sequencer.mark_step_complete(i)
        assert sequencer.go_to_step(n - 1)
        sequencer.mark_step_complete(n - 1)
        assert sequencer.go_to_step(n)
        assert sequencer.current == n

    @pytest.mark.parametrize("n", range(0, len(STEPS) - 2))
    def test_skipping_ahead_is_noop(self, sequencer: StepSequencer, n: int):
        for i in range(n):
            sequencer.mark_step_complete(i)
        sequencer.go_to_step(n)
        before = WizardState(
            current=sequencer.state.current,
            completed=list(sequencer.state.completed),
            complete=sequencer.state.complete,
        )

        assert sequencer.go_to_step(n + 2) is False
        assert sequencer.state == before

    def test_out_of_bounds(self, sequencer: StepSequencer):
        assert sequencer.go_to_step(-1) is False
        assert sequencer.go_to_step(len(STEPS)) is False
        assert sequencer.current == 0

    def test_backward_jump_always_allowed(self, sequencer: StepSequencer):
        sequencer.mark_step_complete(0)
        sequencer.go_to_step(1)
        assert sequencer.go_to_step(0)


class TestAdvance:
    def test_cannot_advance_without_required_fields(self, sequencer: StepSequencer):
        assert sequencer.missing_fields() == ["name", "email", "professional_title"]
        assert sequencer.next_step() is False
        assert sequencer.current == 0
        assert sequencer.state.completed[0] is False

    def test_whitespace_does_not_count_as_present(self, sequencer: StepSequencer):
        sequencer.update_fields({"name": "  ", "email": "a@b.co", "professional_title": "Dev"})
        assert sequencer.missing_fields() == ["name"]

    def test_next_step_marks_complete_and_moves(self, sequencer: StepSequencer):
        sequencer.update_fields({"name": "Jane", "email": "a@b.co", "professional_title": "Dev"})
        assert sequencer.next_step()
        assert sequencer.current == 1
        assert sequencer.state.completed[0]

    def test_previous_step(self, sequencer: StepSequencer):
        assert sequencer.previous_step() is False
        sequencer.update_fields({"name": "Jane", "email": "a@b.co", "professional_title": "Dev"})
        sequencer.next_step()
        assert sequencer.previous_step()
        assert sequencer.current == 0

    def test_walk_to_complete(self, sequencer: StepSequencer, filled_draft):
        sequencer.update_fields(filled_draft)
        for _ in STEPS:
            assert sequencer.next_step()
        assert sequencer.is_complete
        assert sequencer.current == len(STEPS) - 1

    def test_marking_only_last_step_is_not_complete(self, sequencer: StepSequencer):
        sequencer.mark_step_complete(len(STEPS) - 1)
        assert not sequencer.is_complete

    def test_mark_out_of_bounds_raises(self, sequencer: StepSequencer):
        with pytest.raises(IndexError):
            sequencer.mark_step_complete(len(STEPS))

    def test_progress(self, sequencer: StepSequencer):
        assert sequencer.progress == pytest.approx(1 / len(STEPS))


class TestIsPresent:
    @pytest.mark.parametrize("value", ["x", ["a"], {"k": 1}, 0, False])
    def test_present(self, value):
        assert is_present(value)

    @pytest.mark.parametrize("value", [None, "", "   ", [], {}])
    def test_absent(self, value):
        assert not is_present(value)
