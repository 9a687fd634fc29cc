"""
Tests for the landing milestone stepper.

Covers clamping, throttling, completion gating and scroll-lock ownership.
"""

import math
import random

import pytest

from onboarding.errors import ScrollLockHeldError
from onboarding.stepper import MILESTONES, THROTTLE_WINDOW_SECONDS, MilestoneStepper

STEP = THROTTLE_WINDOW_SECONDS + 0.01


def _forward(stepper: MilestoneStepper, count: int, start: float = 100.0) -> float:
    """Send `count` properly spaced forward inputs; returns the last timestamp."""
    t = start
    for _ in range(count):
        stepper.handle_scroll_event(1, t)
        t += STEP
    return t


class TestMilestoneSequence:

    def test_six_milestones_in_order(self):
        assert len(MILESTONES) == 6
        assert MILESTONES[0] == "Hit Radiant"
        assert MILESTONES[-1] == "International Events (Masters/Champions)"

    def test_empty_sequence_rejected(self, page):
        with pytest.raises(ValueError):
            MilestoneStepper(milestones=(), page=page)


class TestStepping:
    """Direction and clamping."""

    def test_starts_at_first_milestone(self, page):
        stepper = MilestoneStepper(page=page)
        assert stepper.active_index == 0
        assert stepper.active_milestone == "Hit Radiant"
        assert not stepper.is_journey_complete()

    def test_forward_moves_one(self, page):
        stepper = MilestoneStepper(page=page)
        assert stepper.handle_scroll_event(1, 0.0) is True
        assert stepper.active_index == 1

    def test_magnitude_is_ignored(self, page):
        stepper = MilestoneStepper(page=page)
        stepper.handle_scroll_event(840.5, 0.0)
        assert stepper.active_index == 1

    def test_five_forward_completes_journey(self, page):
        stepper = MilestoneStepper(page=page)
        t = _forward(stepper, 5)
        assert stepper.active_index == 5
        assert stepper.is_journey_complete()

        # A sixth forward stays on the last milestone
        stepper.handle_scroll_event(1, t)
        assert stepper.active_index == 5
        assert stepper.is_journey_complete()

    def test_backward_at_start_is_noop(self, page):
        stepper = MilestoneStepper(page=page)
        assert stepper.handle_scroll_event(-1, 0.0) is True
        assert stepper.handle_scroll_event(-1, 1.0) is True
        assert stepper.active_index == 0

    def test_backward_leaves_completion(self, page):
        stepper = MilestoneStepper(page=page)
        t = _forward(stepper, 5)
        stepper.handle_scroll_event(-3, t)
        assert stepper.active_index == 4
        assert not stepper.is_journey_complete()

    def test_clamped_input_still_updates_timestamp(self, page):
        stepper = MilestoneStepper(page=page)
        stepper.handle_scroll_event(-1, 10.0)
        assert stepper.state.last_transition_timestamp == 10.0


class TestThrottle:

    def test_two_inputs_inside_window_step_once(self, page):
        stepper = MilestoneStepper(page=page)
        stepper.handle_scroll_event(1, 0.0)
        stepper.handle_scroll_event(1, 0.1)
        assert stepper.active_index == 1

    def test_throttled_input_is_still_consumed(self, page):
        stepper = MilestoneStepper(page=page)
        stepper.handle_scroll_event(1, 0.0)
        assert stepper.handle_scroll_event(1, 0.1) is True
        assert stepper.state.last_transition_timestamp == 0.0

    def test_throttled_inputs_are_dropped_not_queued(self, page):
        stepper = MilestoneStepper(page=page)
        stepper.handle_scroll_event(1, 0.0)
        for t in (0.05, 0.1, 0.2):
            stepper.handle_scroll_event(1, t)
        stepper.handle_scroll_event(1, 0.3)
        assert stepper.active_index == 2

    def test_input_at_window_edge_is_accepted(self, page):
        stepper = MilestoneStepper(page=page, throttle_window=0.25)
        stepper.handle_scroll_event(1, 1.0)
        stepper.handle_scroll_event(1, 1.25)
        assert stepper.active_index == 2


class TestMalformedInput:

    @pytest.mark.parametrize("delta", [0, math.nan, math.inf, -math.inf, None, "down"])
    def test_bad_delta_is_ignored(self, page, delta):
        stepper = MilestoneStepper(page=page)
        assert stepper.handle_scroll_event(delta, 0.0) is False
        assert stepper.active_index == 0
        assert stepper.state.last_transition_timestamp is None

    def test_bad_timestamp_is_ignored(self, page):
        stepper = MilestoneStepper(page=page)
        assert stepper.handle_scroll_event(1, math.nan) is False
        assert stepper.active_index == 0


class TestInvariants:

    def test_random_inputs_stay_in_bounds(self, page):
        rng = random.Random(1234)
        stepper = MilestoneStepper(page=page)
        t = 0.0
        for _ in range(2000):
            t += rng.choice([0.0, 0.05, 0.2, 0.3, 1.0])
            stepper.handle_scroll_event(rng.choice([-1, 1, -120, 120, 0]), t)
            assert 0 <= stepper.active_index < len(MILESTONES)
            assert stepper.is_journey_complete() == (stepper.active_index == len(MILESTONES) - 1)


class TestPageIntegration:
    """Wheel input through the page while the stepper is attached."""

    def test_attach_locks_page_and_listens(self, page):
        stepper = MilestoneStepper(page=page)
        stepper.attach()
        assert page.scroll_locked
        assert page.scroll_lock_owner == "milestone-stepper"
        assert page.listener_count == 1
        stepper.detach()

    def test_accepted_wheel_pins_page_to_top(self, page):
        page.scroll_offset = 480.0
        stepper = MilestoneStepper(page=page)
        with stepper.attached():
            event = page.dispatch_wheel(120.0, timestamp=5.0)
        assert event.default_prevented
        assert page.scroll_offset == 0.0
        assert stepper.active_index == 1

    def test_throttled_wheel_is_prevented(self, page):
        stepper = MilestoneStepper(page=page)
        with stepper.attached():
            page.dispatch_wheel(1.0, timestamp=5.0)
            event = page.dispatch_wheel(1.0, timestamp=5.1)
        assert event.default_prevented
        assert stepper.active_index == 1

    def test_detached_page_scrolls_natively(self, page):
        stepper = MilestoneStepper(page=page)
        with stepper.attached():
            pass
        event = page.dispatch_wheel(100.0, timestamp=1.0)
        assert not event.default_prevented
        assert page.scroll_offset == 100.0
        assert stepper.active_index == 0

    def test_detach_releases_on_error(self, page):
        stepper = MilestoneStepper(page=page)
        with pytest.raises(RuntimeError):
            with stepper.attached():
                raise RuntimeError("navigation")
        assert not page.scroll_locked
        assert page.listener_count == 0
        assert not stepper.is_attached

    def test_detach_is_idempotent(self, page):
        stepper = MilestoneStepper(page=page)
        stepper.attach()
        stepper.detach()
        stepper.detach()
        assert not page.scroll_locked

    def test_second_owner_cannot_take_lock(self, page):
        first = MilestoneStepper(page=page)
        second = MilestoneStepper(page=page)
        with first.attached():
            with pytest.raises(ScrollLockHeldError):
                second.attach()
            assert page.listener_count == 1
        assert not page.scroll_locked
