"""
Milestone Stepper.

Turns wheel input into a bounded "current milestone" index for the landing
roadmap. The "Get Started" action is enabled only once the last milestone
has been reached.

Rules:
- Any positive delta is one step forward, any negative delta one step back.
- Inputs arriving within the throttle window of the last accepted input are
  dropped but still reported as consumed, so the page does not move.
- The index is clamped to the sequence; stepping past either end is a no-op.
- While attached, the stepper owns the page scroll lock.
"""

import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from .page import Page, ScrollLock, WheelEvent, get_page

logger = logging.getLogger(__name__)


MILESTONES: tuple[str, ...] = (
    "Hit Radiant",
    "Amateur Team",
    "Open Qualifiers",
    "Challengers League (Tier 2)",
    "VCT Partner League (Tier 1)",
    "International Events (Masters/Champions)",
)

THROTTLE_WINDOW_SECONDS = 0.25


@dataclass
class StepperState:
    """Position on the roadmap. Lives only as long as the landing screen."""
    active_index: int = 0
    last_transition_timestamp: float | None = None


class MilestoneStepper:
    """
    Wheel-driven stepper over a fixed milestone sequence.

    Usage:
        stepper = MilestoneStepper()
        with stepper.attached():
            page.dispatch_wheel(+1)
            ...
        stepper.is_journey_complete()
    """

    def __init__(
        self,
        milestones: tuple[str, ...] = MILESTONES,
        throttle_window: float = THROTTLE_WINDOW_SECONDS,
        page: Page | None = None,
    ):
        if not milestones:
            raise ValueError("Milestone sequence must not be empty")
        self.milestones = tuple(milestones)
        self.throttle_window = throttle_window
        self.page = page or get_page()
        self.state = StepperState()
        self._lock: ScrollLock | None = None

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def active_index(self) -> int:
        return self.state.active_index

    @property
    def active_milestone(self) -> str:
        return self.milestones[self.state.active_index]

    @property
    def last_index(self) -> int:
        return len(self.milestones) - 1

    def is_journey_complete(self) -> bool:
        """True once the last milestone is active. Gates the start action."""
        return self.state.active_index == self.last_index

    @property
    def is_attached(self) -> bool:
        return self._lock is not None

    # =========================================================================
    # Input handling
    # =========================================================================

    def handle_scroll_event(self, delta: float, timestamp: float) -> bool:
        """
        Apply one wheel input.

        Returns True when the input was consumed (accepted or throttled) and
        the caller must suppress native page scrolling.
        """
        if not _is_finite(delta) or not _is_finite(timestamp) or delta == 0:
            return False

        last = self.state.last_transition_timestamp
        if last is not None and timestamp - last < self.throttle_window:
            return True

        self.state.last_transition_timestamp = timestamp
        previous = self.state.active_index
        if delta > 0:
            self.state.active_index = min(previous + 1, self.last_index)
        else:
            self.state.active_index = max(previous - 1, 0)

        if self.state.active_index != previous:
            logger.debug(f"Milestone {previous} -> {self.state.active_index} ({self.active_milestone})")
        return True

    def _on_wheel(self, event: WheelEvent) -> None:
        """Page listener: step, then keep the page pinned to the top."""
        last = self.state.last_transition_timestamp
        consumed = self.handle_scroll_event(event.delta, event.timestamp)
        if not consumed:
            return
        if self.state.last_transition_timestamp != last:
            self.page.scroll_to_top()
        event.prevent_default()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def attach(self) -> None:
        """Take the page scroll lock and start listening for wheel input."""
        if self._lock is not None:
            return
        self._lock = self.page.acquire_scroll_lock(owner="milestone-stepper")
        self.page.add_wheel_listener(self._on_wheel)

    def detach(self) -> None:
        """Stop listening and release the scroll lock. Safe to call repeatedly."""
        self.page.remove_wheel_listener(self._on_wheel)
        if self._lock is not None:
            lock, self._lock = self._lock, None
            lock.release()

    @contextmanager
    def attached(self) -> Iterator["MilestoneStepper"]:
        """Attach for the duration of the block; always detaches on exit."""
        self.attach()
        try:
            yield self
        finally:
            self.detach()


def _is_finite(value) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False
