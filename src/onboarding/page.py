"""
Page Surface.

Minimal model of the page the onboarding screens are mounted on: a vertical
scroll offset, a single process-wide scroll lock, and wheel listeners.

Wheel input is dispatched to listeners first. If no listener marks the event
as handled and the page is not locked, the page scrolls natively.
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable

from .errors import ScrollLockHeldError

logger = logging.getLogger(__name__)


@dataclass
class WheelEvent:
    """One wheel/scroll input as delivered to listeners."""
    delta: float
    timestamp: float
    default_prevented: bool = False

    def prevent_default(self) -> None:
        """Mark the event as handled so the page does not scroll natively."""
        self.default_prevented = True


WheelListener = Callable[[WheelEvent], None]


class ScrollLock:
    """
    Handle for the page scroll lock.

    Returned by Page.acquire_scroll_lock(). Releasing is idempotent; a
    released handle never touches a lock acquired later by someone else.
    """

    def __init__(self, page: "Page", owner: str):
        self._page = page
        self.owner = owner
        self._released = False

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._page._release_scroll_lock(self)


class Page:
    """Scrollable page with a single-owner scroll lock."""

    def __init__(self) -> None:
        self.scroll_offset: float = 0.0
        self._lock: ScrollLock | None = None
        self._listeners: list[WheelListener] = []

    # =========================================================================
    # Scroll lock
    # =========================================================================

    @property
    def scroll_locked(self) -> bool:
        return self._lock is not None

    @property
    def scroll_lock_owner(self) -> str | None:
        return self._lock.owner if self._lock else None

    def acquire_scroll_lock(self, owner: str) -> ScrollLock:
        """Lock page scrolling for `owner`. Raises if another holder has it."""
        if self._lock is not None:
            raise ScrollLockHeldError(
                f"Scroll lock held by {self._lock.owner!r}, requested by {owner!r}"
            )
        self._lock = ScrollLock(self, owner)
        logger.debug(f"Scroll lock acquired by {owner}")
        return self._lock

    def _release_scroll_lock(self, handle: ScrollLock) -> None:
        if self._lock is handle:
            self._lock = None
            logger.debug(f"Scroll lock released by {handle.owner}")

    # =========================================================================
    # Scrolling
    # =========================================================================

    def scroll_to_top(self) -> None:
        self.scroll_offset = 0.0

    def add_wheel_listener(self, listener: WheelListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_wheel_listener(self, listener: WheelListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def dispatch_wheel(self, delta: float, timestamp: float | None = None) -> WheelEvent:
        """Deliver a wheel input to listeners, then apply native scrolling."""
        if timestamp is None:
            timestamp = time.monotonic()
        event = WheelEvent(delta=delta, timestamp=timestamp)

        for listener in list(self._listeners):
            listener(event)

        if not event.default_prevented and not self.scroll_locked and math.isfinite(delta):
            self.scroll_offset = max(0.0, self.scroll_offset + delta)

        return event


_default_page: Page | None = None


def get_page() -> Page:
    """Get the process-wide page instance."""
    global _default_page
    if _default_page is None:
        _default_page = Page()
    return _default_page
