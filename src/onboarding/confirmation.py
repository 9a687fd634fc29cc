"""
Placement Confirmation.

After a successful submission the user sees their starting tier and
acknowledges it. Acknowledging stores the full placement, then moves to the
career screen. Navigation only happens once the write has succeeded; if the
write fails the confirmation stays open so the user can try again.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum

from .errors import PlacementPersistenceError
from .state import PlacementResult
from .storage import PLACEMENT_KEY, PlacementStore

logger = logging.getLogger(__name__)

CAREER_ROUTE = "/career"


class Navigator(ABC):
    """Client-side route transitions."""

    @abstractmethod
    def navigate(self, route: str) -> None:
        ...


class RouteNavigator(Navigator):
    """Keeps the current route and the history of transitions."""

    def __init__(self, initial_route: str = "/"):
        self.current_route = initial_route
        self.history: list[str] = [initial_route]

    def navigate(self, route: str) -> None:
        logger.info(f"Navigating {self.current_route} -> {route}")
        self.current_route = route
        self.history.append(route)


class ConfirmationStatus(str, Enum):
    AWAITING_ACKNOWLEDGMENT = "awaiting_acknowledgment"
    ACKNOWLEDGED = "acknowledged"


class PlacementConfirmation:
    """One placement waiting for the user's OK."""

    def __init__(
        self,
        result: PlacementResult,
        store: PlacementStore,
        navigator: Navigator,
        destination: str = CAREER_ROUTE,
    ):
        self.result = result
        self.store = store
        self.navigator = navigator
        self.destination = destination
        self.status = ConfirmationStatus.AWAITING_ACKNOWLEDGMENT

    @property
    def starting_tier(self) -> str:
        return self.result.label

    @property
    def message(self) -> str:
        return f"You have been placed in {self.starting_tier}!"

    def acknowledge(self) -> bool:
        """
        Persist the placement and navigate on.

        Returns True if this call completed the step, False if it had already
        been acknowledged. Raises PlacementPersistenceError when the write
        fails; nothing is navigated in that case.
        """
        if self.status == ConfirmationStatus.ACKNOWLEDGED:
            return False

        try:
            self.store.write(self.result.model_dump(), key=PLACEMENT_KEY)
        except PlacementPersistenceError:
            logger.error("Placement not saved; staying on confirmation")
            raise

        self.status = ConfirmationStatus.ACKNOWLEDGED
        self.navigator.navigate(self.destination)
        return True
