"""
Onboarding Session.

Wires the landing stepper to the intake form: the form can only be opened
once every milestone has been visited. Opening the form ends the landing
screen, which detaches the stepper and gives the page scroll back.
"""

import logging

from .confirmation import CAREER_ROUTE, Navigator
from .controller import IntakeFormController
from .errors import JourneyIncompleteError
from .gateway import SubmissionGateway
from .page import Page
from .stepper import MILESTONES, THROTTLE_WINDOW_SECONDS, MilestoneStepper
from .storage import PlacementStore

logger = logging.getLogger(__name__)


class OnboardingSession:
    """Landing stepper plus the intake form it unlocks."""

    def __init__(
        self,
        gateway: SubmissionGateway,
        store: PlacementStore,
        navigator: Navigator,
        page: Page | None = None,
        milestones: tuple[str, ...] = MILESTONES,
        throttle_window: float = THROTTLE_WINDOW_SECONDS,
        destination: str = CAREER_ROUTE,
    ):
        self.gateway = gateway
        self.store = store
        self.navigator = navigator
        self.destination = destination
        self.stepper = MilestoneStepper(
            milestones=milestones,
            throttle_window=throttle_window,
            page=page,
        )
        self.intake: IntakeFormController | None = None

    @property
    def can_start(self) -> bool:
        """Whether the "Get Started" action is enabled."""
        return self.stepper.is_journey_complete()

    def open_intake(self) -> IntakeFormController:
        """
        Open the intake form.

        Raises JourneyIncompleteError before the last milestone is reached.
        Returns the already-open form on repeated calls.
        """
        if not self.can_start:
            raise JourneyIncompleteError(
                f"Reached milestone {self.stepper.active_index + 1} of {len(self.stepper.milestones)}"
            )
        if self.intake is None:
            self.stepper.detach()
            self.intake = IntakeFormController(
                gateway=self.gateway,
                store=self.store,
                navigator=self.navigator,
                destination=self.destination,
            )
            logger.info("Intake form opened")
        return self.intake

    def close(self) -> None:
        """Tear the session down, releasing the page scroll lock."""
        self.stepper.detach()
        self.intake = None
