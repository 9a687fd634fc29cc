"""
Intake Form Controller.

Owns the intake form state and drives its submission:

    idle/failed --submit--> submitting --ok--> succeeded (confirmation opens)
                                       --error--> failed (editable, retry allowed)

Only one submission can be in flight. A submit() arriving while one is
outstanding is rejected immediately, never queued. Gateway errors are turned
into a failed status and an error message; they do not propagate.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from .confirmation import CAREER_ROUTE, Navigator, PlacementConfirmation
from .errors import GatewayError
from .forms import (
    IntakeRequest,
    apply_age,
    apply_division,
    apply_experience,
    apply_rank,
    is_experience_eligible,
    requires_division,
    validate_intake,
)
from .gateway import SubmissionGateway
from .state import IntakeFormState, SubmissionStatus
from .storage import PlacementStore

logger = logging.getLogger(__name__)

SUBMIT_ERROR_MESSAGE = "Failed to create career. Please try again."
IN_FLIGHT_MESSAGE = "A submission is already in progress"


@dataclass(frozen=True)
class SubmitOutcome:
    """Result of one submit() call."""
    accepted: bool  # False if rejected before reaching the gateway
    status: SubmissionStatus
    errors: list[str] = field(default_factory=list)


class IntakeFormController:
    """Intake form state plus its single-flight submission."""

    def __init__(
        self,
        gateway: SubmissionGateway,
        store: PlacementStore,
        navigator: Navigator,
        destination: str = CAREER_ROUTE,
    ):
        self.gateway = gateway
        self.store = store
        self.navigator = navigator
        self.destination = destination
        self._state = IntakeFormState()
        self.confirmation: PlacementConfirmation | None = None

    @property
    def state(self) -> IntakeFormState:
        return self._state

    @property
    def status(self) -> SubmissionStatus:
        return self._state.submission_status

    # =========================================================================
    # Field edits
    # =========================================================================

    def set_age(self, age: int | None) -> IntakeFormState:
        self._state = apply_age(self._state, age)
        return self._state

    def set_rank(self, rank: str) -> IntakeFormState:
        self._state = apply_rank(self._state, rank)
        return self._state

    def set_division(self, division: str | None) -> IntakeFormState:
        self._state = apply_division(self._state, division)
        return self._state

    def set_experience(self, experience: str | None) -> IntakeFormState:
        self._state = apply_experience(self._state, experience)
        return self._state

    @property
    def division_enabled(self) -> bool:
        return self._state.is_editable and requires_division(self._state.current_rank)

    @property
    def experience_enabled(self) -> bool:
        return self._state.is_editable and is_experience_eligible(self._state.current_rank)

    # =========================================================================
    # Submission
    # =========================================================================

    async def submit(self) -> SubmitOutcome:
        """
        Validate and submit the form.

        Everything up to the gateway call runs synchronously, so a second
        submit() scheduled on the same loop already sees `submitting`.
        """
        if not self._state.is_editable:
            reason = IN_FLIGHT_MESSAGE if self._state.is_submitting else "Career already created"
            logger.info(f"Submit rejected: {reason}")
            return SubmitOutcome(accepted=False, status=self.status, errors=[reason])

        is_valid, errors = validate_intake(self._state)
        if not is_valid:
            logger.info(f"Submit rejected by validation: {errors}")
            return SubmitOutcome(accepted=False, status=self.status, errors=errors)

        request = IntakeRequest.from_state(self._state)
        self._state = self._state.evolve(
            submission_status=SubmissionStatus.SUBMITTING,
            placement_result=None,
            error=None,
        )

        try:
            result = await self.gateway.create_career(request)
        except GatewayError as e:
            logger.warning(f"Career creation failed: {e}")
            return self._fail()
        except asyncio.CancelledError:
            self._fail()
            raise
        except Exception as e:
            logger.error(f"Unexpected gateway error: {e}")
            return self._fail()

        self._state = self._state.evolve(
            submission_status=SubmissionStatus.SUCCEEDED,
            placement_result=result,
        )
        self.confirmation = PlacementConfirmation(
            result=result,
            store=self.store,
            navigator=self.navigator,
            destination=self.destination,
        )
        logger.info(f"Career created: {result.starting_tier}")
        logger.debug(f"Form state: {self._state.to_dict()}")
        return SubmitOutcome(accepted=True, status=self.status)

    def _fail(self) -> SubmitOutcome:
        self._state = self._state.evolve(
            submission_status=SubmissionStatus.FAILED,
            error=SUBMIT_ERROR_MESSAGE,
        )
        return SubmitOutcome(accepted=True, status=self.status, errors=[SUBMIT_ERROR_MESSAGE])
