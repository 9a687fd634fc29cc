"""
VCTCareer Onboarding.

Interaction state behind the onboarding screens, independent of rendering:

1. Landing Roadmap - wheel-driven milestone stepper that unlocks "Get Started"
2. Career Intake - conditional form fields and a single-flight submission
3. Placement Confirmation - store the placement, then move to the career screen
"""

from .confirmation import PlacementConfirmation, RouteNavigator
from .controller import IntakeFormController, SubmitOutcome
from .gateway import HttpSubmissionGateway, LocalPlacementGateway, SubmissionGateway
from .session import OnboardingSession
from .state import IntakeFormState, PlacementResult, SubmissionStatus
from .stepper import MILESTONES, MilestoneStepper
from .storage import PLACEMENT_KEY, PlacementStore

__all__ = [
    "HttpSubmissionGateway",
    "IntakeFormController",
    "IntakeFormState",
    "LocalPlacementGateway",
    "MILESTONES",
    "MilestoneStepper",
    "OnboardingSession",
    "PLACEMENT_KEY",
    "PlacementConfirmation",
    "PlacementResult",
    "PlacementStore",
    "RouteNavigator",
    "SubmissionGateway",
    "SubmissionStatus",
    "SubmitOutcome",
]
