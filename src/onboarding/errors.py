"""
Onboarding error types.

Gateway failures never leave the intake form as exceptions; the controller
converts them into a failed submission status. The remaining errors guard
resources and ordering between the onboarding steps.
"""


class OnboardingError(Exception):
    """Base class for onboarding errors."""


class GatewayError(OnboardingError):
    """The submission gateway could not produce a placement."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PlacementPersistenceError(OnboardingError):
    """The placement record could not be written to durable storage."""


class ScrollLockHeldError(OnboardingError):
    """The page scroll lock is already owned by another holder."""


class JourneyIncompleteError(OnboardingError):
    """The intake form was opened before every milestone was visited."""
