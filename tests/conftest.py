"""
Pytest configuration and fixtures for VCTCareer onboarding tests.
"""

import asyncio
import os

import pytest

# Set test environment before importing vctcareer modules
os.environ["VCT_ENV"] = "development"

from onboarding.confirmation import RouteNavigator
from onboarding.errors import GatewayError
from onboarding.forms import IntakeRequest
from onboarding.gateway import SubmissionGateway
from onboarding.page import Page
from onboarding.state import PlacementResult
from onboarding.storage import PlacementStore


# ---------------------------------------------------------------------------
# Fake gateways
# ---------------------------------------------------------------------------


class RecordingGateway(SubmissionGateway):
    """
    Gateway that records every request and returns a fixed placement.

    With `hold=True` each call waits until `release()` is called, which keeps
    a submission in flight for single-flight tests.
    """

    def __init__(self, starting_tier: str = "Tier 2 (College / Challengers)", hold: bool = False):
        self.starting_tier = starting_tier
        self.requests: list[IntakeRequest] = []
        self.hold = hold
        self._released: asyncio.Event | None = None

    def release(self) -> None:
        if self._released is not None:
            self._released.set()

    async def create_career(self, request: IntakeRequest) -> PlacementResult:
        self.requests.append(request)
        if self.hold:
            if self._released is None:
                self._released = asyncio.Event()
            await self._released.wait()
        return PlacementResult(
            starting_tier=self.starting_tier,
            career_info=request.model_dump(),
        )


class FailingGateway(SubmissionGateway):
    """Gateway that always fails like a 500 from the career service."""

    def __init__(self):
        self.calls = 0

    async def create_career(self, request: IntakeRequest) -> PlacementResult:
        self.calls += 1
        raise GatewayError("Career service returned HTTP 500", status_code=500)


class FlakyGateway(RecordingGateway):
    """Fails the first `failures` calls, then behaves like RecordingGateway."""

    def __init__(self, failures: int = 1, **kwargs):
        super().__init__(**kwargs)
        self.failures = failures

    async def create_career(self, request: IntakeRequest) -> PlacementResult:
        if self.failures > 0:
            self.failures -= 1
            self.requests.append(request)
            raise GatewayError("Could not reach career service")
        return await super().create_career(request)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def page():
    """Fresh page so tests never share the process-wide scroll lock."""
    return Page()


@pytest.fixture
def store(tmp_path):
    return PlacementStore(tmp_path / "storage.json")


@pytest.fixture
def navigator():
    return RouteNavigator()


@pytest.fixture
def gateway():
    return RecordingGateway()


@pytest.fixture
def held_gateway():
    """Gateway whose calls stay in flight until `release()`."""
    return RecordingGateway(hold=True)


@pytest.fixture
def failing_gateway():
    return FailingGateway()


@pytest.fixture
def flaky_gateway():
    """Fails once, then succeeds."""
    return FlakyGateway(failures=1)
