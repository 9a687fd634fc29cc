"""
Submission Gateway.

Sends a completed intake form to the career service and returns the
placement. Any failure (transport error, timeout, non-2xx status, body that
is not a placement) is raised as GatewayError; the form controller turns it
into a failed submission.

Implementations:
- HttpSubmissionGateway: POST {base_url}/createCareer
- LocalPlacementGateway: scores the request in-process (offline mode)
"""

import logging
from abc import ABC, abstractmethod

import httpx
from pydantic import ValidationError

from .errors import GatewayError
from .forms import IntakeRequest
from .placement import weighted_tier
from .state import PlacementResult

logger = logging.getLogger(__name__)

CREATE_CAREER_PATH = "/createCareer"
DEFAULT_TIMEOUT_SECONDS = 15.0


class SubmissionGateway(ABC):
    """Remote call that turns intake data into a placement."""

    @abstractmethod
    async def create_career(self, request: IntakeRequest) -> PlacementResult:
        """Submit the intake and return the placement. Raises GatewayError."""
        ...


class HttpSubmissionGateway(SubmissionGateway):
    """
    Gateway backed by the career service HTTP API.

    A client can be injected (e.g. with httpx.MockTransport in tests);
    otherwise a short-lived AsyncClient is opened per call.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    @property
    def url(self) -> str:
        return f"{self.base_url}{CREATE_CAREER_PATH}"

    async def create_career(self, request: IntakeRequest) -> PlacementResult:
        body = request.model_dump()
        logger.info(f"Submitting career creation: rank={request.current_rank} age={request.age}")

        try:
            if self._client is not None:
                response = await self._client.post(self.url, json=body, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.url, json=body)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise GatewayError("Request timed out") from e
        except httpx.HTTPStatusError as e:
            raise GatewayError(
                f"Career service returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise GatewayError(f"Could not reach career service: {e}") from e
        except ValueError as e:
            raise GatewayError("Career service returned invalid JSON") from e

        return _parse_placement(data)


class LocalPlacementGateway(SubmissionGateway):
    """Scores the request in-process using the backend's tier weighting."""

    async def create_career(self, request: IntakeRequest) -> PlacementResult:
        tier = weighted_tier(request)
        logger.debug(f"Local placement: {tier.value}")
        return PlacementResult(
            starting_tier=tier.value,
            career_info=request.model_dump(),
        )


def _parse_placement(data: object) -> PlacementResult:
    if not isinstance(data, dict):
        raise GatewayError("Career service response is not an object")
    try:
        return PlacementResult.model_validate(data)
    except ValidationError as e:
        raise GatewayError(f"Career service response missing placement: {e.error_count()} error(s)") from e
