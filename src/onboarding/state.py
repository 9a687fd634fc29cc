"""
Intake Form State.

In-memory state of the career intake form and its submission lifecycle.
Owned by IntakeFormController for as long as the intake surface is open;
only the confirmed placement outlives it (see confirmation.py).
"""

from dataclasses import dataclass, asdict, replace
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class SubmissionStatus(str, Enum):
    """Submission lifecycle of one intake form."""
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class PlacementResult(BaseModel):
    """
    Placement returned by the gateway.

    `starting_tier` is the label shown to the user; everything else in the
    response body is kept as-is and persisted with it.
    """

    model_config = ConfigDict(extra="allow")

    starting_tier: str
    career_info: dict[str, Any] = {}

    @property
    def label(self) -> str:
        return self.starting_tier


@dataclass(frozen=True)
class IntakeFormState:
    """
    Snapshot of the intake form.

    Immutable: field-change rules in forms.py produce a new snapshot per edit,
    with division and experience already normalized.
    """
    age: int | None = None
    current_rank: str | None = None
    division: str | None = None
    past_experience: str | None = None

    submission_status: SubmissionStatus = SubmissionStatus.IDLE
    placement_result: PlacementResult | None = None
    error: str | None = None

    @property
    def is_submitting(self) -> bool:
        return self.submission_status == SubmissionStatus.SUBMITTING

    @property
    def is_editable(self) -> bool:
        """Fields accept edits unless a submission is in flight or done."""
        return self.submission_status in (SubmissionStatus.IDLE, SubmissionStatus.FAILED)

    def evolve(self, **changes: Any) -> "IntakeFormState":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Serialize for logging/inspection."""
        data = asdict(self)
        data["submission_status"] = self.submission_status.value
        data["placement_result"] = (
            self.placement_result.model_dump() if self.placement_result else None
        )
        return data
