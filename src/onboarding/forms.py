"""
Onboarding Forms - Career Intake.

Field options, cross-field rules and validation for the intake form.

Rules:
- Division is required for every rank except the top tier (Radiant), which
  has no divisions. Changing rank always clears the chosen division.
- Past experience is only meaningful from the eligibility threshold
  (Immortal) upward. Below it the field is locked to "None".

Field edits go through the pure `apply_*` functions, which take the full form
state and return the next one with dependent fields already normalized.
"""

import logging

from pydantic import BaseModel, Field, field_validator, model_validator

from .state import IntakeFormState

logger = logging.getLogger(__name__)


# =============================================================================
# Valid Options
# =============================================================================

# Lowest to highest
RANK_OPTIONS = [
    "Iron",
    "Bronze",
    "Silver",
    "Gold",
    "Platinum",
    "Diamond",
    "Ascendant",
    "Immortal",
    "Radiant",
]

TOP_TIER_RANK = RANK_OPTIONS[-1]

# Ranks below this one cannot claim past experience
EXPERIENCE_ELIGIBILITY_RANK = "Immortal"

DIVISION_OPTIONS = ["1", "2", "3"]

NO_EXPERIENCE = "None"
EXPERIENCE_OPTIONS = ["Tier 1", "Tier 2", "Tier 3", NO_EXPERIENCE]

MIN_AGE = 16
MAX_AGE = 99


# =============================================================================
# Rank Helpers
# =============================================================================

def rank_index(rank: str | None) -> int:
    """Position of `rank` in RANK_OPTIONS, -1 when unknown or unset."""
    try:
        return RANK_OPTIONS.index(rank)
    except ValueError:
        return -1


def requires_division(rank: str | None) -> bool:
    """Division is required for any selected rank except the top tier."""
    return rank is not None and rank != TOP_TIER_RANK


def is_experience_eligible(rank: str | None) -> bool:
    """
    Whether past experience can be chosen for `rank`.

    With no rank selected yet the field stays editable; the forced value only
    applies once a rank below the threshold is picked.
    """
    if rank is None:
        return True
    return rank_index(rank) >= rank_index(EXPERIENCE_ELIGIBILITY_RANK)


# =============================================================================
# Field-Change Rules
# =============================================================================

def _is_whole_number(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def apply_age(state: IntakeFormState, age: int | None) -> IntakeFormState:
    """Set age. Non-integer and out-of-range values are ignored."""
    if not state.is_editable:
        return state
    if age is not None and not _is_whole_number(age):
        logger.info(f"Age is not a whole number (ignored): {age!r}")
        return state
    if age is not None and not (MIN_AGE <= age <= MAX_AGE):
        logger.info(f"Age out of range (ignored): {age}")
        return state
    return state.evolve(age=age)


def apply_rank(state: IntakeFormState, rank: str) -> IntakeFormState:
    """
    Set current rank.

    Changing the rank clears division; re-selecting the same rank keeps it.
    Forces experience to "None" below the threshold; when moving back up
    from a forced "None" the user has to choose again.
    """
    if not state.is_editable:
        return state
    if rank not in RANK_OPTIONS:
        logger.info(f"Unknown rank (ignored): {rank}")
        return state
    if rank == state.current_rank:
        return state

    experience = state.past_experience
    if not is_experience_eligible(rank):
        experience = NO_EXPERIENCE
    elif not is_experience_eligible(state.current_rank):
        experience = None

    return state.evolve(current_rank=rank, division=None, past_experience=experience)


def apply_division(state: IntakeFormState, division: str | None) -> IntakeFormState:
    """Set division. Ignored while no rank is chosen or rank is the top tier."""
    if not state.is_editable:
        return state
    if not requires_division(state.current_rank):
        return state
    if division is not None and division not in DIVISION_OPTIONS:
        logger.info(f"Unknown division (ignored): {division}")
        return state
    return state.evolve(division=division)


def apply_experience(state: IntakeFormState, experience: str | None) -> IntakeFormState:
    """Set past experience. Read-only (stays "None") below the threshold."""
    if not state.is_editable:
        return state
    if not is_experience_eligible(state.current_rank):
        return state
    if experience is not None and experience not in EXPERIENCE_OPTIONS:
        logger.info(f"Unknown experience tier (ignored): {experience}")
        return state
    return state.evolve(past_experience=experience)


# =============================================================================
# Validation
# =============================================================================

def validate_intake(state: IntakeFormState) -> tuple[bool, list[str]]:
    """
    Check that the form can be submitted.

    Returns:
        (is_valid, error_messages)
    """
    errors = []

    if state.age is None:
        errors.append("Please enter your age")
    elif not _is_whole_number(state.age):
        errors.append("Age must be a whole number")
    elif not (MIN_AGE <= state.age <= MAX_AGE):
        errors.append(f"Age must be between {MIN_AGE} and {MAX_AGE}")

    if state.current_rank is None:
        errors.append("Please select your current rank")
    elif requires_division(state.current_rank):
        if not state.division:
            errors.append("Please select your division")
    elif state.division is not None:
        errors.append(f"{TOP_TIER_RANK} has no divisions")

    if not state.past_experience:
        errors.append("Please select your past experience")
    elif not is_experience_eligible(state.current_rank) and state.past_experience != NO_EXPERIENCE:
        errors.append(f"Past experience requires {EXPERIENCE_ELIGIBILITY_RANK} or higher")

    return (len(errors) == 0, errors)


# =============================================================================
# Wire Model
# =============================================================================

class IntakeRequest(BaseModel):
    """Body sent to the submission gateway."""

    age: int = Field(ge=MIN_AGE, le=MAX_AGE, description="Player age")
    current_rank: str = Field(description="Current competitive rank")
    past_experience: str = Field(description="Highest tier played at before")
    division: str | None = Field(
        default=None,
        description="Division within the rank; null for the top tier",
    )

    @field_validator("current_rank")
    @classmethod
    def validate_rank(cls, v: str) -> str:
        if v not in RANK_OPTIONS:
            raise ValueError(f"Unknown rank: {v}")
        return v

    @field_validator("past_experience")
    @classmethod
    def validate_experience(cls, v: str) -> str:
        if v not in EXPERIENCE_OPTIONS:
            raise ValueError(f"Unknown experience tier: {v}")
        return v

    @model_validator(mode="after")
    def division_matches_rank(self) -> "IntakeRequest":
        if requires_division(self.current_rank):
            if self.division not in DIVISION_OPTIONS:
                raise ValueError(f"{self.current_rank} requires a division")
        elif self.division is not None:
            raise ValueError(f"{TOP_TIER_RANK} has no divisions")
        return self

    @classmethod
    def from_state(cls, state: IntakeFormState) -> "IntakeRequest":
        """Build the request from a validated form state."""
        return cls(
            age=state.age,
            current_rank=state.current_rank,
            past_experience=state.past_experience,
            division=state.division if requires_division(state.current_rank) else None,
        )


# =============================================================================
# Rendering Helpers
# =============================================================================

def get_form_options() -> dict:
    """
    Get all form options for rendering.

    Returns dict with:
    - ranks: Rank options, lowest first
    - top_tier_rank: Rank that has no divisions
    - divisions: Division options
    - experience: Past experience options
    - experience_eligibility_rank: Lowest rank allowed to pick experience
    - age: Accepted age range
    """
    return {
        "ranks": RANK_OPTIONS,
        "top_tier_rank": TOP_TIER_RANK,
        "divisions": DIVISION_OPTIONS,
        "experience": EXPERIENCE_OPTIONS,
        "experience_eligibility_rank": EXPERIENCE_ELIGIBILITY_RANK,
        "age": {"min": MIN_AGE, "max": MAX_AGE},
    }
