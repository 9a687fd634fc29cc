"""
Starting tier placement.

Scores an intake request and maps it to the tier a new career starts in.
This is the same weighting the career backend applies on /createCareer and
backs the offline gateway.
"""

from enum import Enum

from .forms import IntakeRequest


class StartingTier(str, Enum):
    """Tier a new career is placed into, lowest first."""
    RANKED_PLAY = "Ranked Play"
    TIER_3 = "Tier 3 (College / Premier)"
    TIER_2 = "Tier 2 (College / Challengers)"
    TIER_1 = "Tier 1 (VCT)"


RANK_SCORES = {
    "Radiant": 5.0,
    "Immortal": 4.0,
    "Ascendant": 2.0,
    "Diamond": 1.0,
    "Platinum": 0.5,
}

EXPERIENCE_SCORES = {
    "Tier 1": 4.0,
    "Tier 2": 3.0,
    "Tier 3": 2.0,
}

# Experience counts in full only from this rank score up
FULL_EXPERIENCE_RANK_SCORE = 2.0

REGION_BONUS_DIVISIONS = {"na", "eu"}

# Tier 3 only takes players in this age window; older/younger go to ranked
TIER_3_AGE_RANGE = range(17, 25)


def placement_score(request: IntakeRequest) -> float:
    """Weighted score from rank, experience and region."""
    rank_score = RANK_SCORES.get(request.current_rank, 0.0)
    exp_score = EXPERIENCE_SCORES.get(request.past_experience, 0.0)

    score = rank_score
    if rank_score >= FULL_EXPERIENCE_RANK_SCORE:
        score += exp_score
    elif exp_score > 0:
        score += 1.0

    if (request.division or "").lower() in REGION_BONUS_DIVISIONS:
        score += 1.0

    return score


def weighted_tier(request: IntakeRequest) -> StartingTier:
    """Map an intake request to its starting tier."""
    score = placement_score(request)
    if score >= 9.0:
        return StartingTier.TIER_1
    if score >= 6.0:
        return StartingTier.TIER_2
    if score >= 3.0:
        if request.age in TIER_3_AGE_RANGE:
            return StartingTier.TIER_3
        return StartingTier.RANKED_PLAY
    return StartingTier.RANKED_PLAY
