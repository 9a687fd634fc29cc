"""
Tests for starting tier placement scoring.
"""

import pytest

from onboarding.forms import IntakeRequest
from onboarding.placement import StartingTier, placement_score, weighted_tier


def _request(rank: str, experience: str = "None", age: int = 20, division: str | None = "1") -> IntakeRequest:
    if rank == "Radiant":
        division = None
    return IntakeRequest(age=age, current_rank=rank, past_experience=experience, division=division)


class TestPlacementScore:

    def test_rank_only(self):
        assert placement_score(_request("Radiant")) == 5.0
        assert placement_score(_request("Platinum")) == 0.5
        assert placement_score(_request("Iron")) == 0.0

    def test_experience_counts_in_full_from_ascendant(self):
        assert placement_score(_request("Immortal", "Tier 1")) == 8.0
        assert placement_score(_request("Radiant", "Tier 3")) == 7.0

    def test_experience_below_ascendant_adds_one(self):
        # Not reachable through the form (experience is forced), but the
        # backend scores it this way
        assert placement_score(_request("Diamond", "Tier 1")) == 2.0

    def test_region_bonus(self):
        request = IntakeRequest.model_construct(
            age=20, current_rank="Immortal", past_experience="None", division="NA"
        )
        assert placement_score(request) == 5.0


class TestWeightedTier:

    def test_radiant_tier_one_experience_is_tier_one(self):
        assert weighted_tier(_request("Radiant", "Tier 1")) == StartingTier.TIER_1

    def test_immortal_tier_two_experience_is_tier_two(self):
        assert weighted_tier(_request("Immortal", "Tier 2")) == StartingTier.TIER_2

    @pytest.mark.parametrize("age, expected", [
        (17, StartingTier.TIER_3),
        (24, StartingTier.TIER_3),
        (16, StartingTier.RANKED_PLAY),
        (25, StartingTier.RANKED_PLAY),
    ])
    def test_tier_three_age_window(self, age, expected):
        # Radiant without experience scores 5
        assert weighted_tier(_request("Radiant", age=age)) == expected

    def test_low_rank_is_ranked_play(self):
        assert weighted_tier(_request("Gold")) == StartingTier.RANKED_PLAY

    def test_labels(self):
        assert StartingTier.TIER_1.value == "Tier 1 (VCT)"
        assert StartingTier.RANKED_PLAY.value == "Ranked Play"
