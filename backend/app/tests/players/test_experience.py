"""
Tests for level progression derived from experience.
"""

import pytest

from app.features.players.experience import (
    calculate_experience_to_next_level,
    calculate_level,
    progression,
)


class TestCalculateLevel:
    """Golden values for the level formula."""

    @pytest.mark.parametrize(
        "experience, expected_level",
        [
            (0, 0),
            (99, 0),
            (100, 1),
            (299, 1),
            (300, 2),
            (100_000, 44),
            (1_000_000, 140),
            (10_000_000, 446),
        ],
    )
    def test_golden_values(self, experience, expected_level):
        """Level matches the closed-form formula at known points."""
        assert calculate_level(experience) == expected_level

    def test_level_thresholds(self):
        """Level n starts exactly at 50 * n * (n + 1) experience."""
        for level in range(1, 447):
            threshold = 50 * level * (level + 1)
            assert calculate_level(threshold) == level
            assert calculate_level(threshold - 1) == level - 1

    def test_monotonic(self):
        """Level never decreases as experience grows."""
        previous = 0
        for experience in range(0, 10_000_001, 4999):
            current = calculate_level(experience)
            assert current >= previous
            previous = current

    def test_negative_experience_rejected(self):
        """Negative experience is outside the domain."""
        with pytest.raises(ValueError):
            calculate_level(-1)


class TestExperienceToNextLevel:
    """Tests for the remaining-experience formula."""

    def test_fresh_character(self):
        """A new character needs 100 experience for level 1."""
        assert calculate_experience_to_next_level(0, 0) == 100

    def test_reference_points(self):
        """Known remaining-experience values."""
        assert calculate_experience_to_next_level(100, 1) == 200
        assert calculate_experience_to_next_level(1_000_000, 140) == 1_100
        assert calculate_experience_to_next_level(10_000_000, 446) == 12_800

    def test_never_negative_for_derived_level(self):
        """Remaining experience is non-negative whenever level comes from experience."""
        experiences = list(range(0, 10_000_001, 3331)) + [10_000_000]
        for level in range(0, 447):
            threshold = 50 * level * (level + 1)
            experiences.extend([threshold, max(threshold - 1, 0)])

        for experience in experiences:
            level = calculate_level(experience)
            remaining = calculate_experience_to_next_level(experience, level)
            assert remaining > 0

    def test_progression_returns_consistent_pair(self):
        """progression() returns the level and its matching remainder."""
        level, remaining = progression(12_345)
        assert level == calculate_level(12_345)
        assert remaining == calculate_experience_to_next_level(12_345, level)
