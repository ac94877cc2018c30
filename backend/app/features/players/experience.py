"""Experience model: level progression derived from raw experience.

Level ``n`` is reached at ``50 * n * (n + 1)`` experience points, which gives
the closed form used by :func:`calculate_level`.
"""

from math import isqrt


def calculate_level(experience: int) -> int:
    """Derive the character level from raw experience.

    :param experience: Raw experience, must be >= 0
    :returns: Level (0 for a fresh character)
    """
    if experience < 0:
        raise ValueError(f"experience must be non-negative, got {experience}")
    return (isqrt(2500 + 200 * experience) - 50) // 100


def calculate_experience_to_next_level(experience: int, level: int) -> int:
    """Experience still missing before ``level + 1`` is reached.

    ``level`` must be the value :func:`calculate_level` returns for
    ``experience``; a mismatched pair gives a meaningless (possibly negative)
    result.
    """
    return 50 * (level + 1) * (level + 2) - experience


def progression(experience: int) -> tuple[int, int]:
    """Return ``(level, experience_to_next_level)`` for raw experience."""
    level = calculate_level(experience)
    return level, calculate_experience_to_next_level(experience, level)
