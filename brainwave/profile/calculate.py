"""
Focus Profile Calculator

Maps lifestyle answers to a focus capacity profile. Every adjustment is
added to a base of 45 minutes in a fixed order, then the total is
clamped to [15, 90].

PURE: same input -> same profile, no side effects.
"""

import logging

from brainwave.shared.rounding import round_half_up

from .models import CaffeineLevel, ExerciseFrequency, FocusProfile, LifestyleInput

logger = logging.getLogger(__name__)

BASE_CONCENTRATION = 45
MIN_CONCENTRATION = 15
MAX_CONCENTRATION = 90

BREAK_RATIO = 0.3
INTERVAL_RATIO = 0.6

EXERCISE_BONUS = {
    ExerciseFrequency.DAILY: 15,
    ExerciseFrequency.WEEKLY: 10,
    ExerciseFrequency.OCCASIONALLY: 5,
    ExerciseFrequency.RARELY: -5,
}

CAFFEINE_EFFECT = {
    CaffeineLevel.NONE: 0,
    CaffeineLevel.LOW: 5,
    CaffeineLevel.MODERATE: 5,
    CaffeineLevel.HIGH: -10,
}


def age_adjustment(age: int) -> int:
    if age < 25:
        return 10
    if age > 50:
        return -10
    return 0


def sleep_adjustment(sleep_hours: float) -> int:
    if 7 <= sleep_hours <= 9:
        return 15
    if sleep_hours < 6:
        return -20
    return 0


def screen_time_adjustment(screen_time: float) -> int:
    if screen_time > 8:
        return -15
    if screen_time < 4:
        return 10
    return 0


def alpha_frequency_for(stress_level: int) -> int:
    """Higher stress gets a lower refocus tone."""
    if stress_level > 7:
        return 8
    if stress_level > 4:
        return 10
    return 12


def clamp_concentration(minutes: int) -> int:
    return max(MIN_CONCENTRATION, min(MAX_CONCENTRATION, minutes))


def calculate_focus_profile(lifestyle: LifestyleInput) -> FocusProfile:
    """
    Derive the focus profile for a validated lifestyle input.

    Adjustment order (additive to BASE_CONCENTRATION):
    1. Age
    2. Sleep
    3. Stress (-3 per level)
    4. Exercise
    5. Caffeine
    6. Screen time
    7. Clamp to [15, 90]

    Args:
        lifestyle: Validated questionnaire answers

    Returns:
        FocusProfile with break lengths derived from max_concentration
    """
    concentration = BASE_CONCENTRATION
    concentration += age_adjustment(lifestyle.age)
    concentration += sleep_adjustment(lifestyle.sleep_hours)
    concentration -= 3 * lifestyle.stress_level
    concentration += EXERCISE_BONUS.get(lifestyle.exercise_frequency, 0)
    concentration += CAFFEINE_EFFECT.get(lifestyle.caffeine, 0)
    concentration += screen_time_adjustment(lifestyle.screen_time)

    max_concentration = clamp_concentration(concentration)

    profile = FocusProfile(
        max_concentration=max_concentration,
        recommended_break=round_half_up(max_concentration * BREAK_RATIO),
        break_interval=round_half_up(max_concentration * INTERVAL_RATIO),
        alpha_frequency=alpha_frequency_for(lifestyle.stress_level),
    )
    logger.debug(f"Focus profile: raw={concentration} -> {profile.max_concentration} min")
    return profile
