"""
Recommendation Generator

Rules are evaluated independently and appended in a fixed order, so the
same input always yields the same list (1 to 3 entries).
"""

from typing import List

from .models import FocusProfile, LifestyleInput, Recommendation


def generate_recommendations(
    lifestyle: LifestyleInput,
    profile: FocusProfile
) -> List[Recommendation]:
    """Advisory messages for a lifestyle input and its profile."""
    recommendations: List[Recommendation] = []

    if lifestyle.sleep_hours < 7:
        recommendations.append(Recommendation(
            category="Sleep",
            priority="high",
            message="Increase sleep to 7-9 hours to improve focus by up to 25%",
        ))

    if lifestyle.stress_level > 7:
        recommendations.append(Recommendation(
            category="Stress",
            priority="high",
            message="Practice meditation. Use alpha wave therapy regularly.",
        ))

    recommendations.append(Recommendation(
        category="Work Pattern",
        priority="high",
        message=(
            f"Work in {profile.max_concentration} min blocks "
            f"with {profile.recommended_break} min breaks"
        ),
    ))

    return recommendations
