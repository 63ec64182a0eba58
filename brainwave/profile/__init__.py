"""
BrainWave Focus Profile

Lifestyle answers -> focus capacity profile + advisory recommendations.

Design Principles:
- PURE: calculate and recommend have no side effects
- DETERMINISTIC: fixed adjustment and rule order
- TOTAL: never fail on validated input
"""

from .models import (
    ExerciseFrequency,
    CaffeineLevel,
    WorkType,
    LifestyleInput,
    FocusProfile,
    Recommendation,
    UserRecord,
    AnalysisResult,
    validate_lifestyle,
)
from .calculate import calculate_focus_profile
from .recommend import generate_recommendations

__all__ = [
    # Models
    "ExerciseFrequency",
    "CaffeineLevel",
    "WorkType",
    "LifestyleInput",
    "FocusProfile",
    "Recommendation",
    "UserRecord",
    "AnalysisResult",
    "validate_lifestyle",
    # Functions
    "calculate_focus_profile",
    "generate_recommendations",
]
