"""
Focus Profile Models

Pydantic models for lifestyle analysis inputs and the derived focus
profile. Field ranges here are the only validation the scoring layer
relies on; calculate/recommend assume an already-validated input.
"""

from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from brainwave.shared.errors import InvalidInputError


class ExerciseFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    OCCASIONALLY = "occasionally"
    RARELY = "rarely"


class CaffeineLevel(str, Enum):
    NONE = "none"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class WorkType(str, Enum):
    CREATIVE = "creative"
    ANALYTICAL = "analytical"
    PHYSICAL = "physical"
    MIXED = "mixed"


class LifestyleInput(BaseModel):
    """
    Lifestyle questionnaire answers for one analysis.

    work_type is advisory only and never affects scoring.
    """
    age: int = Field(ge=0, le=120, description="Age in years")
    sleep_hours: float = Field(ge=0, le=24, description="Average sleep per night")
    stress_level: int = Field(ge=1, le=10, description="Self-reported stress, 1-10")
    exercise_frequency: ExerciseFrequency
    caffeine: CaffeineLevel
    screen_time: float = Field(ge=0, le=24, description="Daily screen time in hours")
    work_type: Optional[WorkType] = Field(
        default=None,
        description="creative, analytical, physical or mixed"
    )

    class Config:
        frozen = True
        extra = "forbid"


class FocusProfile(BaseModel):
    """Focus capacity derived from a LifestyleInput."""
    max_concentration: int = Field(ge=15, le=90, description="Minutes")
    recommended_break: int = Field(description="Recreation break in minutes")
    break_interval: int = Field(description="Minutes between breaks")
    alpha_frequency: Literal[8, 10, 12] = Field(description="Refocus tone in Hz")

    class Config:
        frozen = True


class Recommendation(BaseModel):
    """A single advisory message."""
    category: str
    priority: str
    message: str


class UserRecord(BaseModel):
    """Latest analysis for a user. One record per user_id, overwritten on re-analysis."""
    user_id: str
    lifestyle: LifestyleInput
    profile: FocusProfile
    created_at: datetime
    updated_at: datetime


class AnalysisResult(BaseModel):
    """Outcome of one analyze request."""
    user_id: str
    profile: FocusProfile
    recommendations: List[Recommendation]


def validate_lifestyle(data: dict) -> LifestyleInput:
    """
    Build a LifestyleInput from raw answers.

    Raises:
        InvalidInputError: a field is missing, mistyped or out of range
    """
    try:
        return LifestyleInput(**data)
    except ValidationError as e:
        details = [
            {
                "field": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise InvalidInputError("Invalid lifestyle input", details=details) from e
