"""
Focus Profile Endpoints

POST /api/analyze         - Compute and store a focus profile
GET  /api/user/{user_id}  - Latest analysis for a user
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from brainwave.orchestrate import FocusOrchestrator, get_orchestrator

from .models import FocusProfile, LifestyleInput, Recommendation, UserRecord


router = APIRouter(
    prefix="/api",
    tags=["profile"],
)


class AnalyzeRequest(LifestyleInput):
    """
    Lifestyle answers plus an optional existing user id.

    Accepts snake_case or camelCase keys (sleep_hours or sleepHours).
    """
    user_id: Optional[str] = Field(
        default=None,
        description="Re-analyze this user; a new id is generated when omitted"
    )

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        loc_by_alias = False


class AnalyzeResponse(BaseModel):
    success: bool = True
    user_id: str
    analysis: FocusProfile
    recommendations: List[Recommendation]


class UserResponse(BaseModel):
    success: bool = True
    user: UserRecord


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(
    request: AnalyzeRequest,
    orchestrator: FocusOrchestrator = Depends(get_orchestrator),
):
    """
    Derive a focus profile from lifestyle answers.

    Re-analysis overwrites the user's stored lifestyle and profile but
    keeps the first created_at.
    """
    result = orchestrator.analyze(
        request.model_dump(exclude={"user_id"}),
        user_id=request.user_id,
    )
    return AnalyzeResponse(
        user_id=result.user_id,
        analysis=result.profile,
        recommendations=result.recommendations,
    )


@router.get("/user/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    orchestrator: FocusOrchestrator = Depends(get_orchestrator),
):
    return UserResponse(user=orchestrator.get_user(user_id))
