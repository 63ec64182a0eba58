"""
Focus Session Endpoints

POST /api/session/start       - Open a session
POST /api/session/break       - Report a concentration lapse
POST /api/session/refocus     - Resume after a lapse
POST /api/session/end         - Finalize and score a session
GET  /api/sessions/{user_id}  - Ten most recent completed sessions
GET  /api/stats/{user_id}     - Aggregate stats (null when none)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from brainwave.orchestrate import FocusOrchestrator, get_orchestrator

from .models import SessionRecord, SessionStats


router = APIRouter(
    prefix="/api",
    tags=["session"],
)


class StartSessionRequest(BaseModel):
    user_id: Optional[str] = Field(
        default=None,
        description="Owner of the session; need not have an analysis yet"
    )

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        loc_by_alias = False


class SessionActionRequest(BaseModel):
    session_id: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        loc_by_alias = False


class StartSessionResponse(BaseModel):
    success: bool = True
    session_id: str
    session: SessionRecord


class SessionResponse(BaseModel):
    success: bool = True
    session: SessionRecord


class SessionListResponse(BaseModel):
    success: bool = True
    sessions: List[SessionRecord]


class StatsResponse(BaseModel):
    success: bool = True
    stats: Optional[SessionStats] = None


@router.post("/session/start", response_model=StartSessionResponse)
def start_session(
    request: StartSessionRequest,
    orchestrator: FocusOrchestrator = Depends(get_orchestrator),
):
    session = orchestrator.start_session(request.user_id)
    return StartSessionResponse(session_id=session.session_id, session=session)


@router.post("/session/break", response_model=SessionResponse)
def record_lapse(
    request: SessionActionRequest,
    orchestrator: FocusOrchestrator = Depends(get_orchestrator),
):
    """Count a lapse; the client plays the session's alpha tone until refocus."""
    return SessionResponse(session=orchestrator.record_lapse(request.session_id))


@router.post("/session/refocus", response_model=SessionResponse)
def record_refocus(
    request: SessionActionRequest,
    orchestrator: FocusOrchestrator = Depends(get_orchestrator),
):
    return SessionResponse(session=orchestrator.record_refocus(request.session_id))


@router.post("/session/end", response_model=SessionResponse)
def end_session(
    request: SessionActionRequest,
    orchestrator: FocusOrchestrator = Depends(get_orchestrator),
):
    return SessionResponse(session=orchestrator.end_session(request.session_id))


@router.get("/sessions/{user_id}", response_model=SessionListResponse)
def list_sessions(
    user_id: str,
    orchestrator: FocusOrchestrator = Depends(get_orchestrator),
):
    return SessionListResponse(sessions=orchestrator.list_sessions(user_id))


@router.get("/stats/{user_id}", response_model=StatsResponse)
def get_stats(
    user_id: str,
    orchestrator: FocusOrchestrator = Depends(get_orchestrator),
):
    return StatsResponse(stats=orchestrator.get_stats(user_id))
