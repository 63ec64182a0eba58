"""
BrainWave Health Check
======================
Liveness plus the record store the process is using.
"""

from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from brainwave.orchestrate import FocusOrchestrator, get_orchestrator

API_VERSION = "1.0.0"

router = APIRouter(prefix="/api/v1/health", tags=["Health"])


class HealthCheckResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    api_version: str
    store: Dict[str, str]


@router.get("", response_model=HealthCheckResponse)
def check_health(orchestrator: FocusOrchestrator = Depends(get_orchestrator)):
    return HealthCheckResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        api_version=API_VERSION,
        store=orchestrator.store.describe(),
    )
