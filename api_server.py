"""
BrainWave Focus API Server
Personal focus capacity analysis and supervised focus sessions.
"""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from brainwave.health import API_VERSION, router as health_router
from brainwave.profile.admin import router as profile_router
from brainwave.session.admin import router as session_router
from brainwave.shared.errors import FocusError, InvalidInputError

# ============================================
# Logging
# ============================================
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("brainwave")

# ============================================
# App Configuration
# ============================================
app = FastAPI(
    title="BrainWave Focus API",
    description="Focus capacity profiles and concentration session tracking",
    version=API_VERSION
)

# ============================================
# CORS Configuration
# ============================================
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("BRAINWAVE_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# ============================================
# Error Handling
# ============================================
@app.exception_handler(FocusError)
async def focus_error_handler(request: Request, exc: FocusError):
    return JSONResponse(
        status_code=exc.http_code,
        content={"success": False, "error": exc.to_dict()},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"] if part != "body"),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    error = InvalidInputError("Invalid request", details=details)
    return JSONResponse(
        status_code=error.http_code,
        content={"success": False, "error": error.to_dict()},
    )


# ============================================
# Routers
# ============================================
app.include_router(health_router)
app.include_router(profile_router)
app.include_router(session_router)


@app.get("/")
def root():
    return {"status": "BrainWave API Running", "version": API_VERSION}
