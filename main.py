"""
BrainWave Focus API Entry Point

  uvicorn main:app --host 0.0.0.0 --port $PORT
"""

import os

from api_server import app  # noqa: F401


# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "3000")), reload=True)
