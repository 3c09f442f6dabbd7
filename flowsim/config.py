"""Infrastructure configuration constants: single source of truth for env vars."""

import os
from pathlib import Path

# Server binding: used by `python -m flowsim_api` / uvicorn
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# CORS origins (comma-separated)
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if o.strip()
]

# Log directory: configurable via LOG_DIR env var for Docker
LOG_DIR = Path(os.getenv("LOG_DIR", str(Path(__file__).parent.parent / "logs")))

# Level name for the engine/sse/api loggers; LOG_TO_FILE=0 keeps them console-only
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "1").lower() not in ("0", "false", "no")

# Name used for exports when the caller does not supply one
DEFAULT_WORKFLOW_NAME = os.getenv("DEFAULT_WORKFLOW_NAME", "YouTube Automation Workflow")
