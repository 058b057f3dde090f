"""Marketplace ads API server runner.

Serves the FastAPI application using Uvicorn when invoked directly.

Usage:
    python api_server.py

Starts the server at http://localhost:8000 (configurable via env vars).
"""

import os

import uvicorn

from ads_api.logging_config import setup_logging
from ads_api.startup import init_db, run_db_migrations_if_configured

if __name__ == "__main__":
    host = os.getenv("UVICORN_HOST", "0.0.0.0")
    port = int(os.getenv("UVICORN_PORT", "8000"))
    reload = os.getenv("UVICORN_RELOAD", "false").lower() == "true"

    setup_logging()
    run_db_migrations_if_configured()
    init_db()

    uvicorn.run(
        "ads_api.server:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )
