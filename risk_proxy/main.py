"""Compliance Risk Upload Proxy.

Accepts spreadsheet uploads from the demo dashboard, forwards them to the
external risk-scoring service, and converts a spreadsheet answer into
per-subject risk profiles with a batch summary.

Run with:
    python3 -m uvicorn risk_proxy.main:app --host 0.0.0.0 --port 8000
"""

import logging
from typing import Dict

from fastapi import FastAPI

from risk_proxy.config import load_settings
from risk_proxy.errors import register_exception_handlers
from risk_proxy.routes import analyze
from risk_proxy.upstream.client import UpstreamClient

settings = load_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Compliance Risk Upload Proxy",
    description=(
        "Forwards customer spreadsheets to the external risk-scoring service "
        "and reshapes its output into risk profiles for the dashboard."
    ),
    version="1.0.0",
)

register_exception_handlers(app)


@app.on_event("startup")
async def startup() -> None:
    """Create the shared upstream client."""
    app.state.settings = settings
    app.state.upstream = UpstreamClient(settings)
    logger.info(
        "Upstream scoring service: %s%s (timeout %.0fs)",
        settings.upstream_base_url,
        settings.upstream_path,
        settings.upstream_timeout_seconds,
    )


@app.on_event("shutdown")
async def shutdown() -> None:
    await app.state.upstream.aclose()


app.include_router(analyze.router)


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "healthy"}
