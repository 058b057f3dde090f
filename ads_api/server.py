"""Marketplace ads FastAPI application.

Wiring for startup, error handlers, CORS and routers.
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from ads_domain import __version__
from ads_domain.errors import AdsError, ValidationError

from .config import CORS_ORIGINS
from .db import get_engine
from .logging_config import setup_logging
from .routers import auth, billing, budgets, campaigns, reports, slots, tracking, wallets

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    load_dotenv()
    setup_logging()
    engine = get_engine()

    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    logger.info("Marketplace ads API started")

    try:
        yield
    finally:
        engine.dispose()


app = FastAPI(
    title="Marketplace Ads API",
    description="Sponsored listings for a multi-tenant marketplace: campaigns, slot auctions, wallets.",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(AdsError)
async def ads_error_handler(request: Request, exc: AdsError):
    content = {"detail": exc.message}
    if isinstance(exc, ValidationError):
        content["errors"] = exc.errors
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=content)


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    allow_credentials=False,
)

app.include_router(auth.router)
app.include_router(billing.router)
app.include_router(campaigns.router)
app.include_router(slots.router)
app.include_router(tracking.router)
app.include_router(wallets.router)
app.include_router(budgets.router)
app.include_router(reports.router)
