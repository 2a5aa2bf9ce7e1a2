"""
FastAPI application for the compliance analysis queue.

Mounts the health, analysis queue and file routers under /api/v1.

Dependencies: fastapi, uvicorn, govbid.api.routers
System role: HTTP entry point (run with uvicorn govbid.api.main:app)
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from govbid.configs import get_settings
from govbid.observability.logger import configure_logging
from govbid.observability.middleware import RequestLoggingMiddleware

from .routers import analysis_queue_router, files_router, health_router

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(get_settings().log_level)
    logging.getLogger(__name__).info(f"{__name__}:lifespan - Analysis queue API started")
    yield


def create_app() -> FastAPI:
    """
    Build the application.

    Returns:
        FastAPI: App with CORS, request logging and all routers
    """
    app = FastAPI(
        title="GovBid Compliance Analysis API",
        description="Queue, run and inspect analyses of bidding checklist documents",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    for router in (health_router, analysis_queue_router, files_router):
        app.include_router(router, prefix=API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("govbid.api.main:app", host="0.0.0.0", port=8000)
