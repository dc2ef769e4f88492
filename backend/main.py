import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.configs.dashboard_config import FRONTEND_ORIGINS
from dashboard_service import dashboard_router
from dashboard_service.api_modules.dashboard_api import DashboardLoader

API_PREFIX = "/api/v1"

logger = logging.getLogger("dashboard")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("dashboard.app.startup", extra={"origins": list(FRONTEND_ORIGINS)})
    try:
        yield
    finally:
        # Releases the pooled connections of the shared source client.
        await DashboardLoader.shutdown()
        logger.info("dashboard.app.shutdown")


def create_app() -> FastAPI:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    app = FastAPI(title="Coding Hours Dashboard API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(FRONTEND_ORIGINS),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.get(f"{API_PREFIX}/health", tags=["core"])
    def health_check() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(dashboard_router, prefix=API_PREFIX)
    return app


app = create_app()
