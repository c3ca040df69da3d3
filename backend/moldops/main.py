"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moldops.config import get_settings
from moldops.infrastructure.dependencies import (
    get_auth_gateway,
    get_local_data_gateway,
    get_notification_center,
)
from moldops.infrastructure.logging.log_config import setup_logging
from moldops.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _prepare_local_gateway() -> None:
    """Create the row table and, if enabled, seed the demo data set."""
    from moldops.infrastructure.database import Base, engine
    from moldops.infrastructure.database.seed import seed_demo_data

    settings = get_settings()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if settings.seed_demo_data:
        await seed_demo_data(
            get_local_data_gateway(),
            get_auth_gateway(),
            settings.seed_admin_email,
            settings.seed_admin_password,
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — logging, local storage, notice shutdown."""
    settings = get_settings()
    setup_logging()

    if settings.uses_supabase:
        logger.info("Using Supabase gateway at %s", settings.supabase_url)
    else:
        logger.info("Using local gateway at %s", settings.database_url)
        await _prepare_local_gateway()

    yield

    # Shutdown
    await get_notification_center().shutdown()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "moldops.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
