# Content Unroller Main Entry Point
"""FastAPI application serving the content unrolling endpoints."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from content_unroller.config import settings
from content_unroller.middleware import TransactionIDMiddleware
from content_unroller.routers import content_router, health_router
from content_unroller.services.content_reader import content_reader

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("content_unroller.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(
        f"Reading content from {settings.content_store_host} "
        f"({settings.content_path}, {settings.internal_content_path})"
    )

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")
    await content_reader.close()


app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(TransactionIDMiddleware)

app.include_router(content_router)
app.include_router(health_router)


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting with HTTP on port {settings.port}")
    uvicorn.run(
        "content_unroller.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
