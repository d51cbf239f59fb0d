# thumbgallery/main.py
"""
FastAPI application entry point for thumbgallery.

The application serves gallery listings and static files. Its lifespan
owns the thumbnail sync worker: startup waits for the reconciliation
pass, then the watch loop runs alongside request handling until
shutdown.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .config import Settings, get_settings
from .constants import IMAGES_URL_PREFIX, STATIC_URL_PREFIX, THUMBNAILS_URL_PREFIX
from .enums import LogEmoji, LoggerName, LogSource
from .routers import gallery_routers as gallery
from .routers import health_routers as health
from .services.logger import get_service_logger, initialize_global_logger
from .workers.thumbnail_sync_worker import ThumbnailSyncWorker

logger = get_service_logger(LoggerName.SYSTEM, LogSource.SYSTEM)


def create_app(
    settings: Optional[Settings] = None, start_worker: bool = True
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Application settings (defaults to the environment)
        start_worker: Run the thumbnail sync worker during the lifespan

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    settings.ensure_directories()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        """Handle application startup and shutdown"""
        initialize_global_logger(settings.log_level, settings.log_file)
        logger.info(
            "Starting thumbgallery",
            emoji=LogEmoji.STARTUP,
            extra_context={
                "environment": settings.environment,
                "image_folder": str(settings.image_folder),
                "thumbnail_folder": str(settings.thumbnail_folder),
            },
        )

        worker = None
        if start_worker:
            # A failed subscription aborts startup instead of serving without updates
            worker = ThumbnailSyncWorker.from_settings(settings)
            await worker.start()
        _app.state.sync_worker = worker

        logger.info("Initialized thumbnails and started monitoring directory")

        yield

        logger.info("Shutting down thumbgallery", emoji=LogEmoji.SHUTDOWN)
        if worker is not None:
            await worker.stop()
        _app.state.sync_worker = None

    app = FastAPI(title="thumbgallery", lifespan=lifespan)
    app.state.settings = settings
    app.state.sync_worker = None

    app.include_router(gallery.router)
    app.include_router(health.router)

    # Most specific prefixes first; Starlette matches mounts in order
    app.mount(
        IMAGES_URL_PREFIX,
        StaticFiles(directory=settings.image_folder),
        name="images",
    )
    app.mount(
        THUMBNAILS_URL_PREFIX,
        StaticFiles(directory=settings.thumbnail_folder),
        name="thumbnails",
    )
    app.mount(
        STATIC_URL_PREFIX,
        StaticFiles(directory=settings.static_folder),
        name="static",
    )

    return app


def run() -> None:
    """Console entry point: serve the gallery with uvicorn."""
    settings = get_settings()
    initialize_global_logger(settings.log_level, settings.log_file)
    logger.info(f"Server starting on {settings.api_host}:{settings.api_port}")
    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.value.lower(),
    )


if __name__ == "__main__":
    run()
