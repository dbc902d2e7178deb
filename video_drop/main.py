import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.types import Scope
from video_drop.api.routers import files, uploads
from video_drop.core.config import Settings, settings as default_settings
from video_drop.services.progress_service import UploadTracker, setup_progress_tracking
from video_drop.utils.file_utils import ensure_directory_exists

logger = logging.getLogger("video_drop")

class MediaFiles(StaticFiles):
    """
    Static files from the storage directory, advertising byte ranges so
    players can seek.
    """

    async def get_response(self, path: str, scope: Scope):
        response = await super().get_response(path, scope)
        response.headers["Accept-Ranges"] = "bytes"
        return response

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application over the configured storage directory.
    """
    settings = settings or default_settings
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Server listening on {settings.PORT}")
        logger.info(f"Upload dir: {settings.UPLOAD_DIR}")
        yield

    # Storage directory lives for the whole process
    ensure_directory_exists(settings.UPLOAD_DIR)

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.state.settings = settings

    # Include routers
    app.include_router(uploads.router)
    app.include_router(files.router)

    setup_progress_tracking(app, UploadTracker(history_limit=settings.STATUS_HISTORY_LIMIT))

    app.mount(
        settings.MEDIA_PREFIX,
        MediaFiles(directory=settings.UPLOAD_DIR, check_dir=False),
        name="media"
    )
    # Front-end assets; mounted last so it only catches unrouted paths
    app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True, check_dir=False), name="static")

    return app
