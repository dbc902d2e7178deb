from fastapi import Depends, Request
from video_drop.core.config import Settings
from video_drop.services.progress_service import UploadTracker
from video_drop.services.upload_service import UploadService
from video_drop.services.video_service import VideoService

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_tracker(request: Request) -> UploadTracker:
    return request.app.state.tracker

# Dependency to get the VideoService bound to the configured storage directory
def get_video_service(settings: Settings = Depends(get_settings)) -> VideoService:
    """
    Dependency to get a VideoService over the storage directory.
    """
    return VideoService(
        settings.UPLOAD_DIR,
        extension=settings.VIDEO_EXTENSION,
        media_prefix=settings.MEDIA_PREFIX
    )

def get_upload_service(settings: Settings = Depends(get_settings)) -> UploadService:
    return UploadService(settings.UPLOAD_DIR, chunk_size=settings.UPLOAD_CHUNK_SIZE)
