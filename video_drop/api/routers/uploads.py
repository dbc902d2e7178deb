import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.responses import JSONResponse
from video_drop.api.schemas import ErrorResponse, UploadResponse
from video_drop.api.dependencies import get_tracker, get_upload_service
from video_drop.models import UploadStatus
from video_drop.services.progress_service import UploadProgress, UploadTracker
from video_drop.services.upload_service import UploadService

logger = logging.getLogger("uploads")

router = APIRouter(tags=["uploads"])

def _request_progress(request: Request, tracker: UploadTracker) -> UploadProgress:
    upload_id = getattr(request.state, "upload_id", None)
    progress = tracker.session(upload_id) if upload_id else None
    # Evicted from history, or the middleware is not installed
    return progress or tracker.start(upload_id)

def _error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error).model_dump(by_alias=True)
    )

@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def upload_file(
    request: Request,
    file1: Optional[UploadFile] = File(None),
    upload_service: UploadService = Depends(get_upload_service),
    tracker: UploadTracker = Depends(get_tracker)
):
    """
    Store a single file sent as the multipart field ``file1``.

    Byte progress is recorded by the upload middleware while the body
    arrives; this handler marks the upload done once the file is on disk.
    """
    progress = _request_progress(request, tracker)

    if file1 is None:
        error = "No file1 field in the upload"
        progress.fail(error)
        return _error_response(status.HTTP_400_BAD_REQUEST, error)

    try:
        destination = await upload_service.save_upload(file1)
    except Exception as e:
        logger.exception(f"Upload {progress.upload_id} failed")
        progress.fail(str(e))
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    finally:
        await file1.close()

    progress.complete(destination.name)
    return UploadResponse(filename=destination.name, upload_id=progress.upload_id)

@router.get("/status", response_model=UploadStatus)
async def get_status(tracker: UploadTracker = Depends(get_tracker)):
    """
    Progress of the most recently started upload.
    """
    return tracker.latest()

@router.get("/status/{upload_id:path}", response_model=UploadStatus)
async def get_upload_status(upload_id: str, tracker: UploadTracker = Depends(get_tracker)):
    """
    Progress of one upload session.
    """
    upload_status = tracker.get(upload_id)
    if upload_status is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Upload {upload_id} not found"
        )
    return upload_status
