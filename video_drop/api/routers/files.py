from fastapi import APIRouter, Depends
from video_drop.api.schemas import FileNamesResponse, UserListResponse, UserVideosResponse, VideoListResponse
from video_drop.api.dependencies import get_video_service
from video_drop.services.video_service import VideoService

router = APIRouter(tags=["files"])

@router.get("/files", response_model=FileNamesResponse)
def list_file_names(video_service: VideoService = Depends(get_video_service)):
    """
    Legacy listing: stored video filenames without metadata.
    """
    return FileNamesResponse(files=video_service.list_filenames())

@router.get("/api/files", response_model=VideoListResponse)
def list_videos(video_service: VideoService = Depends(get_video_service)):
    """
    List all stored videos, most recent first.
    """
    return VideoListResponse(
        upload_dir=str(video_service.upload_dir),
        files=video_service.list_videos()
    )

@router.get("/api/users", response_model=UserListResponse)
def list_users(video_service: VideoService = Depends(get_video_service)):
    return UserListResponse(users=video_service.list_users())

@router.get("/api/user/{name}", response_model=UserVideosResponse)
def list_user_videos(name: str, video_service: VideoService = Depends(get_video_service)):
    """
    List the videos uploaded by one user.
    """
    user = name.strip()
    return UserVideosResponse(user=user, files=video_service.list_by_user(user))
