from typing import List, Optional
from video_drop.models import CamelModel, VideoEntry

class UploadResponse(CamelModel):
    ok: bool = True
    filename: Optional[str] = None
    upload_id: Optional[str] = None

class ErrorResponse(CamelModel):
    ok: bool = False
    error: str

class FileNamesResponse(CamelModel):
    files: List[str]

class VideoListResponse(CamelModel):
    ok: bool = True
    upload_dir: str
    files: List[VideoEntry]

class UserListResponse(CamelModel):
    ok: bool = True
    users: List[str]

class UserVideosResponse(CamelModel):
    ok: bool = True
    user: str
    files: List[VideoEntry]
