from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

UNKNOWN_USER = "unknown"

class CamelModel(BaseModel):
    """Base model serialized with camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class VideoMeta(BaseModel):
    user: str = UNKNOWN_USER
    style: str = ""
    skill: str = ""
    take: str = ""

class VideoEntry(VideoMeta):
    filename: str
    url: str
    size: int
    mtime: float  # milliseconds since the epoch

class UploadStatus(CamelModel):
    state: str = "idle"  # "idle", "uploading", "done", "error"
    filename: Optional[str] = None
    bytes_received: int = 0
    bytes_total: int = 0
    percent: int = 0
    message: str = ""
    upload_id: Optional[str] = None
