import math
import uuid
import logging
import threading
from collections import OrderedDict
from typing import Optional
from fastapi import FastAPI
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send
from video_drop.models import UploadStatus

logger = logging.getLogger("progress_service")

UPLOAD_ID_HEADER = "x-upload-id"

class UploadProgress:
    """
    Progress record for a single upload request.

    Updated from the request's body stream and from the upload handler;
    readers get copies through ``snapshot()``.
    """

    def __init__(self, upload_id: str, bytes_total: int = 0):
        self._lock = threading.Lock()
        self._status = UploadStatus(
            state="uploading",
            bytes_total=bytes_total,
            upload_id=upload_id
        )

    @property
    def upload_id(self) -> str:
        return self._status.upload_id

    def add_bytes(self, count: int) -> None:
        with self._lock:
            status = self._status
            status.bytes_received += count
            if status.bytes_total > 0:
                # Round half up, not half to even
                ratio = status.bytes_received / status.bytes_total * 100
                status.percent = min(100, math.floor(ratio + 0.5))

    def complete(self, filename: str) -> None:
        with self._lock:
            self._status.state = "done"
            self._status.filename = filename
            self._status.percent = 100

    def fail(self, message: str) -> None:
        with self._lock:
            self._status.state = "error"
            self._status.message = message

    def fail_if_uploading(self, message: str) -> bool:
        with self._lock:
            if self._status.state != "uploading":
                return False
            self._status.state = "error"
            self._status.message = message
            return True

    def snapshot(self) -> UploadStatus:
        with self._lock:
            return self._status.model_copy()

class UploadTracker:
    """
    Registry of upload progress records keyed by upload session id.

    ``latest()`` reports whichever upload started most recently. With several
    uploads in flight that view is last-writer-wins; per-session lookups via
    ``get()`` are not affected by other uploads.
    """

    def __init__(self, history_limit: int = 100):
        self.history_limit = max(1, history_limit)
        self._lock = threading.Lock()
        self._sessions: "OrderedDict[str, UploadProgress]" = OrderedDict()
        self._latest: Optional[UploadProgress] = None

    def start(self, upload_id: Optional[str] = None, bytes_total: int = 0) -> UploadProgress:
        progress = UploadProgress(upload_id or uuid.uuid4().hex, bytes_total)
        with self._lock:
            self._sessions.pop(progress.upload_id, None)
            self._sessions[progress.upload_id] = progress
            while len(self._sessions) > self.history_limit:
                self._sessions.popitem(last=False)
            self._latest = progress
        return progress

    def session(self, upload_id: str) -> Optional[UploadProgress]:
        with self._lock:
            return self._sessions.get(upload_id)

    def get(self, upload_id: str) -> Optional[UploadStatus]:
        progress = self.session(upload_id)
        return progress.snapshot() if progress else None

    def latest(self) -> UploadStatus:
        with self._lock:
            progress = self._latest
        return progress.snapshot() if progress else UploadStatus()

class UploadProgressMiddleware:
    """
    ASGI middleware counting request body bytes of upload requests.

    Runs before routing, so progress is visible while the multipart body is
    still being decoded. The session id is exposed to handlers as
    ``request.state.upload_id``.
    """

    def __init__(self, app: ASGIApp, tracker: UploadTracker, path: str = "/upload"):
        self.app = app
        self.tracker = tracker
        self.path = path

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] != "POST" or scope["path"] != self.path:
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        progress = self.tracker.start(
            upload_id=headers.get(UPLOAD_ID_HEADER),
            bytes_total=content_length(headers)
        )
        scope.setdefault("state", {})["upload_id"] = progress.upload_id
        logger.info(f"Upload {progress.upload_id} started ({progress.snapshot().bytes_total} bytes expected)")

        async def receive_with_progress() -> Message:
            message = await receive()
            if message["type"] == "http.request":
                progress.add_bytes(len(message.get("body", b"")))
            elif message["type"] == "http.disconnect":
                if progress.fail_if_uploading("Client disconnected before the upload finished"):
                    logger.warning(f"Upload {progress.upload_id} aborted by client")
            return message

        try:
            await self.app(scope, receive_with_progress, send)
        except Exception as e:
            progress.fail_if_uploading(str(e))
            raise
        # Rejected before the handler ran, e.g. a malformed multipart body
        progress.fail_if_uploading("Upload request finished without storing a file")

def content_length(headers: Headers) -> int:
    try:
        return max(0, int(headers.get("content-length") or 0))
    except ValueError:
        return 0

def setup_progress_tracking(app: FastAPI, tracker: UploadTracker, path: str = "/upload"):
    """
    Attach upload progress tracking to the FastAPI application.
    """
    app.state.tracker = tracker
    app.add_middleware(UploadProgressMiddleware, tracker=tracker, path=path)
