import os
import pytest
from pathlib import Path
from fastapi.testclient import TestClient
from video_drop.core.config import Settings
from video_drop.main import create_app

@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"

@pytest.fixture
def test_settings(upload_dir):
    return Settings(UPLOAD_DIR=upload_dir, LOG_LEVEL="DEBUG")

@pytest.fixture
def test_app(test_settings):
    """Create the FastAPI app over a temporary storage directory."""
    return create_app(test_settings)

@pytest.fixture
def test_client(test_app):
    """Create a test client for the FastAPI app."""
    return TestClient(test_app)

@pytest.fixture
def make_video(upload_dir):
    """Write a file into the storage directory with a fixed mtime."""
    def _make_video(name: str, content: bytes = b"video", mtime: float = None) -> Path:
        upload_dir.mkdir(parents=True, exist_ok=True)
        path = upload_dir / name
        path.write_bytes(content)
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path
    return _make_video
