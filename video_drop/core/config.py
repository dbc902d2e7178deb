from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

class Settings(BaseSettings):
    PROJECT_NAME: str = "Video Drop"

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Storage settings
    UPLOAD_DIR: Path = Field(default_factory=lambda: Path.cwd() / "uploads")
    STATIC_DIR: Path = Path(__file__).resolve().parent.parent / "static"
    VIDEO_EXTENSION: str = ".mp4"
    MEDIA_PREFIX: str = "/media"
    UPLOAD_CHUNK_SIZE: int = 1024 * 1024  # 1MB copy buffer

    # Progress tracking
    STATUS_HISTORY_LIMIT: int = 100

# Global settings instance
settings = Settings()
