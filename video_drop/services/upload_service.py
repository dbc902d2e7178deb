import logging
import aiofiles
import aiofiles.os
from pathlib import Path
from fastapi import UploadFile
from video_drop.utils.file_utils import storage_name

logger = logging.getLogger("upload_service")

class UploadService:
    """
    Service to persist uploaded files into the storage directory.
    """

    def __init__(self, upload_dir: Path, chunk_size: int = 1024 * 1024):
        self.upload_dir = upload_dir
        self.chunk_size = chunk_size

    async def save_upload(self, upload: UploadFile) -> Path:
        """
        Write an uploaded file under its original name, replacing any
        existing file of the same name.
        """
        filename = storage_name(upload.filename)
        destination = self.upload_dir / filename

        await upload.seek(0)
        async with aiofiles.open(destination, "wb") as out_file:
            while True:
                chunk = await upload.read(self.chunk_size)
                if not chunk:
                    break
                await out_file.write(chunk)

        logger.info(f"Uploaded file path = {destination}")
        listing = await aiofiles.os.listdir(self.upload_dir)
        logger.info(f"Dir listing now = {sorted(listing)}")
        return destination
