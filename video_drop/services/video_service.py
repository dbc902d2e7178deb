import os
import logging
from pathlib import Path
from typing import Iterator, List
from video_drop.models import VideoEntry, VideoMeta
from video_drop.utils.file_utils import display_name, has_extension, media_url, parse_filename

logger = logging.getLogger("video_service")

class VideoService:
    """
    Read-only view over the videos in the storage directory.

    Nothing is cached: every call lists and stats the directory again, so
    results always reflect the filesystem at call time.
    """

    def __init__(self, upload_dir: Path, extension: str = ".mp4", media_prefix: str = "/media"):
        self.upload_dir = upload_dir
        self.extension = extension
        self.media_prefix = media_prefix

    def _scan(self) -> Iterator[os.DirEntry]:
        """
        Regular files in the storage directory carrying the video extension,
        in directory order.
        """
        if not self.upload_dir.is_dir():
            return
        with os.scandir(self.upload_dir) as entries:
            for entry in entries:
                if has_extension(entry.name, self.extension) and entry.is_file():
                    yield entry

    def list_filenames(self) -> List[str]:
        """
        Names of the stored videos in directory order, without metadata.
        """
        return [display_name(entry.name) for entry in self._scan()]

    def list_videos(self) -> List[VideoEntry]:
        """
        All stored videos with their stat data and parsed metadata,
        most recently modified first.
        """
        videos = []
        for entry in self._scan():
            try:
                st = entry.stat()
            except FileNotFoundError:
                # Removed between the directory read and the stat
                logger.debug(f"Skipping vanished file: {entry.name!r}")
                continue

            filename = display_name(entry.name)
            meta = parse_filename(filename) or VideoMeta()
            videos.append(VideoEntry(
                filename=filename,
                url=media_url(self.media_prefix, entry.name),
                size=st.st_size,
                mtime=st.st_mtime_ns / 1_000_000,
                **meta.model_dump()
            ))

        videos.sort(key=lambda video: video.mtime, reverse=True)
        return videos

    def list_users(self) -> List[str]:
        return sorted({video.user for video in self.list_videos()})

    def list_by_user(self, name: str) -> List[VideoEntry]:
        user = name.strip()
        return [video for video in self.list_videos() if video.user == user]
