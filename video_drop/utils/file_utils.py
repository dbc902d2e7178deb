import os
import re
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Optional
from urllib.parse import quote
from video_drop.models import VideoMeta

_EXTENSION_RE = re.compile(r"\.[^/.]+$")

# Characters encodeURIComponent leaves alone on top of quote()'s defaults
_URI_COMPONENT_SAFE = "!~*'()"

def parse_filename(name: str) -> Optional[VideoMeta]:
    """
    Extract metadata from a ``<user>_<style>_<skill>_<take>.<ext>`` filename.

    The final extension is stripped and the rest split on underscores. Names
    with fewer than four parts carry no metadata and yield None; parts past
    the fourth are ignored.
    """
    base = _EXTENSION_RE.sub("", name)
    parts = base.split("_")
    if len(parts) < 4:
        return None
    user, style, skill, take = parts[:4]
    return VideoMeta(user=user, style=style, skill=skill, take=take)

def media_url(prefix: str, filename: str) -> str:
    # Quote the on-disk bytes so undecodable names still map back to the file
    return f"{prefix.rstrip('/')}/{quote(os.fsencode(filename), safe=_URI_COMPONENT_SAFE)}"

def display_name(filename: str) -> str:
    """
    Filename as shown to clients. Bytes that are not valid UTF-8 become
    U+FFFD instead of lone surrogates, which cannot be serialized.
    """
    return os.fsencode(filename).decode("utf-8", errors="replace")

def has_extension(name: str, extension: str) -> bool:
    return name.lower().endswith(extension.lower())

def storage_name(client_filename: Optional[str]) -> str:
    """
    Reduce a client-supplied filename to the name it is stored under.

    Only the final path component is kept, whichever separator the client
    used. Raises ValueError when nothing usable is left.
    """
    name = PureWindowsPath(PurePosixPath(client_filename or "").name).name
    if name in ("", ".", ".."):
        raise ValueError(f"Invalid upload filename: {client_filename!r}")
    return name

def ensure_directory_exists(directory_path: Path) -> None:
    """
    Ensure that a directory exists, creating it if necessary.
    """
    directory_path.mkdir(parents=True, exist_ok=True)
