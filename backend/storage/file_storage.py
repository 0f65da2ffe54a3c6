"""
File storage abstraction.

Provides a simple interface for storing uploaded cover images.
Currently uses the local filesystem.
"""
import shutil
import threading
import time
from pathlib import Path
from typing import BinaryIO, Callable, Optional


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class FileStorage:
    """
    Local file storage implementation.

    Files are stored flat in ``upload_root`` as ``{timestamp}-{filename}``
    and addressed by clients as ``{url_prefix}/{timestamp}-{filename}``.
    Stamps only move forward, and a name already on disk is never
    overwritten; the stamp is bumped instead.
    """

    def __init__(
        self,
        upload_root: str | Path = "uploads",
        url_prefix: str = "/uploads",
        clock: Optional[Callable[[], int]] = None,
    ):
        self.upload_root = Path(upload_root)
        self.url_prefix = url_prefix.rstrip("/")
        self._clock = clock or _now_ms
        self._last_stamp = 0
        self._lock = threading.Lock()

    def ensure_root(self) -> Path:
        """Create the upload directory if it does not exist yet."""
        self.upload_root.mkdir(parents=True, exist_ok=True)
        return self.upload_root

    def save_upload(self, file: BinaryIO, filename: str) -> str:
        """
        Save an uploaded file.

        Args:
            file: File-like object with the upload data
            filename: Original client filename; only its final component is kept

        Returns:
            URL path of the saved file
        """
        name = Path(filename or "").name or "upload"
        root = self.ensure_root()

        while True:
            new_filename = f"{self._next_stamp()}-{name}"
            file_path = root / new_filename
            try:
                f = open(file_path, "xb")
            except FileExistsError:
                continue
            with f:
                shutil.copyfileobj(file, f)
            return f"{self.url_prefix}/{new_filename}"

    def _next_stamp(self) -> int:
        with self._lock:
            stamp = self._clock()
            if stamp <= self._last_stamp:
                stamp = self._last_stamp + 1
            self._last_stamp = stamp
            return stamp

    def get_absolute_path(self, url_path: str) -> Path:
        """Convert a URL path returned by ``save_upload`` to a filesystem path."""
        rel = url_path
        if rel.startswith(self.url_prefix + "/"):
            rel = rel[len(self.url_prefix) + 1:]
        return self.upload_root / Path(rel).name

    def file_exists(self, url_path: str) -> bool:
        """Check if a file exists."""
        return self.get_absolute_path(url_path).exists()
