"""
Local document storage for onboarding uploads.
Files land in the uploads directory as "{timestamp_ms}-{original filename}";
only the returned path is persisted on the application row.
"""
from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable

from services.errors import InternalError

logger = logging.getLogger(__name__)

_MAX_NAME_ATTEMPTS = 1000


def _millis() -> int:
    return time.time_ns() // 1_000_000


def _safe_filename(filename: str | None) -> str:
    """Basename of the client-supplied name; never lets a path escape the uploads dir."""
    name = Path((filename or "").replace("\\", "/")).name.strip()
    if name in ("", ".", ".."):
        return "upload"
    return name


class DocumentStorage:
    def __init__(self, upload_dir: str | Path, clock: Callable[[], int] = _millis):
        self.upload_dir = Path(upload_dir)
        self._clock = clock

    def save(self, original_filename: str | None, content: bytes) -> str:
        """Write content under a unique name and return its path."""
        name = _safe_filename(original_filename)
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InternalError("Error storing uploaded file.") from e

        stamp = self._clock()
        for _ in range(_MAX_NAME_ATTEMPTS):
            path = self.upload_dir / f"{stamp}-{name}"
            try:
                # "xb" fails instead of overwriting another request's upload
                with open(path, "xb") as fh:
                    fh.write(content)
            except FileExistsError:
                stamp += 1
                continue
            except OSError as e:
                path.unlink(missing_ok=True)
                raise InternalError("Error storing uploaded file.") from e
            logger.debug("Stored upload %s (%d bytes)", path, len(content))
            return str(path)
        raise InternalError("Could not allocate a unique name for the uploaded file.")

    def delete(self, path: str | Path | None) -> None:
        if not path:
            return
        try:
            Path(path).unlink(missing_ok=True)
        except OSError:
            logger.exception("Error deleting file %s", path)

    def delete_all(self, paths: list[str]) -> None:
        for p in paths:
            self.delete(p)
