import logging
import os
import re
import shutil
import time
import uuid
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Union

from app.core.exceptions import UploadError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_MAX_NAME_LENGTH = 100
# Names produced by store(): uuid4 hex, underscore, sanitized name
_STORED_NAME = re.compile(r"^[0-9a-f]{32}_[A-Za-z0-9._-]+$")
DEFAULT_MIN_AGE_SECONDS = 24 * 60 * 60


def sanitize_filename(original_name: Optional[str]) -> str:
    """Reduce a client-supplied file name to a safe base name."""
    # Browsers on Windows may send the full client path
    base = (original_name or "").replace("\\", "/").rsplit("/", 1)[-1]
    base = _UNSAFE_CHARS.sub("_", base).lstrip(".")
    base = base[-_MAX_NAME_LENGTH:]
    return base or "upload"


def is_external_ref(ref: Optional[str]) -> bool:
    return bool(ref) and ref.lower().startswith(("http://", "https://", "//"))


class UploadManager:
    """
    Owns the flat upload directory.

    A ref is the stored file's name relative to `upload_dir`.
    """

    def __init__(self, upload_dir: Path):
        self.upload_dir = Path(upload_dir)

    def ensure_dir(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def is_local_ref(self, ref: Optional[str]) -> bool:
        return self.resolve(ref) is not None

    def resolve(self, ref: Optional[str]) -> Optional[Path]:
        """Path for a local ref, or None for external/empty/escaping refs."""
        if not ref or is_external_ref(ref):
            return None
        if "/" in ref or "\\" in ref or ref in (".", ".."):
            return None
        return self.upload_dir / ref

    def store(self, content: Union[bytes, BinaryIO], original_name: Optional[str]) -> str:
        """
        Write `content` under a new collision-free name and return its ref.

        Raises:
            UploadError: the file could not be written
        """
        ref = f"{uuid.uuid4().hex}_{sanitize_filename(original_name)}"
        target = self.upload_dir / ref

        try:
            self.ensure_dir()
            with open(target, "wb") as buffer:
                if isinstance(content, (bytes, bytearray)):
                    buffer.write(content)
                else:
                    if hasattr(content, "seek"):
                        content.seek(0)
                    shutil.copyfileobj(content, buffer)
        except OSError as e:
            logger.error(f"Save upload error {original_name}: {e}")
            try:
                target.unlink()
            except OSError:
                pass
            raise UploadError(
                "Could not save the uploaded file",
                details={"filename": original_name},
            ) from e

        logger.info(f"Stored upload {original_name!r} as {ref}")
        return ref

    def delete(self, ref: Optional[str]) -> bool:
        """
        Remove the file behind a local ref.

        External URLs, empty refs and paths outside the upload directory are
        ignored. A missing file is not an error.
        """
        path = self.resolve(ref)
        if path is None:
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error(f"Could not delete upload {ref}: {e}")
            return False
        logger.info(f"Deleted upload {ref}")
        return True

    def reclaim_orphans(
        self,
        live_refs: Iterable[str],
        min_age: float = DEFAULT_MIN_AGE_SECONDS,
        now: Optional[float] = None,
    ) -> List[str]:
        """
        Delete files no record references and that are older than `min_age`
        seconds. Only names produced by store() are considered, so anything
        else sharing the directory is left alone. Returns the deleted refs.
        """
        live = set(live_refs)
        now = time.time() if now is None else now
        deleted: List[str] = []

        try:
            entries = list(os.scandir(self.upload_dir))
        except FileNotFoundError:
            return deleted

        for entry in entries:
            if entry.name in live or not _STORED_NAME.match(entry.name):
                continue
            if not entry.is_file(follow_symlinks=False):
                continue
            try:
                age = now - entry.stat(follow_symlinks=False).st_mtime
            except OSError:
                continue
            if age > min_age and self.delete(entry.name):
                deleted.append(entry.name)

        if deleted:
            logger.info(f"Reclaimed {len(deleted)} orphaned upload(s)")
        return deleted
