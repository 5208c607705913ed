"""
Upload storage

Files are written to the upload directory under a generated name
(``<uuid4 hex><extension>``) so that two uploads with the same original name
never overwrite each other. The original name lives on the Submission record.
"""

import logging
import os
import uuid
from pathlib import Path
from typing import BinaryIO, Optional

from . import config
from .exceptions import InternalError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


class FileStore:
    """
    Local directory of uploaded assignment files.

    Args:
        upload_dir: Directory path where uploaded files will be stored.
        max_file_size: Maximum allowed file size in bytes (default: 50MB).
    """

    def __init__(self, upload_dir: str = "uploads", max_file_size: int = 50 * 1024 * 1024):
        self.upload_dir = Path(upload_dir).resolve()
        self.max_file_size = max_file_size
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"FileStore initialized with upload directory: {self.upload_dir}")

    @staticmethod
    def generate_name(filename: str) -> str:
        """Return a unique stored name keeping the original extension."""
        _, ext = os.path.splitext(filename or "")
        # Only keep well-formed extensions
        if not ext[1:].isalnum() or len(ext) > 16:
            ext = ""
        return f"{uuid.uuid4().hex}{ext.lower()}"

    def save(self, file: BinaryIO, filename: str) -> str:
        """
        Save an uploaded file under a generated name.

        Args:
            file: File-like object containing the file data.
            filename: Original filename.

        Returns:
            str: The generated stored name.

        Raises:
            ValidationError: If the file exceeds the size limit.
            InternalError: If the file cannot be written.
        """
        stored_name = self.generate_name(filename)
        file_path = self.upload_dir / stored_name
        written = 0
        try:
            with open(file_path, 'wb') as f:
                while chunk := file.read(CHUNK_SIZE):
                    written += len(chunk)
                    if written > self.max_file_size:
                        raise ValidationError(
                            f"File size exceeds maximum allowed size of {self.max_file_size} bytes"
                        )
                    f.write(chunk)
        except ValidationError:
            file_path.unlink(missing_ok=True)
            raise
        except OSError as e:
            file_path.unlink(missing_ok=True)
            logger.error(f"Failed to save file {filename}: {e}")
            raise InternalError(f"Failed to save file {filename}") from e

        logger.info(f"Saved {filename} as {stored_name} ({written} bytes)")
        return stored_name

    def resolve(self, stored_name: str) -> Path:
        """Return the on-disk path of a stored file.

        Raises:
            NotFoundError: If the name escapes the upload directory or the
                file does not exist.
        """
        file_path = (self.upload_dir / stored_name).resolve()
        if file_path.parent != self.upload_dir or not file_path.is_file():
            raise NotFoundError("File not found")
        return file_path

    def delete(self, stored_name: Optional[str]) -> None:
        """Remove a stored file if it is still there."""
        if not stored_name:
            return
        file_path = (self.upload_dir / stored_name).resolve()
        if file_path.parent != self.upload_dir:
            return
        try:
            file_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove stored file {stored_name}: {e}")


_file_store: Optional[FileStore] = None


def get_file_store() -> FileStore:
    """Dependency returning the process-wide file store."""
    global _file_store
    if _file_store is None:
        _file_store = FileStore(upload_dir=config.UPLOAD_DIR, max_file_size=config.MAX_UPLOAD_BYTES)
    return _file_store
