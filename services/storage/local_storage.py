"""
Local filesystem storage for uploaded timeline images.

- Stored names are generated (UUID4 + original extension); client file
  names never reach the filesystem beyond their extension
- Path traversal protection (resolve + prefix validation)
- Atomic writes (temp file + atomic rename)
"""

import os
import tempfile
from pathlib import Path
from typing import Any, BinaryIO

import aiofiles
import aiofiles.os

from core.exceptions import StoragePermissionError, StorageUploadError
from core.logging import get_logger
from utils.filesystem import ensure_dir
from utils.generators import generate_image_name

logger = get_logger(__name__)


class LocalImageStorage:
    """
    Stores uploaded images in one flat directory served under a public prefix.

    Directory Structure:
    {images_dir}/{uuid}{ext}

    Each stored file is published to clients as "{public_prefix}/{uuid}{ext}".
    """

    CHUNK_SIZE = 64 * 1024  # 64KB chunks for streaming
    FILE_MODE = 0o644  # readable by a static server running as another user

    def __init__(self, images_dir: Path | str, public_prefix: str = "assets/imgs") -> None:
        """
        Initialize image storage.

        Args:
            images_dir: Directory the image files are written to
            public_prefix: Path under which the static server publishes images_dir
        """
        self.images_dir = Path(images_dir).resolve()
        self.public_prefix = public_prefix.strip("/")

    def _get_full_path(self, filename: str) -> Path:
        """
        Get full filesystem path with security validation.

        Raises:
            StoragePermissionError: If the name resolves outside images_dir
        """
        full_path = (self.images_dir / filename).resolve()

        try:
            full_path.relative_to(self.images_dir)
        except ValueError as e:
            raise StoragePermissionError(filename, "path_validation") from e

        return full_path

    def public_path(self, filename: str) -> str:
        """Path of a stored file relative to the public asset root"""
        return f"{self.public_prefix}/{filename}"

    async def save(self, file_data: BinaryIO, original_filename: str) -> dict[str, Any]:
        """
        Store an uploaded file under a freshly generated name.

        Implementation:
        1. Generate name from a random identifier + original extension
        2. Stream content to a temp file in images_dir
        3. Atomic rename to the final name

        Args:
            file_data: File content (binary mode)
            original_filename: Client-supplied name; only its extension is used

        Returns:
            dict: filename, public_path and size of the stored file

        Raises:
            StorageUploadError: If writing fails
        """
        filename = generate_image_name(original_filename)
        target_path = self._get_full_path(filename)

        try:
            ensure_dir(self.images_dir)

            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.images_dir, prefix=".tmp_", suffix=target_path.suffix
            )
            os.close(temp_fd)

            try:
                size = 0
                async with aiofiles.open(temp_path, "wb") as f:
                    while True:
                        chunk = file_data.read(self.CHUNK_SIZE)
                        if not chunk:
                            break
                        size += len(chunk)
                        await f.write(chunk)

                # mkstemp creates 0o600 files
                os.chmod(temp_path, self.FILE_MODE)
                os.replace(temp_path, target_path)
            finally:
                # Clean up temp file if the rename never happened
                if Path(temp_path).exists():
                    await aiofiles.os.remove(temp_path)

        except OSError as e:
            raise StorageUploadError(str(target_path), f"Upload failed: {e!s}") from e

        logger.debug(f"Stored {original_filename!r} as {filename} ({size} bytes)")

        return {
            "filename": filename,
            "public_path": self.public_path(filename),
            "size": size,
        }
