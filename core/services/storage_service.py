# =============================================================================
# core/services/storage_service.py - Local Video Storage
# =============================================================================
# Streams uploaded videos into the upload directory, which is served
# read-only under /uploads/reels.
# =============================================================================

import logging
import os
from pathlib import Path

from starlette.datastructures import UploadFile
from starlette.concurrency import run_in_threadpool

from app.exceptions import FileTooLargeError, StorageWriteError
from lib.utils import TEMP_PREFIX, TEMP_SUFFIX, build_stored_filename

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1 MB


class StorageService:
    """
    Service for writing uploads to disk.

    Files are written under a temporary name and renamed once complete,
    so a failed or oversized upload never leaves a partial file behind.
    """

    def __init__(self, upload_dir: Path | str, max_size_bytes: int):
        self.upload_dir = Path(upload_dir)
        self.max_size_bytes = max_size_bytes

    def ensure_directory(self) -> None:
        """Create the upload directory if it doesn't exist."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> Path:
        return self.upload_dir / filename

    async def save_upload(self, upload: UploadFile) -> tuple[str, int]:
        """
        Stream an uploaded file to disk.

        Args:
            upload: The multipart file

        Returns:
            Tuple of (stored filename, size in bytes)

        Raises:
            FileTooLargeError: If the file exceeds the size limit
            StorageWriteError: If the file can't be written
        """
        filename = build_stored_filename(upload.filename)
        final_path = self.path_for(filename)
        temp_path = self.path_for(f"{TEMP_PREFIX}{filename}{TEMP_SUFFIX}")

        size = 0
        try:
            handle = await run_in_threadpool(open, temp_path, "wb")
            try:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self.max_size_bytes:
                        raise FileTooLargeError(self.max_size_bytes // (1024 * 1024))
                    await run_in_threadpool(handle.write, chunk)
            finally:
                await run_in_threadpool(handle.close)

            await run_in_threadpool(os.replace, temp_path, final_path)

        except FileTooLargeError:
            logger.warning(f"Upload exceeded {self.max_size_bytes} bytes: {upload.filename}")
            self._discard(temp_path)
            raise
        except OSError as e:
            logger.error(f"Failed to write upload {filename}: {e}")
            self._discard(temp_path)
            raise StorageWriteError(filename)
        except BaseException:
            # Client disconnects and cancellation
            self._discard(temp_path)
            raise

        logger.info(f"Stored upload: {filename} ({size / (1024 * 1024):.2f}MB)")
        return filename, size

    def delete(self, filename: str) -> bool:
        """
        Delete a stored file.

        Returns:
            True if the file existed and was removed
        """
        return self._discard(self.path_for(filename))

    @staticmethod
    def _discard(path: Path) -> bool:
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error(f"Failed to delete {path}: {e}")
            return False
