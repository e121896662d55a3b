"""
Blob store for postcard images.
S3 when S3_BUCKET_NAME is set, otherwise files under UPLOAD_DIR.
"""
import logging
import mimetypes
import os
from dataclasses import dataclass
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from app.aws.s3 import delete_from_s3, download_from_s3, upload_to_s3
from app.core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class BlobStoreError(Exception):
    """Raised when the underlying storage rejects a read, write or delete."""


@dataclass
class StoredBlob:
    body: bytes
    content_type: Optional[str] = None


class BlobStore:
    """Key-addressed image storage."""

    def put(self, key: str, body: bytes, content_type: str) -> None:
        raise NotImplementedError

    def get(self, key: str) -> Optional[StoredBlob]:
        """Return the blob, or None if nothing is stored under `key`."""
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class S3BlobStore(BlobStore):
    def __init__(self, bucket: Optional[str] = None):
        self.bucket = bucket or settings.S3_BUCKET_NAME

    def put(self, key: str, body: bytes, content_type: str) -> None:
        try:
            upload_to_s3(key=key, body=body, content_type=content_type, bucket=self.bucket)
        except (BotoCoreError, ClientError) as e:
            raise BlobStoreError(f"S3 upload failed for {key}: {e}") from e

    def get(self, key: str) -> Optional[StoredBlob]:
        try:
            found = download_from_s3(key, bucket=self.bucket)
        except (BotoCoreError, ClientError) as e:
            raise BlobStoreError(f"S3 download failed for {key}: {e}") from e
        if found is None:
            return None
        body, content_type = found
        return StoredBlob(body=body, content_type=content_type)

    def delete(self, key: str) -> None:
        try:
            delete_from_s3(key, bucket=self.bucket)
        except (BotoCoreError, ClientError) as e:
            raise BlobStoreError(f"S3 delete failed for {key}: {e}") from e


class LocalBlobStore(BlobStore):
    """Files on disk; content type is inferred from the key's extension."""

    def __init__(self, root: Optional[str] = None):
        self.root = root or settings.UPLOAD_DIR

    def _path(self, key: str) -> str:
        name = os.path.basename(key)
        if not name or name != key:
            raise BlobStoreError(f"Invalid blob key: {key!r}")
        return os.path.join(self.root, name)

    def put(self, key: str, body: bytes, content_type: str) -> None:
        path = self._path(key)
        try:
            os.makedirs(self.root, exist_ok=True)
            with open(path, "wb") as f:
                f.write(body)
        except OSError as e:
            raise BlobStoreError(f"Local write failed for {key}: {e}") from e
        logger.info("Stored blob %s (%d bytes) in %s", key, len(body), self.root)

    def get(self, key: str) -> Optional[StoredBlob]:
        path = self._path(key)
        if not os.path.isfile(path):
            return None
        try:
            with open(path, "rb") as f:
                body = f.read()
        except OSError as e:
            raise BlobStoreError(f"Local read failed for {key}: {e}") from e
        content_type, _ = mimetypes.guess_type(path)
        return StoredBlob(body=body, content_type=content_type)

    def delete(self, key: str) -> None:
        try:
            os.remove(self._path(key))
        except FileNotFoundError:
            return
        except OSError as e:
            raise BlobStoreError(f"Local delete failed for {key}: {e}") from e


def build_blob_store() -> BlobStore:
    if settings.use_s3:
        return S3BlobStore()
    return LocalBlobStore()
