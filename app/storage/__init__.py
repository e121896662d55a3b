from app.storage.blob_store import (
    DEFAULT_CONTENT_TYPE,
    BlobStore,
    BlobStoreError,
    LocalBlobStore,
    S3BlobStore,
    StoredBlob,
    build_blob_store,
)

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "BlobStore",
    "BlobStoreError",
    "LocalBlobStore",
    "S3BlobStore",
    "StoredBlob",
    "build_blob_store",
]
