"""
S3 object helpers - put, get and delete postcard images by key.
"""
import logging
from typing import Optional, Tuple

from botocore.exceptions import ClientError

from app.aws.client import get_aws_client
from app.core.config import settings

logger = logging.getLogger(__name__)

_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


def get_s3_client():
    """S3 client for the configured region."""
    return get_aws_client("s3", region_name=settings.s3_region)


def _bucket(bucket: Optional[str]) -> str:
    b = bucket or settings.S3_BUCKET_NAME
    if not b:
        raise ValueError("S3_BUCKET_NAME not configured")
    return b


def upload_to_s3(
    key: str,
    body: bytes,
    content_type: str,
    bucket: Optional[str] = None,
) -> str:
    """
    Upload bytes to S3 under `key`.

    Args:
        key: S3 object key (e.g. Paris-1760000000000.png)
        body: File bytes
        content_type: MIME type (e.g. image/png)
        bucket: Override bucket; defaults to settings.S3_BUCKET_NAME

    Returns:
        The key that was written.
    """
    b = _bucket(bucket)
    get_s3_client().put_object(
        Bucket=b,
        Key=key,
        Body=body,
        ContentType=content_type,
    )
    logger.info("Uploaded S3 key=%s to bucket=%s", key, b)
    return key


def download_from_s3(key: str, bucket: Optional[str] = None) -> Optional[Tuple[bytes, Optional[str]]]:
    """Return (body, content_type) for `key`, or None when the object does not exist."""
    try:
        obj = get_s3_client().get_object(Bucket=_bucket(bucket), Key=key)
    except ClientError as e:
        if e.response.get("Error", {}).get("Code") in _MISSING_KEY_CODES:
            return None
        raise
    return obj["Body"].read(), obj.get("ContentType")


def delete_from_s3(key: str, bucket: Optional[str] = None) -> None:
    b = _bucket(bucket)
    get_s3_client().delete_object(Bucket=b, Key=key)
    logger.info("Deleted S3 key=%s from bucket=%s", key, b)
