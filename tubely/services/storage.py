"""
S3-compatible object storage for processed videos.
One put_object per upload: no retry, no multipart, no checksum. Client errors propagate.
"""
import logging
from pathlib import Path
from typing import Any

import boto3
from fastapi import Depends

from tubely.config import Settings, get_settings

logger = logging.getLogger(__name__)

_storages: dict[tuple, "ObjectStorage"] = {}


class ObjectStorage:
    def __init__(self, client: Any, bucket: str):
        self.client = client
        self.bucket = bucket

    def upload_file(self, key: str, file_path: Path, content_type: str) -> None:
        """Stream file_path into the bucket under key."""
        with open(file_path, "rb") as f:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=f,
                ContentType=content_type,
            )
        logger.info("Uploaded %s to s3://%s/%s", file_path, self.bucket, key)


def build_s3_client(settings: Settings) -> Any:
    # Empty values fall back to boto3's own credential/endpoint resolution
    return boto3.client(
        "s3",
        region_name=settings.s3_region or None,
        endpoint_url=settings.s3_endpoint_url or None,
        aws_access_key_id=settings.s3_access_key_id or None,
        aws_secret_access_key=settings.s3_secret_access_key or None,
    )


def _storage_key(settings: Settings) -> tuple:
    return (
        settings.s3_bucket,
        settings.s3_region,
        settings.s3_endpoint_url,
        settings.s3_access_key_id,
        settings.s3_secret_access_key,
    )


def get_storage(settings: Settings = Depends(get_settings)) -> ObjectStorage:
    """One S3 client per distinct storage configuration, built on first use."""
    key = _storage_key(settings)
    storage = _storages.get(key)
    if storage is None:
        storage = ObjectStorage(build_s3_client(settings), settings.s3_bucket)
        _storages[key] = storage
    return storage


def public_video_url(settings: Settings, key: str) -> str:
    return f"https://{settings.s3_cf_distribution}/{key}"
