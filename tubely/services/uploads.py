"""
Thumbnail and video upload steps shared by the upload routes.
Ownership is checked before the multipart body is read; everything after that runs in the threadpool.
"""
import logging
import secrets
import shutil
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from tubely.auth import get_bearer_token, validate_jwt
from tubely.config import Settings
from tubely.errors import APIError, ErrorKind
from tubely.models.video import Video
from tubely.services.assets import get_asset_disk_path, get_asset_url, media_type_to_extension
from tubely.services.ffmpeg import PROCESSED_SUFFIX, get_video_aspect_ratio, process_video_for_fast_start
from tubely.services.storage import ObjectStorage, public_video_url

logger = logging.getLogger(__name__)

MAX_THUMBNAIL_SIZE = 10 << 20  # 10 MiB
MAX_VIDEO_SIZE = 1 << 30  # 1 GiB

THUMBNAIL_MEDIA_TYPES = {"image/png", "image/jpeg"}
VIDEO_MEDIA_TYPE = "video/mp4"

CHUNK_SIZE = 1024 * 1024  # 1 MB


def authorize_video_owner(video_id: str, headers: Mapping[str, str], db: Session, settings: Settings) -> Video:
    """Check id, token and ownership, in that order. Returns the caller's video."""
    if not video_id or not video_id.strip():
        raise APIError(ErrorKind.BAD_REQUEST, "Invalid video ID")

    token = get_bearer_token(headers)
    user_id = validate_jwt(token, settings.secret_key, settings.algorithm)

    video = db.query(Video).filter(Video.id == video_id).first()
    if not video:
        raise APIError(ErrorKind.NOT_FOUND, "Couldn't find video")
    if video.user_id != user_id:
        raise APIError(ErrorKind.FORBIDDEN, "You do not own this video")
    return video


def get_upload_field(form: Mapping[str, Any], field: str, label: str, max_size: int, media_types: set[str]) -> UploadFile:
    """Pick the named file out of a parsed form and check its size and media type."""
    upload = form.get(field)
    if not isinstance(upload, UploadFile):
        raise APIError(ErrorKind.BAD_REQUEST, f"{label} file missing")
    if upload.size is not None and upload.size > max_size:
        raise APIError(ErrorKind.BAD_REQUEST, f"{label} file too large")
    if upload.content_type not in media_types:
        raise APIError(ErrorKind.BAD_REQUEST, f"Unsupported {label.lower()} media type")
    return upload


def _write_upload(upload: UploadFile, path: Path) -> None:
    upload.file.seek(0)
    with path.open("wb") as f:
        shutil.copyfileobj(upload.file, f, CHUNK_SIZE)


@contextmanager
def staged_files(*paths: Path) -> Iterator[list[Path]]:
    """Remove every registered path on exit, success or failure. Delete errors are logged, not raised."""
    registered = list(paths)
    try:
        yield registered
    finally:
        for path in registered:
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning("Could not remove temp file %s: %s", path, e)


def save_thumbnail(video: Video, upload: UploadFile, db: Session, settings: Settings) -> Video:
    """Write the thumbnail under a random name in the assets dir and point the record at it."""
    file_name = secrets.token_urlsafe(32) + media_type_to_extension(upload.content_type or "")
    _write_upload(upload, get_asset_disk_path(settings, file_name))

    # Any previous thumbnail file is left in place
    video.thumbnail_url = get_asset_url(settings, file_name)
    db.commit()
    db.refresh(video)
    return video


def process_video_upload(
    video: Video,
    upload: UploadFile,
    db: Session,
    settings: Settings,
    storage: ObjectStorage,
) -> Video:
    """Stage, probe, fast-start, store in the bucket, then record the CDN URL."""
    file_name = f"{video.id}.mp4"
    # Shared by concurrent uploads of the same video; they are not serialized
    temp_path = Path(settings.tmp_dir) / file_name
    processed_path = Path(f"{temp_path}{PROCESSED_SUFFIX}")

    with staged_files(temp_path, processed_path):
        _write_upload(upload, temp_path)

        orientation = get_video_aspect_ratio(temp_path, settings)
        processed = process_video_for_fast_start(temp_path, settings)

        key = f"{orientation}/{file_name}"
        storage.upload_file(key, processed, VIDEO_MEDIA_TYPE)

        video.video_url = public_video_url(settings, key)
        db.commit()
        db.refresh(video)
    return video
