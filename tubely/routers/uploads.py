"""
Thumbnail and video uploads for an existing video record.
Order of checks: video id, bearer token, record exists, caller owns it, then the multipart field.
The body is only read once the caller is known to own the record.
"""
import logging
from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from tubely.config import Settings, get_settings
from tubely.database import get_db
from tubely.schemas.video import VideoResponse
from tubely.services.storage import ObjectStorage, get_storage
from tubely.services.uploads import (
    MAX_THUMBNAIL_SIZE,
    MAX_VIDEO_SIZE,
    THUMBNAIL_MEDIA_TYPES,
    VIDEO_MEDIA_TYPE,
    authorize_video_owner,
    get_upload_field,
    process_video_upload,
    save_thumbnail,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["uploads"])


@router.post("/thumbnail_upload/{video_id}", response_model=VideoResponse)
async def upload_thumbnail(
    video_id: str,
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Multipart field 'thumbnail': PNG or JPEG, up to 10 MiB."""
    video = await run_in_threadpool(authorize_video_owner, video_id, request.headers, db, settings)
    logger.info("Uploading thumbnail for video %s by user %s", video.id, video.user_id)

    form = await request.form()
    try:
        upload = get_upload_field(form, "thumbnail", "Thumbnail", MAX_THUMBNAIL_SIZE, THUMBNAIL_MEDIA_TYPES)
        return await run_in_threadpool(save_thumbnail, video, upload, db, settings)
    finally:
        await form.close()


@router.post("/video_upload/{video_id}", response_model=VideoResponse)
async def upload_video(
    video_id: str,
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    storage: ObjectStorage = Depends(get_storage),
):
    """Multipart field 'video': MP4 up to 1 GiB. Probed, remuxed for fast start, stored under <orientation>/<id>.mp4."""
    video = await run_in_threadpool(authorize_video_owner, video_id, request.headers, db, settings)
    logger.info("Uploading video %s by user %s", video.id, video.user_id)

    form = await request.form()
    try:
        upload = get_upload_field(form, "video", "Video", MAX_VIDEO_SIZE, {VIDEO_MEDIA_TYPE})
        return await run_in_threadpool(process_video_upload, video, upload, db, settings, storage)
    finally:
        await form.close()
