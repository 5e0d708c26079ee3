"""
Video records. Uploads attach a thumbnail or the processed video to a record created here.
Records are never deleted by this service.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from tubely.auth import get_current_user_id
from tubely.database import get_db
from tubely.errors import APIError, ErrorKind
from tubely.models.video import Video
from tubely.schemas.video import VideoCreate, VideoResponse

router = APIRouter(prefix="/api/videos", tags=["videos"])


@router.post("", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
def create_video(
    body: VideoCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    if not body.title.strip():
        raise APIError(ErrorKind.BAD_REQUEST, "Title is required")
    video = Video(user_id=user_id, title=body.title.strip(), description=body.description)
    db.add(video)
    db.commit()
    db.refresh(video)
    return video


@router.get("", response_model=list[VideoResponse])
def list_videos(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Caller's videos, newest first."""
    return db.query(Video).filter(Video.user_id == user_id).order_by(Video.created_at.desc()).all()


@router.get("/{video_id}", response_model=VideoResponse)
def get_video(
    video_id: str,
    _user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    video = db.query(Video).filter(Video.id == video_id).first()
    if not video:
        raise APIError(ErrorKind.NOT_FOUND, "Couldn't find video")
    return video
