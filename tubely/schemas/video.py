from datetime import datetime
from pydantic import BaseModel, Field


class VideoCreate(BaseModel):
    title: str
    description: str | None = None


class VideoResponse(BaseModel):
    """Video record as returned to clients (camelCase keys)."""
    id: str
    user_id: str = Field(serialization_alias="userID")
    title: str
    description: str | None
    thumbnail_url: str | None = Field(default=None, serialization_alias="thumbnailURL")
    video_url: str | None = Field(default=None, serialization_alias="videoURL")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    class Config:
        from_attributes = True
