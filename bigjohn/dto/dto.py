from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, computed_field, field_validator

from bigjohn.enums.enums import MediaTypeEnum
from bigjohn.util.timeUtil import ensure_utc


class DocumentResponse(BaseModel):
    # correctly convert a SQLAlchemy ORM object into a JSON response.
    model_config = ConfigDict(from_attributes=True)

    id: str
    uploadDate: datetime

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        return str(value)

    @field_validator("uploadDate", mode="after")
    @classmethod
    def _tag_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    # older clients key their lists on `_id`
    @computed_field(alias="_id")
    @property
    def document_id(self) -> str:
        return self.id


class NewsPostRequest(BaseModel):
    title: str = ""
    content: Optional[str] = None
    link: Optional[str] = None
    imageUrl: Optional[str] = None


class NewsPostResponse(DocumentResponse):
    title: str
    content: Optional[str] = None
    link: Optional[str] = None
    imageUrl: Optional[str] = None


class SpotifyEmbedRequest(BaseModel):
    embedUrl: str


class SpotifyEmbedResponse(DocumentResponse):
    embedUrl: str


class MediaUrl(BaseModel):
    imageUrl: Optional[str] = None
    videoUrl: Optional[str] = None
    audioUrl: Optional[str] = None


class VipContentResponse(DocumentResponse):
    title: str
    description: Optional[str] = None
    mediaUrl: MediaUrl
    mediaType: MediaTypeEnum


class UploadResponse(BaseModel):
    imageUrl: str


class TrackRequest(BaseModel):
    userId: str


class TrackResponse(BaseModel):
    success: bool = True


class DauPoint(BaseModel):
    date: date
    users: int

