import uuid
from sqlalchemy import JSON, UUID, Column, DateTime, String, Text, Enum as SAEnum
from bigjohn.db.database import Base
from bigjohn.enums.enums import MediaTypeEnum
from bigjohn.util.timeUtil import utcnow


def empty_media_url():
    return {"imageUrl": None, "videoUrl": None, "audioUrl": None}


class VipContentEntity(Base):
    __tablename__ = "vip_contents"

    id = Column(UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)

    title = Column(String, nullable=False, default="")
    description = Column(Text, nullable=True)

    # {"imageUrl": str | None, "videoUrl": str | None, "audioUrl": str | None}
    mediaUrl = Column(JSON, nullable=False, default=empty_media_url)

    # advisory only, nothing checks it against mediaUrl
    mediaType = Column(
        SAEnum(
            MediaTypeEnum,
            name="MediaTypeEnum",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=MediaTypeEnum.MIXED,
    )

    uploadDate = Column(DateTime(timezone=True), nullable=False, index=True, default=utcnow)
