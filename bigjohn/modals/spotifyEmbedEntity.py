import uuid
from sqlalchemy import UUID, Column, DateTime, Text
from bigjohn.db.database import Base
from bigjohn.util.timeUtil import utcnow


class SpotifyEmbedEntity(Base):
    __tablename__ = "spotify_embeds"

    id = Column(UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)

    # raw iframe markup or a plain url, stored as given
    embedUrl = Column(Text, nullable=False)

    uploadDate = Column(DateTime(timezone=True), nullable=False, index=True, default=utcnow)
