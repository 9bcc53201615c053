import uuid
from sqlalchemy import UUID, Column, DateTime, String, Text
from bigjohn.db.database import Base
from bigjohn.util.timeUtil import utcnow


class NewsPostEntity(Base):
    __tablename__ = "news_posts"

    id = Column(UUID(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)

    title = Column(String, nullable=False, default="")

    # serialized rich-text document, never parsed server side
    content = Column(Text, nullable=True)

    uploadDate = Column(DateTime(timezone=True), nullable=False, index=True, default=utcnow)

    link = Column(String, nullable=True)
    imageUrl = Column(String, nullable=True)
