import uuid
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bigjohn.enums.enums import MediaTypeEnum
from bigjohn.errors.contentErrors import ContentNotFoundError
from bigjohn.modals.vipContentEntity import VipContentEntity, empty_media_url
from bigjohn.repositories.news_repository import parse_id
from bigjohn.util.timeUtil import utcnow


async def get_all_contents(db: AsyncSession) -> List[VipContentEntity]:
    result = await db.execute(select(VipContentEntity).order_by(VipContentEntity.uploadDate.desc()))
    return list(result.scalars().all())


async def create_content(
    title: str,
    description: Optional[str],
    media_url: Dict[str, Optional[str]],
    media_type: MediaTypeEnum,
    db: AsyncSession,
    upload_date: Optional[datetime] = None,
) -> VipContentEntity:
    content = VipContentEntity(
        id=uuid.uuid4(),
        title=title,
        description=description,
        mediaUrl={**empty_media_url(), **media_url},
        mediaType=media_type,
        uploadDate=upload_date or utcnow(),
    )
    db.add(content)
    await db.commit()
    await db.refresh(content)
    return content


async def delete_content(content_id: str, db: AsyncSession) -> VipContentEntity:
    content = await db.get(VipContentEntity, parse_id(content_id, "VIP content"))
    if content is None:
        raise ContentNotFoundError("VIP content", content_id)
    await db.delete(content)
    await db.commit()
    return content
