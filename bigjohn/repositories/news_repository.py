import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bigjohn.errors.contentErrors import ContentNotFoundError
from bigjohn.modals.newsPostEntity import NewsPostEntity
from bigjohn.util.timeUtil import utcnow


def parse_id(raw_id: str, label: str) -> uuid.UUID:
    # a malformed id can never match a stored document, so it is reported as not found
    try:
        return uuid.UUID(str(raw_id))
    except ValueError:
        raise ContentNotFoundError(label, raw_id) from None


async def get_all_posts(db: AsyncSession) -> List[NewsPostEntity]:
    result = await db.execute(select(NewsPostEntity).order_by(NewsPostEntity.uploadDate.desc()))
    return list(result.scalars().all())


async def get_post(post_id: str, db: AsyncSession) -> NewsPostEntity:
    post = await db.get(NewsPostEntity, parse_id(post_id, "Post"))
    if post is None:
        raise ContentNotFoundError("Post", post_id)
    return post


async def create_post(
    title: str,
    content: Optional[str],
    link: Optional[str],
    image_url: Optional[str],
    db: AsyncSession,
    upload_date: Optional[datetime] = None,
) -> NewsPostEntity:
    post = NewsPostEntity(
        id=uuid.uuid4(),
        title=title,
        content=content,
        link=link,
        imageUrl=image_url,
        uploadDate=upload_date or utcnow(),
    )
    db.add(post)
    await db.commit()
    await db.refresh(post)
    return post


async def replace_post(
    post_id: str,
    title: str,
    content: Optional[str],
    link: Optional[str],
    image_url: Optional[str],
    db: AsyncSession,
) -> NewsPostEntity:
    post = await get_post(post_id, db)
    post.title = title
    post.content = content
    post.link = link
    post.imageUrl = image_url
    post.uploadDate = utcnow()
    await db.commit()
    await db.refresh(post)
    return post


async def delete_post(post_id: str, db: AsyncSession) -> NewsPostEntity:
    post = await get_post(post_id, db)
    await db.delete(post)
    await db.commit()
    return post
