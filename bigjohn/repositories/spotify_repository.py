import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bigjohn.errors.contentErrors import ContentNotFoundError
from bigjohn.modals.spotifyEmbedEntity import SpotifyEmbedEntity
from bigjohn.repositories.news_repository import parse_id
from bigjohn.util.timeUtil import utcnow


async def get_latest_embeds(limit: int, db: AsyncSession) -> List[SpotifyEmbedEntity]:
    query = select(SpotifyEmbedEntity).order_by(SpotifyEmbedEntity.uploadDate.desc()).limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def create_embed(embed_url: str, db: AsyncSession, upload_date: Optional[datetime] = None) -> SpotifyEmbedEntity:
    embed = SpotifyEmbedEntity(id=uuid.uuid4(), embedUrl=embed_url, uploadDate=upload_date or utcnow())
    db.add(embed)
    await db.commit()
    await db.refresh(embed)
    return embed


async def delete_embed(embed_id: str, db: AsyncSession) -> SpotifyEmbedEntity:
    embed = await db.get(SpotifyEmbedEntity, parse_id(embed_id, "Spotify embed"))
    if embed is None:
        raise ContentNotFoundError("Spotify embed", embed_id)
    await db.delete(embed)
    await db.commit()
    return embed
