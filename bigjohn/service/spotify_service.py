from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from bigjohn.modals.spotifyEmbedEntity import SpotifyEmbedEntity
from bigjohn.repositories import spotify_repository

LATEST_EMBEDS_LIMIT = 5


async def get_latest_embeds(db: AsyncSession) -> List[SpotifyEmbedEntity]:
    return await spotify_repository.get_latest_embeds(LATEST_EMBEDS_LIMIT, db)


async def create_embed(embed_url: str, db: AsyncSession) -> SpotifyEmbedEntity:
    return await spotify_repository.create_embed(embed_url, db)


async def delete_embed(embed_id: str, db: AsyncSession) -> SpotifyEmbedEntity:
    return await spotify_repository.delete_embed(embed_id, db)
