import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from bigjohn.controller.errors import server_error
from bigjohn.dto.dto import SpotifyEmbedRequest, SpotifyEmbedResponse
from bigjohn.errors.contentErrors import ContentNotFoundError
from bigjohn.service import spotify_service

logger = logging.getLogger(__name__)


async def get_latest_embeds(db: AsyncSession) -> List[SpotifyEmbedResponse]:
    try:
        embeds = await spotify_service.get_latest_embeds(db)
    except Exception:
        raise server_error(logger, "fetch Spotify embeds")
    return [SpotifyEmbedResponse.model_validate(embed) for embed in embeds]


async def create_embed(embed: SpotifyEmbedRequest, db: AsyncSession) -> SpotifyEmbedResponse:
    try:
        created = await spotify_service.create_embed(embed.embedUrl, db)
    except Exception:
        raise server_error(logger, "save Spotify embed")
    return SpotifyEmbedResponse.model_validate(created)


async def delete_embed(embed_id: str, db: AsyncSession) -> SpotifyEmbedResponse:
    try:
        deleted = await spotify_service.delete_embed(embed_id, db)
    except ContentNotFoundError:
        raise
    except Exception:
        raise server_error(logger, f"delete Spotify embed {embed_id}")
    return SpotifyEmbedResponse.model_validate(deleted)
