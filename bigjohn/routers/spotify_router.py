from typing import Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bigjohn.auth.dependencies import require_token
from bigjohn.controller import spotify_controller
from bigjohn.db.database import get_db
from bigjohn.dto.dto import SpotifyEmbedRequest, SpotifyEmbedResponse

router = APIRouter()


@router.get("/spotify", response_model=List[SpotifyEmbedResponse])
async def get_spotify_embeds(db: AsyncSession = Depends(get_db)):
    return await spotify_controller.get_latest_embeds(db)


@router.post("/spotify", response_model=SpotifyEmbedResponse, status_code=201)
async def create_spotify_embed(embed: SpotifyEmbedRequest, db: AsyncSession = Depends(get_db), claims: Dict = Depends(require_token)):
    return await spotify_controller.create_embed(embed, db)


@router.delete("/spotify/{embed_id}", response_model=SpotifyEmbedResponse)
async def delete_spotify_embed(embed_id: str, db: AsyncSession = Depends(get_db), claims: Dict = Depends(require_token)):
    return await spotify_controller.delete_embed(embed_id, db)
