from typing import Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bigjohn.auth.dependencies import require_token
from bigjohn.controller import dau_controller
from bigjohn.db.database import get_db
from bigjohn.dto.dto import DauPoint, TrackRequest, TrackResponse

router = APIRouter()


@router.get("/dau", response_model=List[DauPoint])
async def get_daily_active_users(db: AsyncSession = Depends(get_db), claims: Dict = Depends(require_token)):
    return await dau_controller.get_daily_active_users(db)


@router.post("/dau/track", response_model=TrackResponse)
async def track_user(track: TrackRequest, db: AsyncSession = Depends(get_db), claims: Dict = Depends(require_token)):
    return await dau_controller.track_user(track, db)
