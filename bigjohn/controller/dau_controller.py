import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from bigjohn.controller.errors import server_error
from bigjohn.dto.dto import DauPoint, TrackRequest, TrackResponse
from bigjohn.service import dau_service

logger = logging.getLogger(__name__)


async def get_daily_active_users(db: AsyncSession) -> List[DauPoint]:
    try:
        return await dau_service.get_daily_active_users(db)
    except Exception:
        raise server_error(logger, "fetch daily active users")


async def track_user(track: TrackRequest, db: AsyncSession) -> TrackResponse:
    try:
        await dau_service.track_user(track.userId, db)
    except Exception:
        raise server_error(logger, f"track user {track.userId}")
    return TrackResponse(success=True)
