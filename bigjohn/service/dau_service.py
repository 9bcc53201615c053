from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from bigjohn.dto.dto import DauPoint
from bigjohn.repositories import dau_repository
from bigjohn.util.timeUtil import last_n_days, utc_today

DAU_WINDOW_DAYS = 30


async def track_user(user_id: str, db: AsyncSession) -> None:
    await dau_repository.add_user_to_day(utc_today(), user_id, db)


async def get_daily_active_users(db: AsyncSession, days: int = DAU_WINDOW_DAYS) -> List[DauPoint]:
    window = last_n_days(days)
    buckets = await dau_repository.get_buckets_between(window[0], window[-1], db)
    counts = {bucket.date: bucket.userCount for bucket in buckets}
    # one point per day, days nobody visited count as zero
    return [DauPoint(date=day, users=counts.get(day, 0)) for day in window]
