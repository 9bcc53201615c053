from datetime import date
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bigjohn.modals.dailyUserCountEntity import DailyUserCountEntity


async def _add_user(day: date, user_id: str, db: AsyncSession) -> DailyUserCountEntity:
    result = await db.execute(select(DailyUserCountEntity).where(DailyUserCountEntity.date == day))
    bucket = result.scalars().first()
    if bucket is None:
        bucket = DailyUserCountEntity(date=day, users=[user_id], userCount=1)
        db.add(bucket)
    elif user_id not in (bucket.users or []):
        # reassign so the JSON column is flagged dirty
        users = sorted(set(bucket.users or []) | {user_id})
        bucket.users = users
        bucket.userCount = len(users)
    await db.commit()
    return bucket


async def add_user_to_day(day: date, user_id: str, db: AsyncSession) -> DailyUserCountEntity:
    """
    Set-union `user_id` into the bucket for `day`. Repeat calls for the same user
    and day change nothing. Two first-of-the-day inserts can race on the unique
    date, so the loser rolls back and retries against the winner's row once.
    """
    try:
        return await _add_user(day, user_id, db)
    except IntegrityError:
        await db.rollback()
        return await _add_user(day, user_id, db)


async def get_buckets_between(start: date, end: date, db: AsyncSession) -> List[DailyUserCountEntity]:
    query = (
        select(DailyUserCountEntity)
        .where(DailyUserCountEntity.date >= start, DailyUserCountEntity.date <= end)
        .order_by(DailyUserCountEntity.date.asc())
    )
    result = await db.execute(query)
    return list(result.scalars().all())
