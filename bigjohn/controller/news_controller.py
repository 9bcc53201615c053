# bigjohn/controller/news_controller.py

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from bigjohn.controller.errors import server_error
from bigjohn.dto.dto import NewsPostRequest, NewsPostResponse
from bigjohn.errors.contentErrors import ContentNotFoundError
from bigjohn.service import news_service

logger = logging.getLogger(__name__)


async def get_news(db: AsyncSession) -> List[NewsPostResponse]:
    try:
        posts = await news_service.get_all_news(db)
    except Exception:
        raise server_error(logger, "fetch news posts")
    return [NewsPostResponse.model_validate(post) for post in posts]


async def create_news(post: NewsPostRequest, db: AsyncSession) -> NewsPostResponse:
    try:
        created = await news_service.create_news(post, db)
    except Exception:
        raise server_error(logger, "create news post")
    logger.info("✅ Created news post %s", created.id)
    return NewsPostResponse.model_validate(created)


async def replace_news(post_id: str, post: NewsPostRequest, db: AsyncSession) -> NewsPostResponse:
    try:
        updated = await news_service.replace_news(post_id, post, db)
    except ContentNotFoundError:
        raise
    except Exception:
        raise server_error(logger, f"update news post {post_id}")
    return NewsPostResponse.model_validate(updated)


async def delete_news(post_id: str, db: AsyncSession) -> NewsPostResponse:
    try:
        deleted = await news_service.delete_news(post_id, db)
    except ContentNotFoundError:
        raise
    except Exception:
        raise server_error(logger, f"delete news post {post_id}")
    logger.info("✅ Deleted news post %s", post_id)
    return NewsPostResponse.model_validate(deleted)
