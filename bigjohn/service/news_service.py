from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from bigjohn.dto.dto import NewsPostRequest
from bigjohn.modals.newsPostEntity import NewsPostEntity
from bigjohn.repositories import news_repository


async def get_all_news(db: AsyncSession) -> List[NewsPostEntity]:
    return await news_repository.get_all_posts(db)


async def create_news(post: NewsPostRequest, db: AsyncSession) -> NewsPostEntity:
    # id and uploadDate are always assigned here, whatever the client sent
    return await news_repository.create_post(post.title, post.content, post.link, post.imageUrl, db)


async def replace_news(post_id: str, post: NewsPostRequest, db: AsyncSession) -> NewsPostEntity:
    return await news_repository.replace_post(post_id, post.title, post.content, post.link, post.imageUrl, db)


async def delete_news(post_id: str, db: AsyncSession) -> NewsPostEntity:
    return await news_repository.delete_post(post_id, db)
