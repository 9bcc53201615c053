from typing import Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bigjohn.auth.dependencies import require_token
from bigjohn.controller import news_controller
from bigjohn.db.database import get_db
from bigjohn.dto.dto import NewsPostRequest, NewsPostResponse

router = APIRouter()


# public, anonymous readers and logged in members alike
@router.get("/news", response_model=List[NewsPostResponse])
async def get_news(db: AsyncSession = Depends(get_db)):
    return await news_controller.get_news(db)


@router.post("/news", response_model=NewsPostResponse, status_code=201)
async def create_news(post: NewsPostRequest, db: AsyncSession = Depends(get_db), claims: Dict = Depends(require_token)):
    return await news_controller.create_news(post, db)


@router.put("/news/{post_id}", response_model=NewsPostResponse)
async def replace_news(post_id: str, post: NewsPostRequest, db: AsyncSession = Depends(get_db), claims: Dict = Depends(require_token)):
    return await news_controller.replace_news(post_id, post, db)


@router.delete("/news/{post_id}", response_model=NewsPostResponse)
async def delete_news(post_id: str, db: AsyncSession = Depends(get_db), claims: Dict = Depends(require_token)):
    return await news_controller.delete_news(post_id, db)
