import logging
from typing import Dict, List, Optional

from fastapi import HTTPException, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from bigjohn.controller.errors import server_error
from bigjohn.dto.dto import UploadResponse, VipContentResponse
from bigjohn.enums.enums import MediaFieldEnum
from bigjohn.errors.contentErrors import ContentNotFoundError
from bigjohn.service import upload_service, vip_service

logger = logging.getLogger(__name__)


async def get_vip_content(db: AsyncSession) -> List[VipContentResponse]:
    try:
        contents = await vip_service.get_all_vip_content(db)
    except Exception:
        raise server_error(logger, "fetch VIP content")
    return [VipContentResponse.model_validate(content) for content in contents]


async def create_vip_content(
    title: str,
    description: Optional[str],
    files: Dict[MediaFieldEnum, Optional[UploadFile]],
    media_store,
    db: AsyncSession,
) -> VipContentResponse:
    try:
        created = await vip_service.create_vip_content(title, description, files, media_store, db)
    except Exception:
        raise server_error(logger, "create VIP content")
    logger.info("✅ Created VIP content %s", created.id)
    return VipContentResponse.model_validate(created)


async def delete_vip_content(content_id: str, db: AsyncSession) -> VipContentResponse:
    try:
        deleted = await vip_service.delete_vip_content(content_id, db)
    except ContentNotFoundError:
        raise
    except Exception:
        raise server_error(logger, f"delete VIP content {content_id}")
    return VipContentResponse.model_validate(deleted)


async def upload_image(image: Optional[UploadFile], media_store) -> UploadResponse:
    if image is None or not image.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    try:
        url = await upload_service.upload_file(image, media_store)
    except Exception:
        raise server_error(logger, f"upload {image.filename}")
    return UploadResponse(imageUrl=url)
