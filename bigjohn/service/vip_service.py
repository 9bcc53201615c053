import asyncio
import logging
from typing import Dict, List, Optional

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from bigjohn.enums.enums import MediaFieldEnum, MediaTypeEnum
from bigjohn.modals.vipContentEntity import VipContentEntity
from bigjohn.repositories import vip_repository
from bigjohn.service.upload_service import discard_uploads, upload_file

logger = logging.getLogger(__name__)


async def get_all_vip_content(db: AsyncSession) -> List[VipContentEntity]:
    return await vip_repository.get_all_contents(db)


async def create_vip_content(
    title: str,
    description: Optional[str],
    files: Dict[MediaFieldEnum, Optional[UploadFile]],
    media_store,
    db: AsyncSession,
) -> VipContentEntity:
    """
    Upload every supplied file concurrently, then save one VipContent document.

    The multi-file route always records mediaType "mixed". If any upload or the
    final save fails, the objects that did reach the media store are deleted
    before the error propagates.
    """
    present = [(field, upload) for field, upload in files.items() if upload is not None and upload.filename]

    results = await asyncio.gather(
        *[upload_file(upload, media_store) for _, upload in present],
        return_exceptions=True,
    )

    failures = [r for r in results if isinstance(r, Exception)]
    uploaded = [r for r in results if not isinstance(r, Exception)]
    if failures:
        for (field, upload), result in zip(present, results):
            if isinstance(result, Exception):
                logger.error("❌ VIP %s upload failed for %s: %r", field.value, upload.filename, result)
        await discard_uploads(uploaded, media_store)
        raise failures[0]

    media_url = {field.url_key: url for (field, _), url in zip(present, results)}
    try:
        return await vip_repository.create_content(title, description, media_url, MediaTypeEnum.MIXED, db)
    except Exception:
        await discard_uploads(uploaded, media_store)
        raise


async def delete_vip_content(content_id: str, db: AsyncSession) -> VipContentEntity:
    return await vip_repository.delete_content(content_id, db)
