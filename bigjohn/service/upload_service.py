import logging
from typing import List

from fastapi import UploadFile

logger = logging.getLogger(__name__)


async def upload_file(upload: UploadFile, media_store) -> str:
    body = await upload.read()
    return await media_store.upload(body, upload.filename, upload.content_type)


async def discard_uploads(urls: List[str], media_store) -> None:
    """Best-effort removal of objects whose owning document was never saved."""
    for url in urls:
        if not await media_store.delete(url):
            logger.warning("⚠️ Orphaned media object left behind: %s", url)
