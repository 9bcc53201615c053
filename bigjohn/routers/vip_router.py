from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from bigjohn.auth.dependencies import get_media_store, require_token
from bigjohn.controller import vip_controller
from bigjohn.db.database import get_db
from bigjohn.dto.dto import UploadResponse, VipContentResponse
from bigjohn.enums.enums import MediaFieldEnum

router = APIRouter()


@router.get("/vip", response_model=List[VipContentResponse])
async def get_vip_content(db: AsyncSession = Depends(get_db), claims: Dict = Depends(require_token)):
    return await vip_controller.get_vip_content(db)


@router.post("/vip", response_model=VipContentResponse, status_code=201)
async def create_vip_content(
    title: str = Form(""),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    video: Optional[UploadFile] = File(None),
    audio: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
    media_store=Depends(get_media_store),
    claims: Dict = Depends(require_token),
):
    files = {
        MediaFieldEnum.IMAGE: image,
        MediaFieldEnum.VIDEO: video,
        MediaFieldEnum.AUDIO: audio,
    }
    return await vip_controller.create_vip_content(title, description, files, media_store, db)


@router.delete("/vip/{content_id}", response_model=VipContentResponse)
async def delete_vip_content(content_id: str, db: AsyncSession = Depends(get_db), claims: Dict = Depends(require_token)):
    return await vip_controller.delete_vip_content(content_id, db)


# inline editor images
@router.post("/upload", response_model=UploadResponse, status_code=201)
async def upload_image(
    image: Optional[UploadFile] = File(None),
    media_store=Depends(get_media_store),
    claims: Dict = Depends(require_token),
):
    return await vip_controller.upload_image(image, media_store)
