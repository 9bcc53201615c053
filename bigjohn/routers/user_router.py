from typing import Dict, List

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from bigjohn.auth.dependencies import get_identity, require_token
from bigjohn.controller import user_controller

router = APIRouter()


@router.get("/api/users", response_model=List[str])
async def list_users(
    page: int = Query(0, ge=0),
    per_page: int = Query(50, ge=1, le=100),
    identity=Depends(get_identity),
    claims: Dict = Depends(require_token),
):
    return await user_controller.list_user_emails(identity, page, per_page)


@router.get("/authorized", response_class=PlainTextResponse)
def authorized(claims: Dict = Depends(require_token)):
    return "Secured Resource"
