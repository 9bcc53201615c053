import logging
from typing import List

from bigjohn.controller.errors import server_error
from bigjohn.service import user_service

logger = logging.getLogger(__name__)


async def list_user_emails(identity, page: int, per_page: int) -> List[str]:
    try:
        return await user_service.list_user_emails(identity, page, per_page)
    except Exception:
        raise server_error(logger, "list users from the identity provider")
