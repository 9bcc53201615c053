from typing import List


async def list_user_emails(identity, page: int, per_page: int) -> List[str]:
    return await identity.list_user_emails(page=page, per_page=per_page)
