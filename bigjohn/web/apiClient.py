import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import aiohttp

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    def __init__(self, method: str, path: str, reason: str, status: Optional[int] = None):
        super().__init__(f"{method} {path} failed: {reason}")
        self.method = method
        self.path = path
        self.reason = reason
        self.status = status


@dataclass
class PendingFile:
    """A file picked in a form, held until it is sent to the API."""
    filename: str
    content: bytes
    content_type: Optional[str] = None


class BigJohnApiClient:
    """
    HTTP client for the BigJohn API.

    The bearer token is attached whenever one is passed and left off otherwise,
    so the public reads (news, Spotify) work for anonymous visitors too.
    """

    def __init__(self, base_url: str, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    @staticmethod
    def _headers(token: Optional[str]) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def _request(self, method: str, path: str, token: Optional[str] = None, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.request(method, url, headers=self._headers(token), **kwargs) as response:
                    if response.status >= 400:
                        error_text = await response.text()
                        raise ApiClientError(method, path, error_text, status=response.status)
                    if response.content_type == "application/json":
                        return await response.json()
                    return await response.text()
        except aiohttp.ClientError as e:
            raise ApiClientError(method, path, str(e)) from e

    # ---------- News ----------
    async def fetch_news(self, token: Optional[str] = None) -> List[Dict]:
        return await self._request("GET", "/api/news", token)

    async def save_news(self, post: Dict, token: str) -> Dict:
        return await self._request("POST", "/api/news", token, json=post)

    async def update_news(self, post_id: str, post: Dict, token: str) -> Dict:
        return await self._request("PUT", f"/api/news/{post_id}", token, json=post)

    async def delete_news(self, post_id: str, token: str) -> Dict:
        return await self._request("DELETE", f"/api/news/{post_id}", token)

    # ---------- Spotify ----------
    async def fetch_spotify(self, token: Optional[str] = None) -> List[Dict]:
        return await self._request("GET", "/api/spotify", token)

    async def save_spotify(self, embed_url: str, token: str) -> Dict:
        return await self._request("POST", "/api/spotify", token, json={"embedUrl": embed_url})

    async def delete_spotify(self, embed_id: str, token: str) -> Dict:
        return await self._request("DELETE", f"/api/spotify/{embed_id}", token)

    # ---------- VIP ----------
    async def fetch_vip(self, token: Optional[str] = None) -> List[Dict]:
        return await self._request("GET", "/api/vip", token)

    async def upload_vip(
        self,
        title: str,
        description: str,
        files: Dict[str, Optional[PendingFile]],
        token: str,
    ) -> Dict:
        form = aiohttp.FormData()
        form.add_field("title", title)
        form.add_field("description", description)
        for field_name, pending in files.items():
            if pending is not None:
                form.add_field(field_name, pending.content, filename=pending.filename, content_type=pending.content_type)
        return await self._request("POST", "/api/vip", token, data=form)

    async def delete_vip(self, content_id: str, token: str) -> Dict:
        return await self._request("DELETE", f"/api/vip/{content_id}", token)

    async def upload_image(self, pending: PendingFile, token: str) -> str:
        form = aiohttp.FormData()
        form.add_field("image", pending.content, filename=pending.filename, content_type=pending.content_type)
        data = await self._request("POST", "/api/upload", token, data=form)
        return data["imageUrl"]

    # ---------- Users ----------
    async def track_user(self, user_id: str, token: str) -> bool:
        data = await self._request("POST", "/api/dau/track", token, json={"userId": user_id})
        return bool(data.get("success"))

    async def fetch_daily_active_users(self, token: str) -> List[Dict]:
        return await self._request("GET", "/api/dau", token)
