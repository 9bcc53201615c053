import logging
import secrets
from typing import Dict, List, Optional, Sequence
from urllib.parse import urlencode

import aiohttp
import jwt

from bigjohn.errors.contentErrors import AuthError, IdentityProviderError

logger = logging.getLogger(__name__)


class Auth0Client:
    """
    Thin wrapper around an Auth0 tenant.

    - validates RS256 bearer tokens against the tenant's JWKS, issuer and audience
    - runs the authorization code flow for the web client
    - reads the user directory through the Management API (client credentials grant)

    Token refresh and rotation are left to Auth0 itself.
    """

    def __init__(
        self,
        domain: Optional[str],
        audience: Optional[str],
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        callback_url: Optional[str] = None,
        jwks_client=None,
        algorithms: Sequence[str] = ("RS256",),
        timeout: float = 10,
    ):
        self.domain = domain
        self.audience = audience
        self.client_id = client_id
        self.client_secret = client_secret
        self.callback_url = callback_url
        self.algorithms = list(algorithms)
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._jwks_client = jwks_client

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}"

    @property
    def issuer(self) -> str:
        return f"{self.base_url}/"

    @property
    def jwks_client(self):
        # built lazily, PyJWKClient fetches and caches the signing keys on first use
        if self._jwks_client is None:
            self._jwks_client = jwt.PyJWKClient(f"{self.base_url}/.well-known/jwks.json")
        return self._jwks_client

    # ---------- Bearer tokens ----------
    def verify_token(self, token: str) -> Dict:
        if not token:
            raise AuthError("Missing bearer token")
        try:
            signing_key = self.jwks_client.get_signing_key_from_jwt(token)
            return jwt.decode(
                token,
                signing_key.key,
                algorithms=self.algorithms,
                audience=self.audience,
                issuer=self.issuer,
            )
        except jwt.PyJWKClientError as e:
            logger.warning("⚠️ Could not resolve signing key: %s", e)
            raise AuthError("Unable to find appropriate signing key") from e
        except jwt.ExpiredSignatureError as e:
            raise AuthError("Token has expired") from e
        except jwt.PyJWTError as e:
            raise AuthError(f"Invalid token: {e}") from e

    # ---------- Authorization code flow ----------
    def new_state(self) -> str:
        return secrets.token_urlsafe(32)

    def authorize_url(self, state: str, scopes: Sequence[str] = ("openid", "profile", "email")) -> str:
        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.callback_url,
            "scope": " ".join(scopes),
            "state": state,
        }
        if self.audience:
            params["audience"] = self.audience
        return f"{self.base_url}/authorize?{urlencode(params)}"

    def logout_url(self, return_to: str) -> str:
        return f"{self.base_url}/v2/logout?{urlencode({'client_id': self.client_id, 'returnTo': return_to})}"

    async def _post_token(self, payload: Dict) -> Dict:
        url = f"{self.base_url}/oauth/token"
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(url, json=payload) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error("❌ Token request (%s) failed: %s", payload.get("grant_type"), error_text)
                        raise IdentityProviderError(f"Token request failed with status {response.status}")
                    return await response.json()
        except aiohttp.ClientError as e:
            raise IdentityProviderError(f"Token request failed: {e}") from e

    async def exchange_code(self, code: str) -> Dict:
        """Trade an authorization code for the user's tokens."""
        return await self._post_token({
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "redirect_uri": self.callback_url,
        })

    async def management_token(self) -> str:
        data = await self._post_token({
            "grant_type": "client_credentials",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "audience": f"{self.base_url}/api/v2/",
        })
        return data["access_token"]

    # ---------- User directory ----------
    async def list_user_emails(self, page: int = 0, per_page: int = 50) -> List[str]:
        token = await self.management_token()
        params = {"page": page, "per_page": per_page, "fields": "email", "include_fields": "true"}
        headers = {"Authorization": f"Bearer {token}"}
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(f"{self.base_url}/api/v2/users", params=params, headers=headers) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error("❌ User directory query failed: %s", error_text)
                        raise IdentityProviderError(f"User directory query failed with status {response.status}")
                    users = await response.json()
        except aiohttp.ClientError as e:
            raise IdentityProviderError(f"User directory query failed: {e}") from e
        return [user["email"] for user in users if user.get("email")]
