from typing import Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bigjohn.errors.contentErrors import AuthError

bearer_scheme = HTTPBearer(auto_error=False)


def get_identity(request: Request):
    return request.app.state.identity


def get_media_store(request: Request):
    return request.app.state.media_store


# sync on purpose: FastAPI runs it in the threadpool, where the JWKS fetch may block
def require_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    identity=Depends(get_identity),
) -> Dict:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthError("Missing bearer token")
    return identity.verify_token(credentials.credentials)
