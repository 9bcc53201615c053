"""
Route guards for the web client.

They only decide where a visitor is sent; they never call the API. Every
protected API route checks the bearer token itself, so these are a
convenience for the visitor and not an access control.
"""

from typing import Optional

from bigjohn.web.authStatus import AuthStatus

EDITOR_LOGIN_PATH = "/johns-news/login"
HOME_PATH = "/"


class GuardRedirect(Exception):
    def __init__(self, location: str):
        super().__init__(location)
        self.location = location


def editor_guard(auth: AuthStatus) -> Optional[str]:
    """Redirect target for the editor route, or None when the visitor may stay."""
    return None if auth.editor_unlocked else EDITOR_LOGIN_PATH


def vip_guard(auth: AuthStatus) -> Optional[str]:
    return None if auth.is_authenticated else HOME_PATH


def enforce(guard, auth: AuthStatus) -> None:
    location = guard(auth)
    if location is not None:
        raise GuardRedirect(location)
