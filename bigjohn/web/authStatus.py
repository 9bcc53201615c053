from typing import Dict, MutableMapping, Optional, Protocol


class AuthStatus(Protocol):
    @property
    def is_authenticated(self) -> bool: ...

    @property
    def access_token(self) -> Optional[str]: ...

    @property
    def user_id(self) -> Optional[str]: ...

    @property
    def editor_unlocked(self) -> bool: ...


class SessionAuthStatus:
    """AuthStatus backed by the signed session cookie of the web client."""

    TOKEN_KEY = "access_token"
    USER_KEY = "user_id"
    EDITOR_KEY = "isNewsEditorAuthenticated"
    STATE_KEY = "oauth_state"

    def __init__(self, session: MutableMapping):
        self.session = session

    @property
    def is_authenticated(self) -> bool:
        return bool(self.session.get(self.TOKEN_KEY))

    @property
    def access_token(self) -> Optional[str]:
        return self.session.get(self.TOKEN_KEY)

    @property
    def user_id(self) -> Optional[str]:
        return self.session.get(self.USER_KEY)

    @property
    def editor_unlocked(self) -> bool:
        return self.session.get(self.EDITOR_KEY) is True

    def login(self, tokens: Dict, claims: Dict) -> None:
        self.session[self.TOKEN_KEY] = tokens["access_token"]
        self.session[self.USER_KEY] = claims.get("sub")

    def logout(self) -> None:
        self.session.clear()

    def unlock_editor(self) -> None:
        self.session[self.EDITOR_KEY] = True

    def remember_state(self, state: str) -> None:
        self.session[self.STATE_KEY] = state

    def pop_state(self) -> Optional[str]:
        return self.session.pop(self.STATE_KEY, None)
