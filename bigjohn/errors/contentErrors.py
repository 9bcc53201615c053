class ContentError(Exception):
    """Base class for errors raised while serving site content."""
    pass


class ContentNotFoundError(ContentError):
    def __init__(self, label: str, content_id: str):
        super().__init__(f"{label} not found")
        self.label = label
        self.content_id = content_id


class MediaUploadError(ContentError):
    def __init__(self, filename: str, reason: str):
        super().__init__(f"❌ Failed to upload '{filename}' to the media store: {reason}")
        self.filename = filename
        self.reason = reason


class IdentityProviderError(ContentError):
    """The identity provider refused or failed a token exchange or directory query."""
    pass


class AuthError(ContentError):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
