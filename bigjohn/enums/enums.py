from enum import Enum


class MediaTypeEnum(str, Enum):
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    MIXED = "mixed"


class MediaFieldEnum(str, Enum):
    # multipart field name -> key inside VipContent.mediaUrl
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"

    @property
    def url_key(self) -> str:
        return f"{self.value}Url"
