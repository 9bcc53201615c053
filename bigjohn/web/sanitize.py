"""
Spotify embed markup is stored exactly as the editor pasted it, so it is
cleaned on the way out: only an `<iframe>` pointing at the Spotify player
survives, everything else is stripped.
"""

from typing import Optional

import bleach
from markupsafe import Markup, escape

SPOTIFY_EMBED_PREFIX = "https://open.spotify.com/"
EMBED_TAGS = ["iframe"]
IFRAME_ATTRIBUTES = ("width", "height", "frameborder", "allow", "allowfullscreen", "loading", "title")


def _iframe_attribute(tag: str, name: str, value: str) -> bool:
    if name == "src":
        return value.startswith(SPOTIFY_EMBED_PREFIX)
    return name in IFRAME_ATTRIBUTES


def clean_embed(embed: Optional[str]) -> Markup:
    """Sanitized embed markup. A bare player URL is wrapped in an iframe."""
    embed = (embed or "").strip()
    if embed.startswith(SPOTIFY_EMBED_PREFIX) and "<" not in embed:
        return Markup(
            f'<iframe src="{escape(embed)}" width="100%" height="152" frameborder="0" '
            f'allow="encrypted-media" loading="lazy"></iframe>'
        )
    return Markup(bleach.clean(
        embed,
        tags=EMBED_TAGS,
        attributes={"iframe": _iframe_attribute},
        protocols=["https"],
        strip=True,
    ))
