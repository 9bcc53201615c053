from typing import List, Optional, Tuple
from urllib.parse import urlsplit

from markupsafe import Markup, escape

from bigjohn.richtext.document import Block, Document

BLOCK_TAGS = {
    "unstyled": "p",
    "header-one": "h1",
    "header-two": "h2",
    "blockquote": "blockquote",
    "unordered-list-item": "li",
    "ordered-list-item": "li",
}
LIST_TAGS = {"unordered-list-item": "ul", "ordered-list-item": "ol"}
STYLE_TAGS = (("BOLD", "strong"), ("ITALIC", "em"), ("UNDERLINE", "u"))
SAFE_URL_SCHEMES = ("http", "https")


def safe_url(url) -> Optional[str]:
    """`url` when it is an absolute http(s) URL, otherwise None."""
    if not isinstance(url, str):
        return None
    url = url.strip()
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if parts.scheme.lower() not in SAFE_URL_SCHEMES or not parts.netloc:
        return None
    return url


def _runs(block: Block) -> List[Tuple[str, frozenset, Optional[int]]]:
    styles = block.char_styles()
    entities = block.char_entities()
    runs = []
    for i, char in enumerate(block.text):
        marker = (frozenset(styles[i]), entities[i])
        if runs and (runs[-1][1], runs[-1][2]) == marker:
            runs[-1] = (runs[-1][0] + char, runs[-1][1], runs[-1][2])
        else:
            runs.append((char, marker[0], marker[1]))
    return runs


def _render_inline(block: Block, document: Document) -> str:
    parts = []
    for text, styles, entity_key in _runs(block):
        html = str(escape(text)).replace("\n", "<br>")
        for style, tag in STYLE_TAGS:
            if style in styles:
                html = f"<{tag}>{html}</{tag}>"
        entity = document.entity_map.get(entity_key) if entity_key is not None else None
        href = safe_url(entity.data.get("url")) if entity is not None and entity.type == "LINK" else None
        if href is not None:
            html = (
                f'<a href="{escape(href)}" '
                f'target="_blank" rel="noopener noreferrer">{html}</a>'
            )
        parts.append(html)
    return "".join(parts) or "<br>"


def _render_atomic(block: Block, document: Document) -> str:
    for entity_range in block.entity_ranges:
        entity = document.entity_map.get(entity_range.key)
        src = safe_url(entity.data.get("src")) if entity is not None and entity.type == "IMAGE" else None
        if src is not None:
            return f'<figure><img src="{escape(src)}"></figure>'
    return ""


def render_html(document: Document) -> Markup:
    """Render a document to HTML; all text and attribute values are escaped."""
    out = []
    open_list = None
    for block in document.blocks:
        list_tag = LIST_TAGS.get(block.type)
        if open_list and open_list != list_tag:
            out.append(f"</{open_list}>")
            open_list = None
        if list_tag and open_list is None:
            out.append(f"<{list_tag}>")
            open_list = list_tag

        if block.type == "atomic":
            out.append(_render_atomic(block, document))
            continue
        tag = BLOCK_TAGS.get(block.type, "p")
        out.append(f"<{tag}>{_render_inline(block, document)}</{tag}>")
    if open_list:
        out.append(f"</{open_list}>")
    return Markup("\n".join(part for part in out if part))
