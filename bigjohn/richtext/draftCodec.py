import json
import logging
from typing import Any, Dict, Protocol

from bigjohn.richtext.document import Block, Document, Entity, EntityRange, InlineStyleRange, new_block_key
from bigjohn.richtext.markup import render_html

logger = logging.getLogger(__name__)

INVALID_CONTENT_MARKUP = "<p>Invalid content</p>"


class RichTextError(ValueError):
    """Stored content could not be read back as a rich-text document."""
    pass


def _field(container: Dict, name: str, kind: type, default: Any = None) -> Any:
    if not isinstance(container, dict):
        raise RichTextError(f"Expected an object holding {name!r}, got {type(container).__name__}")
    value = container.get(name)
    if value is None:
        value = default
    # bool is an int subclass but never a valid offset, length or key
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise RichTextError(f"{name!r} must be {kind.__name__}, got {type(value).__name__}")
    return value


class RichTextCodec(Protocol):
    def serialize(self, document: Document) -> str: ...

    def deserialize(self, raw: str) -> Document: ...

    def render_to_markup(self, document: Document) -> str: ...

    def render_serialized(self, raw: str) -> str: ...


class DraftRawCodec:
    """Reads and writes the Draft.js raw JSON format (`convertToRaw` / `convertFromRaw`)."""

    def to_raw(self, document: Document) -> Dict:
        return {
            "blocks": [
                {
                    "key": block.key,
                    "text": block.text,
                    "type": block.type,
                    "depth": block.depth,
                    "inlineStyleRanges": [
                        {"offset": r.offset, "length": r.length, "style": r.style}
                        for r in block.inline_style_ranges
                    ],
                    "entityRanges": [
                        {"offset": r.offset, "length": r.length, "key": r.key}
                        for r in block.entity_ranges
                    ],
                    "data": block.data,
                }
                for block in document.blocks
            ],
            "entityMap": {
                str(key): {"type": entity.type, "mutability": entity.mutability, "data": entity.data}
                for key, entity in document.entity_map.items()
            },
        }

    def from_raw(self, raw: Dict) -> Document:
        raw_entities = _field(raw, "entityMap", dict, default={})
        try:
            blocks = [self._block_from_raw(raw_block) for raw_block in _field(raw, "blocks", list)]
            entity_map = {
                int(key): Entity(
                    type=_field(raw_entity, "type", str),
                    mutability=_field(raw_entity, "mutability", str, default="MUTABLE"),
                    data=_field(raw_entity, "data", dict, default={}),
                )
                for key, raw_entity in raw_entities.items()
            }
        except RichTextError:
            raise
        except (TypeError, ValueError) as e:
            raise RichTextError(f"Malformed raw document: {e}") from e
        return Document(blocks=blocks, entity_map=entity_map)

    @staticmethod
    def _block_from_raw(raw_block: Dict) -> Block:
        return Block(
            key=_field(raw_block, "key", str, default=new_block_key()),
            text=_field(raw_block, "text", str, default=""),
            type=_field(raw_block, "type", str, default="unstyled"),
            depth=_field(raw_block, "depth", int, default=0),
            inline_style_ranges=[
                InlineStyleRange(
                    offset=_field(r, "offset", int),
                    length=_field(r, "length", int),
                    style=_field(r, "style", str),
                )
                for r in _field(raw_block, "inlineStyleRanges", list, default=[])
            ],
            entity_ranges=[
                EntityRange(offset=_field(r, "offset", int), length=_field(r, "length", int), key=_field(r, "key", int))
                for r in _field(raw_block, "entityRanges", list, default=[])
            ],
            data=_field(raw_block, "data", dict, default={}),
        )

    def serialize(self, document: Document) -> str:
        return json.dumps(self.to_raw(document))

    def deserialize(self, raw: str) -> Document:
        if not raw:
            raise RichTextError("Empty content")
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise RichTextError(f"Content is not JSON: {e}") from e
        if not isinstance(data, dict):
            raise RichTextError("Content is not a raw document")
        return self.from_raw(data)

    def render_to_markup(self, document: Document) -> str:
        """Render `document`, or the invalid-content placeholder when it cannot be rendered. Never raises."""
        try:
            return render_html(document)
        except (TypeError, ValueError, AttributeError, KeyError, IndexError) as e:
            logger.warning("⚠️ Failed to render content: %s", e)
            return INVALID_CONTENT_MARKUP

    def render_serialized(self, raw: str) -> str:
        try:
            return self.render_to_markup(self.deserialize(raw))
        except RichTextError as e:
            logger.warning("⚠️ Failed to parse content: %s", e)
            return INVALID_CONTENT_MARKUP
