"""
Editable rich-text document.

The shape follows the Draft.js raw content format: a list of blocks, each
carrying its own text, block type, inline style ranges and entity ranges,
plus an entity map shared by the whole document (links and images).
"""

import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

BLOCK_TYPES = (
    "unstyled",
    "header-one",
    "header-two",
    "blockquote",
    "unordered-list-item",
    "ordered-list-item",
    "atomic",
)
INLINE_STYLES = ("BOLD", "ITALIC", "UNDERLINE")

# plain-text authoring prefixes, longest first so "## " wins over "# "
_PLAIN_TEXT_PREFIXES = (
    ("## ", "header-two"),
    ("# ", "header-one"),
    ("> ", "blockquote"),
    ("- ", "unordered-list-item"),
    ("1. ", "ordered-list-item"),
)


def new_block_key() -> str:
    return uuid.uuid4().hex[:5]


@dataclass
class InlineStyleRange:
    offset: int
    length: int
    style: str


@dataclass
class EntityRange:
    offset: int
    length: int
    key: int


@dataclass
class Entity:
    type: str
    mutability: str = "MUTABLE"
    data: Dict = field(default_factory=dict)


@dataclass
class Block:
    key: str = field(default_factory=new_block_key)
    text: str = ""
    type: str = "unstyled"
    depth: int = 0
    inline_style_ranges: List[InlineStyleRange] = field(default_factory=list)
    entity_ranges: List[EntityRange] = field(default_factory=list)
    data: Dict = field(default_factory=dict)

    def char_styles(self) -> List[Set[str]]:
        styles: List[Set[str]] = [set() for _ in self.text]
        for style_range in self.inline_style_ranges:
            end = min(style_range.offset + style_range.length, len(self.text))
            for i in range(max(style_range.offset, 0), end):
                styles[i].add(style_range.style)
        return styles

    def char_entities(self) -> List[Optional[int]]:
        entities: List[Optional[int]] = [None] * len(self.text)
        for entity_range in self.entity_ranges:
            end = min(entity_range.offset + entity_range.length, len(self.text))
            for i in range(max(entity_range.offset, 0), end):
                entities[i] = entity_range.key
        return entities

    def set_char_styles(self, styles: List[Set[str]]) -> None:
        ranges = []
        for style in INLINE_STYLES + tuple(sorted({s for chars in styles for s in chars} - set(INLINE_STYLES))):
            start = None
            for i, chars in enumerate(styles + [set()]):
                if style in chars and start is None:
                    start = i
                elif style not in chars and start is not None:
                    ranges.append(InlineStyleRange(offset=start, length=i - start, style=style))
                    start = None
        self.inline_style_ranges = sorted(ranges, key=lambda r: (r.offset, r.style))


@dataclass
class Document:
    blocks: List[Block] = field(default_factory=list)
    entity_map: Dict[int, Entity] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "Document":
        return cls(blocks=[Block()])

    @classmethod
    def from_plain_text(cls, text: str) -> "Document":
        """One block per line; a leading "# ", "## ", "> ", "- " or "1. " picks the block type."""
        blocks = []
        for line in (text or "").replace("\r\n", "\n").split("\n"):
            block_type = "unstyled"
            for prefix, prefixed_type in _PLAIN_TEXT_PREFIXES:
                if line.startswith(prefix):
                    block_type = prefixed_type
                    line = line[len(prefix):]
                    break
            blocks.append(Block(text=line, type=block_type))
        return cls(blocks=blocks or [Block()])

    def to_plain_text(self) -> str:
        prefixes = {block_type: prefix for prefix, block_type in _PLAIN_TEXT_PREFIXES}
        lines = []
        for block in self.blocks:
            if block.type == "atomic":
                continue
            lines.append(prefixes.get(block.type, "") + block.text)
        return "\n".join(lines)

    @property
    def plain_text(self) -> str:
        return "\n".join(block.text for block in self.blocks if block.type != "atomic")

    def is_empty(self) -> bool:
        return not any(block.text.strip() or block.type == "atomic" for block in self.blocks)

    # ---------- editing ----------
    def _block(self, index: int) -> Block:
        if not 0 <= index < len(self.blocks):
            raise IndexError(f"No block at index {index}")
        return self.blocks[index]

    def _selection(self, block: Block, offset: int, length: int) -> Tuple[int, int]:
        start = max(0, min(offset, len(block.text)))
        end = max(start, min(offset + length, len(block.text)))
        return start, end

    def toggle_inline_style(self, block_index: int, offset: int, length: int, style: str) -> None:
        """
        Apply `style` to the selection, or remove it when every selected
        character already carries it.
        """
        if style not in INLINE_STYLES:
            raise ValueError(f"Unsupported inline style: {style}")
        block = self._block(block_index)
        start, end = self._selection(block, offset, length)
        if start == end:
            return
        styles = block.char_styles()
        remove = all(style in styles[i] for i in range(start, end))
        for i in range(start, end):
            if remove:
                styles[i].discard(style)
            else:
                styles[i].add(style)
        block.set_char_styles(styles)

    def toggle_block_type(self, block_index: int, block_type: str) -> None:
        if block_type not in BLOCK_TYPES or block_type == "atomic":
            raise ValueError(f"Unsupported block type: {block_type}")
        block = self._block(block_index)
        block.type = "unstyled" if block.type == block_type else block_type

    def create_entity(self, entity_type: str, mutability: str, data: Dict) -> int:
        key = max(self.entity_map, default=-1) + 1
        self.entity_map[key] = Entity(type=entity_type, mutability=mutability, data=dict(data))
        return key

    def apply_link(self, block_index: int, offset: int, length: int, url: str) -> Optional[int]:
        block = self._block(block_index)
        start, end = self._selection(block, offset, length)
        if start == end or not url:
            return None
        key = self.create_entity("LINK", "MUTABLE", {"url": url})
        entities = block.char_entities()
        for i in range(start, end):
            entities[i] = key
        block.entity_ranges = _ranges_from_entities(entities)
        return key

    def insert_image(self, src: str, after_index: Optional[int] = None) -> int:
        """
        Add an atomic image block after `after_index` (default: the end),
        followed by an empty paragraph so writing can continue below it.
        """
        key = self.create_entity("IMAGE", "IMMUTABLE", {"src": src})
        position = len(self.blocks) if after_index is None else after_index + 1
        atomic = Block(text=" ", type="atomic", entity_ranges=[EntityRange(offset=0, length=1, key=key)])
        self.blocks[position:position] = [atomic, Block()]
        return key


def _ranges_from_entities(entities: List[Optional[int]]) -> List[EntityRange]:
    ranges = []
    start = 0
    for i in range(1, len(entities) + 1):
        if i == len(entities) or entities[i] != entities[start]:
            if entities[start] is not None:
                ranges.append(EntityRange(offset=start, length=i - start, key=entities[start]))
            start = i
    return ranges
