"""Typed document nodes for richblok.

All nodes and marks are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: Safe sharing across threads
- Pattern matching: match statements dispatch on the class

Node Hierarchy:
Node (base)
├── Block (structural nodes with content)
│   ├── Document
│   ├── Heading
│   ├── Paragraph
│   ├── BulletList
│   ├── OrderedList
│   └── ListItem
├── Text (leaf, decorated by marks)
└── UnknownNode

Mark (base)
├── Bold, Italic, Underline, Strike, Code
├── Superscript, Subscript, Highlight, Styled
├── Link
│   └── Anchor
└── UnknownMark

Attributes:
Every node and mark keeps the raw ``attrs`` bag of the editor JSON as an
ordered tuple of ``(key, value)`` pairs. Typed fields such as
``Heading.level`` or ``Link.href`` are the validated view of that bag; the
bag itself is what gets serialized into HTML attributes.

"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar


class NodeType(StrEnum):
    """Block and text node identifiers (editor wire names)."""

    DOCUMENT = "doc"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BULLET_LIST = "bullet_list"
    ORDERED_LIST = "ordered_list"
    LIST_ITEM = "list_item"
    TEXT = "text"


class MarkType(StrEnum):
    """Inline mark identifiers (editor wire names)."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    STRIKE = "strike"
    CODE = "code"
    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"
    HIGHLIGHT = "highlight"
    STYLED = "styled"
    LINK = "link"
    ANCHOR = "anchor"


class LinkType(StrEnum):
    """Targets a link mark can point at."""

    ASSET = "asset"
    URL = "url"
    EMAIL = "email"
    STORY = "story"


# Descriptive names accepted alongside the wire names.
# Keys are normalized (lowercase, underscores).
_ALIASES: dict[str, NodeType | MarkType] = {
    "document": NodeType.DOCUMENT,
    "unordered_list": NodeType.BULLET_LIST,
    "ul": NodeType.BULLET_LIST,
    "ol": NodeType.ORDERED_LIST,
    "li": NodeType.LIST_ITEM,
}


def resolve_type_name(name: object) -> NodeType | MarkType | None:
    """Map a raw ``type`` value to its enum member.

    Accepts wire names (``bullet_list``), hyphenated spellings
    (``bullet-list``) and descriptive aliases (``document``,
    ``unordered-list``).

    Returns:
        The matching NodeType or MarkType, or None for unknown names.

    Example:
        >>> resolve_type_name("unordered-list")
        <NodeType.BULLET_LIST: 'bullet_list'>
        >>> resolve_type_name("blink") is None
        True
    """
    if not isinstance(name, str):
        return None
    key = name.strip().lower().replace("-", "_")
    if key in NodeType:
        return NodeType(key)
    if key in MarkType:
        return MarkType(key)
    return _ALIASES.get(key)


type Attrs = tuple[tuple[str, Any], ...]


def freeze_attrs(attrs: Mapping[str, Any] | Attrs | None) -> Attrs:
    """Convert an attribute mapping to the immutable ordered form."""
    if not attrs:
        return ()
    if isinstance(attrs, Mapping):
        return tuple((str(k), v) for k, v in attrs.items())
    return tuple((str(k), v) for k, v in attrs)


def attr(attrs: Attrs, key: str, default: Any = None) -> Any:
    """Look up ``key`` in a frozen attribute bag."""
    for k, v in attrs:
        if k == key:
            return v
    return default


# =============================================================================
# Marks
# =============================================================================


@dataclass(frozen=True, slots=True)
class Mark:
    """Base class for inline marks.

    A mark carries no children; it wraps the text it decorates.

    """

    kind: ClassVar[MarkType | None] = None

    attrs: Attrs = ()


@dataclass(frozen=True, slots=True)
class Bold(Mark):
    """HTML: <strong>text</strong>"""

    kind: ClassVar[MarkType] = MarkType.BOLD


@dataclass(frozen=True, slots=True)
class Italic(Mark):
    """HTML: <em>text</em>"""

    kind: ClassVar[MarkType] = MarkType.ITALIC


@dataclass(frozen=True, slots=True)
class Underline(Mark):
    """HTML: <u>text</u>"""

    kind: ClassVar[MarkType] = MarkType.UNDERLINE


@dataclass(frozen=True, slots=True)
class Strike(Mark):
    """HTML: <s>text</s>"""

    kind: ClassVar[MarkType] = MarkType.STRIKE


@dataclass(frozen=True, slots=True)
class Code(Mark):
    """HTML: <code>text</code>"""

    kind: ClassVar[MarkType] = MarkType.CODE


@dataclass(frozen=True, slots=True)
class Superscript(Mark):
    """HTML: <sup>text</sup>"""

    kind: ClassVar[MarkType] = MarkType.SUPERSCRIPT


@dataclass(frozen=True, slots=True)
class Subscript(Mark):
    """HTML: <sub>text</sub>"""

    kind: ClassVar[MarkType] = MarkType.SUBSCRIPT


@dataclass(frozen=True, slots=True)
class Highlight(Mark):
    """HTML: <mark>text</mark>"""

    kind: ClassVar[MarkType] = MarkType.HIGHLIGHT


@dataclass(frozen=True, slots=True)
class Styled(Mark):
    """Generic style carrier.

    HTML: <span class="...">text</span>

    """

    kind: ClassVar[MarkType] = MarkType.STYLED


@dataclass(frozen=True, slots=True)
class Link(Mark):
    """Hyperlink mark.

    The rendered ``href`` depends on ``linktype``: ``email`` links get a
    ``mailto:`` prefix, ``asset``/``url``/``story`` links use ``href`` as-is,
    and anything else renders an empty ``href``.

    HTML: <a href="..." target="...">text</a>

    """

    kind: ClassVar[MarkType] = MarkType.LINK

    href: str = ""
    linktype: str | None = None
    target: str | None = None


@dataclass(frozen=True, slots=True)
class Anchor(Link):
    """In-page anchor. Rendered exactly like a link."""

    kind: ClassVar[MarkType] = MarkType.ANCHOR


@dataclass(frozen=True, slots=True)
class UnknownMark(Mark):
    """Mark whose type has no resolver. Kept so the renderer can report it."""

    type_name: str = ""


MARK_CLASSES: dict[MarkType, type[Mark]] = {
    MarkType.BOLD: Bold,
    MarkType.ITALIC: Italic,
    MarkType.UNDERLINE: Underline,
    MarkType.STRIKE: Strike,
    MarkType.CODE: Code,
    MarkType.SUPERSCRIPT: Superscript,
    MarkType.SUBSCRIPT: Subscript,
    MarkType.HIGHLIGHT: Highlight,
    MarkType.STYLED: Styled,
    MarkType.LINK: Link,
    MarkType.ANCHOR: Anchor,
}


# =============================================================================
# Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for document nodes."""

    kind: ClassVar[NodeType | None] = None


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Text run, optionally decorated by marks.

    Marks apply in order: the first mark is the innermost wrapper and the
    last mark is the outermost.

    """

    kind: ClassVar[NodeType] = NodeType.TEXT

    text: str = ""
    marks: tuple[Mark, ...] = ()


@dataclass(frozen=True, slots=True)
class Block(Node):
    """Structural node with ordered children."""

    content: tuple[Node, ...] = ()
    attrs: Attrs = ()


@dataclass(frozen=True, slots=True)
class Document(Block):
    """Root of an editor document.

    HTML: <div>...</div>

    """

    kind: ClassVar[NodeType] = NodeType.DOCUMENT


@dataclass(frozen=True, slots=True)
class Heading(Block):
    """Heading, levels 1 through 6.

    HTML: <h1>...</h1>

    """

    kind: ClassVar[NodeType] = NodeType.HEADING

    level: int = 1

    def __post_init__(self) -> None:
        level = self.level
        if isinstance(level, bool) or not isinstance(level, int) or not 1 <= level <= 6:
            msg = f"Heading level must be an integer from 1 to 6, got {level!r}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Paragraph(Block):
    """HTML: <p>...</p>"""

    kind: ClassVar[NodeType] = NodeType.PARAGRAPH


@dataclass(frozen=True, slots=True)
class BulletList(Block):
    """HTML: <ul>...</ul>"""

    kind: ClassVar[NodeType] = NodeType.BULLET_LIST


@dataclass(frozen=True, slots=True)
class OrderedList(Block):
    """HTML: <ol>...</ol>"""

    kind: ClassVar[NodeType] = NodeType.ORDERED_LIST


@dataclass(frozen=True, slots=True)
class ListItem(Block):
    """HTML: <li>...</li>"""

    kind: ClassVar[NodeType] = NodeType.LIST_ITEM


@dataclass(frozen=True, slots=True)
class UnknownNode(Block):
    """Node whose type has no resolver.

    Produced by lenient loading so an unsupported block degrades to empty
    output instead of failing the whole document.

    """

    type_name: str = ""


BLOCK_CLASSES: dict[NodeType, type[Block]] = {
    NodeType.DOCUMENT: Document,
    NodeType.HEADING: Heading,
    NodeType.PARAGRAPH: Paragraph,
    NodeType.BULLET_LIST: BulletList,
    NodeType.ORDERED_LIST: OrderedList,
    NodeType.LIST_ITEM: ListItem,
}


def type_name_of(item: Node | Mark) -> str:
    """Return the wire type name for a node or mark."""
    if isinstance(item, (UnknownNode, UnknownMark)):
        return item.type_name
    kind = type(item).kind
    return str(kind) if kind is not None else type(item).__name__
