"""Resolver registry: node and mark type to HTML rendering function.

The registry is built once at import and is read-only afterwards. It covers
every NodeType and MarkType; a missing entry is a programming error and
fails the import with RenderError.

A resolver receives the node (or mark) plus its already-rendered inner
HTML and returns the complete markup for that node:

- Block nodes get their rendered children, one string per child.
- Marks get a one-element sequence holding the accumulated text.
- Text gets no children; its resolver escapes the bare text.

Attribute values are emitted verbatim unless ``escape_attrs`` is set.
Text content is always escaped by ``resolve_text``; nothing else escapes.

Example:
    >>> from richblok.nodes import Paragraph
    >>> lookup("paragraph")(Paragraph(), ["Hi"])
    '<p >Hi</p>'

"""

import json
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any, Protocol

from richblok.errors import RenderError
from richblok.nodes import (
    Attrs,
    Heading,
    Link,
    LinkType,
    MarkType,
    NodeType,
    Text,
    attr,
    resolve_type_name,
)
from richblok.utils.text import escape_html


class Resolver(Protocol):
    """Callable that renders one node or mark to HTML."""

    def __call__(
        self, item: Any, children: Sequence[str], /, *, escape_attrs: bool = False
    ) -> str: ...


def _format_value(value: Any) -> str:
    """Format an attribute value the way the editor JSON spells it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def attrs_to_string(attrs: Attrs | Mapping[str, Any], *, escape: bool = False) -> str:
    """Serialize attributes as space-joined ``key="value"`` pairs.

    Keys keep their iteration order. Values are not escaped unless
    ``escape`` is True.

    Example:
        >>> attrs_to_string((("class", "lead"), ("id", "intro")))
        'class="lead" id="intro"'
    """
    items = attrs.items() if isinstance(attrs, Mapping) else attrs
    parts: list[str] = []
    for key, value in items:
        text = _format_value(value)
        if escape:
            text = escape_html(text)
        parts.append(f'{key}="{text}"')
    return " ".join(parts)


def _attrs_of(item: Any) -> Attrs:
    return getattr(item, "attrs", ())


# =============================================================================
# Block resolvers
# =============================================================================


def element(tag: str) -> Resolver:
    """Build a resolver wrapping joined children in ``<tag ...>``."""

    def resolve(item: Any, children: Sequence[str], /, *, escape_attrs: bool = False) -> str:
        attrs = attrs_to_string(_attrs_of(item), escape=escape_attrs)
        return f"<{tag} {attrs}>{''.join(children)}</{tag}>"

    resolve.__name__ = f"resolve_{tag}"
    return resolve


def resolve_heading(
    item: Any, children: Sequence[str], /, *, escape_attrs: bool = False
) -> str:
    """Render ``<hN ...>`` with matching open and close levels."""
    if isinstance(item, Heading):
        level = item.level
    else:
        level = attr(_attrs_of(item), "level", 1)
    attrs = attrs_to_string(_attrs_of(item), escape=escape_attrs)
    return f"<h{level} {attrs}>{''.join(children)}</h{level}>"


def resolve_text(item: Any, children: Sequence[str] = (), /, *, escape_attrs: bool = False) -> str:
    """Escape bare text. The only place text content is escaped."""
    if not isinstance(item, Text):
        return ""
    return escape_html(item.text)


# =============================================================================
# Mark resolvers
# =============================================================================


def link_href(mark: Link) -> str:
    """Compute the ``href`` for a link or anchor mark.

    Example:
        >>> link_href(Link(href="a@b.com", linktype="email"))
        'mailto:a@b.com'
    """
    match mark.linktype:
        case LinkType.ASSET | LinkType.URL | LinkType.STORY:
            return mark.href
        case LinkType.EMAIL:
            return f"mailto:{mark.href}"
        case _:
            return ""


def resolve_link(item: Any, children: Sequence[str], /, *, escape_attrs: bool = False) -> str:
    """Render ``<a ... href="..." target="...">``.

    Inner text was escaped when the mark chain started; it is not escaped
    again here.
    """
    if isinstance(item, Link):
        href = link_href(item)
        target = item.target
    else:
        href = ""
        target = attr(_attrs_of(item), "target")
    if escape_attrs:
        href = escape_html(href)
    target_attr = ""
    if target:
        value = escape_html(str(target)) if escape_attrs else target
        target_attr = f' target="{value}"'
    attrs = attrs_to_string(_attrs_of(item), escape=escape_attrs)
    return f'<a {attrs} href="{href}"{target_attr}>{"".join(children)}</a>'


# =============================================================================
# Registry
# =============================================================================


def _check_exhaustive(registry: Mapping[NodeType | MarkType, Resolver]) -> None:
    missing = [str(t) for t in (*NodeType, *MarkType) if t not in registry]
    if missing:
        msg = f"No resolver registered for: {', '.join(missing)}"
        raise RenderError(msg)


_REGISTRY: dict[NodeType | MarkType, Resolver] = {
    NodeType.DOCUMENT: element("div"),
    NodeType.HEADING: resolve_heading,
    NodeType.PARAGRAPH: element("p"),
    NodeType.BULLET_LIST: element("ul"),
    NodeType.ORDERED_LIST: element("ol"),
    NodeType.LIST_ITEM: element("li"),
    NodeType.TEXT: resolve_text,
    MarkType.LINK: resolve_link,
    MarkType.ANCHOR: resolve_link,
    MarkType.STYLED: element("span"),
    MarkType.BOLD: element("strong"),
    MarkType.ITALIC: element("em"),
    MarkType.UNDERLINE: element("u"),
    MarkType.STRIKE: element("s"),
    MarkType.CODE: element("code"),
    MarkType.SUPERSCRIPT: element("sup"),
    MarkType.SUBSCRIPT: element("sub"),
    MarkType.HIGHLIGHT: element("mark"),
}
_check_exhaustive(_REGISTRY)

RESOLVERS: Mapping[NodeType | MarkType, Resolver] = MappingProxyType(_REGISTRY)


def lookup(type_name: str) -> Resolver | None:
    """Return the resolver for a node or mark type, or None if unknown.

    Accepts wire names and aliases (see ``resolve_type_name``).
    """
    kind = resolve_type_name(type_name)
    if kind is None:
        return None
    return RESOLVERS.get(kind)


__all__ = [
    "RESOLVERS",
    "Resolver",
    "attrs_to_string",
    "element",
    "link_href",
    "lookup",
    "resolve_heading",
    "resolve_link",
    "resolve_text",
]
