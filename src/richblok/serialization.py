"""Editor JSON serialization for richblok nodes.

Converts the rich-text editor's JSON form into typed nodes and back:

    {"type": "paragraph", "attrs": {...}, "content": [...]}
    {"type": "text", "text": "Hi", "marks": [{"type": "bold"}]}

Loading is lenient by default: unknown node and mark types become
UnknownNode / UnknownMark so the renderer can degrade them to empty output,
and malformed attributes are coerced with a diagnostic. ``strict=True``
raises SchemaError instead.

Example:
    from richblok.serialization import from_dict, to_dict

    doc = from_dict({"type": "doc", "content": [{"type": "paragraph"}]})
    assert to_dict(doc) == {"type": "doc", "content": [{"type": "paragraph"}]}

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Mapping
from typing import Any

from richblok.diagnostics import Diagnostic, DiagnosticCode, DiagnosticSink, emit
from richblok.errors import SchemaError
from richblok.nodes import (
    BLOCK_CLASSES,
    MARK_CLASSES,
    Attrs,
    Block,
    Heading,
    Link,
    Mark,
    MarkType,
    Node,
    NodeType,
    Text,
    UnknownMark,
    UnknownNode,
    freeze_attrs,
    resolve_type_name,
    type_name_of,
)

_MIN_LEVEL = 1
_MAX_LEVEL = 6


def from_dict(
    data: Mapping[str, Any],
    *,
    strict: bool = False,
    on_diagnostic: DiagnosticSink | None = None,
) -> Node:
    """Build a typed node tree from editor JSON.

    Args:
        data: Mapping with a ``type`` key (plus ``attrs``, ``content``,
            ``text``, ``marks`` as applicable).
        strict: Raise SchemaError on unknown types and invalid attributes.
        on_diagnostic: Receives diagnostics for coerced input.

    Returns:
        Typed node. Unknown types load as UnknownNode unless strict.

    Raises:
        TypeError: If ``data`` is not a mapping.
        SchemaError: In strict mode, for anything that does not fit the schema.

    """
    if not isinstance(data, Mapping):
        msg = f"Expected a mapping, got {type(data).__name__}"
        raise TypeError(msg)
    return _load_node(data, strict, on_diagnostic)


def _load_node(data: Mapping[str, Any], strict: bool, sink: DiagnosticSink | None) -> Node:
    raw_type = data.get("type")
    kind = resolve_type_name(raw_type)
    attrs = _load_attrs(data.get("attrs"), raw_type, strict, sink)

    if kind is NodeType.TEXT:
        text = data.get("text")
        return Text(
            text="" if text is None else str(text),
            marks=_load_marks(data.get("marks"), strict, sink),
        )

    if isinstance(kind, NodeType):
        cls = BLOCK_CLASSES[kind]
        content = _load_content(data.get("content"), strict, sink)
        if cls is Heading:
            level = _coerce_level(dict(attrs).get("level"), strict, sink)
            return Heading(content=content, attrs=attrs, level=level)
        return cls(content=content, attrs=attrs)

    if strict:
        raise SchemaError("Unknown node type", type_name=str(raw_type))
    return UnknownNode(type_name="" if raw_type is None else str(raw_type), attrs=attrs)


def _load_attrs(
    raw: Any, raw_type: Any, strict: bool, sink: DiagnosticSink | None
) -> Attrs:
    """Freeze an ``attrs`` bag; anything but a mapping counts as no attrs."""
    if raw is None:
        return ()
    if isinstance(raw, Mapping):
        return freeze_attrs(raw)
    type_name = None if raw_type is None else str(raw_type)
    if strict:
        msg = f"attrs must be a mapping, got {type(raw).__name__}"
        raise SchemaError(msg, type_name=type_name)
    emit(
        Diagnostic(
            DiagnosticCode.INVALID_INPUT,
            f"Ignoring attrs that are not a mapping: {type(raw).__name__}",
            node_type=type_name,
        ),
        sink,
    )
    return ()


def _as_list(
    raw: Any, field: str, strict: bool, sink: DiagnosticSink | None
) -> list[Any] | tuple[Any, ...]:
    if raw is None:
        return ()
    if isinstance(raw, (list, tuple)):
        return raw
    if strict:
        raise SchemaError(f"{field} must be a list, got {type(raw).__name__}")
    emit(
        Diagnostic(
            DiagnosticCode.INVALID_INPUT,
            f"Ignoring {field} that is not a list: {type(raw).__name__}",
        ),
        sink,
    )
    return ()


def _load_content(
    raw: Any, strict: bool, sink: DiagnosticSink | None
) -> tuple[Node, ...]:
    children: list[Node] = []
    for item in _as_list(raw, "content", strict, sink):
        if isinstance(item, Mapping):
            children.append(_load_node(item, strict, sink))
            continue
        if strict:
            raise SchemaError(f"Child node must be a mapping, got {type(item).__name__}")
        emit(
            Diagnostic(
                DiagnosticCode.INVALID_INPUT,
                f"Skipping child that is not a node: {type(item).__name__}",
            ),
            sink,
        )
    return tuple(children)


def _load_marks(raw: Any, strict: bool, sink: DiagnosticSink | None) -> tuple[Mark, ...]:
    marks: list[Mark] = []
    for item in _as_list(raw, "marks", strict, sink):
        if not isinstance(item, Mapping):
            if strict:
                raise SchemaError(f"Mark must be a mapping, got {type(item).__name__}")
            emit(
                Diagnostic(
                    DiagnosticCode.INVALID_INPUT,
                    f"Skipping mark that is not a mapping: {type(item).__name__}",
                ),
                sink,
            )
            continue
        marks.append(_load_mark(item, strict, sink))
    return tuple(marks)


def _load_mark(data: Mapping[str, Any], strict: bool, sink: DiagnosticSink | None) -> Mark:
    raw_type = data.get("type")
    kind = resolve_type_name(raw_type)
    attrs = _load_attrs(data.get("attrs"), raw_type, strict, sink)

    if not isinstance(kind, MarkType):
        if strict:
            raise SchemaError("Unknown mark type", type_name=str(raw_type))
        return UnknownMark(type_name="" if raw_type is None else str(raw_type), attrs=attrs)

    cls = MARK_CLASSES[kind]
    if issubclass(cls, Link):
        bag = dict(attrs)
        href = bag.get("href")
        target = bag.get("target")
        linktype = bag.get("linktype")
        return cls(
            attrs=attrs,
            href="" if href is None else str(href),
            linktype=None if linktype is None else str(linktype),
            target=None if target is None else str(target),
        )
    return cls(attrs=attrs)


def _coerce_level(raw: Any, strict: bool, sink: DiagnosticSink | None) -> int:
    """Read a heading level, clamping bad values into 1..6."""
    try:
        level = int(raw)
    except (TypeError, ValueError, OverflowError):
        level = None

    if level is not None and _MIN_LEVEL <= level <= _MAX_LEVEL:
        return level

    if strict:
        raise SchemaError(f"Invalid heading level {raw!r}", type_name="heading")
    fixed = _MIN_LEVEL if level is None else min(max(level, _MIN_LEVEL), _MAX_LEVEL)
    emit(
        Diagnostic(
            DiagnosticCode.INVALID_HEADING_LEVEL,
            f"Heading level {raw!r} is invalid, using {fixed}",
            node_type="heading",
        ),
        sink,
    )
    return fixed


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a typed node back to editor JSON.

    Empty ``attrs``, ``content`` and ``marks`` are omitted. Typed fields that
    are missing from the raw attribute bag (``Heading.level``, ``Link.href``,
    ...) are added to ``attrs``.

    """
    result: dict[str, Any] = {"type": type_name_of(node)}

    if isinstance(node, Text):
        result["text"] = node.text
        if node.marks:
            result["marks"] = [_mark_to_dict(m) for m in node.marks]
        return result

    if isinstance(node, Block):
        attrs = dict(node.attrs)
        if isinstance(node, Heading):
            attrs.setdefault("level", node.level)
        if attrs:
            result["attrs"] = attrs
        if node.content:
            result["content"] = [to_dict(child) for child in node.content]
    return result


def _mark_to_dict(mark: Mark) -> dict[str, Any]:
    result: dict[str, Any] = {"type": type_name_of(mark)}
    attrs = dict(mark.attrs)
    if isinstance(mark, Link):
        if mark.href:
            attrs.setdefault("href", mark.href)
        if mark.linktype is not None:
            attrs.setdefault("linktype", mark.linktype)
        if mark.target is not None:
            attrs.setdefault("target", mark.target)
    if attrs:
        result["attrs"] = attrs
    return result


def to_json(node: Node, *, indent: int | None = None) -> str:
    """Serialize a node tree to a JSON string. Attribute order is preserved."""
    return json.dumps(to_dict(node), indent=indent)


def from_json(data: str, *, strict: bool = False) -> Node:
    """Deserialize a node tree from a JSON string.

    Raises:
        ValueError: If the JSON is not an object.

    """
    raw = json.loads(data)
    if not isinstance(raw, dict):
        msg = f"Expected a JSON object, got {type(raw).__name__}"
        raise ValueError(msg)
    return from_dict(raw, strict=strict)


__all__ = [
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
]
