"""HTML renderer: tree walker and mark chain composer.

Renders typed nodes (or raw editor JSON) to HTML by looking up each node's
resolver in the registry, rendering children first and handing the
resolver the rendered strings.

Mark Composition:
A text node's marks fold over its escaped text in list order. Each mark
wraps the result of the marks before it, so the first mark ends up
innermost: marks ``[bold, italic]`` render ``<em ><strong >x</strong></em>``.

Degraded Input:
Unknown node types, unknown marks, missing input and values that are not
nodes never raise. They emit a Diagnostic (logged, and sent to the caller's
sink if one was given) and contribute an empty string. An unknown mark
replaces the text it wraps with an empty string; marks after it wrap that
empty string.

Thread Safety:
All per-render state lives in a RenderContext created for each render()
call. Multiple threads can safely share a single HtmlRenderer instance.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from richblok.config import RenderConfig, get_render_config
from richblok.diagnostics import Diagnostic, DiagnosticCode, DiagnosticSink, emit
from richblok.nodes import Block, Mark, Node, Text, UnknownMark, UnknownNode
from richblok.resolvers import RESOLVERS, Resolver, resolve_text
from richblok.serialization import from_dict

type RenderInput = Node | Mapping[str, Any] | Sequence[Node | Mapping[str, Any]] | None


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Per-render state, created fresh for each render() call."""

    config: RenderConfig
    sink: DiagnosticSink | None = None


class HtmlRenderer:
    """Render document nodes to HTML.

    Usage:
        >>> from richblok.nodes import Document, Paragraph, Text, Bold
        >>> doc = Document(content=(Paragraph(content=(Text("Hi", marks=(Bold(),)),)),))
        >>> HtmlRenderer().render(doc)
        '<div ><p ><strong >Hi</strong></p></div>'

    Args:
        config: Fixed configuration. When None, the config active in the
            calling context is read at each render() call.
        on_diagnostic: Receives every diagnostic raised while rendering.

    Thread Safety:
        Holds no mutable state. Safe to share across threads.
    """

    __slots__ = ("_config", "_on_diagnostic")

    def __init__(
        self,
        *,
        config: RenderConfig | None = None,
        on_diagnostic: DiagnosticSink | None = None,
    ) -> None:
        self._config = config
        self._on_diagnostic = on_diagnostic

    def render(self, node: RenderInput) -> str:
        """Render a node, a raw mapping, or a sequence of either to HTML.

        A sequence renders each element in order and concatenates the
        results. ``None`` renders as an empty string.

        Raises:
            SchemaError: Only when the config is strict and a raw mapping
                does not fit the schema.
        """
        config = self._config if self._config is not None else get_render_config()
        ctx = RenderContext(config=config, sink=self._on_diagnostic)
        return self._render_input(node, ctx)

    # =========================================================================
    # Tree walker
    # =========================================================================

    def _render_input(self, value: Any, ctx: RenderContext) -> str:
        match value:
            case None:
                self._report(
                    ctx,
                    DiagnosticCode.MISSING_INPUT,
                    "No content to render: expected a node or a sequence of nodes",
                )
                return ""
            case Node():
                return self._render_node(value, ctx)
            case Mapping():
                node = from_dict(value, strict=ctx.config.strict, on_diagnostic=ctx.sink)
                return self._render_node(node, ctx)
            case str() | bytes():
                self._report(
                    ctx,
                    DiagnosticCode.INVALID_INPUT,
                    f"Cannot render a bare {type(value).__name__}; wrap text in a text node",
                )
                return ""
            case Sequence():
                return "".join(self._render_input(item, ctx) for item in value)
            case _:
                self._report(
                    ctx,
                    DiagnosticCode.INVALID_INPUT,
                    f"Cannot render value of type {type(value).__name__}",
                )
                return ""

    def _render_node(self, node: Node, ctx: RenderContext) -> str:
        """Render one node and its subtree, children before the parent."""
        match node:
            case UnknownNode():
                return self._unresolved(node.type_name, ctx)
            case Text():
                return self._render_text(node, ctx)

        resolver = self._resolver_for(node)
        if resolver is None:
            return self._unresolved(type(node).__name__, ctx)

        children: list[str] = []
        if isinstance(node, Block):
            children = [self._render_node(child, ctx) for child in node.content]
        return resolver(node, children, escape_attrs=ctx.config.escape_attributes)

    def _unresolved(self, type_name: str, ctx: RenderContext) -> str:
        self._report(
            ctx,
            DiagnosticCode.UNKNOWN_NODE,
            f"No resolver found for node type {type_name!r}",
            node_type=type_name,
        )
        return ""

    # =========================================================================
    # Mark chain composer
    # =========================================================================

    def _render_text(self, node: Text, ctx: RenderContext) -> str:
        """Escape the text, then wrap it with each mark in order."""
        html = resolve_text(node)
        for mark in node.marks:
            resolver = self._resolver_for(mark)
            if resolver is None:
                type_name = mark.type_name if isinstance(mark, UnknownMark) else type(mark).__name__
                self._report(
                    ctx,
                    DiagnosticCode.UNKNOWN_MARK,
                    f"No resolver found for mark type {type_name!r}",
                    node_type=type_name,
                )
                html = ""
                continue
            html = resolver(mark, (html,), escape_attrs=ctx.config.escape_attributes)
        return html

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _resolver_for(item: Node | Mark) -> Resolver | None:
        kind = type(item).kind
        if kind is None:
            return None
        return RESOLVERS.get(kind)

    @staticmethod
    def _report(
        ctx: RenderContext,
        code: DiagnosticCode,
        message: str,
        node_type: str | None = None,
    ) -> None:
        emit(Diagnostic(code, message, node_type=node_type), ctx.sink)
