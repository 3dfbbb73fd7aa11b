"""
richblok: rich-text document to HTML renderer

Renders the JSON tree produced by a block-based rich-text editor (documents,
headings, paragraphs, lists, text runs with inline marks) into an HTML
string. Pure, synchronous, and zero runtime dependencies.

Quick Start:
    >>> from richblok import render
    >>> render({
    ...     "type": "doc",
    ...     "content": [{
    ...         "type": "paragraph",
    ...         "content": [{"type": "text", "text": "Hi <there>", "marks": [{"type": "bold"}]}],
    ...     }],
    ... })
    '<div ><p ><strong >Hi &lt;there&gt;</strong></p></div>'

Typed nodes:
    >>> from richblok import Document, Heading, Text
    >>> render(Heading(level=2, content=(Text("Title"),)))
    '<h2 >Title</h2>'

Diagnostics:
    Unknown node types and missing input never raise. Pass
    ``on_diagnostic`` to receive a Diagnostic for each problem; they are
    always logged to the ``richblok`` logger as well.

Images:
    >>> from richblok import optimize_image
    >>> optimize_image("https://a.example.com/f/1/x.jpg", {"width": 100, "height": 50}).src
    'https://a.example.com/f/1/x.jpg/m/100x50'
"""

from richblok.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from richblok.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticSink,
    collect_diagnostics,
)
from richblok.errors import RenderError, RichblokError, SchemaError
from richblok.images import ImageFilters, ImageOptions, OptimizedImage, optimize_image
from richblok.nodes import (
    Anchor,
    Block,
    Bold,
    BulletList,
    Code,
    Document,
    Heading,
    Highlight,
    Italic,
    Link,
    LinkType,
    ListItem,
    Mark,
    MarkType,
    Node,
    NodeType,
    OrderedList,
    Paragraph,
    Strike,
    Styled,
    Subscript,
    Superscript,
    Text,
    Underline,
    UnknownMark,
    UnknownNode,
)
from richblok.renderers.html import HtmlRenderer, RenderInput
from richblok.resolvers import RESOLVERS, Resolver, attrs_to_string, lookup
from richblok.serialization import from_dict, from_json, to_dict, to_json

__version__ = "0.1.0"


def render(
    node: RenderInput,
    *,
    on_diagnostic: DiagnosticSink | None = None,
    config: RenderConfig | None = None,
) -> str:
    """Render a document tree to HTML.

    Args:
        node: A typed node, a raw editor JSON mapping, or a sequence of
            either (rendered in order and concatenated). ``None`` renders
            as an empty string.
        on_diagnostic: Optional callback receiving each Diagnostic.
        config: Render configuration (defaults to the active context's).

    Returns:
        HTML string

    Example:
        >>> render([{"type": "text", "text": "A & B"}])
        'A &amp; B'
    """
    renderer = HtmlRenderer(config=config, on_diagnostic=on_diagnostic)
    return renderer.render(node)


__all__ = [  # noqa: RUF022
    # Version
    "__version__",
    # Core API
    "render",
    "HtmlRenderer",
    "RenderInput",
    # Resolver registry
    "RESOLVERS",
    "Resolver",
    "attrs_to_string",
    "lookup",
    # Block nodes
    "Node",
    "Block",
    "Document",
    "Heading",
    "Paragraph",
    "BulletList",
    "OrderedList",
    "ListItem",
    "Text",
    "UnknownNode",
    # Marks
    "Mark",
    "Bold",
    "Italic",
    "Underline",
    "Strike",
    "Code",
    "Superscript",
    "Subscript",
    "Highlight",
    "Styled",
    "Link",
    "Anchor",
    "UnknownMark",
    # Type identifiers
    "NodeType",
    "MarkType",
    "LinkType",
    # Serialization
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
    # Diagnostics and errors
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSink",
    "collect_diagnostics",
    "RichblokError",
    "RenderError",
    "SchemaError",
    # Configuration (ContextVar-based)
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
    # Images
    "ImageFilters",
    "ImageOptions",
    "OptimizedImage",
    "optimize_image",
]
