"""richblok renderers.

Renderers convert typed document nodes into output formats.

Available Renderers:
- HtmlRenderer: Renders nodes to HTML through the resolver registry

Thread Safety:
Per-render state is created inside each render() call.
Safe for concurrent use from multiple threads.

"""

from richblok.renderers.html import HtmlRenderer, RenderInput

__all__ = ["HtmlRenderer", "RenderInput"]
