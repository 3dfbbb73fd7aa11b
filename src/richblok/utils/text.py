"""Text escaping for richblok.

Example:
    >>> from richblok.utils.text import escape_html
    >>> escape_html("A & B")
    'A &amp; B'
"""

from __future__ import annotations

import html as html_module


def escape_html(text: str) -> str:
    """Escape HTML special characters in text content.

    Converts special characters to HTML entities:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &#039;

    Args:
        text: Text to escape

    Returns:
        Escaped text; ``html.unescape`` restores the original.

    Examples:
        >>> escape_html("<script>alert('xss')</script>")
        '&lt;script&gt;alert(&#039;xss&#039;)&lt;/script&gt;'
    """
    if not text:
        return ""

    escaped = html_module.escape(text, quote=True)
    return escaped.replace("&#x27;", "&#039;")
