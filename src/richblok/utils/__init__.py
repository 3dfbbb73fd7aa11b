"""Utility modules for richblok.

Provides:
- text: escape_html for the text escaping boundary
"""

from richblok.utils.text import escape_html

__all__ = [
    "escape_html",
]
