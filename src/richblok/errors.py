"""Exception classes for richblok.

Rendering never raises for bad input; malformed trees degrade to empty
output and a diagnostic. These exceptions cover strict loading and
programming errors.
"""

from __future__ import annotations


class RichblokError(Exception):
    """Base exception for all richblok errors.

    Subclass this for specific error categories.
    """

    pass


class SchemaError(RichblokError):
    """Error when strictly loading editor JSON.

    Raised by ``from_dict(..., strict=True)`` when a node or mark does not
    match a known type.
    """

    def __init__(self, message: str, type_name: str | None = None) -> None:
        """Initialize schema error.

        Args:
            message: Error description
            type_name: The offending ``type`` value (optional)
        """
        self.type_name = type_name
        prefix = f"{type_name!r}: " if type_name is not None else ""
        super().__init__(f"{prefix}{message}")


class RenderError(RichblokError):
    """Error in the renderer's own setup.

    Raised when the resolver registry does not cover every node and mark
    type.
    """

    pass
