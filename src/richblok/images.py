"""Image service URL builder.

Appends resize and filter segments to an asset URL for the CMS image
service, and collects the matching ``<img>`` attributes:

    https://a.example.com/f/1/photo.jpg/m/640x480/filters:blur(5):format(webp)

Example:
    >>> result = optimize_image(
    ...     "https://a.example.com/f/1/photo.jpg",
    ...     {"width": 640, "height": 480, "filters": {"format": "webp"}},
    ... )
    >>> result.src
    'https://a.example.com/f/1/photo.jpg/m/640x480/filters:format(webp)'
    >>> result.attrs
    {'width': 640, 'height': 480}

Thread Safety:
    Pure functions over immutable options, safe to call from any thread.

"""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from richblok.diagnostics import get_logger

logger = get_logger(__name__)

LOADING_VALUES = frozenset(("lazy", "eager"))
ROTATE_VALUES = frozenset((90, 180, 270))
FORMAT_VALUES = frozenset(("webp", "png", "jpeg"))


def _member(value: Any, allowed: frozenset[Any]) -> bool:
    return isinstance(value, (str, int)) and not isinstance(value, bool) and value in allowed


def _known_fields(cls: type, data: Mapping[str, Any], renames: Mapping[str, str]) -> dict[str, Any]:
    valid = {f.name for f in fields(cls)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        name = renames.get(key, key)
        if name in valid:
            kwargs[name] = value
        else:
            logger.debug("Ignoring unknown %s key %r", cls.__name__, key)
    return kwargs


@dataclass(frozen=True, slots=True)
class ImageFilters:
    """Image service filters. Falsy values are left out of the URL."""

    blur: int | float | None = None
    quality: int | None = None
    brightness: int | float | None = None
    fill: str | None = None
    grayscale: bool = False
    rotate: int | None = None
    format: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ImageFilters":
        """Create filters from a mapping; unknown keys are ignored."""
        return cls(**_known_fields(cls, data, {}))

    def segments(self) -> list[str]:
        """Return filter segments in the image service's order."""
        params: list[str] = []
        if self.blur:
            params.append(f"blur({self.blur})")
        if self.quality:
            params.append(f"quality({self.quality})")
        if self.brightness:
            params.append(f"brightness({self.brightness})")
        if self.fill:
            params.append(f"fill({self.fill})")
        if self.grayscale:
            params.append("grayscale()")
        if _member(self.rotate, ROTATE_VALUES):
            params.append(f"rotate({self.rotate})")
        if _member(self.format, FORMAT_VALUES):
            params.append(f"format({self.format})")
        return params


@dataclass(frozen=True, slots=True)
class ImageOptions:
    """Resize, loading and filter options for one image.

    ``css_class`` is spelled ``class`` in mappings and in the output attrs.
    """

    width: int | None = None
    height: int | None = None
    loading: str | None = None
    css_class: str | None = None
    filters: ImageFilters | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ImageOptions":
        """Create options from a mapping; unknown keys are ignored."""
        kwargs = _known_fields(cls, data, {"class": "css_class"})
        filters = kwargs.get("filters")
        if isinstance(filters, Mapping):
            kwargs["filters"] = ImageFilters.from_dict(filters)
        elif filters is not None and not isinstance(filters, ImageFilters):
            logger.debug("Ignoring filters of type %s", type(filters).__name__)
            del kwargs["filters"]
        return cls(**kwargs)


@dataclass(frozen=True, slots=True)
class OptimizedImage:
    """Result of optimize_image: the rewritten URL and ``<img>`` attributes."""

    src: str
    attrs: dict[str, Any] = field(default_factory=dict)


def _positive(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def optimize_image(
    src: str,
    options: bool | ImageOptions | Mapping[str, Any] | None = None,
) -> OptimizedImage:
    """Build an image service URL and its attributes.

    Args:
        src: Base asset URL.
        options: ``None``/``False``/empty leaves ``src`` untouched.
            ``True`` requests the service without resizing or filters.
            A mapping or ImageOptions adds size, loading, class and filters.

    Returns:
        OptimizedImage with the new ``src`` and the ``attrs`` to put on the
        ``<img>`` element. A size segment is only written when both width
        and height are positive.

    """
    if not options:
        return OptimizedImage(src=src)

    if isinstance(options, Mapping):
        options = ImageOptions.from_dict(options)
    elif not isinstance(options, ImageOptions):
        options = ImageOptions()

    attrs: dict[str, Any] = {}
    if options.width:
        attrs["width"] = options.width
    if options.height:
        attrs["height"] = options.height
    if _member(options.loading, LOADING_VALUES):
        attrs["loading"] = options.loading
    if options.css_class:
        attrs["class"] = options.css_class

    result = f"{src}/m/"
    sized = _positive(options.width) and _positive(options.height)
    if sized:
        result = f"{result}{options.width}x{options.height}"

    filters = options.filters
    params = filters.segments() if isinstance(filters, ImageFilters) else []
    if params:
        separator = "/" if sized else ""
        result = f"{result}{separator}filters:{':'.join(params)}"

    return OptimizedImage(src=result, attrs=attrs)


__all__ = [
    "ImageFilters",
    "ImageOptions",
    "OptimizedImage",
    "optimize_image",
]
