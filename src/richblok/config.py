"""ContextVar-based render configuration for richblok.

Provides thread-local configuration using Python's ContextVars (PEP 567).
An explicit config passed to HtmlRenderer wins; otherwise the renderer reads
the config active in the current context at render time.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from richblok import render
    from richblok.config import RenderConfig, render_config_context

    with render_config_context(RenderConfig(escape_attributes=True)):
        html = render(doc)

"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Attributes:
        escape_attributes: Escape attribute values before emitting them.
            Off by default: attributes are treated as trusted CMS output and
            passed through verbatim. Turn this on when attribute values can
            come from untrusted authors.
        strict: Load raw mappings strictly, raising SchemaError on unknown
            node or mark types instead of rendering them as empty.

    """

    escape_attributes: bool = False
    strict: bool = False

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "RenderConfig":
        """Create RenderConfig from a dictionary.

        Only includes keys that are valid RenderConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> RenderConfig.from_dict({"strict": True, "theme": "dark"}).strict
            True

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get the render configuration active in this context."""
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set render configuration for the current context.

    Only affects the current thread's context.

    """
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to the default configuration."""
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with render_config_context(RenderConfig(strict=True)):
        ...     get_render_config().strict
        True
        >>> get_render_config().strict
        False

    """
    previous = _render_config.get()
    _render_config.set(config)
    try:
        yield
    finally:
        _render_config.set(previous)


__all__ = [
    "RenderConfig",
    "get_render_config",
    "render_config_context",
    "reset_render_config",
    "set_render_config",
]
