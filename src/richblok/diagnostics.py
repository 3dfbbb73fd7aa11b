"""Diagnostics and logging for degraded rendering.

Rendering never fails the caller. When a subtree cannot be rendered (unknown
node type, missing input, malformed attributes) the renderer emits a
Diagnostic and carries on. Diagnostics always go to the ``richblok.*``
loggers. Callers that want them programmatically pass a sink, or wrap the
work in ``collect_diagnostics()`` to record everything emitted in the block.

Example:
    >>> from richblok import render
    >>> from richblok.diagnostics import collect_diagnostics
    >>> with collect_diagnostics() as found:
    ...     render({"type": "blink", "text": "x"})
    ''
    >>> found[0].code
    'unknown-node'

Thread Safety:
    The active collector lives in a ContextVar, so each thread (and each
    asyncio task) collects only its own diagnostics.

"""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from enum import StrEnum

_PACKAGE = "richblok"


def get_logger(name: str) -> logging.Logger:
    """Return a stdlib logger namespaced under ``richblok``.

    Example:
        >>> get_logger("renderer").name
        'richblok.renderer'
    """
    if not (name == _PACKAGE or name.startswith(f"{_PACKAGE}.")):
        name = f"{_PACKAGE}.{name}"
    return logging.getLogger(name)


logger = get_logger(__name__)


class DiagnosticCode(StrEnum):
    """Kinds of recoverable rendering problems."""

    MISSING_INPUT = "missing-input"
    INVALID_INPUT = "invalid-input"
    UNKNOWN_NODE = "unknown-node"
    UNKNOWN_MARK = "unknown-mark"
    INVALID_HEADING_LEVEL = "invalid-heading-level"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A non-fatal report about the input.

    Attributes:
        code: Category of the problem
        message: Human-readable description
        node_type: The raw ``type`` value involved, if any

    """

    code: DiagnosticCode
    message: str
    node_type: str | None = None

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


type DiagnosticSink = Callable[[Diagnostic], None]

_collector: ContextVar[list[Diagnostic] | None] = ContextVar(
    "richblok_diagnostics", default=None
)


def emit(diagnostic: Diagnostic, sink: DiagnosticSink | None = None) -> None:
    """Log a diagnostic and hand it to ``sink`` and the active collector."""
    logger.warning("%s", diagnostic)
    if sink is not None:
        sink(diagnostic)
    found = _collector.get()
    if found is not None:
        found.append(diagnostic)


@contextmanager
def collect_diagnostics() -> Iterator[list[Diagnostic]]:
    """Record every diagnostic emitted in the current context.

    Yields the list that fills up while the block runs. Nested blocks
    collect separately; the outer list does not see the inner block's
    diagnostics. Explicit ``on_diagnostic`` sinks still receive theirs.

    """
    found: list[Diagnostic] = []
    token = _collector.set(found)
    try:
        yield found
    finally:
        _collector.reset(token)


__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSink",
    "collect_diagnostics",
    "emit",
    "get_logger",
]
