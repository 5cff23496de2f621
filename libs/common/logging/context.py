"""Render ID generation and context propagation for log correlation.

Every render cycle of a sparkline runs under its own render ID so that all
log records emitted while mapping values, computing dimensions and building
geometry for one render can be grouped together.

Render IDs are short hex strings derived from UUIDv4.

Example:
    >>> from libs.common.logging.context import RenderContext, get_render_id
    >>> with RenderContext("render-1"):
    ...     get_render_id()
    'render-1'
    >>> get_render_id() is None
    True
"""

import contextvars
import uuid
from types import TracebackType

# Context variable for storing the render ID of the render in progress
_render_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "render_id", default=None
)


def generate_render_id() -> str:
    """Generate a new unique render ID.

    Returns:
        A 12 character hex string taken from a UUID v4

    Example:
        >>> len(generate_render_id())
        12
    """
    return uuid.uuid4().hex[:12]


def get_render_id() -> str | None:
    """Get the current render ID from context.

    Returns:
        Current render ID if a render is in progress, None otherwise
    """
    return _render_id_var.get()


def set_render_id(render_id: str) -> None:
    """Set the render ID for the current context.

    Args:
        render_id: The render ID to set

    Raises:
        ValueError: If render_id is empty or None
    """
    if not render_id:
        raise ValueError("Render ID cannot be empty")
    _render_id_var.set(render_id)


def clear_render_id() -> None:
    """Clear the render ID from the current context."""
    _render_id_var.set(None)


class RenderContext:
    """Context manager scoping a render ID to one render cycle.

    The previous render ID (if any) is restored on exit, so nested renders,
    e.g. a chart re-rendered from inside a hover callback, keep their own ID.

    Args:
        render_id: The render ID to use. If None, generates a new ID.

    Example:
        >>> with RenderContext() as render_id:
        ...     get_render_id() == render_id
        True
    """

    def __init__(self, render_id: str | None = None) -> None:
        self.render_id = render_id or generate_render_id()
        self._token: contextvars.Token[str | None] | None = None

    def __enter__(self) -> str:
        self._token = _render_id_var.set(self.render_id)
        return self.render_id

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._token is not None:
            _render_id_var.reset(self._token)
            self._token = None
