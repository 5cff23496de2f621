"""Drawing surface contract and the SVG implementation.

The chart orchestrator only talks to a DrawingSurface: it mounts layers of
primitives, shows an error placeholder, subscribes to pointer events and asks
for the on-screen bounding box. SvgSurface keeps the mounted primitives and
serializes them on demand, so hover markers moved by pointer events show up
in the next ``to_svg()`` call.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from html import escape
from typing import Protocol

from libs.sparklines.svg.renderer import render_svg
from libs.sparklines.types import Box, ClientRect, Group, PointerEvent

PointerHandler = Callable[[PointerEvent], None]

POINTER_EVENTS = frozenset({"mouseover", "mousemove", "mouseout"})


class DrawingSurface(Protocol):
    @property
    def has_content(self) -> bool: ...

    def clear(self) -> None: ...

    def mount(
        self, view_box: Box, layers: list[Group], width: float, height: float
    ) -> None: ...

    def show_error(self, message: str) -> None: ...

    def subscribe(self, event: str, handler: PointerHandler) -> None: ...

    def bounding_box(self) -> ClientRect: ...


class SvgSurface:
    """In-memory SVG drawing surface.

    Attributes:
        element_id: Id set on the wrapping element
        client_rect: On-screen box reported to pointer handling; defaults to
            the mounted pixel size at the origin
    """

    def __init__(self, element_id: str | None = None, client_rect: ClientRect | None = None) -> None:
        self.element_id = element_id
        self.client_rect = client_rect
        self.view_box: Box | None = None
        self.layers: list[Group] = []
        self.error: str | None = None
        self._size: tuple[float, float] | None = None
        self._handlers: dict[str, list[PointerHandler]] = defaultdict(list)

    @property
    def has_content(self) -> bool:
        return self.view_box is not None or self.error is not None

    def clear(self) -> None:
        self.view_box = None
        self.layers = []
        self.error = None
        self._size = None
        self._handlers.clear()

    def mount(self, view_box: Box, layers: list[Group], width: float, height: float) -> None:
        self.view_box = view_box
        self.layers = list(layers)
        self._size = (width, height)

    def show_error(self, message: str) -> None:
        self.clear()
        self.error = message

    def subscribe(self, event: str, handler: PointerHandler) -> None:
        if event not in POINTER_EVENTS:
            raise ValueError(f"Unsupported pointer event: {event}")
        self._handlers[event].append(handler)

    def dispatch(self, event: str, pointer: PointerEvent | None = None) -> None:
        """Deliver a pointer event to the subscribed handlers."""
        pointer = pointer or PointerEvent(client_x=0.0)
        for handler in list(self._handlers.get(event, ())):
            handler(pointer)

    def bounding_box(self) -> ClientRect:
        if self.client_rect is not None:
            return self.client_rect
        width, height = self._size or (0.0, 0.0)
        return ClientRect(left=0.0, top=0.0, width=width, height=height)

    def to_svg(self) -> str:
        """Markup of the current content: the chart, the error placeholder or ''."""
        id_attr = f' id="{escape(self.element_id, quote=True)}"' if self.element_id else ""
        if self.error is not None:
            return (
                f'<div{id_attr} class="sparkline-error" '
                'style="color: red; font-size: smaller; font-weight: bold">'
                f"{escape(self.error)}</div>"
            )
        if self.view_box is None:
            return ""
        width, height = self._size or (None, None)
        svg = render_svg(self.view_box, self.layers, width, height)
        return f"<div{id_attr}>{svg}</div>" if id_attr else svg
