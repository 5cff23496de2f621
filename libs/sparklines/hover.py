"""Hover hit-testing and hover markers.

Each point gets a horizontal hit zone. Pointer positions are translated from
client coordinates to viewport units and looked up in the zones; the matching
point moves the hover markers and is reported to the hover callback.

Hover markers are separate overlay primitives rather than restyled dots or
bars, so they can e.g. shade a whole slot.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from libs.sparklines.base import screen_y
from libs.sparklines.dimensions import Dimensions
from libs.sparklines.settings import BarsHoverSettings, HoverCallback, LineHoverSettings
from libs.sparklines.types import (
    Circle,
    ClientRect,
    Group,
    IndexedPoint,
    LineSegment,
    MarkerIndex,
    Point,
    PointerEvent,
    Rectangle,
    translate,
)


def marker_index(x: float, zone_width: float, has_lines: bool, has_bars: bool) -> MarkerIndex:
    """Hit zone of the point at position ``x``.

    - bars only: the full slot, starting at the slot's left edge
    - lines only: half a step on both sides of the point
    - bars and lines: half a slot on both sides of the slot center
    """
    half = zone_width / 2
    if has_bars and has_lines:
        center = (x - 1) * zone_width + half
        return MarkerIndex(x_from=center - half, x_to=center + half, x_coord_marker=center)
    if has_bars:
        left = (x - 1) * zone_width
        return MarkerIndex(x_from=left, x_to=left + zone_width, x_coord_marker=left)
    center = (x - 1) * zone_width
    return MarkerIndex(x_from=center - half, x_to=center + half, x_coord_marker=center)


def build_point_index(
    points: Sequence[Point], dimensions: Dimensions, has_lines: bool, has_bars: bool
) -> list[IndexedPoint]:
    """Index points by hit zone, ordered by descending x.

    Zones are closed and neighbours share a boundary; with descending order
    the later point wins a pointer exactly on the boundary.
    """
    zone_width = dimensions.step_width if has_bars else dimensions.x_step
    indexed = [
        IndexedPoint(point=p, marker_index=marker_index(p.x, zone_width, has_lines, has_bars))
        for p in points
    ]
    return sorted(indexed, key=lambda p: p.x, reverse=True)


def find_point(index: Sequence[IndexedPoint], x: float) -> IndexedPoint | None:
    for point in index:
        if point.marker_index.contains(x):
            return point
    return None


def client_to_viewport_x(client_x: float, rect: ClientRect, dimensions: Dimensions) -> float:
    """Translate a client x coordinate to the plot's viewport x.

    The result is relative to the plot origin, i.e. after the horizontal
    margin the chart layers are translated by.
    """
    scale = dimensions.box.width / rect.width
    # chart layers are drawn shifted right by margin_x, hit zones are not
    return (client_x - rect.left) * scale + dimensions.box.x - dimensions.margin_x


class HoverMarker(ABC):
    """Overlay group that is moved to and shown at the hovered point."""

    def __init__(self, dimensions: Dimensions) -> None:
        self.dimensions = dimensions
        self.marker = Group(name="hover-marker", visible=False)
        self.container = Group(
            children=[self.marker],
            transform=translate(dimensions.margin_x, dimensions.margin_y),
            name="hover",
        )

    @property
    def visible(self) -> bool:
        return self.marker.visible

    def show(self) -> None:
        self.marker.visible = True

    def hide(self) -> None:
        self.marker.visible = False

    def _move_to(self, x: float) -> None:
        self.marker.transform = translate(x, 0)

    @abstractmethod
    def set_at_point(self, point: IndexedPoint) -> None:
        """Move the marker to the point (a point without y leaves it in place)."""


class LineHoverMarker(HoverMarker):
    """Hover dot and crosshair for line charts."""

    def __init__(self, settings: LineHoverSettings, dimensions: Dimensions) -> None:
        super().__init__(dimensions)
        self.settings = settings
        self.crosshair: LineSegment | None = None
        self.dot: Group | None = None
        if settings.dot is not None:
            dot = settings.dot
            pixel_size = dimensions.pixel_size
            circle = Circle(
                center_x=0,
                center_y=0,
                radius=dot.size * pixel_size / 2,
                fill=dot.fill.color or "transparent",
                fill_opacity=dot.fill.opacity,
                stroke=dot.stroke.color if dot.stroke is not None else None,
                stroke_width=dot.stroke_width * pixel_size if dot.stroke_width is not None else None,
            )
            self.dot = Group(children=[circle], name="hover-dot")
            self.marker.append(self.dot)
        if settings.crosshair is not None:
            box = dimensions.box
            # drawn before the dot so the dot stays on top
            self.crosshair = LineSegment(
                x1=0,
                y1=box.y,
                x2=0,
                y2=box.y + box.height,
                stroke=settings.crosshair.color,
                stroke_width=dimensions.pixel_size,
            )
            self.marker.children.insert(0, self.crosshair)

    def set_at_point(self, point: IndexedPoint) -> None:
        if point.y is None:
            return
        if self.dot is not None:
            self.dot.transform = translate(0, screen_y(point.y) or 0.0)
        self._move_to(point.marker_index.x_coord_marker)


class BarHoverMarker(HoverMarker):
    """Hover overlay rectangle for bar charts, spanning the point's hit zone."""

    def __init__(self, settings: BarsHoverSettings, dimensions: Dimensions) -> None:
        super().__init__(dimensions)
        self.settings = settings
        self.rectangle: Rectangle | None = None
        if settings.fill is not None:
            self.rectangle = Rectangle(
                x=0,
                y=0,
                width=dimensions.step_width,
                height=0,
                fill=settings.fill.color,
                fill_opacity=settings.fill.opacity,
            )
            self.marker.append(self.rectangle)

    def set_at_point(self, point: IndexedPoint) -> None:
        if point.y is None:
            return
        zone = point.marker_index
        if self.rectangle is not None:
            coord_y = screen_y(point.y) or 0.0
            self.rectangle.x = zone.x_from - zone.x_coord_marker
            self.rectangle.y = 0.0 if point.y < 0 else coord_y
            self.rectangle.width = zone.x_to - zone.x_from
            self.rectangle.height = abs(point.y)
        self._move_to(zone.x_coord_marker)


class HoverController:
    """Pointer event handling for one render.

    Handlers only touch marker position/visibility and call the hover
    callback, so repeated events are idempotent.
    """

    def __init__(
        self,
        index: Sequence[IndexedPoint],
        dimensions: Dimensions,
        markers: Sequence[HoverMarker] = (),
        on_hover: HoverCallback | None = None,
    ) -> None:
        self.index = list(index)
        self.dimensions = dimensions
        self.markers = list(markers)
        self.on_hover = on_hover

    def point_at(self, client_x: float, rect: ClientRect) -> IndexedPoint | None:
        if rect.width <= 0:
            return None
        return find_point(self.index, client_to_viewport_x(client_x, rect, self.dimensions))

    def move(self, event: PointerEvent, rect: ClientRect) -> IndexedPoint | None:
        point = self.point_at(event.client_x, rect)
        if point is None or point.y is None:
            self.leave()
            return None
        for marker in self.markers:
            marker.set_at_point(point)
            marker.show()
        if self.on_hover is not None:
            self.on_hover(point.value, point.x_label)
        return point

    def leave(self) -> None:
        for marker in self.markers:
            marker.hide()
