"""Points and abstract drawing primitives.

Geometry builders only produce these dataclasses; turning them into SVG
markup is the drawing surface's job (see libs/sparklines/svg).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Point:
    """One entry of the value series.

    Attributes:
        x: 1-based position in the series
        x_label: Label of a labeled value
        y: Plotted value after win/loss collapsing and rescaling, None for a gap
        value: Resolved input value, reported on hover
    """

    x: float
    x_label: str | None = None
    y: float | None = None
    value: float | None = None


@dataclass(frozen=True)
class MarkerIndex:
    """Closed horizontal hit zone of a point, in viewport units."""

    x_from: float
    x_to: float
    x_coord_marker: float

    def contains(self, x: float) -> bool:
        return self.x_from <= x <= self.x_to


@dataclass(frozen=True)
class IndexedPoint:
    point: Point
    marker_index: MarkerIndex

    @property
    def x(self) -> float:
        return self.point.x

    @property
    def y(self) -> float | None:
        return self.point.y

    @property
    def value(self) -> float | None:
        return self.point.value

    @property
    def x_label(self) -> str | None:
        return self.point.x_label


@dataclass(frozen=True)
class Coordinates:
    x: float
    y: float


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Transform:
    translate: Coordinates | None = None
    scale: Coordinates | None = None


@dataclass(frozen=True)
class ClientRect:
    """On-screen bounding box of the drawing surface, in client pixels."""

    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class PointerEvent:
    client_x: float
    client_y: float = 0.0


@dataclass(frozen=True)
class PathVertex:
    """Path vertex; a vertex without y is skipped when drawing."""

    x: float
    y: float | None


@dataclass
class Rectangle:
    x: float
    y: float
    width: float
    height: float
    fill: str
    fill_opacity: float | None = None
    stroke: str | None = None
    stroke_opacity: float | None = None
    stroke_width: float | None = None
    value: float | None = None
    x_label: str | None = None


@dataclass
class Circle:
    center_x: float
    center_y: float
    radius: float
    fill: str
    fill_opacity: float | None = None
    stroke: str | None = None
    stroke_width: float | None = None
    value: float | None = None
    x_label: str | None = None


@dataclass
class Path:
    vertices: list[PathVertex]
    fill: str
    fill_opacity: float | None = None
    stroke: str | None = None
    stroke_opacity: float | None = None
    stroke_width: float | None = None


@dataclass
class LineSegment:
    """Straight dashed line, used for crosshairs."""

    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: float


@dataclass
class Group:
    """Container primitive.

    Groups are the only primitives mutated after construction: hover markers
    move and hide their group between pointer events.
    """

    children: list[Primitive] = field(default_factory=list)
    transform: Transform | None = None
    visible: bool = True
    name: str | None = None

    def append(self, child: Primitive) -> None:
        self.children.append(child)


Primitive = Union[Group, Rectangle, Circle, Path, LineSegment]


def translate(x: float, y: float) -> Transform:
    return Transform(translate=Coordinates(x, y))
