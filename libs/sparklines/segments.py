"""Splitting of a point series into single-color segments.

Lines above zero and below zero are drawn in different colors, and a missing
value interrupts the line. Both need the series split into segments: at every
gap, and at every zero crossing where an interpolated point on the zero line
ends one segment and starts the next.
"""

from __future__ import annotations

from collections.abc import Sequence

from libs.common.exceptions import GeometryError
from libs.sparklines.types import Point

Segment = list[Point]


def _crosses_zero(previous: float, current: float) -> bool:
    return (previous > 0 and current <= 0) or (previous < 0 and current > 0)


def zero_crossing_x(previous: Point, current: Point) -> float:
    """X where the straight line between two points crosses y = 0.

    Example:
        >>> zero_crossing_x(Point(x=1, y=10), Point(x=2, y=-10))
        1.5
    """
    if previous.y is None or current.y is None:
        raise GeometryError("Zero crossing needs two points with a value")
    x_delta = abs(previous.y) * (current.x - previous.x) / abs(previous.y - current.y)
    return previous.x + x_delta


def segment_points(points: Sequence[Point]) -> list[Segment]:
    """Split points into segments at gaps and zero crossings.

    Returns:
        Non-empty segments in series order
    """
    current: Segment = []
    segments: list[Segment] = [current]
    previous: Point | None = None
    for point in points:
        if point.y is None:
            current = []
            segments.append(current)
        elif previous is not None and previous.y is not None and _crosses_zero(previous.y, point.y):
            zero_point = Point(x=zero_crossing_x(previous, point), y=0.0)
            current.append(zero_point)
            current = [zero_point, point]
            segments.append(current)
        else:
            current.append(point)
        previous = point
    return [segment for segment in segments if segment]


def segment_is_negative(segment: Segment) -> bool:
    return any(p.y is not None and p.y < 0 for p in segment)


def close_segment(segment: Segment) -> Segment:
    """Add zero height points at both ends so the area can be filled.

    The closing points make a path-close operator unnecessary.
    """
    if not segment:
        return []
    return [Point(x=segment[0].x, y=0.0), *segment, Point(x=segment[-1].x, y=0.0)]
