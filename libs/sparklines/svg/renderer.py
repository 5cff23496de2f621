"""SVG markup for abstract drawing primitives.

Rectangles and circles are emitted as ``<path>`` elements: a path gives the
same rendering in every browser for sub-pixel sizes and lets a stroked circle
behave like a border-box (outer disc in the stroke color, inner disc in the
fill color).
"""

from __future__ import annotations

import math
from html import escape

from libs.common.exceptions import GeometryError
from libs.sparklines.types import (
    Box,
    Circle,
    Group,
    LineSegment,
    Path,
    Primitive,
    Rectangle,
    Transform,
)

XMLNS = "http://www.w3.org/2000/svg"

# Paths lower than this are not always drawn visibly by Firefox
MIN_RENDER_HEIGHT = 1


def fmt(value: float) -> str:
    """Format a coordinate compactly, without exponent or negative zero."""
    if not math.isfinite(value):
        raise GeometryError(f"Cannot render non-finite coordinate {value}")
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _attrs(**attributes: object) -> str:
    parts = []
    for name, value in attributes.items():
        if value is None:
            continue
        if isinstance(value, float):
            value = fmt(value)
        parts.append(f'{name.rstrip("_").replace("_", "-")}="{escape(str(value), quote=True)}"')
    return " ".join(parts)


def _data_attrs(value: float | None, x_label: str | None) -> dict[str, object]:
    attrs: dict[str, object] = {"data_value": fmt(value) if value is not None else "none"}
    if x_label is not None:
        attrs["data_x_label"] = x_label
    return attrs


def transform_str(transform: Transform | None) -> str | None:
    if transform is None:
        return None
    parts = []
    if transform.translate is not None:
        parts.append(f"translate({fmt(transform.translate.x)} {fmt(transform.translate.y)})")
    if transform.scale is not None:
        parts.append(f"scale({fmt(transform.scale.x)} {fmt(transform.scale.y)})")
    return " ".join(parts) or None


def rectangle_path(x: float, y: float, width: float, height: float) -> str:
    render_height = max(height, MIN_RENDER_HEIGHT)
    return (
        f"M {fmt(x)} {fmt(y)} l {fmt(width)} 0 l 0 {fmt(render_height)} "
        f"l {fmt(-width)} 0 l 0 {fmt(-render_height)}"
    )


def circle_path(center_x: float, center_y: float, radius: float) -> str:
    r = fmt(radius)
    return (
        f"M {fmt(center_x)} {fmt(center_y)} m {r}, 0 "
        f"a {r},{r} 0 1,0 {fmt(-radius * 2)},0 "
        f"a {r},{r} 0 1,0 {fmt(radius * 2)},0"
    )


def render_rectangle(rect: Rectangle) -> str:
    attrs = _attrs(
        **_data_attrs(rect.value, rect.x_label),
        data_y=fmt(rect.y),
        d=rectangle_path(rect.x, rect.y, rect.width, rect.height),
        fill=rect.fill,
        fill_opacity=rect.fill_opacity,
        stroke=rect.stroke,
        stroke_opacity=rect.stroke_opacity if rect.stroke else None,
        stroke_width=rect.stroke_width if rect.stroke else None,
        # prevents hairline gaps between adjacent bars in Chrome
        shape_rendering="crispEdges",
    )
    return f"<path {attrs} />"


def _disc(circle: Circle, radius: float, fill: str) -> str:
    attrs = _attrs(
        **_data_attrs(circle.value, circle.x_label),
        data_x=fmt(circle.center_x),
        data_y=fmt(circle.center_y),
        data_radius=fmt(radius),
        d=circle_path(circle.center_x, circle.center_y, radius),
        fill=fill,
        fill_opacity=circle.fill_opacity,
    )
    return f"<path {attrs} />"


def render_circle(circle: Circle) -> str:
    if circle.stroke is not None and circle.stroke_width is not None:
        outer = _disc(circle, circle.radius, circle.stroke)
        inner = _disc(circle, max(circle.radius - circle.stroke_width, 0), circle.fill)
        return f"<g>{outer}{inner}</g>"
    return _disc(circle, circle.radius, circle.fill)


def path_data(path: Path) -> str:
    """``d`` attribute of a line path; vertices without y are skipped."""
    commands = []
    for vertex in path.vertices:
        if vertex.y is None:
            continue
        command = "L" if commands else "M"
        commands.append(f"{command} {fmt(vertex.x)} {fmt(vertex.y)}")
    return " ".join(commands)


def render_path(path: Path) -> str:
    if not path.vertices:
        raise GeometryError("Cannot create a path for lines without points")
    attrs = _attrs(
        d=path_data(path),
        fill=path.fill,
        fill_opacity=path.fill_opacity,
        stroke=path.stroke,
        stroke_opacity=path.stroke_opacity if path.stroke else None,
        stroke_width=path.stroke_width if path.stroke else None,
    )
    return f"<path {attrs} />"


def render_line_segment(line: LineSegment) -> str:
    attrs = _attrs(
        d=f"M {fmt(line.x1)} {fmt(line.y1)} L {fmt(line.x2)} {fmt(line.y2)}",
        stroke=line.stroke,
        stroke_width=line.stroke_width,
        stroke_dasharray="2",
    )
    return f"<path {attrs} />"


def render_group(group: Group) -> str:
    transform = transform_str(group.transform)
    attrs = _attrs(
        transform=transform,
        transform_origin="center" if transform else None,
        class_=f"sparkline-{group.name}" if group.name else None,
        style=None if group.visible else "visibility: hidden",
    )
    children = "".join(render_primitive(child) for child in group.children)
    return f"<g {attrs}>{children}</g>" if attrs else f"<g>{children}</g>"


def render_primitive(primitive: Primitive) -> str:
    if isinstance(primitive, Group):
        return render_group(primitive)
    if isinstance(primitive, Rectangle):
        return render_rectangle(primitive)
    if isinstance(primitive, Circle):
        return render_circle(primitive)
    if isinstance(primitive, Path):
        return render_path(primitive)
    if isinstance(primitive, LineSegment):
        return render_line_segment(primitive)
    raise TypeError(f"Unsupported primitive {type(primitive).__name__}")


def render_svg(
    view_box: Box,
    layers: list[Group],
    width: float | None = None,
    height: float | None = None,
) -> str:
    """Render a complete ``<svg>`` element."""
    attrs = _attrs(
        xmlns=XMLNS,
        version="1.1",
        class_="sparkline",
        width=fmt(width) if width is not None else None,
        height=fmt(height) if height is not None else None,
        viewBox=(
            f"{fmt(view_box.x)} {fmt(view_box.y)} {fmt(view_box.width)} {fmt(view_box.height)}"
        ),
    )
    body = "".join(render_group(layer) for layer in layers)
    return f"<svg {attrs}>{body}</svg>"
