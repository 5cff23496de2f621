"""Tests for SVG markup of drawing primitives."""

from __future__ import annotations

import math

import pytest

from libs.common.exceptions import GeometryError
from libs.sparklines.svg.renderer import (
    circle_path,
    fmt,
    path_data,
    rectangle_path,
    render_circle,
    render_group,
    render_line_segment,
    render_path,
    render_primitive,
    render_rectangle,
    render_svg,
    transform_str,
)
from libs.sparklines.types import (
    Box,
    Circle,
    Coordinates,
    Group,
    LineSegment,
    Path,
    PathVertex,
    Rectangle,
    Transform,
    translate,
)


class TestFmt:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1.0, "1"), (0.25, "0.25"), (-3.5, "-3.5"), (1 / 3, "0.333333"), (-0.0, "0"), (1e-9, "0")],
    )
    def test_compact(self, value: float, expected: str) -> None:
        assert fmt(value) == expected

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_non_finite_raises(self, value: float) -> None:
        with pytest.raises(GeometryError):
            fmt(value)


class TestShapes:
    def test_rectangle_path(self) -> None:
        assert rectangle_path(1, -4, 2, 4) == "M 1 -4 l 2 0 l 0 4 l -2 0 l 0 -4"

    def test_flat_rectangle_gets_minimum_height(self) -> None:
        assert rectangle_path(0, 0, 2, 0) == "M 0 0 l 2 0 l 0 1 l -2 0 l 0 -1"

    def test_circle_path(self) -> None:
        assert circle_path(5, -2, 1.5) == (
            "M 5 -2 m 1.5, 0 a 1.5,1.5 0 1,0 -3,0 a 1.5,1.5 0 1,0 3,0"
        )

    def test_render_rectangle(self) -> None:
        markup = render_rectangle(
            Rectangle(x=0, y=-3, width=2, height=3, fill="red", fill_opacity=0.5, value=3, x_label="Q1")
        )

        assert markup.startswith("<path ")
        assert 'data-value="3"' in markup
        assert 'data-x-label="Q1"' in markup
        assert 'fill="red"' in markup
        assert 'fill-opacity="0.5"' in markup
        assert 'shape-rendering="crispEdges"' in markup
        assert "stroke" not in markup

    def test_render_circle_without_stroke(self) -> None:
        markup = render_circle(Circle(center_x=1, center_y=-1, radius=2, fill="blue"))

        assert markup.count("<path") == 1
        assert 'fill="blue"' in markup
        assert 'data-value="none"' in markup

    def test_stroked_circle_is_two_discs(self) -> None:
        markup = render_circle(
            Circle(center_x=0, center_y=0, radius=2, fill="white", stroke="black", stroke_width=0.5)
        )

        assert markup.startswith("<g>")
        assert markup.count("<path") == 2
        assert 'data-radius="2" ' in markup
        assert 'data-radius="1.5"' in markup
        assert markup.index('fill="black"') < markup.index('fill="white"')

    def test_line_segment_is_dashed(self) -> None:
        markup = render_line_segment(LineSegment(x1=0, y1=0, x2=0, y2=-5, stroke="grey", stroke_width=0.2))

        assert 'd="M 0 0 L 0 -5"' in markup
        assert 'stroke-dasharray="2"' in markup


class TestPaths:
    def test_first_vertex_moves(self) -> None:
        path = Path(vertices=[PathVertex(0, -1), PathVertex(2, -3)], fill="none", stroke="red")

        assert path_data(path) == "M 0 -1 L 2 -3"

    def test_vertices_without_y_skipped(self) -> None:
        path = Path(
            vertices=[PathVertex(0, None), PathVertex(1, -2), PathVertex(2, None), PathVertex(3, 0)],
            fill="none",
        )

        assert path_data(path) == "M 1 -2 L 3 0"

    def test_render_path_attributes(self) -> None:
        path = Path(
            vertices=[PathVertex(0, 0), PathVertex(1, -1)],
            fill="none",
            stroke="green",
            stroke_width=0.4,
            stroke_opacity=0.9,
        )

        markup = render_path(path)

        assert 'stroke="green"' in markup
        assert 'stroke-width="0.4"' in markup
        assert 'stroke-opacity="0.9"' in markup

    def test_fill_path_has_no_stroke_width(self) -> None:
        markup = render_path(Path(vertices=[PathVertex(0, 0)], fill="pink", stroke=None))

        assert "stroke" not in markup

    def test_empty_path_raises(self) -> None:
        with pytest.raises(GeometryError, match="without points"):
            render_path(Path(vertices=[], fill="none"))


class TestGroups:
    def test_transform_str(self) -> None:
        assert transform_str(None) is None
        assert transform_str(translate(1.5, 0)) == "translate(1.5 0)"
        assert (
            transform_str(Transform(translate=Coordinates(1, 2), scale=Coordinates(2, 2)))
            == "translate(1 2) scale(2 2)"
        )

    def test_plain_group(self) -> None:
        assert render_group(Group()) == "<g></g>"

    def test_named_translated_group(self) -> None:
        markup = render_group(Group(transform=translate(2, 0), name="lines"))

        assert 'transform="translate(2 0)"' in markup
        assert 'transform-origin="center"' in markup
        assert 'class="sparkline-lines"' in markup

    def test_hidden_group(self) -> None:
        markup = render_group(Group(visible=False, name="hover-marker"))

        assert 'style="visibility: hidden"' in markup

    def test_nested_children(self) -> None:
        inner = Group(children=[Rectangle(x=0, y=0, width=1, height=1, fill="red")])

        markup = render_primitive(Group(children=[inner]))

        assert markup.startswith("<g><g><path ")
        assert markup.endswith("</g></g>")

    def test_unknown_primitive_raises(self) -> None:
        with pytest.raises(TypeError):
            render_primitive("circle")  # type: ignore[arg-type]


class TestRenderSvg:
    def test_svg_element(self) -> None:
        markup = render_svg(Box(0, -11.1, 24.4, 12.2), [Group(name="bars")], 100, 50)

        assert markup.startswith('<svg xmlns="http://www.w3.org/2000/svg" version="1.1"')
        assert 'class="sparkline"' in markup
        assert 'width="100"' in markup
        assert 'height="50"' in markup
        assert 'viewBox="0 -11.1 24.4 12.2"' in markup
        assert markup.endswith('<g class="sparkline-bars"></g></svg>')

    def test_without_size(self) -> None:
        markup = render_svg(Box(0, -1, 2, 2), [])

        assert "width" not in markup
        assert markup.endswith("></svg>")
