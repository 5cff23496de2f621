"""Tests for line chart geometry."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from libs.common.exceptions import ConfigurationError, GeometryError
from libs.sparklines.base import screen_y
from libs.sparklines.dimensions import Dimensions
from libs.sparklines.lines import Lines
from libs.sparklines.settings import LineSettings, resolve_settings
from libs.sparklines.types import Box, Circle, Coordinates, Group, Path, Point

LOGGER = logging.getLogger("tests.sparklines.lines")


@pytest.fixture()
def dims() -> Dimensions:
    return Dimensions(
        margin_x=1.0,
        margin_y=0.0,
        pixel_size=0.5,
        x_step=10.0,
        step_width=8.0,
        box=Box(x=0, y=-20, width=40, height=25),
    )


def _line(**line: Any) -> LineSettings:
    settings = resolve_settings({"line": line}).line
    assert settings is not None
    return settings


def _points(*ys: float | None) -> list[Point]:
    return [Point(x=i + 1, y=y, value=y) for i, y in enumerate(ys)]


def _xy(path: Path) -> list[tuple[float, float | None]]:
    return [(v.x, v.y) for v in path.vertices]


class TestScreenY:
    def test_flips_sign(self) -> None:
        assert screen_y(3.5) == -3.5
        assert screen_y(-2) == 2

    def test_zero_and_missing(self) -> None:
        assert str(screen_y(0.0)) == "0.0"
        assert screen_y(None) is None


class TestOutline:
    def test_step_aligned_vertices(self, dims: Dimensions) -> None:
        lines = Lines(_points(2, 4), dims, _line(), LOGGER)

        path = lines.outline(_points(2, 4))

        assert _xy(path) == [(0, -2), (10, -4)]
        assert path.fill == "none"
        assert path.stroke == "currentColor"
        assert path.stroke_width == pytest.approx(0.5 * 1.67)

    def test_center_aligned_vertices(self, dims: Dimensions) -> None:
        """Lines drawn with bars sit in the middle of the bar slots."""
        lines = Lines(_points(2, 4), dims, _line(), LOGGER)

        path = lines.outline(_points(2, 4), center_align=True)

        assert _xy(path) == [(4, -2), (12, -4)]

    def test_stroke_opacity(self, dims: Dimensions) -> None:
        lines = Lines([], dims, _line(stroke={"opacity": 0.4}, strokeWidth=2), LOGGER)

        path = lines.outline(_points(1))

        assert path.stroke_opacity == 0.4
        assert path.stroke_width == 1.0

    def test_empty_segment_raises(self, dims: Dimensions) -> None:
        lines = Lines([], dims, _line(), LOGGER)

        with pytest.raises(GeometryError, match="without points"):
            lines.outline([])


class TestArea:
    def test_closed_along_zero(self, dims: Dimensions) -> None:
        lines = Lines([], dims, _line(fill={"color": "lightblue", "opacity": 0.3}), LOGGER)

        path = lines.area(_points(2, 4))

        assert _xy(path) == [(0, 0), (0, -2), (10, -4), (10, 0)]
        assert path.fill == "lightblue"
        assert path.fill_opacity == 0.3
        assert path.stroke == "none"

    def test_without_fill_raises(self, dims: Dimensions) -> None:
        lines = Lines([], dims, _line(), LOGGER)

        with pytest.raises(ConfigurationError):
            lines.area(_points(1))


class TestDots:
    def test_one_dot_per_defined_point(self, dims: Dimensions) -> None:
        points = _points(1, None, 3, 0)
        lines = Lines(points, dims, _line(dots={"size": 4}), LOGGER)

        dots = lines.dots()

        assert len(dots) == 3
        assert [(d.center_x, d.center_y) for d in dots] == [(0, -1), (20, -3), (30, 0)]
        assert all(d.radius == 1.0 for d in dots)
        assert [d.value for d in dots] == [1, 3, 0]

    def test_fill_by_sign(self, dims: Dimensions) -> None:
        settings = _line(
            dots={
                "fill": {
                    "color": "grey",
                    "colorForPositiveValues": "green",
                    "colorForNegativeValues": "red",
                }
            }
        )
        lines = Lines(_points(2, 0, -2), dims, settings, LOGGER)

        assert [d.fill for d in lines.dots()] == ["green", "grey", "red"]

    def test_stroke_scaled_by_pixel_size(self, dims: Dimensions) -> None:
        settings = _line(dots={"stroke": {"color": "white"}, "strokeWidth": 2})
        lines = Lines(_points(1), dims, settings, LOGGER)

        (dot,) = lines.dots()

        assert dot.stroke == "white"
        assert dot.stroke_width == 1.0

    def test_without_dots_raises(self, dims: Dimensions) -> None:
        lines = Lines(_points(1), dims, _line(), LOGGER)

        with pytest.raises(ConfigurationError):
            lines.dots()


class TestDraw:
    def test_structure(self, dims: Dimensions) -> None:
        lines = Lines(_points(1, 2), dims, _line(dots={}), LOGGER)

        group = lines.draw()

        assert group.transform is not None
        assert group.transform.translate == Coordinates(1.0, 0.0)
        lines_group, dots_group = group.children
        assert isinstance(lines_group, Group) and lines_group.name == "lines"
        assert isinstance(dots_group, Group) and dots_group.name == "dots"
        assert all(isinstance(c, Circle) for c in dots_group.children)

    def test_no_dots_group_without_dots(self, dims: Dimensions) -> None:
        group = Lines(_points(1, 2), dims, _line(), LOGGER).draw()

        assert len(group.children) == 1

    def test_segment_colors_and_area_order(self, dims: Dimensions) -> None:
        """Each segment gets its area first, then its outline, colored by sign."""
        settings = _line(
            stroke={"colorForPositiveValues": "green", "colorForNegativeValues": "red"},
            fill={"colorForPositiveValues": "lightgreen", "colorForNegativeValues": "pink"},
        )
        group = Lines(_points(10, -10), dims, settings, LOGGER).draw()

        paths = group.children[0].children  # type: ignore[union-attr]
        assert [(p.fill, p.stroke) for p in paths] == [  # type: ignore[union-attr]
            ("lightgreen", "none"),
            ("none", "green"),
            ("pink", "none"),
            ("none", "red"),
        ]

    def test_gap_splits_outline(self, dims: Dimensions) -> None:
        group = Lines(_points(1, 2, None, 3), dims, _line(), LOGGER).draw()

        assert len(group.children[0].children) == 2  # type: ignore[union-attr]

    def test_clutter_warning(self, dims: Dimensions, caplog: pytest.LogCaptureFixture) -> None:
        cluttered = Dimensions(
            margin_x=0.1, margin_y=0, pixel_size=0.1, x_step=0.6, step_width=0.5, box=dims.box
        )

        with caplog.at_level(logging.WARNING, logger=LOGGER.name):
            Lines(_points(1, 2), cluttered, _line(), LOGGER).draw()

        assert "cluttered" in caplog.text

    def test_no_warning_with_room(self, dims: Dimensions, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger=LOGGER.name):
            Lines(_points(1, 2), dims, _line(), LOGGER).draw()

        assert caplog.records == []
