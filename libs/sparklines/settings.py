"""
Sparkline settings models.

Two layers of Pydantic models live here:

- ``*Props`` models describe what a caller may pass: every field optional,
  camelCase or snake_case keys accepted, unknown keys ignored.
- ``*Settings`` models are the fully resolved, validated and frozen
  configuration the geometry builders consume.

``SparklineSettings`` owns the current resolved snapshot. Construction fills
in defaults (see config/settings.py) and validates; ``update`` merges a
partial props object into a copy of the snapshot, validates the copy and only
then swaps it in, so an invalid update never leaves a half-applied
configuration behind.

Example:
    >>> settings = SparklineSettings({"width": 100, "height": 50, "bars": {"isWinLoss": True}})
    >>> settings.bars.is_win_loss
    True
    >>> settings.line is None
    True
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from config.settings import get_settings
from libs.common.exceptions import ConfigurationError

ShowUndefinedValuesAs = Literal["missing", "unchanged"]
HoverCallback = Callable[[float | None, str | None], Any]

_PROPS_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)
_SETTINGS_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="forbid",
    frozen=True,
)


# =============================================================================
# Props - partial user input
# =============================================================================


class ColorProps(BaseModel):
    model_config = _PROPS_CONFIG

    color: str | None = None
    color_for_positive_values: str | None = None
    color_for_negative_values: str | None = None
    opacity: float | None = None


class DotsProps(BaseModel):
    model_config = _PROPS_CONFIG

    stroke: ColorProps | None = None
    stroke_width: float | None = None
    size: float | None = None
    fill: ColorProps | None = None


class LineHoverProps(BaseModel):
    model_config = _PROPS_CONFIG

    dot: DotsProps | None = None
    crosshair: ColorProps | None = None


class LineProps(BaseModel):
    model_config = _PROPS_CONFIG

    stroke_width: float | None = None
    stroke: ColorProps | None = None
    fill: ColorProps | None = None
    dots: DotsProps | None = None
    hover: LineHoverProps | None = None


class BarsHoverProps(BaseModel):
    model_config = _PROPS_CONFIG

    fill: ColorProps | None = None


class BarsProps(BaseModel):
    model_config = _PROPS_CONFIG

    is_win_loss: bool | None = None
    margin_percentage: float | None = None
    fill: ColorProps | None = None
    hover: BarsHoverProps | None = None


class SparklinesProps(BaseModel):
    """Partial sparkline configuration as supplied by a caller.

    Width and height are the rendered size in pixels. The container the chart
    is placed in (padding etc.) is not taken into account.
    """

    model_config = _PROPS_CONFIG

    width: float | None = None
    height: float | None = None
    show_undefined_values_as: str | None = None
    on_hover_fn: HoverCallback | None = None
    line: LineProps | None = None
    bars: BarsProps | None = None


# =============================================================================
# Resolved settings
# =============================================================================


class ColorSettings(BaseModel):
    """Resolved color settings.

    Attributes:
        color: Base color, used when a sign specific color is not set
        color_for_positive_values: Color for positive values
        color_for_negative_values: Color for negative values
        opacity: Opacity in (0, 1]; None leaves it to the renderer
    """

    model_config = _SETTINGS_CONFIG

    color: str
    color_for_positive_values: str | None = None
    color_for_negative_values: str | None = None
    opacity: float | None = Field(default=None, gt=0, le=1)

    @property
    def positive_color(self) -> str:
        return self.color_for_positive_values or self.color

    @property
    def negative_color(self) -> str:
        return self.color_for_negative_values or self.color


class DotsSettings(BaseModel):
    """Resolved dot (point marker) settings; sizes are in pixels."""

    model_config = _SETTINGS_CONFIG

    stroke: ColorSettings | None = None
    stroke_width: float | None = Field(default=None, gt=0)
    size: float = Field(gt=0)
    fill: ColorSettings

    @model_validator(mode="after")
    def validate_stroke_pair(self) -> DotsSettings:
        if (self.stroke is None) != (self.stroke_width is None):
            raise ValueError("Dots stroke and stroke width must either be both filled or both empty")
        return self


class LineHoverSettings(BaseModel):
    """Resolved line hover settings.

    Attributes:
        dot: Dot drawn at the hovered point
        crosshair: Color of a dashed vertical line through the hovered point
    """

    model_config = _SETTINGS_CONFIG

    dot: DotsSettings | None = None
    crosshair: ColorSettings | None = None


class LineSettings(BaseModel):
    model_config = _SETTINGS_CONFIG

    stroke: ColorSettings
    stroke_width: float = Field(gt=0)
    fill: ColorSettings | None = None
    dots: DotsSettings | None = None
    hover: LineHoverSettings | None = None


class BarsHoverSettings(BaseModel):
    model_config = _SETTINGS_CONFIG

    fill: ColorSettings | None = None


class BarsSettings(BaseModel):
    """Resolved bar settings.

    Attributes:
        is_win_loss: Collapse values to +1/-1 by sign
        margin_percentage: Inset of a bar within its slot, as a percentage of
            the slot width split over both sides; None for no inset
        fill: Bar fill colors
        hover: Hover overlay settings
    """

    model_config = _SETTINGS_CONFIG

    is_win_loss: bool = False
    margin_percentage: float | None = Field(default=None, gt=0, le=100)
    fill: ColorSettings
    hover: BarsHoverSettings | None = None


class ResolvedSettings(BaseModel):
    """Fully resolved sparkline configuration.

    Invariants:
        - at least one of line/bars is present
        - a win/loss bar chart is never combined with a line
    """

    model_config = _SETTINGS_CONFIG

    width: float = Field(ge=1)
    height: float = Field(ge=1)
    show_undefined_values_as: ShowUndefinedValuesAs = "missing"
    on_hover_fn: HoverCallback | None = None
    line: LineSettings | None = None
    bars: BarsSettings | None = None

    @field_validator("width", "height")
    @classmethod
    def validate_max_dimension(cls, v: float) -> float:
        max_dimension = get_settings().max_dimension
        if v > max_dimension:
            raise ValueError(f"must be <= {max_dimension:g}")
        return v

    @model_validator(mode="after")
    def validate_chart_kind(self) -> ResolvedSettings:
        if self.line is None and self.bars is None:
            raise ValueError("Settings must contain at least line or bars")
        if self.line is not None and self.bars is not None and self.bars.is_win_loss:
            raise ValueError("Win/loss chart may not be combined with lines")
        return self

    @property
    def dot_size(self) -> float | None:
        if self.line is None or self.line.dots is None:
            return None
        return self.line.dots.size

    @property
    def marker_size(self) -> float | None:
        """Largest marker that may overflow the plot area: hover dot, else dot."""
        if self.line is not None and self.line.hover is not None and self.line.hover.dot is not None:
            return self.line.hover.dot.size
        return self.dot_size


# =============================================================================
# Resolution
# =============================================================================


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        message = detail["msg"].removeprefix("Value error, ")
        parts.append(f"settings.{location}: {message}" if location else message)
    return "Invalid sparkline settings: " + "; ".join(parts)


def _validate(data: dict[str, Any]) -> ResolvedSettings:
    try:
        return ResolvedSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(_format_validation_error(e)) from e


def parse_props(props: SparklinesProps | Mapping[str, Any] | str | None) -> SparklinesProps:
    """Parse caller supplied settings into a SparklinesProps.

    Raises:
        ConfigurationError: If the JSON text is malformed or the payload is
            not an object of recognized shape
    """
    if props is None:
        return SparklinesProps()
    if isinstance(props, SparklinesProps):
        return props
    if isinstance(props, (str, bytes)):
        try:
            props = json.loads(props)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                "Supplied sparkline settings are not a valid JSON object"
            ) from e
    if not isinstance(props, Mapping):
        raise ConfigurationError("Settings must be an object")
    try:
        return SparklinesProps.model_validate(props)
    except ValidationError as e:
        raise ConfigurationError(_format_validation_error(e)) from e


def _resolve_color(props: ColorProps | None) -> dict[str, Any]:
    props = props or ColorProps()
    return {
        "color": props.color if props.color is not None else get_settings().default_color,
        "color_for_positive_values": props.color_for_positive_values,
        "color_for_negative_values": props.color_for_negative_values,
        "opacity": props.opacity,
    }


def _resolve_dots(props: DotsProps) -> dict[str, Any]:
    defaults = get_settings()
    if props.stroke is not None:
        stroke: dict[str, Any] | None = _resolve_color(props.stroke)
    elif props.stroke_width is not None:
        stroke = {"color": defaults.default_color}
    else:
        stroke = None
    if props.stroke_width is not None:
        stroke_width = props.stroke_width
    elif props.stroke is not None:
        stroke_width = defaults.default_stroke_width
    else:
        stroke_width = None
    return {
        "stroke": stroke,
        "stroke_width": stroke_width,
        "size": props.size if props.size is not None else defaults.default_dot_size,
        "fill": _resolve_color(props.fill),
    }


def _resolve_hover_dot(props: DotsProps) -> dict[str, Any]:
    # hover dots get no stroke defaults; a half specified stroke is rejected
    return {
        "stroke": _resolve_color(props.stroke) if props.stroke is not None else None,
        "stroke_width": props.stroke_width,
        "size": props.size if props.size is not None else get_settings().default_dot_size,
        "fill": _resolve_color(props.fill),
    }


def _resolve_line(props: LineProps | None) -> dict[str, Any]:
    props = props or LineProps()
    hover = None
    if props.hover is not None:
        hover = {
            "dot": _resolve_hover_dot(props.hover.dot) if props.hover.dot is not None else None,
            "crosshair": (
                _resolve_color(props.hover.crosshair) if props.hover.crosshair is not None else None
            ),
        }
    return {
        "stroke_width": (
            props.stroke_width if props.stroke_width is not None else get_settings().default_stroke_width
        ),
        "stroke": _resolve_color(props.stroke),
        "fill": _resolve_color(props.fill) if props.fill is not None else None,
        "dots": _resolve_dots(props.dots) if props.dots is not None else None,
        "hover": hover,
    }


def _resolve_bars(props: BarsProps) -> dict[str, Any]:
    hover = None
    if props.hover is not None:
        hover = {"fill": _resolve_color(props.hover.fill) if props.hover.fill is not None else None}
    return {
        "is_win_loss": props.is_win_loss if props.is_win_loss is not None else False,
        "margin_percentage": props.margin_percentage,
        "fill": _resolve_color(props.fill),
        "hover": hover,
    }


def resolve_settings(props: SparklinesProps | Mapping[str, Any] | str | None = None) -> ResolvedSettings:
    """Resolve partial settings into a validated snapshot.

    A line chart is assumed when neither line nor bars is given.

    Raises:
        ConfigurationError: If the settings are invalid
    """
    parsed = parse_props(props)
    defaults = get_settings()
    data: dict[str, Any] = {
        "width": parsed.width if parsed.width is not None else defaults.default_width,
        "height": parsed.height if parsed.height is not None else defaults.default_height,
        "show_undefined_values_as": (
            parsed.show_undefined_values_as
            if parsed.show_undefined_values_as is not None
            else "missing"
        ),
        "on_hover_fn": parsed.on_hover_fn,
        "line": None,
        "bars": None,
    }
    if parsed.line is not None or parsed.bars is None:
        data["line"] = _resolve_line(parsed.line)
    if parsed.bars is not None:
        data["bars"] = _resolve_bars(parsed.bars)
    return _validate(data)


# =============================================================================
# Update merging
# =============================================================================


def merge_color(current: dict[str, Any], updated: ColorProps) -> dict[str, Any]:
    """Merge a partial color update into resolved color data.

    Provided fields override, missing fields keep their current value. When
    no explicit base color is given, a provided color for negative values
    also becomes the base color.
    """
    if updated.color is not None:
        color = updated.color
    elif updated.color_for_negative_values is not None:
        color = updated.color_for_negative_values
    else:
        color = current["color"]
    return {
        "color": color,
        "color_for_positive_values": (
            updated.color_for_positive_values
            if updated.color_for_positive_values is not None
            else current.get("color_for_positive_values")
        ),
        "color_for_negative_values": (
            updated.color_for_negative_values
            if updated.color_for_negative_values is not None
            else current.get("color_for_negative_values")
        ),
        "opacity": updated.opacity if updated.opacity is not None else current.get("opacity"),
    }


def _merge_dots(current: dict[str, Any], updated: DotsProps) -> None:
    if updated.stroke is not None and current.get("stroke") is not None:
        current["stroke"] = merge_color(current["stroke"], updated.stroke)
    if updated.stroke_width is not None and current.get("stroke_width") is not None:
        current["stroke_width"] = updated.stroke_width
    if updated.size is not None:
        current["size"] = updated.size
    if updated.fill is not None:
        current["fill"] = merge_color(current["fill"], updated.fill)


def _merge_line(current: dict[str, Any], updated: LineProps) -> None:
    if updated.stroke_width is not None:
        current["stroke_width"] = updated.stroke_width
    if updated.stroke is not None:
        current["stroke"] = merge_color(current["stroke"], updated.stroke)
    if updated.fill is not None and current.get("fill") is not None:
        current["fill"] = merge_color(current["fill"], updated.fill)
    if updated.dots is not None and current.get("dots") is not None:
        _merge_dots(current["dots"], updated.dots)
    if (
        updated.hover is not None
        and updated.hover.dot is not None
        and current.get("hover") is not None
        and current["hover"].get("dot") is not None
    ):
        _merge_dots(current["hover"]["dot"], updated.hover.dot)
    if (
        updated.hover is not None
        and updated.hover.crosshair is not None
        and current.get("hover") is not None
        and current["hover"].get("crosshair") is not None
    ):
        current["hover"]["crosshair"] = merge_color(current["hover"]["crosshair"], updated.hover.crosshair)


def _merge_bars(current: dict[str, Any], updated: BarsProps) -> None:
    if updated.is_win_loss is not None:
        current["is_win_loss"] = updated.is_win_loss
    if updated.margin_percentage is not None and current.get("margin_percentage") is not None:
        current["margin_percentage"] = updated.margin_percentage
    if updated.fill is not None:
        current["fill"] = merge_color(current["fill"], updated.fill)
    if (
        updated.hover is not None
        and updated.hover.fill is not None
        and current.get("hover") is not None
        and current["hover"].get("fill") is not None
    ):
        current["hover"]["fill"] = merge_color(current["hover"]["fill"], updated.hover.fill)


def merge_settings(
    current: ResolvedSettings, props: SparklinesProps | Mapping[str, Any] | str
) -> ResolvedSettings:
    """Apply a partial update to a resolved snapshot, returning a new snapshot.

    Only style changes to existing parts are supported: dots, hover, fill or a
    chart kind that is not already configured cannot be added or removed.

    Raises:
        ConfigurationError: If the update is malformed or the merged result
            is invalid. ``current`` is never modified.
    """
    updated = parse_props(props)
    data = current.model_dump(exclude={"on_hover_fn"})
    data["on_hover_fn"] = current.on_hover_fn

    if updated.width is not None:
        data["width"] = updated.width
    if updated.height is not None:
        data["height"] = updated.height
    if updated.on_hover_fn is not None:
        data["on_hover_fn"] = updated.on_hover_fn
    if updated.show_undefined_values_as is not None:
        data["show_undefined_values_as"] = updated.show_undefined_values_as
    if updated.line is not None and data["line"] is not None:
        _merge_line(data["line"], updated.line)
    if updated.bars is not None and data["bars"] is not None:
        _merge_bars(data["bars"], updated.bars)

    return _validate(data)


class SparklineSettings:
    """Holder of the current resolved settings snapshot.

    Attributes are read through to the snapshot. ``update`` replaces the
    snapshot atomically.

    Example:
        >>> settings = SparklineSettings({"line": {"stroke": {"color": "blue"}}})
        >>> settings.update({"line": {"strokeWidth": 2}})
        >>> settings.line.stroke_width
        2.0
    """

    def __init__(self, props: SparklinesProps | Mapping[str, Any] | str | None = None) -> None:
        self._snapshot = resolve_settings(props)

    @property
    def snapshot(self) -> ResolvedSettings:
        return self._snapshot

    @property
    def width(self) -> float:
        return self._snapshot.width

    @property
    def height(self) -> float:
        return self._snapshot.height

    @property
    def show_undefined_values_as(self) -> ShowUndefinedValuesAs:
        return self._snapshot.show_undefined_values_as

    @property
    def on_hover_fn(self) -> HoverCallback | None:
        return self._snapshot.on_hover_fn

    @property
    def line(self) -> LineSettings | None:
        return self._snapshot.line

    @property
    def bars(self) -> BarsSettings | None:
        return self._snapshot.bars

    @property
    def dot_size(self) -> float | None:
        return self._snapshot.dot_size

    def update(self, props: SparklinesProps | Mapping[str, Any] | str) -> None:
        self._snapshot = merge_settings(self._snapshot, props)
