"""
Exception hierarchy for the sparklines engine.

This module defines all custom exceptions raised while resolving settings,
mapping values and building chart geometry. Every error kind that the render
boundary is allowed to convert into the error placeholder derives from
SparklineError; anything else is treated as a programming defect and
propagates.
"""


class SparklineError(Exception):
    """
    Base exception for all sparkline errors.

    The orchestrator catches this class at the render boundary, shows the
    error placeholder and logs the error.

    Example:
        >>> try:
        ...     chart.render()
        ... except SparklineError as e:
        ...     logger.error(f"Sparkline error: {e}")
    """

    pass


class ConfigurationError(SparklineError):
    """
    Raised when settings are missing, out of range or incompatible.

    Validation happens on a copy of the settings, so a failed construction or
    update never leaves a partially applied configuration behind.

    Example:
        >>> if settings.line is not None and settings.bars.is_win_loss:
        ...     raise ConfigurationError("Win/loss chart may not be combined with lines")
    """

    pass


class SparklineValueError(SparklineError, ValueError):
    """
    Raised when an input value cannot be turned into a finite number.

    This includes non numeric strings, infinite numbers, malformed JSON
    value payloads and labeled values without a label.

    Example:
        >>> if math.isinf(number):
        ...     raise SparklineValueError(f"Invalid infinite number for value {label} ({raw})")
    """

    pass


class GeometryError(SparklineError):
    """
    Raised when the viewport or a drawing primitive would be degenerate.

    Covers non-finite viewport sizes, scales, margins and steps, and paths
    built without any vertex. Usually caused by an upstream configuration
    edge case such as a zero height.

    Example:
        >>> if not math.isfinite(svg_width):
        ...     raise GeometryError("Sparkline cannot be rendered as it will contain infinite dimensions")
    """

    pass
