"""Common utilities and exceptions."""

from libs.common.exceptions import (
    ConfigurationError,
    GeometryError,
    SparklineError,
    SparklineValueError,
)

__all__ = [
    "SparklineError",
    "ConfigurationError",
    "SparklineValueError",
    "GeometryError",
]
