"""Input value parsing and scalar conversion.

A values payload is a list (or its JSON text) whose elements are numbers,
numeric strings, None, or ``{"label": ..., "value": ...}`` objects; shapes may
be mixed. Each element is parsed once into a PlainValue or LabeledValue and
converted to a float at mapping time.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from numbers import Real
from typing import Any, Union

from libs.common.exceptions import SparklineValueError


@dataclass(frozen=True)
class PlainValue:
    value: Any = None


@dataclass(frozen=True)
class LabeledValue:
    label: str
    value: Any = None


ParsedValue = Union[PlainValue, LabeledValue]


def to_number(value: Any, label: str = "") -> float | None:
    """Convert a scalar to a finite float.

    None and blank strings are missing values and return None.

    Args:
        value: Number, numeric string, Decimal or None
        label: Name used in error messages

    Returns:
        The finite float, or None for a missing value

    Raises:
        SparklineValueError: If the value is not numeric or is infinite

    Example:
        >>> to_number(" 4.5 ")
        4.5
        >>> to_number("") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise SparklineValueError(f"Invalid non numeric value for value {label} ({value})")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            raise SparklineValueError(
                f"Invalid non numeric value for value {label} ({text})"
            ) from None
    elif isinstance(value, (Real, Decimal)):
        try:
            number = float(value)
        except OverflowError:
            # huge ints are not quoted, str() refuses them past the digit limit
            raise SparklineValueError(f"Invalid infinite number for value {label}") from None
        except ValueError:
            raise SparklineValueError(
                f"Invalid non numeric value for value {label} ({value})"
            ) from None
    else:
        raise SparklineValueError(f"Value {value!r} is not convertable")

    if math.isnan(number):
        raise SparklineValueError(f"Invalid non numeric value for value {label} ({value})")
    if math.isinf(number):
        raise SparklineValueError(f"Invalid infinite number for value {label} ({value})")
    return number


def parse_values(values: str | Sequence[Any] | None) -> list[ParsedValue]:
    """Parse a values payload into tagged values.

    Args:
        values: List of values, or its JSON text

    Returns:
        One PlainValue or LabeledValue per element

    Raises:
        SparklineValueError: On malformed JSON, a non-list payload, or a
            labeled value without a label
    """
    if values is None:
        return []
    if isinstance(values, (str, bytes)):
        try:
            payload = json.loads(values)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SparklineValueError(f"Supplied sparkline values are not valid JSON: {e}") from e
    else:
        payload = values

    if isinstance(payload, (str, bytes, Mapping)) or not isinstance(payload, Sequence):
        raise SparklineValueError("Sparkline values must be an array")

    parsed: list[ParsedValue] = []
    for index, item in enumerate(payload):
        if isinstance(item, (LabeledValue, PlainValue)):
            parsed.append(item)
        elif isinstance(item, Mapping):
            label = item.get("label")
            if label is None:
                raise SparklineValueError(f"Value object at index {index} must have a label")
            parsed.append(LabeledValue(label=str(label), value=item.get("value")))
        else:
            parsed.append(PlainValue(item))
    return parsed
