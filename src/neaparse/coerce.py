"""Defensive field extraction from untyped JSON nodes.

Every accessor is total: whatever shape ``node`` has, the caller gets a
value of the requested kind, falling back to ``default`` when the field is
missing or malformed. Nothing in this module raises.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, TypeVar

from .const import HUMIDITY_MAX, HUMIDITY_MIN
from .models import Temperature

_EnumT = TypeVar("_EnumT", bound=Enum)

_TRUE_STRINGS = frozenset({"true", "on", "yes", "1"})
_FALSE_STRINGS = frozenset({"false", "off", "no", "0"})


def _lookup(node: Any, key: str) -> Any:
    if isinstance(node, dict):
        return node.get(key)
    return None


def as_number(value: Any) -> float | None:
    """Return ``value`` as a finite float, or None if it is not numeric.

    Booleans are not numbers here even though Python treats them as ints.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def as_bool(value: Any) -> bool | None:
    """Map the vendor's boolean spellings to ``bool``; None if unrecognised."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        if value == 1:
            return True
        if value == 0:
            return False
        return None
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


def get_node(node: Any, key: str) -> dict[str, Any]:
    """Return the object at ``key``, or an empty dict."""
    value = _lookup(node, key)
    return value if isinstance(value, dict) else {}


def get_optional_node(node: Any, key: str) -> dict[str, Any] | None:
    """Return the object at ``key``, or None when absent or not an object."""
    value = _lookup(node, key)
    return value if isinstance(value, dict) else None


def get_list(node: Any, key: str) -> list[Any]:
    """Return the array at ``key``, or an empty list."""
    value = _lookup(node, key)
    return value if isinstance(value, list) else []


def get_str(node: Any, key: str, default: str = "") -> str:
    value = _lookup(node, key)
    return value if isinstance(value, str) else default


def get_str_list(node: Any, key: str) -> tuple[str, ...]:
    """Return the array at ``key`` as strings, keeping positions."""
    return tuple(item if isinstance(item, str) else "" for item in get_list(node, key))


def get_number(node: Any, key: str, default: float = 0.0) -> float:
    number = as_number(_lookup(node, key))
    return default if number is None else number


def get_optional_number(node: Any, key: str) -> float | None:
    return as_number(_lookup(node, key))


def get_int(node: Any, key: str, default: int = 0) -> int:
    number = as_number(_lookup(node, key))
    if number is None or not number.is_integer():
        return default
    return int(number)


def get_bool(node: Any, key: str, default: bool = False) -> bool:
    value = as_bool(_lookup(node, key))
    return default if value is None else value


def get_enum(node: Any, key: str, enum_cls: type[_EnumT], unknown: _EnumT) -> _EnumT:
    """Resolve an enum member by value, then by name; ``unknown`` otherwise."""
    value = _lookup(node, key)
    return coerce_enum(value, enum_cls, unknown)


def coerce_enum(value: Any, enum_cls: type[_EnumT], unknown: _EnumT) -> _EnumT:
    if value is None or isinstance(value, bool):
        return unknown
    if isinstance(value, str):
        name = value.strip().upper()
        if name in enum_cls.__members__:
            return enum_cls[name]
        number = as_number(value)
        if number is None:
            return unknown
        value = number
    if isinstance(value, float):
        if not value.is_integer():
            return unknown
        value = int(value)
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        return unknown


def get_humidity(node: Any, key: str) -> float | None:
    """Return relative humidity clamped to 0..100, or None without a reading."""
    number = as_number(_lookup(node, key))
    if number is None:
        return None
    return max(float(HUMIDITY_MIN), min(float(HUMIDITY_MAX), number))


def get_temperature(node: Any, key: str, *, keep_raw: bool = True) -> Temperature:
    """Read a raw temperature (tenths of a degree Fahrenheit).

    A missing or non-numeric value yields an empty reading.
    """
    value = _lookup(node, key)
    number = as_number(value)
    raw = value if keep_raw else None
    if number is None:
        return Temperature(raw=raw)
    return Temperature.from_raw(number, raw=raw)
