"""Text -> value conversion for primitive definition nodes.

Each supported value type has a small parse function in ``ADAPTERS``;
anything else goes through a pydantic ``TypeAdapter``. Converters raise
plain ``ValueError``/``TypeError``; the binder wraps them with the
element context.
"""

from __future__ import annotations

import functools
import inspect
import re
import types
import typing
from collections.abc import Callable
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from pydantic import TypeAdapter

NULL_TEXT = "null"

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_DURATION_RE = re.compile(
    r"^(?P<sign>-)?"
    r"(?:(?P<days>\d+)\.)?"
    r"(?P<hours>\d{1,2}):(?P<minutes>\d{1,2})"
    r"(?::(?P<seconds>\d{1,2})(?:\.(?P<fraction>\d{1,7}))?)?$"
)


def parse_int(text: str) -> int:
    if not _INTEGER_RE.match(text):
        msg = f"{text!r} is not a decimal integer"
        raise ValueError(msg)
    return int(text)


def parse_float(text: str) -> float:
    return float(text)


def parse_decimal(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation as exc:
        msg = f"{text!r} is not a decimal number"
        raise ValueError(msg) from exc


def parse_bool(text: str) -> bool:
    match text.lower():
        case "true" | "1":
            return True
        case "false" | "0":
            return False
        case _:
            msg = f"{text!r} is not a boolean"
            raise ValueError(msg)


def parse_duration(text: str) -> timedelta:
    """Parse ``[-][d.]hh:mm[:ss[.fffffff]]`` text, or a bare integer count of days."""
    if ":" not in text:
        return timedelta(days=parse_int(text))

    match = _DURATION_RE.match(text)
    if match is None:
        msg = f"{text!r} is not a duration"
        raise ValueError(msg)

    hours = int(match["hours"])
    minutes = int(match["minutes"])
    seconds = int(match["seconds"] or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        msg = f"{text!r} has a duration component out of range"
        raise ValueError(msg)

    # Up to seven fractional digits, i.e. 100ns ticks.
    ticks = int((match["fraction"] or "").ljust(7, "0"))
    value = timedelta(
        days=int(match["days"] or 0),
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        microseconds=ticks // 10,
    )
    return -value if match["sign"] else value


ADAPTERS: dict[type, Callable[[str], Any]] = {
    str: str,
    int: parse_int,
    float: parse_float,
    bool: parse_bool,
    Decimal: parse_decimal,
    timedelta: parse_duration,
}

ZERO_VALUES: dict[type, Any] = {
    int: 0,
    float: 0.0,
    bool: False,
    Decimal: Decimal(0),
    timedelta: timedelta(0),
}


def unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Split ``X | None`` into ``(X, True)``; other annotations pass through."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        optional = len(args) < len(typing.get_args(annotation))
        if len(args) == 1:
            return args[0], optional
        return typing.Union[tuple(args)], optional  # noqa: UP007
    return annotation, False


def is_value_type(target: Any) -> bool:
    """Whether *target* has a non-null zero value (numbers, bools, durations, enums)."""
    if target in ZERO_VALUES:
        return True
    return isinstance(target, type) and issubclass(target, Enum)


def zero_value(target: Any) -> Any:
    """Return the zero value for a value type, or None for reference types."""
    if target in ZERO_VALUES:
        return ZERO_VALUES[target]
    if isinstance(target, type) and issubclass(target, Enum):
        return next(iter(target))
    return None


def parse_enum(enum_cls: type[Enum], text: str) -> Enum:
    if text in enum_cls.__members__:
        return enum_cls[text]
    for member in enum_cls:
        if str(member.value) == text:
            return member
    msg = f"{text!r} is not a member of {enum_cls.__name__}"
    raise ValueError(msg)


@functools.lru_cache(maxsize=128)
def _type_adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def convert_text(text: str, target: Any) -> Any:
    """Convert trimmed element *text* to *target*.

    Empty text yields None for reference and optional types and the zero
    value for value types. ``null`` yields None for optional value types
    such as ``bool | None``; for other targets it is ordinary text.
    """
    inner, optional = unwrap_optional(target)

    if not text:
        return None if optional else zero_value(inner)
    if optional and text.lower() == NULL_TEXT and is_value_type(inner):
        return None

    if inner is Any or inner is object:
        return text
    adapter = ADAPTERS.get(inner)
    if adapter is not None:
        return adapter(text)
    if isinstance(inner, type):
        if issubclass(inner, Enum):
            return parse_enum(inner, text)
        if inspect.isabstract(inner):
            msg = f"cannot convert text to abstract type {inner.__qualname__}"
            raise TypeError(msg)
    return _type_adapter(inner).validate_python(text)
