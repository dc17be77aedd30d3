"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.

Short-unit duration strings ("300ms", "1h30m", "-1.5s") as signed nanoseconds.
"""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

NANOSECOND = 1
MICROSECOND = 1_000 * NANOSECOND
MILLISECOND = 1_000 * MICROSECOND
SECOND = 1_000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

MAX_DURATION = 2**63 - 1
MIN_DURATION = -(2**63)

UNITS = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # micro sign
    "μs": MICROSECOND,  # greek mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

_COMPONENT_RE = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]+)")


def parse_duration(text: str) -> "Duration":
    """Parse a sequence of ``<number><unit>`` components into a Duration.

    Raises ValueError on malformed text or when the result does not fit in a
    signed 64-bit nanosecond count.
    """
    original = text
    negative = False
    if text[:1] in ("-", "+"):
        negative = text[0] == "-"
        text = text[1:]
    if text == "0":
        return Duration(0)
    if not text:
        raise ValueError(f"invalid duration {original!r}")

    total = 0
    pos = 0
    while pos < len(text):
        match = _COMPONENT_RE.match(text, pos)
        if match is None:
            raise ValueError(f"invalid duration {original!r}")
        whole, frac, unit = match.group(1), match.group(2), match.group(3)
        if not whole and not frac:
            raise ValueError(f"invalid duration {original!r}")
        scale = UNITS.get(unit)
        if scale is None:
            raise ValueError(f"unknown unit {unit!r} in duration {original!r}")
        total += int(whole or "0") * scale
        if frac:
            total += int(frac) * scale // 10 ** len(frac)
        pos = match.end()

    if negative:
        total = -total
    if total > MAX_DURATION or total < MIN_DURATION:
        raise ValueError(f"invalid duration {original!r}")
    return Duration(total)


def _with_fraction(value: int, scale: int) -> str:
    whole, frac = divmod(value, scale)
    if not frac:
        return str(whole)
    digits = str(frac).rjust(len(str(scale)) - 1, "0").rstrip("0")
    return f"{whole}.{digits}"


def format_duration(nanoseconds: int) -> str:
    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    remaining = abs(nanoseconds)

    if remaining < MICROSECOND:
        return f"{sign}{remaining}ns"
    if remaining < MILLISECOND:
        return f"{sign}{_with_fraction(remaining, MICROSECOND)}µs"
    if remaining < SECOND:
        return f"{sign}{_with_fraction(remaining, MILLISECOND)}ms"

    hours, remaining = divmod(remaining, HOUR)
    minutes, remaining = divmod(remaining, MINUTE)
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return out + f"{_with_fraction(remaining, SECOND)}s"


class Duration(int):
    """Signed nanosecond count that prints in the short-unit form."""

    @classmethod
    def parse(cls, text: str) -> "Duration":
        return parse_duration(text)

    @classmethod
    def from_timedelta(cls, value: timedelta) -> "Duration":
        return cls((value.days * 86_400 + value.seconds) * SECOND + value.microseconds * MICROSECOND)

    def seconds(self) -> float:
        return int(self) / SECOND

    def to_timedelta(self) -> timedelta:
        return timedelta(microseconds=int(self) // MICROSECOND)

    def __str__(self) -> str:
        return format_duration(int(self))

    def __repr__(self) -> str:
        return f"Duration({format_duration(int(self))!r})"

    @classmethod
    def _validate(cls, value: Any) -> "Duration":
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError("a boolean is not a duration")
        if isinstance(value, int):
            if value > MAX_DURATION or value < MIN_DURATION:
                raise ValueError(f"duration {value} out of range")
            return cls(value)
        if isinstance(value, timedelta):
            return cls.from_timedelta(value)
        if isinstance(value, str):
            return parse_duration(value.strip())
        raise ValueError(f"cannot read a duration from {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        # Nanosecond ints, timedeltas or "1h30m" strings in; the short form out in JSON.
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str, when_used="json"),
        )
