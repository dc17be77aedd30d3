"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, Optional, TypeVar

from .duration import Duration, parse_duration
from .errors import (
    REASON_BOOLEAN,
    REASON_DURATION,
    REASON_MISSING_CLOSING_QUOTE,
    REASON_NUMBER,
    EnvSyntaxError,
)
from .fields import FieldDescriptor, FieldKind, record_fields
from .raw import ABSENT, Present, RawMapping, lookup

logger = logging.getLogger(__name__)

T = TypeVar("T")

QUOTE_CHARS = frozenset({'"', "'", "`"})
TRUE_VALUES = frozenset({"t", "true", "1", "on", "enabled"})
FALSE_VALUES = frozenset({"f", "false", "0", "off", "disabled"})

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def normalize_text(env_var: str, text: str) -> str:
    """Trim surrounding whitespace and strip one pair of matching quotes."""
    value = text.strip()
    if value and value[0] in QUOTE_CHARS:
        if len(value) < 2 or value[-1] != value[0]:
            raise EnvSyntaxError(REASON_MISSING_CLOSING_QUOTE, env_var=env_var)
        value = value[1:-1]
    return value


def normalized_values(raw: RawMapping) -> Dict[str, Optional[str]]:
    """Flatten to sorted name -> normalized text, with ``None`` for naked variables."""
    out: Dict[str, Optional[str]] = {}
    for name in sorted(raw):
        value = raw[name]
        out[name] = normalize_text(name, value.literal) if isinstance(value, Present) else None
    return out


def resolve_text(raw: RawMapping, descriptor: FieldDescriptor) -> Optional[str]:
    """Normalized text for a field, or None when the variable is not set."""
    value = lookup(raw, descriptor.env_var)
    if value is ABSENT and descriptor.default is not None:
        value = Present(descriptor.default)
    if not isinstance(value, Present):
        return None
    return normalize_text(descriptor.env_var, value.literal)


def _parse_int64(env_var: str, text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise EnvSyntaxError(REASON_NUMBER, env_var=env_var)
    number = int(text)
    if number < _INT64_MIN or number > _INT64_MAX:
        raise EnvSyntaxError(REASON_NUMBER, env_var=env_var)
    return number


def wrap_signed(number: int, bits: int) -> int:
    """Two's complement narrowing, as a fixed-width integer store would do."""
    mask = (1 << bits) - 1
    number &= mask
    if number >= 1 << (bits - 1):
        number -= 1 << bits
    return number


def _to_string(descriptor: FieldDescriptor, text: str) -> str:
    return text


def _to_bool(descriptor: FieldDescriptor, text: str) -> bool:
    if text == "":
        return False
    lowered = text.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    if _INT_RE.fullmatch(lowered):
        number = int(lowered)
        if _INT64_MIN <= number <= _INT64_MAX:
            return number > 0
    raise EnvSyntaxError(REASON_BOOLEAN, env_var=descriptor.env_var)


def _to_int(descriptor: FieldDescriptor, text: str) -> int:
    if text == "":
        return 0
    return wrap_signed(_parse_int64(descriptor.env_var, text), descriptor.kind.bits or 64)


def _to_duration(descriptor: FieldDescriptor, text: str) -> Duration:
    if text == "":
        return Duration(0)
    try:
        return parse_duration(text)
    except ValueError as exc:
        raise EnvSyntaxError(REASON_DURATION, env_var=descriptor.env_var) from exc


_CONVERTERS: Dict[FieldKind, Callable[[FieldDescriptor, str], Any]] = {
    FieldKind.STRING: _to_string,
    FieldKind.BOOL: _to_bool,
    FieldKind.INT8: _to_int,
    FieldKind.INT16: _to_int,
    FieldKind.INT32: _to_int,
    FieldKind.INT64: _to_int,
    FieldKind.DURATION: _to_duration,
}


def convert(descriptor: FieldDescriptor, text: Optional[str]) -> Any:
    """Typed value for ``text``; None (not set) gives None or the zero value."""
    if text is None:
        if descriptor.optional:
            return None
        text = ""
    return _CONVERTERS[descriptor.kind](descriptor, text)


def bind(raw: RawMapping, dest: T) -> T:
    """Populate every bound field of ``dest`` from ``raw``.

    Fields are processed in declaration order and the first error is raised
    as-is; fields written before it keep their new values.
    """
    descriptors = record_fields(dest)
    for descriptor in descriptors:
        value = convert(descriptor, resolve_text(raw, descriptor))
        setattr(dest, descriptor.attr, value)
    logger.debug(
        "[env_bind] record=%s fields=%d variables=%d",
        type(dest).__name__,
        len(descriptors),
        len(raw),
    )
    return dest


def bound_value(dest: Any, env_var: str) -> Any:
    """Current value of the field of ``dest`` bound to ``env_var``."""
    for descriptor in record_fields(dest):
        if descriptor.env_var == env_var:
            return getattr(dest, descriptor.attr)
    raise KeyError(f"envVar {env_var} not available in {type(dest).__name__}")
