"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.

Raw values as produced by the sources and consumed by the binder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union


class _Marker:
    __slots__ = ("_label",)

    def __init__(self, label: str) -> None:
        self._label = label

    def __repr__(self) -> str:
        return self._label

    def __bool__(self) -> bool:
        return False


ABSENT = _Marker("ABSENT")
NAKED = _Marker("NAKED")


@dataclass(frozen=True)
class Present:
    """A variable that has a value, possibly empty.

    ``quote`` is set when the scanner read the value from a quoted literal; in
    that case ``text`` is already unquoted and ``literal`` gives back the form
    the binder normalizes.
    """

    text: str
    quote: Optional[str] = None

    @property
    def literal(self) -> str:
        if self.quote is None:
            return self.text
        return f"{self.quote}{self.text}{self.quote}"


RawValue = Union[_Marker, Present]
RawMapping = Dict[str, RawValue]


def lookup(raw: RawMapping, name: str) -> RawValue:
    return raw.get(name, ABSENT)

