"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

REASON_NAKED_VARIABLE = "naked variable"
REASON_INVALID_NAME = "invalid variable name"
REASON_MISSING_CLOSING_QUOTE = "missing closing quote"
REASON_UNSUPPORTED_QUOTE = "unsupported quote"
REASON_NUMBER = "number not parsable"
REASON_DURATION = "not parsable as duration string"
REASON_BOOLEAN = "not a valid boolean value"


@dataclass
class EnvSyntaxError(ValueError):
    """Malformed input, located either by scanner line or by variable name."""

    reason: str
    line: Optional[int] = None
    env_var: Optional[str] = None

    def __str__(self) -> str:
        if self.line is not None and self.line > 0:
            return f"line {self.line}: syntax error ({self.reason})"
        return f"{self.env_var}: syntax error ({self.reason})"


@dataclass
class SourceAccessError(RuntimeError):
    path: str
    cause: BaseException

    def __str__(self) -> str:
        return f"error reading {self.path} ({self.cause})"


class UnsupportedFieldType(TypeError):
    pass
