"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import io
import logging
import re
from typing import List, Optional, TextIO, Tuple, Union

from .dialects import DialectProfile, resolve_dialect
from .errors import (
    REASON_INVALID_NAME,
    REASON_MISSING_CLOSING_QUOTE,
    REASON_NAKED_VARIABLE,
    REASON_UNSUPPORTED_QUOTE,
    EnvSyntaxError,
)
from .raw import NAKED, Present, RawMapping

logger = logging.getLogger(__name__)

_EOF = ""
_SKIP_CHARS = frozenset(" \t\r\n")
_NAME_GAP_CHARS = frozenset(" \t")
_END_OF_LINE = frozenset("\r\n")
_UNESCAPE_NEWLINES_RE = re.compile(r"(\\r)?\\n")


class DotenvScanner:
    """Single pass, character at a time scanner for dotenv text.

    One instance can scan any number of sources, one at a time.
    """

    def __init__(self, dialect: Union[str, DialectProfile]) -> None:
        self.dialect = resolve_dialect(dialect)
        self._src: Optional[TextIO] = None
        self._ch = _EOF
        self._line = 1
        self._pending_newline = False

    @property
    def line(self) -> int:
        return self._line

    def scan(self, source: Union[str, TextIO]) -> RawMapping:
        self._src = io.StringIO(source) if isinstance(source, str) else source
        self._ch = _EOF
        self._line = 1
        self._pending_newline = False

        variables: RawMapping = {}
        try:
            while self._next():
                if self._ch in _SKIP_CHARS:
                    continue
                if self._ch == "#":
                    self._consume_rest_of_line()
                    continue

                name, naked = self._scan_name()
                if naked:
                    variables[name] = NAKED
                    continue
                variables[name] = self._scan_value()
        finally:
            self._src = None

        logger.debug(
            "[dotenv_scan] dialect=%s variables=%d lines=%d",
            self.dialect.name,
            len(variables),
            self._line,
        )
        return variables

    def _next(self) -> bool:
        if self._pending_newline:
            self._line += 1
            self._pending_newline = False
        ch = self._src.read(1)
        self._ch = ch
        if ch == _EOF:
            return False
        if ch == "\n":
            self._pending_newline = True
        return True

    def _consume_rest_of_line(self) -> None:
        while self._next():
            if self._ch == "\n":
                return

    def _scan_name(self) -> Tuple[str, bool]:
        start_line = self._line
        if self._ch == "=":
            raise EnvSyntaxError(REASON_INVALID_NAME, line=start_line)
        chars: List[str] = [self._ch]

        while self._next():
            ch = self._ch
            if ch == "=":
                return "".join(chars), False
            if ch in _END_OF_LINE:
                return self._naked("".join(chars), start_line)
            if ch in _NAME_GAP_CHARS:
                if self._skip_to_equals():
                    return "".join(chars), False
                return self._naked("".join(chars), start_line)
            chars.append(ch)

        return self._naked("".join(chars), start_line)

    def _skip_to_equals(self) -> bool:
        """Skip the blanks between a name and `=`; False when the line ends first."""
        while self._next():
            ch = self._ch
            if ch == "=":
                return True
            if ch in _END_OF_LINE:
                return False
            if ch not in _NAME_GAP_CHARS:
                raise EnvSyntaxError(REASON_INVALID_NAME, line=self._line)
        return False

    def _naked(self, name: str, start_line: int) -> Tuple[str, bool]:
        if not self.dialect.allow_naked:
            raise EnvSyntaxError(REASON_NAKED_VARIABLE, line=start_line)
        return name, True

    def _scan_value(self) -> Present:
        chars: List[str] = []
        while self._next():
            ch = self._ch
            # Any quote opens a quoted literal; text collected before it is dropped.
            if ch in self.dialect.quote_chars:
                return self._scan_quoted(ch)
            if ch in self.dialect.unsupported_quote_chars:
                raise EnvSyntaxError(REASON_UNSUPPORTED_QUOTE, line=self._line)
            if ch == "#":
                self._consume_rest_of_line()
                break
            if ch == "\n":
                break
            chars.append(ch)
        return Present("".join(chars))

    def _scan_quoted(self, quote: str) -> Present:
        start_line = self._line
        chars: List[str] = []
        while self._next():
            if self._ch == quote:
                text = "".join(chars)
                if quote in self.dialect.expand_newline_quote_chars:
                    text = _UNESCAPE_NEWLINES_RE.sub("\n", text)
                return Present(text, quote=quote)
            chars.append(self._ch)
        raise EnvSyntaxError(REASON_MISSING_CLOSING_QUOTE, line=start_line)


def scan_dotenv(source: Union[str, TextIO], dialect: Union[str, DialectProfile]) -> RawMapping:
    return DotenvScanner(dialect).scan(source)
