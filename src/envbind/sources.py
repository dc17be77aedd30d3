"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.

Entry points: bind a record from the process environment or from dotenv text.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Mapping, Optional, TextIO, TypeVar, Union

from .binder import bind
from .dialects import NODEJS, PYTHON, DialectProfile, resolve_dialect
from .errors import SourceAccessError
from .raw import Present, RawMapping
from .scanner import DotenvScanner

logger = logging.getLogger(__name__)

T = TypeVar("T")

DialectLike = Union[str, DialectProfile]
EnvironLike = Union[Mapping[str, str], Iterable[str]]


def environ_mapping(environ: Optional[EnvironLike] = None) -> RawMapping:
    """Raw mapping of the OS environment (or of ``NAME=value`` strings).

    Every entry is present; the environment has no notion of naked variables.
    """
    source: EnvironLike = os.environ if environ is None else environ
    raw: RawMapping = {}
    if isinstance(source, Mapping):
        for name, value in source.items():
            raw[name] = Present(value)
        return raw
    for entry in source:
        name, sep, value = entry.partition("=")
        if sep and name:
            raw[name] = Present(value)
    return raw


def parse_environ(dest: T, environ: Optional[EnvironLike] = None) -> T:
    return bind(environ_mapping(environ), dest)


def parse_dotenv(dest: T, source: Union[str, TextIO], dialect: DialectLike) -> T:
    raw = DotenvScanner(dialect).scan(source)
    return bind(raw, dest)


def read_dotenv_file(path: Union[str, Path], dialect: DialectLike) -> RawMapping:
    """Scan a dotenv file; open/read failures raise SourceAccessError."""
    profile = resolve_dialect(dialect)
    file_path = Path(path)
    try:
        with file_path.open("r", encoding="utf-8") as handle:
            raw = DotenvScanner(profile).scan(handle)
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceAccessError(path=str(file_path), cause=exc) from exc
    logger.debug("[dotenv_file] path=%s dialect=%s variables=%d", file_path, profile.name, len(raw))
    return raw


def parse_dotenv_file(dest: T, path: Union[str, Path], dialect: DialectLike) -> T:
    return bind(read_dotenv_file(path, dialect), dest)


def nodejs_dotenv(dest: T, source: Union[str, TextIO]) -> T:
    """Bind ``source`` following the npm ``dotenv`` package conventions."""
    return parse_dotenv(dest, source, NODEJS)


def nodejs_dotenv_file(dest: T, path: Union[str, Path]) -> T:
    return parse_dotenv_file(dest, path, NODEJS)


def django_dotenv(dest: T, source: Union[str, TextIO]) -> T:
    """Bind ``source`` following the django-dotenv conventions."""
    return parse_dotenv(dest, source, PYTHON)


def django_dotenv_file(dest: T, path: Union[str, Path]) -> T:
    return parse_dotenv_file(dest, path, PYTHON)
