"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from envbind.binder import bind, normalized_values
from envbind.dialects import dialect_names
from envbind.duration import Duration
from envbind.errors import EnvSyntaxError, SourceAccessError
from envbind.fields import Int8, Int16, Int32, Int64, env_field
from envbind.raw import RawMapping
from envbind.sources import read_dotenv_file

_KIND_TYPES: Dict[str, Any] = {
    "string": str,
    "str": str,
    "bool": bool,
    "int": int,
    "int8": Int8,
    "int16": Int16,
    "int32": Int32,
    "int64": Int64,
    "duration": Duration,
}


def _setup_logging(verbose: bool = False) -> None:
    if logging.getLogger().hasHandlers():
        return
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _read(args: argparse.Namespace) -> Tuple[Optional[RawMapping], int]:
    path = Path(args.path)
    try:
        return read_dotenv_file(path, args.dialect), 0
    except SourceAccessError as exc:
        print(str(exc), file=sys.stderr)
        return None, 1
    except EnvSyntaxError as exc:
        print(f"{path}: {exc}", file=sys.stderr)
        return None, 2


def _scan(args: argparse.Namespace) -> int:
    _setup_logging(args.verbose)
    raw, status = _read(args)
    if raw is None:
        return status

    try:
        payload = normalized_values(raw)
    except EnvSyntaxError as exc:
        print(f"{args.path}: {exc}", file=sys.stderr)
        return 2
    print(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))
    return 0


def _check(args: argparse.Namespace) -> int:
    _setup_logging(args.verbose)
    raw, status = _read(args)
    if raw is None:
        return status
    print(f"[dotenv] OK {args.path} ({len(raw)} variables, dialect={args.dialect})")
    return 0


def _parse_requirement(spec: str) -> Tuple[str, Any]:
    name, _, kind = spec.partition(":")
    name = name.strip()
    kind = (kind or "string").strip().lower()
    optional = kind.endswith("?")
    kind = kind.rstrip("?")
    if not name:
        raise SystemExit(f"Invalid --require value '{spec}': missing variable name.")
    if kind not in _KIND_TYPES:
        expected = ", ".join(sorted(_KIND_TYPES))
        raise SystemExit(f"Invalid --require value '{spec}': unknown kind '{kind}' (expected one of {expected}).")
    field_type = _KIND_TYPES[kind]
    return name, Optional[field_type] if optional else field_type


def _jsonable(value: Any) -> Any:
    if isinstance(value, Duration):
        return str(value)
    return value


def _bind_check(args: argparse.Namespace) -> int:
    _setup_logging(args.verbose)
    requirements = [_parse_requirement(spec) for spec in args.require]
    if not requirements:
        raise SystemExit("Nothing to check; use --require NAME[:kind].")

    record_fields: List[Tuple[str, Any, Any]] = []
    for index, (env_var, field_type) in enumerate(requirements):
        record_fields.append((f"field_{index}", field_type, env_field(env_var)))
    record_type = dataclasses.make_dataclass("RequiredEnv", record_fields)

    raw, status = _read(args)
    if raw is None:
        return status
    try:
        record = bind(raw, record_type())
    except EnvSyntaxError as exc:
        print(f"{args.path}: {exc}", file=sys.stderr)
        return 2

    payload = {
        env_var: _jsonable(getattr(record, f"field_{index}")) for index, (env_var, _) in enumerate(requirements)
    }
    print(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="envctl",
        description="Inspect and validate dotenv files.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def _add_common(cmd: argparse.ArgumentParser) -> None:
        cmd.add_argument("path", help="Path to the dotenv file.")
        cmd.add_argument(
            "--dialect",
            choices=dialect_names(),
            default="nodejs",
            help="Dotenv dialect (default: nodejs).",
        )
        cmd.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")

    scan_cmd = subparsers.add_parser("scan", help="Print variables as JSON (naked variables as null)")
    _add_common(scan_cmd)
    scan_cmd.set_defaults(func=_scan)

    check_cmd = subparsers.add_parser("check", help="Validate dotenv syntax")
    _add_common(check_cmd)
    check_cmd.set_defaults(func=_check)

    bind_cmd = subparsers.add_parser("bind-check", help="Bind variables to types and print the typed values")
    _add_common(bind_cmd)
    bind_cmd.add_argument(
        "--require",
        action="append",
        default=[],
        help="NAME[:kind] with kind one of string, bool, int, int8, int16, int32, int64, duration; suffix '?' for optional.",
    )
    bind_cmd.set_defaults(func=_bind_check)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
