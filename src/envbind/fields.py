"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.

Declarative field bindings and the per-type descriptor table the binder walks.
"""

from __future__ import annotations

import dataclasses
import functools
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, NewType, Optional, Tuple

from pydantic import BaseModel

from .duration import Duration
from .errors import UnsupportedFieldType

ENV_VAR_KEY = "env_var"
ENV_DEFAULT_KEY = "env_default"

Int8 = NewType("Int8", int)
Int16 = NewType("Int16", int)
Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)


class FieldKind(Enum):
    STRING = "string"
    BOOL = "bool"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    DURATION = "duration"

    @property
    def bits(self) -> Optional[int]:
        return _INT_BITS.get(self)


_INT_BITS = {
    FieldKind.INT8: 8,
    FieldKind.INT16: 16,
    FieldKind.INT32: 32,
    FieldKind.INT64: 64,
}

_KIND_BY_TYPE: Dict[Any, FieldKind] = {
    str: FieldKind.STRING,
    bool: FieldKind.BOOL,
    int: FieldKind.INT64,
    Int8: FieldKind.INT8,
    Int16: FieldKind.INT16,
    Int32: FieldKind.INT32,
    Int64: FieldKind.INT64,
    Duration: FieldKind.DURATION,
}

_UNION_TYPES = (typing.Union, types.UnionType)


@dataclass(frozen=True)
class FieldDescriptor:
    attr: str
    env_var: str
    default: Optional[str]
    kind: FieldKind
    optional: bool = False


def env_metadata(env_var: str, default: Optional[str] = None) -> Dict[str, str]:
    """Binding metadata for a dataclass field or a pydantic ``json_schema_extra``."""
    if not env_var:
        raise ValueError("env_var must be a non-empty variable name")
    metadata = {ENV_VAR_KEY: env_var}
    if default is not None:
        metadata[ENV_DEFAULT_KEY] = str(default)
    return metadata


def env_field(env_var: str, default: Optional[str] = None, *, initial: Any = None, **kwargs: Any) -> Any:
    """Dataclass field bound to ``env_var``.

    ``default`` is the raw text used when the variable is absent from the
    source; ``initial`` is the attribute value before anything is bound.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata.update(env_metadata(env_var, default))
    return dataclasses.field(default=initial, metadata=metadata, **kwargs)


def _classify(hint: Any) -> Tuple[Optional[FieldKind], bool]:
    kind = _KIND_BY_TYPE.get(hint)
    if kind is not None:
        return kind, False
    if typing.get_origin(hint) in _UNION_TYPES:
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if len(args) == 1 and len(typing.get_args(hint)) == 2:
            return _KIND_BY_TYPE.get(args[0]), True
    return None, False


def _declared_bindings(record_type: type) -> Tuple[Tuple[str, Any, Mapping[str, Any]], ...]:
    if dataclasses.is_dataclass(record_type):
        hints = typing.get_type_hints(record_type)
        return tuple((f.name, hints.get(f.name), f.metadata) for f in dataclasses.fields(record_type))
    if issubclass(record_type, BaseModel):
        out = []
        for name, info in record_type.model_fields.items():
            extra = info.json_schema_extra
            out.append((name, info.annotation, extra if isinstance(extra, Mapping) else {}))
        return tuple(out)
    raise TypeError(f"destination must be a dataclass or pydantic model instance (was {record_type.__name__})")


@functools.lru_cache(maxsize=None)
def field_table(record_type: type) -> Tuple[FieldDescriptor, ...]:
    """Descriptors for every bound field of ``record_type``, in declaration order.

    Raises UnsupportedFieldType when a bound field is declared with a type the
    binder cannot produce.
    """
    if not isinstance(record_type, type):
        raise TypeError(f"expected a record type (was {record_type!r})")
    table = []
    for attr, hint, metadata in _declared_bindings(record_type):
        env_var = metadata.get(ENV_VAR_KEY)
        if not env_var:
            continue
        kind, optional = _classify(hint)
        if kind is None:
            raise UnsupportedFieldType(f"unsupported type '{hint}' for field {record_type.__name__}.{attr}")
        default = metadata.get(ENV_DEFAULT_KEY)
        table.append(
            FieldDescriptor(
                attr=attr,
                env_var=str(env_var),
                default=None if default is None else str(default),
                kind=kind,
                optional=optional,
            )
        )
    return tuple(table)


def record_fields(dest: Any) -> Tuple[FieldDescriptor, ...]:
    if dest is None or isinstance(dest, type):
        raise TypeError(f"destination must be a record instance (was {dest!r})")
    return field_table(type(dest))
