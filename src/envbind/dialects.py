"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class DialectProfile(BaseModel):
    """Scanner rules for one flavour of dotenv file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    allow_naked: bool = False
    quote_chars: FrozenSet[str]
    unsupported_quote_chars: FrozenSet[str] = Field(default_factory=frozenset)
    expand_newline_quote_chars: FrozenSet[str] = Field(default_factory=frozenset)

    @field_validator("quote_chars", "unsupported_quote_chars", "expand_newline_quote_chars")
    @classmethod
    def _validate_single_chars(cls, value: FrozenSet[str]) -> FrozenSet[str]:
        for ch in value:
            if len(ch) != 1:
                raise ValueError(f"quote entries must be single characters (got {ch!r})")
            if ch in ("#", "=") or ch.isspace():
                raise ValueError(f"{ch!r} cannot be used as a quote character")
        return value

    @model_validator(mode="after")
    def _validate_sets(self) -> "DialectProfile":
        if not self.expand_newline_quote_chars <= self.quote_chars:
            raise ValueError("expand_newline_quote_chars must be a subset of quote_chars")
        overlap = self.quote_chars & self.unsupported_quote_chars
        if overlap:
            raise ValueError(f"quote characters both supported and unsupported: {sorted(overlap)}")
        return self


# Rules of the npm `dotenv` package.
NODEJS = DialectProfile(
    name="nodejs",
    quote_chars=frozenset({'"', "'", "`"}),
    expand_newline_quote_chars=frozenset({'"'}),
)

# Rules of django-dotenv / python-dotenv.
PYTHON = DialectProfile(
    name="python",
    allow_naked=True,
    quote_chars=frozenset({'"', "'"}),
    unsupported_quote_chars=frozenset({"`"}),
    expand_newline_quote_chars=frozenset({'"'}),
)

DIALECTS: Dict[str, DialectProfile] = {
    "nodejs": NODEJS,
    "node": NODEJS,
    "js": NODEJS,
    "python": PYTHON,
    "py": PYTHON,
    "django": PYTHON,
}


def dialect_names() -> list[str]:
    return sorted({profile.name for profile in DIALECTS.values()})


def resolve_dialect(dialect: Union[str, DialectProfile]) -> DialectProfile:
    if isinstance(dialect, DialectProfile):
        return dialect
    key = str(dialect).strip().lower()
    try:
        return DIALECTS[key]
    except KeyError:
        raise ValueError(f"Unknown dotenv dialect '{dialect}' (expected one of {', '.join(dialect_names())})") from None
