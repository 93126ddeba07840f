"""Declarative parameter schema.

A pedal's parameter contract is defined as a list of ParamDef objects.
ParamSchema wraps the list and derives the legacy dicts (PARAM_RANGES,
CHOICE_RANGES, default_params) and a strict validator for presets and
CLI input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ParamType(Enum):
    FLOAT = "float"
    INT = "int"
    CHOICE = "choice"


@dataclass
class ParamDef:
    key: str
    type: ParamType
    default: Any
    section: str
    label: str = ""                   # CLI help text
    range: tuple | None = None        # (min, max) inclusive, for FLOAT/INT
    choices: list[str] | None = None  # canonical lowercase names for CHOICE
    aliases: dict[str, str] = field(default_factory=dict)  # alias -> choice
    optional: bool = False            # None is an accepted value


class ParamSchema:
    """Derives the param structures from a declarative param list."""

    def __init__(self, params: list[ParamDef]):
        self._params = params
        self._by_key: dict[str, ParamDef] = {p.key: p for p in params}

    def default_params(self) -> dict:
        return {p.key: p.default for p in self._params}

    def param_ranges(self) -> dict[str, tuple]:
        """PARAM_RANGES -- continuous params only (float/int with range)."""
        return {p.key: p.range for p in self._params
                if p.range is not None and p.type in (ParamType.FLOAT, ParamType.INT)}

    def param_sections(self) -> dict[str, list[str]]:
        sections: dict[str, list[str]] = {}
        for p in self._params:
            sections.setdefault(p.section, []).append(p.key)
        return sections

    def choice_ranges(self) -> dict[str, int]:
        """CHOICE_RANGES -- choice param -> number of options."""
        result = {}
        for p in self._params:
            if p.type == ParamType.CHOICE and p.choices:
                result[p.key] = len(p.choices)
        return result

    def validate(self, raw: dict) -> dict:
        """Validate a raw params dict (preset file, CLI overrides).

        Unlike clamping, anything out of contract is an error: unknown keys,
        values that do not convert, values outside their range, and choice
        tokens that are neither a choice nor an alias. Missing keys take
        their defaults.

        Raises:
            ValueError: describing the first offending parameter.
        """
        unknown = sorted(set(raw) - set(self._by_key))
        if unknown:
            raise ValueError(f"Unknown parameter(s): {', '.join(unknown)}")

        result = self.default_params()
        for key, value in raw.items():
            result[key] = self._coerce(self._by_key[key], value)
        return result

    def _coerce(self, p: ParamDef, value):
        if value is None:
            if p.optional:
                return None
            raise ValueError(f"{p.key} must not be empty")

        if p.type == ParamType.CHOICE:
            if isinstance(value, Enum):
                value = value.value
            token = str(value).strip().lower()
            token = p.aliases.get(token, token)
            if token not in (p.choices or []):
                allowed = sorted(set(p.choices or []) | set(p.aliases))
                raise ValueError(f"Unknown {p.key} '{value}' "
                                 f"(expected one of: {', '.join(allowed)})")
            return token

        # bool is an int subclass; never accept it as a number
        if isinstance(value, bool):
            raise ValueError(f"{p.key} must be a number, got {value!r}")

        if p.type == ParamType.INT:
            if isinstance(value, float) and not value.is_integer():
                raise ValueError(f"{p.key} must be an integer, got {value!r}")
            try:
                v = int(value)
            except (TypeError, ValueError):
                raise ValueError(f"{p.key} must be an integer, got {value!r}") from None
        else:
            try:
                v = float(value)
            except (TypeError, ValueError):
                raise ValueError(f"{p.key} must be a number, got {value!r}") from None
            if v != v:
                raise ValueError(f"{p.key} must not be NaN")

        if p.range is not None:
            lo, hi = p.range
            if hi is None and v < lo:
                raise ValueError(f"{p.key} must be >= {lo}, got {v}")
            if hi is not None and not lo <= v <= hi:
                raise ValueError(f"{p.key} must be in [{lo}, {hi}], got {v}")
        return v

    def get(self, key: str) -> ParamDef | None:
        return self._by_key.get(key)

    def __len__(self):
        return len(self._params)
