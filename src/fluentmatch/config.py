from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class MatcherSettings(BaseModel):
    """Tunables shared by every matcher invocation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    almost_equal_delta: float = 1e-7
    diff_context_lines: int = 3
    max_repr_length: int = 2000
    show_diff: bool = True

    @field_validator("almost_equal_delta")
    @classmethod
    def delta_must_not_be_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("almost_equal_delta must not be negative")
        return v

    @field_validator("diff_context_lines")
    @classmethod
    def context_must_not_be_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("diff_context_lines must not be negative")
        return v

    @field_validator("max_repr_length")
    @classmethod
    def repr_length_must_be_usable(cls, v: int) -> int:
        if v < 16:
            raise ValueError("max_repr_length must be at least 16")
        return v


class CheckSpec(BaseModel):
    """One data-driven assertion: apply ``matcher`` to ``subject``."""

    model_config = ConfigDict(extra="forbid")
    name: str | None = None
    subject: Any = None
    matcher: str
    args: list[Any] = []
    negate: bool = False
    weight: float = 1.0

    @field_validator("matcher")
    @classmethod
    def matcher_must_be_named(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("matcher must not be empty")
        return v.strip()

    @field_validator("args", mode="before")
    @classmethod
    def normalize_args(cls, v: Any) -> list:
        if v is None:
            return []
        if isinstance(v, list):
            return v
        return [v]

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        prefix = "not_" if self.negate else ""
        return f"{prefix}{self.matcher}"


class CheckFile(BaseModel):
    settings: MatcherSettings = MatcherSettings()
    checks: list[CheckSpec]

    @model_validator(mode="after")
    def checks_must_not_be_empty(self) -> CheckFile:
        if not self.checks:
            raise ValueError("checks must not be empty")
        return self


def _expand(value: Any) -> Any:
    """Expand ${VAR} references in every string of a loaded YAML document."""
    if isinstance(value, str):
        return expandvars(value)
    if isinstance(value, list):
        return [_expand(item) for item in value]
    if isinstance(value, dict):
        return {key: _expand(item) for key, item in value.items()}
    return value


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path) as f:
        raw = yaml.safe_load(f)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a YAML mapping, got {type(raw).__name__}")
    return _expand(raw)


def load_settings(path: Path) -> MatcherSettings:
    """Load and validate matcher settings from a YAML file."""
    return MatcherSettings(**_read_yaml(path))


def load_check_file(path: Path) -> CheckFile:
    """Load and validate a check file from a YAML file."""
    return CheckFile(**_read_yaml(path))


@lru_cache
def get_settings() -> MatcherSettings:
    """Process-wide default settings."""
    return MatcherSettings()
