"""Configuration model controlling how documents are scanned and tangled.

TangleConfig

`left_marker` (`str`)
: Opening bracket surrounding a label, both on fragment header lines and in
  references. Defaults to `«`.

`right_marker` (`str`)
: Closing bracket surrounding a label. Defaults to `»`.

`strict_labels` (`bool`)
: Raise `AmbiguousLabelError` when an initialization uses a short form that
  matches several labels instead of registering the short text as a new
  label.

`prefer_exact_match` (`bool`)
: Let a reference equal to a full label resolve to it even when longer labels
  share the same prefix.

`max_depth` (`int`)
: Maximum nesting of references during assembly.

`encoding` (`str`)
: Text encoding used to read documents and write the tangled output.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
import yaml

from .exceptions import ConfigError


DEFAULT_LEFT_MARKER = "«"
DEFAULT_RIGHT_MARKER = "»"
DEFAULT_MAX_DEPTH = 256
CONFIG_SECTION = "tanglesmith"


class TangleConfig(BaseModel):
    """Options shared by the scanner, the registry, and the tangler."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    left_marker: str = DEFAULT_LEFT_MARKER
    right_marker: str = DEFAULT_RIGHT_MARKER
    strict_labels: bool = False
    prefer_exact_match: bool = False
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
    encoding: str = "utf-8"

    @model_validator(mode="after")
    def _check_markers(self) -> TangleConfig:
        for name in ("left_marker", "right_marker"):
            marker = getattr(self, name)
            if not marker:
                raise ValueError(f"{name} must not be empty")
            if "\n" in marker or "\r" in marker:
                raise ValueError(f"{name} must fit on a single line")
            if "`" in marker:
                raise ValueError(f"{name} must not contain backticks")
        if self.left_marker == self.right_marker:
            raise ValueError("left_marker and right_marker must differ")
        return self

    def merged(self, overrides: Mapping[str, Any]) -> TangleConfig:
        """Return a copy with the non-``None`` overrides applied and validated."""
        payload = self.model_dump()
        payload.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return TangleConfig.model_validate(payload)
        except ValidationError as exc:
            raise ConfigError(f"invalid configuration: {exc}") from exc


def load_config(path: Path) -> TangleConfig:
    """Load a YAML configuration file, unwrapping a ``tanglesmith`` section."""
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"failed to read configuration '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"configuration '{path}' is not valid YAML: {exc}") from exc

    if raw is None:
        return TangleConfig()
    if not isinstance(raw, Mapping):
        raise ConfigError(f"configuration '{path}' must contain a mapping")
    section = raw.get(CONFIG_SECTION, raw)
    if not isinstance(section, Mapping):
        raise ConfigError(f"section '{CONFIG_SECTION}' in '{path}' must be a mapping")

    try:
        return TangleConfig.model_validate(dict(section))
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration '{path}': {exc}") from exc


__all__ = [
    "CONFIG_SECTION",
    "DEFAULT_LEFT_MARKER",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_RIGHT_MARKER",
    "TangleConfig",
    "load_config",
]
