"""Dispatcher settings loader.

Settings come from an optional YAML file, then ``COMMAND_SYNTAX_*``
environment variables override individual keys.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from command_syntax.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "COMMAND_SYNTAX_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class DispatcherSettings:
    prefix: str = ""
    case_sensitive: bool = False
    suggestion_cutoff: float = 0.6
    max_candidates: int = 10


def load_settings(
    path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> DispatcherSettings:
    """Load settings from *path* (YAML) with environment overrides."""
    values: dict[str, Any] = {}
    if path is not None:
        values.update(_load_yaml(Path(path).expanduser()))
    values.update(_load_env(os.environ if environ is None else environ))
    settings = _build(values)
    logger.debug("Loaded dispatcher settings: %s", settings)
    return settings


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"Settings file {path} does not exist")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    return data


def _load_env(environ: Mapping[str, str]) -> dict[str, str]:
    values: dict[str, str] = {}
    for f in fields(DispatcherSettings):
        key = ENV_PREFIX + f.name.upper()
        if key in environ:
            values[f.name] = environ[key]
    return values


def _build(values: dict[str, Any]) -> DispatcherSettings:
    known = {f.name for f in fields(DispatcherSettings)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"Unknown setting(s): {', '.join(unknown)}")

    kwargs: dict[str, Any] = {}
    if "prefix" in values:
        kwargs["prefix"] = "" if values["prefix"] is None else str(values["prefix"])
    if "case_sensitive" in values:
        kwargs["case_sensitive"] = _as_bool("case_sensitive", values["case_sensitive"])
    if "suggestion_cutoff" in values:
        cutoff = _as_number("suggestion_cutoff", values["suggestion_cutoff"], float)
        if not 0.0 <= cutoff <= 1.0:
            raise ConfigError("suggestion_cutoff must be between 0 and 1")
        kwargs["suggestion_cutoff"] = cutoff
    if "max_candidates" in values:
        limit = _as_number("max_candidates", values["max_candidates"], int)
        if limit < 1:
            raise ConfigError("max_candidates must be at least 1")
        kwargs["max_candidates"] = limit
    return DispatcherSettings(**kwargs)


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _as_number(name: str, value: Any, kind: type) -> Any:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    try:
        return kind(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc
