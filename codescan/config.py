"""Scanner configuration loaded from an optional YAML file."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, List, Mapping, Optional

import yaml

from .errors import ConfigError
from .utils import read_yaml_file

DEFAULT_CONFIG_FILENAME = ".codescan.yaml"
WORKERS_ENV = "CODESCAN_WORKERS"


@dataclass
class ScanConfig:
    """Tunable scan options; every field has a working default."""

    workers: int = 1
    disabled_rules: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    strict_markup: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ScanConfig":
        known = {item.name for item in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(sorted(map(str, unknown)))}")

        config = cls()
        if "workers" in data:
            config.workers = _coerce_workers(data["workers"], "workers")
        if "disabled_rules" in data:
            config.disabled_rules = _string_list(data["disabled_rules"], "disabled_rules")
        if "exclude" in data:
            config.exclude = _string_list(data["exclude"], "exclude")
        if "strict_markup" in data:
            if not isinstance(data["strict_markup"], bool):
                raise ConfigError("strict_markup must be true or false")
            config.strict_markup = data["strict_markup"]
        return config

    def apply_env(self, environ: Optional[Mapping[str, str]] = None) -> "ScanConfig":
        environ = os.environ if environ is None else environ
        value = environ.get(WORKERS_ENV, "")
        if value:
            self.workers = _coerce_workers(value, WORKERS_ENV)
        return self


def load_config(path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> ScanConfig:
    """Load configuration from ``path`` (or the default file when present).

    An explicitly requested file must exist; the default file is optional.
    """

    explicit = path is not None
    config_path = Path(path) if explicit else Path(DEFAULT_CONFIG_FILENAME)
    try:
        data = read_yaml_file(config_path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read {config_path}: {exc}") from exc

    if data is None:
        if explicit and not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration at {config_path} is not a mapping")
    return ScanConfig.from_mapping(data).apply_env(environ)


def _coerce_workers(value: Any, source: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{source} must be a positive integer")
    try:
        workers = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{source} must be a positive integer, got {value!r}") from exc
    if workers < 1:
        raise ConfigError(f"{source} must be a positive integer, got {value!r}")
    return workers


def _string_list(value: Any, key: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigError(f"{key} must be a list of strings")
