"""
Run configuration.

Settings come from, lowest precedence first: built-in defaults, a YAML
file, ``ASVIEW_*`` environment variables, then explicit command line
arguments. Relative paths in a YAML file are taken relative to that file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from asview.errors import ConfigError

INPUT_KEYS = ("relationships", "bgp", "destinations", "vantages")
OUTPUT_MODES = ("cli", "json")

ENV_PREFIX = "ASVIEW_"


@dataclass(frozen=True)
class RunConfig:
    relationships: Path | None = None
    bgp: Path | None = None
    destinations: Path | None = None
    vantages: Path | None = None
    workers: int = 1
    output: str = "cli"
    json_file: Path = field(default_factory=lambda: Path("asview_report.json"))

    def merged(self, overrides: Mapping[str, Any]) -> "RunConfig":
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        values = {}
        for key, value in overrides.items():
            if key not in known:
                raise ConfigError(f"Unknown configuration key: {key!r}")
            if value is not None:
                values[key] = value
        return _validated(replace(self, **values))

    def missing_inputs(self) -> list[str]:
        return [key for key in INPUT_KEYS if getattr(self, key) is None]

    def require_inputs(self) -> None:
        missing = self.missing_inputs()
        if missing:
            raise ConfigError(f"Missing input file setting(s): {', '.join(missing)}")


def _validated(config: RunConfig) -> RunConfig:
    try:
        workers = int(config.workers)
    except (TypeError, ValueError):
        raise ConfigError(f"workers must be an integer, got {config.workers!r}") from None
    if workers < 1:
        raise ConfigError(f"workers must be at least 1, got {workers}")
    if config.output not in OUTPUT_MODES:
        raise ConfigError(f"output must be one of {OUTPUT_MODES}, got {config.output!r}")
    paths = {}
    for key in INPUT_KEYS + ("json_file",):
        value = getattr(config, key)
        if value is not None and not isinstance(value, Path):
            paths[key] = Path(value)
    return replace(config, workers=workers, **paths)


def load_config_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML configuration file.

    Raises:
        FileNotFoundError: if the file does not exist
        ConfigError: if the document is not a mapping
    """
    with path.open("r", encoding="utf-8") as fh:
        try:
            document = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigError("Configuration file must be a YAML mapping (dict)")

    values = dict(document)
    for key in INPUT_KEYS + ("json_file",):
        value = values.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ConfigError(f"'{key}' must be a path string")
        resolved = Path(value)
        if not resolved.is_absolute():
            resolved = path.parent / resolved
        values[key] = resolved
    return values


def environment_overrides(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    environ = os.environ if environ is None else environ
    values: dict[str, Any] = {}
    for key in INPUT_KEYS + ("workers",):
        value = environ.get(ENV_PREFIX + key.upper())
        if value:
            values[key] = value
    return values


def resolve_config(
    config_file: Path | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> RunConfig:
    """
    Merge every configuration source into one validated RunConfig.

    Raises:
        ConfigError: on unknown keys or invalid values
    """
    config = RunConfig()
    if config_file is not None:
        config = config.merged(load_config_file(config_file))
    config = config.merged(environment_overrides(environ))
    if cli_overrides:
        config = config.merged(cli_overrides)
    return config
