"""Load BBConfig from bbserve.yaml and the environment.

Precedence, lowest to highest: defaults, config file, ``PORT`` env var,
explicit overrides (CLI flags).
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path

import yaml

from bbserve._errors import ConfigError
from bbserve.config import BBConfig

PORT_ENV_VAR = "PORT"

_CONFIG_KEYS: frozenset[str] = frozenset({
    "host",
    "port",
    "workers",
    "templates_dir",
    "static_dir",
    "templated",
    "cors_origins",
    "security_headers",
    "request_log",
    "probes",
})


def load_config(
    root: Path,
    *,
    environ: Mapping[str, str] | None = None,
    **overrides: object,
) -> BBConfig:
    """Load BBConfig from root, merging bbserve.yaml, ``PORT`` and overrides.

    Looks for bbserve.yaml, bbserve.yml, or bbserve.toml in root.  Overrides
    whose value is ``None`` are ignored so unset CLI flags never mask the
    file or the environment.

    Raises:
        ConfigError: If ``PORT`` is not an integer or a value is out of range.

    """
    env = os.environ if environ is None else environ
    merged: dict[str, object] = dict(_read_config_file(root))

    port_env = env.get(PORT_ENV_VAR)
    if port_env:
        merged["port"] = _parse_port(port_env)

    merged.update({k: v for k, v in overrides.items() if v is not None})

    if "cors_origins" in merged and isinstance(merged["cors_origins"], list):
        merged["cors_origins"] = tuple(str(o) for o in merged["cors_origins"])

    try:
        return BBConfig(root=root, **merged)  # type: ignore[arg-type]
    except TypeError as exc:
        msg = f"Invalid configuration: {exc}"
        raise ConfigError(msg) from exc


def _parse_port(value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        msg = f"{PORT_ENV_VAR} must be an integer, got {value!r}"
        raise ConfigError(msg) from exc


def _read_config_file(root: Path) -> dict[str, object]:
    """Read config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("bbserve.yaml", "bbserve.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "bbserve.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    """Parse YAML config. Returns empty dict on error."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        return {}
    if not isinstance(data, dict):
        return {}
    return _flatten_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config. Returns empty dict on error."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError):
        return {}
    return _flatten_section(data)


def _flatten_section(data: dict[str, object]) -> dict[str, object]:
    """Extract known keys from the top level and the ``bbserve`` section."""
    result: dict[str, object] = {
        k: v for k, v in data.items() if k in _CONFIG_KEYS
    }
    section = data.get("bbserve")
    if isinstance(section, dict):
        result.update({k: v for k, v in section.items() if k in _CONFIG_KEYS})
    return result
