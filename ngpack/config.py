"""Configuration loading for ngpack (.ngpack.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".ngpack.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class PackagerConfig:
    """Tunable packaging conventions read from .ngpack.yml."""

    root: Path
    escape_delimiter: str = "__"
    umd_suffix: str = ".umd"
    metadata_version: int = 3
    strip_amd_modules: bool = True
    manifest_indent: int = 2
    log_file: Optional[Path] = None


def load_config(config_path: Path) -> PackagerConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    if not config_file.exists():
        return PackagerConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = PackagerConfig(root=root)

    delimiter = _as_str(data.get("escape_delimiter"))
    if delimiter is not None:
        if not delimiter:
            raise ConfigError("escape_delimiter must not be empty")
        config.escape_delimiter = delimiter

    umd_suffix = _as_str(data.get("umd_suffix"))
    if umd_suffix is not None:
        config.umd_suffix = umd_suffix

    version = _as_int(data.get("metadata_version"))
    if version is not None:
        config.metadata_version = version

    strip_amd = _as_bool(data.get("strip_amd_modules"))
    if strip_amd is not None:
        config.strip_amd_modules = strip_amd

    indent = _as_int(data.get("manifest_indent"))
    if indent is not None:
        if indent < 0:
            raise ConfigError("manifest_indent must be zero or positive")
        config.manifest_indent = indent

    log_file = _as_str(data.get("log_file"))
    if log_file:
        config.log_file = root / log_file

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = ["CONFIG_FILENAME", "ConfigError", "PackagerConfig", "load_config"]
