"""Persistent user configuration.

Stored as JSON in ``~/.config/auto-git/config.json``::

    {
        "provider": "siliconflow",
        "endpoint": "",
        "model": "llama3.2"
    }

Set ``AUTO_GIT_CONFIG_DIR`` to keep it somewhere else. API keys are never
written here; they come from the environment.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from .errors import ConfigLoadError

DEFAULT_PROVIDER = "siliconflow"
DEFAULT_MODEL = "llama3.2"
CONFIG_DIR_ENV = "AUTO_GIT_CONFIG_DIR"
CONFIG_FILE = "config.json"
# Written by earlier releases; never read
LEGACY_CONFIG_FILE = "config.yaml"


@dataclass
class Config:
    """User configuration with defaults for missing values."""

    provider: str = DEFAULT_PROVIDER
    endpoint: str = ""
    model: str = DEFAULT_MODEL

    @classmethod
    def from_dict(cls, data: dict) -> Config:
        """Create Config from a dictionary, ignoring unknown keys.

        Empty provider or model values fall back to the defaults.
        """
        known = {f.name for f in fields(cls)}
        values = {k: str(v).strip() for k, v in data.items() if k in known and v is not None}
        config = cls(**values)
        config.provider = config.provider or DEFAULT_PROVIDER
        config.model = config.model or DEFAULT_MODEL
        return config

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def get_config_dir() -> Path:
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    return Path.home() / ".config" / "auto-git"


def get_config_path() -> Path:
    return get_config_dir() / CONFIG_FILE


def find_legacy_config(path: Path | None = None) -> Path | None:
    """Return the old ``config.yaml`` beside ``path`` if it is the only config there."""
    path = path or get_config_path()
    legacy = path.with_name(LEGACY_CONFIG_FILE)
    if legacy.exists() and not path.exists():
        return legacy
    return None


def load_config(path: Path | None = None) -> Config:
    """Load the configuration, returning defaults if no file exists.

    Raises:
        ConfigLoadError: If the file exists but cannot be read or parsed
    """
    path = path or get_config_path()
    if not path.exists():
        return Config()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigLoadError(f"Failed to read config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigLoadError(f"Failed to parse config file {path}: expected a JSON object")

    return Config.from_dict(data)


def save_config(config: Config, path: Path | None = None) -> Path:
    """Write the configuration, creating its directory if needed.

    Raises:
        ConfigLoadError: If the file cannot be written
    """
    path = path or get_config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise ConfigLoadError(f"Failed to write config file {path}: {e}") from e
    return path


def _update(path: Path | None = None, **changes: str) -> Config:
    config = load_config(path)
    for key, value in changes.items():
        setattr(config, key, value)
    save_config(config, path)
    return config


def set_provider(provider: str, path: Path | None = None) -> Config:
    return _update(path, provider=provider)


def set_endpoint(endpoint: str, path: Path | None = None) -> Config:
    return _update(path, endpoint=endpoint)


def set_model(model: str, path: Path | None = None) -> Config:
    return _update(path, model=model)


__all__ = [
    "Config",
    "DEFAULT_MODEL",
    "DEFAULT_PROVIDER",
    "find_legacy_config",
    "get_config_dir",
    "get_config_path",
    "load_config",
    "save_config",
    "set_endpoint",
    "set_model",
    "set_provider",
]
