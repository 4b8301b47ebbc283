"""
Persisted client configuration: a small JSON file holding the agent token.
"""

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path

from api.errors import ConfigError

CONFIG_FILE_NAME = "config.json"


@dataclass
class ConfigData:
    # Agent auth token for the SpaceTraders API.
    token: str


def default_config_path() -> Path:
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return Path(base_dir) / CONFIG_FILE_NAME


def read_config_file(config_file_path: str | os.PathLike) -> ConfigData | None:
    """Return the stored config, or None if the file is missing, unreadable or malformed."""
    try:
        with open(config_file_path, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError):
        return None
    token = raw.get("token") if isinstance(raw, dict) else None
    if not isinstance(token, str):
        return None
    return ConfigData(token=token)


def write_config_file(config_data: ConfigData, config_file_path: str | os.PathLike) -> None:
    path = Path(config_file_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(asdict(config_data), f, indent=4)
    except OSError as e:
        raise ConfigError(path, e) from e


def read_default_config_file() -> ConfigData | None:
    return read_config_file(default_config_path())


def write_default_config_file(config_data: ConfigData) -> None:
    write_config_file(config_data, default_config_path())
