"""Configuration file and environment handling for the command line."""

import os
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from ifacescan.errors import ConfigError

API_KEY_ENV = "API_KEY"
DEFAULT_CONFIG_FILE = "config.yaml"


@dataclass
class Config:
    """Settings for one run. Every field can also be given on the command line."""
    go_file_path: str | None = None
    go_directory: str | None = None
    backend: str | None = None
    model: str | None = None
    endpoint: str | None = None
    strict_signatures: bool = False
    structs_only: bool = False
    workers: int = 1
    api_key: str | None = None

    @classmethod
    def from_file(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file.

        Raises:
            ConfigError: If the file cannot be read, is not valid YAML, or
                         contains unknown keys.
        """
        config_path = Path(path)
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
        except OSError as exc:
            raise ConfigError(f"cannot read config file {path}: {exc.strerror or exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML in {path}: {exc}") from exc

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a mapping at the top level")

        # The credential only ever comes from the environment.
        known = {f.name for f in fields(cls)} - {"api_key"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"{path}: unknown keys: {', '.join(unknown)}")

        config = cls(**data)
        if not isinstance(config.workers, int) or config.workers < 1:
            raise ConfigError(f"{path}: workers must be a positive integer")
        return config


def load_config(
    path: str | Path | None = None,
    use_default: bool = True,
) -> Config:
    """Load the config file (if any) and pick up the API key from the environment.

    With no explicit path, ./config.yaml is read when it exists and
    `use_default` is set.
    """
    if path is not None:
        config = Config.from_file(path)
    elif use_default and Path(DEFAULT_CONFIG_FILE).is_file():
        config = Config.from_file(DEFAULT_CONFIG_FILE)
    else:
        config = Config()

    config.api_key = os.environ.get(API_KEY_ENV) or None
    return config
