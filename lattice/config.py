"""
Config system - Layered configuration with validation.

Merge precedence (later overrides earlier):
defaults < YAML file < .env file < environment variables < overrides
"""

from typing import Any, Dict, Optional, get_type_hints
from dataclasses import dataclass, fields
from pathlib import Path
import json
import logging
import os

import yaml
from dotenv import dotenv_values

from .errors import LatticeError

DEFAULT_CONFIG_FILES = ("lattice.yaml", "lattice.yml")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(LatticeError):
    """Raised when configuration validation fails."""
    pass


@dataclass
class Settings:
    """
    Validated runtime settings.

    Attributes:
        log_level: Root logging level used by the CLI
        diagnostics: Attach a console listener to container diagnostics
        target: Default ``module:attribute`` wiring target for the CLI
    """
    log_level: str = "WARNING"
    diagnostics: bool = False
    target: Optional[str] = None

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources.

    Example:
        loader = ConfigLoader.load(env_prefix="LATTICE_")
        settings = loader.settings()
        loader.get("log_level")
    """

    def __init__(self, env_prefix: str = "LATTICE_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        path: Optional[str] = None,
        env_prefix: str = "LATTICE_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "ConfigLoader":
        """
        Load configuration from every source.

        Args:
            path: YAML config file (``lattice.yaml`` auto-detected if None)
            env_prefix: Prefix for environment variables
            env_file: Path to .env file
            overrides: Manual overrides (highest precedence)

        Returns:
            Configured ConfigLoader instance
        """
        loader = cls(env_prefix=env_prefix)

        if path is None:
            for candidate in DEFAULT_CONFIG_FILES:
                if Path(candidate).exists():
                    path = candidate
                    break

        if path:
            loader._load_yaml_file(Path(path))

        if env_file:
            loader._load_env_file(env_file)

        loader._load_from_env()

        if overrides:
            loader._merge_dict(loader.config_data, overrides)

        return loader

    def _load_yaml_file(self, path: Path):
        """Load config from YAML file."""
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if data is None:
            return
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        self._merge_dict(self.config_data, data)

    def _load_env_file(self, path: str):
        """Load prefixed entries from a .env file."""
        env_path = Path(path)
        if not env_path.exists():
            return

        for key, value in dotenv_values(env_path).items():
            if value is not None and key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _load_from_env(self):
        """Load config from environment variables."""
        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _set_nested(self, key: str, value: str):
        """Convert LATTICE_SECTION__NAME to a nested dict entry."""
        key = key[len(self.env_prefix):]

        # Double underscore separates nested keys
        parts = key.lower().split("__")

        current = self.config_data
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        current[parts[-1]] = self._parse_value(value)

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes", "1"):
            return True
        if value.lower() in ("false", "no", "0"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _merge_dict(self, target: dict, source: dict):
        """Deep merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_dict(target[key], value)
            else:
                target[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get config value by dot-separated path."""
        current = self.config_data
        for part in path.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def settings(self) -> Settings:
        """
        Build validated settings from the merged data.

        Raises:
            ConfigError: If a value has the wrong type or is out of range
        """
        hints = get_type_hints(Settings)
        kwargs = {}
        for field_info in fields(Settings):
            if field_info.name not in self.config_data:
                continue
            value = self.config_data[field_info.name]
            expected = hints[field_info.name]

            if expected is bool and not isinstance(value, bool):
                raise ConfigError(
                    f"Config field '{field_info.name}' expected bool, got {type(value).__name__}"
                )
            if field_info.name == "log_level":
                value = str(value).upper()
                if value not in _LOG_LEVELS:
                    raise ConfigError(
                        f"Config field 'log_level' must be one of {', '.join(_LOG_LEVELS)}, got {value!r}"
                    )
            if field_info.name == "target" and value is not None:
                value = str(value)
                if ":" not in value:
                    raise ConfigError(
                        f"Config field 'target' must look like 'module:attribute', got {value!r}"
                    )
            kwargs[field_info.name] = value

        return Settings(**kwargs)
