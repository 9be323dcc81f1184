"""Configuration management for filedex."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml

from .types import ConfigurationError, ListingConfig, LoaderConfig

LOADER_TYPES = ("object", "text")


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Configuration:
    """Handles loading and validation of configuration from YAML and environment variables."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration from file and environment variables.

        Args:
            config_path: Path to YAML configuration file. If None, uses default locations.

        Raises:
            ConfigurationError: If configuration is invalid or cannot be loaded.
        """
        self.config_data: Dict[str, Any] = {}
        self._load_defaults()

        if config_path:
            self._load_from_yaml(config_path)
        else:
            self._load_from_default_locations()

        self._load_from_env()
        self._validate_config()

    def _load_defaults(self) -> None:
        """Load default configuration values."""
        self.config_data = {
            "listing": {
                "directory": None,
                "extensions": None,
            },
            "loader": {
                "type": "object",
                "encoding": "utf-8",
            },
        }

    def _load_from_yaml(self, config_path: str) -> None:
        """Load configuration from YAML file.

        Sections in the file are merged key by key over the defaults.

        Raises:
            ConfigurationError: If file cannot be read or contains invalid YAML.
        """
        try:
            with open(config_path, 'r') as f:
                yaml_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config from {config_path}: {str(e)}")

        if not yaml_config:
            return
        if not isinstance(yaml_config, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")

        for section, values in yaml_config.items():
            if isinstance(values, dict) and isinstance(self.config_data.get(section), dict):
                self.config_data[section].update(values)
            else:
                self.config_data[section] = values

    def _load_from_default_locations(self) -> None:
        """Load configuration from default locations."""
        default_locations = [
            Path.cwd() / "filedex.yaml",
            Path.home() / ".filedex" / "config.yaml",
            Path("/etc/filedex/config.yaml"),
        ]

        for path in default_locations:
            if path.is_file():
                self._load_from_yaml(str(path))
                break

    def _load_from_env(self) -> None:
        """Load configuration from environment variables.

        Environment variables should be prefixed with FILEDEX_ and use underscore
        separated uppercase names matching the nested config structure.

        Example:
            FILEDEX_LISTING_DIRECTORY=/srv/data will set config_data["listing"]["directory"]
            FILEDEX_LISTING_EXTENSIONS=.py,.json sets a list of extensions
        """
        for key, value in os.environ.items():
            if key.startswith("FILEDEX_"):
                parts = key[8:].lower().split("_")
                current = self.config_data
                for part in parts[:-1]:
                    current = current.setdefault(part, {})
                    if not isinstance(current, dict):
                        raise ConfigurationError(
                            f"Environment variable {key} does not match a config section"
                        )
                # Convert value based on existing type
                final_key = parts[-1]
                if final_key in current and isinstance(current[final_key], list):
                    current[final_key] = _split_list(value)
                else:
                    current[final_key] = value

    def _validate_config(self) -> None:
        """Validate the loaded configuration.

        Raises:
            ConfigurationError: If configuration is invalid.
        """
        required_sections = ["listing", "loader"]
        for section in required_sections:
            if not isinstance(self.config_data.get(section), dict):
                raise ConfigurationError(f"Missing required config section: {section}")

        loader_type = self.config_data["loader"].get("type")
        if loader_type not in LOADER_TYPES:
            raise ConfigurationError(f"Unknown loader type: {loader_type}")

        # A single string is a comma separated list, as in FILEDEX_LISTING_EXTENSIONS
        extensions = self.config_data["listing"].get("extensions")
        if isinstance(extensions, str):
            extensions = _split_list(extensions)
        elif extensions is not None and (
            not isinstance(extensions, list)
            or not all(isinstance(ext, str) for ext in extensions)
        ):
            raise ConfigurationError(
                f"listing.extensions must be a list of strings, got {extensions!r}"
            )
        self.config_data["listing"]["extensions"] = extensions

    def get_listing_config(self) -> ListingConfig:
        """Get directory listing configuration.

        Returns:
            ListingConfig object with the directory and extensions.
        """
        listing_data = self.config_data["listing"]
        return ListingConfig(
            directory=listing_data.get("directory"),
            extensions=list(listing_data.get("extensions") or [])
        )

    def get_loader_config(self) -> LoaderConfig:
        """Get loader configuration.

        Returns:
            LoaderConfig object with loader configuration.

        Raises:
            ConfigurationError: If loader configuration is invalid.
        """
        try:
            loader_data = self.config_data["loader"]
            return LoaderConfig(
                loader_type=loader_data["type"],
                encoding=loader_data.get("encoding", "utf-8")
            )
        except KeyError as e:
            raise ConfigurationError(f"Missing required loader config key: {str(e)}")
