"""Configuration management for loading settings from YAML."""

import copy
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml

DEFAULT_SETTINGS = {
    "pubmed": {
        "base_url": "https://eutils.ncbi.nlm.nih.gov/entrez/eutils/",
        "email": None,
        "tool": "litsearch",
        "api_key": None,
        "timeout": 30,
        "batch_size": 200,
    },
    "storage": {
        "enabled": False,
        "path": "data/search_history.db",
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
}

# NCBI allows 3 requests/second without an API key, 10 with one
MIN_INTERVAL_WITHOUT_KEY = 0.34
MIN_INTERVAL_WITH_KEY = 0.1


class ConfigManager:

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        if config_path is None:
            config_path = os.environ.get("LITSEARCH_CONFIG")
        self.config_path = Path(config_path) if config_path else None
        self.config = copy.deepcopy(DEFAULT_SETTINGS)
        self.load()
        self.validate()

    def load(self) -> None:
        if self.config_path is not None:
            if not self.config_path.exists():
                raise FileNotFoundError(
                    f"Configuration file not found: {self.config_path}\n"
                    f"Please copy settings-template.yaml to settings.yaml and configure your values."
                )

            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f)

            if not loaded:
                raise ValueError(f"Configuration file is empty: {self.config_path}")
            if not isinstance(loaded, dict):
                raise ValueError(f"Configuration file must contain a mapping: {self.config_path}")

            _merge(self.config, loaded)

        # Environment takes precedence over the file for the API key
        env_key = os.environ.get("NCBI_API_KEY")
        if env_key:
            self.set("pubmed.api_key", env_key)

    def validate(self) -> None:
        positive_fields = {
            "pubmed.timeout": self.timeout,
            "pubmed.batch_size": self.batch_size,
            "pubmed.min_interval": self.min_interval,
        }

        for field, value in positive_fields.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ValueError(
                    f"Setting '{field}' must be a positive number, got {value!r}.\n"
                    f"Please update {self.config_path or 'your settings'}"
                )

    def get(self, key_path: str, default: Any = None) -> Any:
        keys = key_path.split('.')
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any) -> None:
        keys = key_path.split('.')
        config = self.config
        for key in keys[:-1]:
            if key not in config or not isinstance(config[key], dict):
                config[key] = {}
            config = config[key]
        config[keys[-1]] = value

    @property
    def base_url(self) -> str:
        return self.get("pubmed.base_url")

    @property
    def pubmed_email(self) -> Optional[str]:
        return self.get("pubmed.email")

    @property
    def pubmed_api_key(self) -> Optional[str]:
        return self.get("pubmed.api_key") or None

    @property
    def pubmed_tool(self) -> str:
        return self.get("pubmed.tool", "litsearch")

    @property
    def min_interval(self) -> float:
        """Seconds between requests: 0.1 if API key provided, else 0.34."""
        default = MIN_INTERVAL_WITH_KEY if self.pubmed_api_key else MIN_INTERVAL_WITHOUT_KEY
        return self.get("pubmed.min_interval", default)

    @property
    def timeout(self) -> float:
        return self.get("pubmed.timeout", 30)

    @property
    def batch_size(self) -> int:
        return self.get("pubmed.batch_size", 200)

    @property
    def storage_enabled(self) -> bool:
        return bool(self.get("storage.enabled", False))

    @property
    def storage_path(self) -> str:
        return self.get("storage.path", "data/search_history.db")

    @property
    def log_level(self) -> str:
        return str(self.get("logging.level", "INFO")).upper()

    @property
    def log_file(self) -> Optional[str]:
        return self.get("logging.file")


def _merge(base: dict, override: dict) -> None:
    """Recursively merge override into base in place."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
