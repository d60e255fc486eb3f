import json
import os
from typing import Any


class Config:
    """Process-wide settings for logging and the command line tool."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            config = cls._load_config()
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._config = config
        return cls._instance

    @staticmethod
    def _load_config() -> dict:
        """Load defaults, then overlay the JSON file named by KECCAK_CONST_CONFIG."""
        config = {
            "logging": {
                "level": "WARNING",
            },
            "cli": {
                "default_algorithm": "sha3_256",
                "xof_length": 32,
            },
        }
        config_file = os.environ.get("KECCAK_CONST_CONFIG")
        if config_file and os.path.exists(config_file):
            with open(config_file, "r") as f:
                try:
                    file_config = json.load(f)
                except json.JSONDecodeError as e:
                    raise ValueError(f"Error reading config file {config_file}: {e}") from e
            if not isinstance(file_config, dict):
                raise ValueError(f"Config file {config_file} must hold a JSON object")
            for section, values in file_config.items():
                if isinstance(values, dict) and isinstance(config.get(section), dict):
                    config[section].update(values)
                else:
                    config[section] = values
        return config

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded settings so the next Config() reads them again."""
        cls._instance = None

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a configuration value by dotted key, e.g. ``cli.xof_length``."""
        value = self._config
        for k in key.split("."):
            if not isinstance(value, dict) or k not in value:
                return default
            value = value[k]
        return value
