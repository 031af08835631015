# File: src/config/explorer_config.py

import yaml
import os
from typing import Dict, Any

from ..exceptions import ConfigError
from ..utils.config import Config

DEFAULT_CONFIG_PATH = "config/explorer.yaml"

def default_config() -> Dict[str, Any]:
    return {
        "node": {
            "url": Config.DEFAULT_NODE_URL,
            "request_timeout": Config.DEFAULT_REQUEST_TIMEOUT
        },
        "server": {
            "host": Config.DEFAULT_SERVER_HOST,
            "port": Config.DEFAULT_SERVER_PORT,
            "static_dir": "static"
        },
        "explorer": {
            "blocks_per_page": Config.BLOCKS_PER_PAGE,
            "receipt_workers": 1,
            "page_timeout": Config.DEFAULT_PAGE_TIMEOUT
        },
        "monitoring": {
            "metrics_port": 0,  # 0 keeps the metrics server off
            "log_dir": "logs",
            "log_level": "INFO"
        }
    }

def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged

class ExplorerConfig:
    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        if not os.path.exists(self.config_path):
            return self._create_default_config()

        try:
            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid configuration in {self.config_path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigError(f"Configuration in {self.config_path} must be a mapping")
        # Keys missing from the file fall back to defaults
        return _merge(default_config(), loaded)

    def _create_default_config(self) -> Dict[str, Any]:
        config = default_config()

        directory = os.path.dirname(self.config_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.config_path, 'w') as f:
            yaml.dump(config, f)

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        try:
            keys = key.split('.')
            value = self.config
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def update(self, key: str, value: Any):
        """Update configuration value."""
        keys = key.split('.')
        config = self.config
        for k in keys[:-1]:
            config = config.setdefault(k, {})
        config[keys[-1]] = value

        with open(self.config_path, 'w') as f:
            yaml.dump(self.config, f)

    def override(self, key: str, value: Any):
        """Change a value for this process only, e.g. from a command line flag"""
        if value is None:
            return
        keys = key.split('.')
        config = self.config
        for k in keys[:-1]:
            config = config.setdefault(k, {})
        config[keys[-1]] = value
