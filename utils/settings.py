"""Settings: optional YAML file, overridden by environment variables."""
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_ENV = "EDGE_FRAME_CONFIG"
DEFAULT_CONFIG_FILE = "config.yaml"

DEFAULTS: Dict[str, Any] = {
    "server.host": "0.0.0.0",
    "server.port": 8080,
    "log.level": "INFO",
    "canny.low_threshold": 80,
    "canny.high_threshold": 150,
    "frame.output_path": None,
    "frame.jpeg_quality": 90,
}


class Config:
    def __init__(self, config_path: Optional[str] = None):
        """
        Args:
            config_path: Path to a YAML settings file. Missing files are ignored.
        """
        self.config_data: Dict[str, Any] = {}
        if config_path and Path(config_path).exists():
            with open(config_path, 'r', encoding='utf-8') as f:
                self.config_data = yaml.safe_load(f) or {}

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key; SERVER_PORT overrides server.port and so on."""
        if default is None:
            default = DEFAULTS.get(key)

        env_value = os.getenv(key.upper().replace('.', '_'))
        if env_value is not None:
            return env_value

        value = self.config_data
        for k in key.split('.'):
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
        return value if value is not None else default

    def get_int(self, key: str, default: Optional[int] = None) -> int:
        fallback = DEFAULTS.get(key, 0) if default is None else default
        value = self.get(key, fallback)
        try:
            return int(value)
        except (ValueError, TypeError):
            return fallback

    def get_float(self, key: str, default: Optional[float] = None) -> float:
        fallback = DEFAULTS.get(key, 0.0) if default is None else default
        value = self.get(key, fallback)
        try:
            return float(value)
        except (ValueError, TypeError):
            return float(fallback)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ('true', '1', 'yes', 'on')
        return default


def load_config(config_path: Optional[str] = None) -> Config:
    path = config_path or os.getenv(CONFIG_ENV) or DEFAULT_CONFIG_FILE
    return Config(path)


settings = load_config()
