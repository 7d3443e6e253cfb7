from .load import load_config
from .model import ConfigError, TemplarConfig
from .paths import CONFIG_FILE, default_config_path, find_config

__all__ = [
    "load_config",
    "ConfigError",
    "TemplarConfig",
    "CONFIG_FILE",
    "default_config_path",
    "find_config",
]
