import os
from dataclasses import dataclass
from typing import Dict, Any

import yaml

from .logging import diagnostics_logger as logger, LogRouter
from .logging.severity import parse_level_mask
from ..utils.deep_merge import deep_merge

DEFAULT_CONFIG: Dict[str, Any] = {
    "logging": {
        "level": "warning|error",
        "directory": "logs",
        "show_caller": True,
    }
}


@dataclass
class RouterSettings:
    level_mask: int
    base_directory: str
    show_caller: bool = True

    def build_router(self, **kwargs):
        """Create and initialize a LogRouter from these settings."""
        return LogRouter.from_settings(self, **kwargs)


class ConfigManager:
    """
    Loads router settings from a YAML file, merged over defaults, with
    LOG_ROUTER_LEVEL and LOG_ROUTER_DIR environment overrides.
    """

    def __init__(self, config_path: str = os.path.join("config", "logging.yaml")):
        self.config_path = config_path
        self.config = self._load_config()

        logger.info("Configuration manager initialized", extra={
            "config": {
                "config_path": config_path,
                "config_exists": os.path.exists(config_path),
            }
        })

    def _load_config(self) -> Dict[str, Any]:
        loaded: Dict[str, Any] = {}
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except FileNotFoundError as e:
            logger.warning(f"Configuration file not found: {e}", extra={
                "config": {
                    "error_type": "file_not_found",
                    "file_path": self.config_path
                }
            })
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML file: {e}", extra={
                "config": {
                    "error_type": "yaml_parse_error",
                    "error_message": str(e)
                }
            })
        if not isinstance(loaded, dict):
            logger.error("Configuration root must be a mapping, ignoring file", extra={
                "config": {"file_path": self.config_path}
            })
            loaded = {}

        config = deep_merge(DEFAULT_CONFIG, loaded)
        if not isinstance(config["logging"], dict):
            logger.error("'logging' section must be a mapping, using defaults", extra={
                "config": {"file_path": self.config_path}
            })
            config["logging"] = deep_merge(DEFAULT_CONFIG["logging"], {})
        for key, default in DEFAULT_CONFIG["logging"].items():
            if config["logging"].get(key) is None:
                config["logging"][key] = default

        # Environment overrides
        env_level = os.getenv("LOG_ROUTER_LEVEL")
        if env_level:
            config["logging"]["level"] = env_level
        env_dir = os.getenv("LOG_ROUTER_DIR")
        if env_dir:
            config["logging"]["directory"] = env_dir
        return config

    def get_config(self) -> Dict[str, Any]:
        return self.config

    def get_settings(self) -> RouterSettings:
        """
        Raises:
            ValueError: the configured level is not a valid mask
        """
        section = self.config["logging"]
        return RouterSettings(
            level_mask=parse_level_mask(section.get("level")),
            base_directory=str(section.get("directory")),
            show_caller=bool(section.get("show_caller", True)),
        )

    def reload_config(self) -> RouterSettings:
        logger.info("Reloading configuration", extra={
            "config": {
                "operation": "reload_config",
                "config_path": self.config_path
            }
        })
        self.config = self._load_config()
        return self.get_settings()
