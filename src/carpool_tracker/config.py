"""
Configuration management for Carpool Tracker

Handles configuration loading with sensible defaults and environment overrides.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__

ENV_HOME = "CARPOOL_TRACKER_HOME"
ENV_DATA_FILE = "CARPOOL_TRACKER_DATA_FILE"
ENV_DEBUG = "CARPOOL_TRACKER_DEBUG"
ENV_LOG_TO_FILE = "CARPOOL_TRACKER_LOG_TO_FILE"


@dataclass
class StorageConfig:
    """Address book storage configuration."""

    data_file: str = "addressbook.json"  # Relative paths resolve against the home dir
    seed_sample_data: bool = True  # Populate sample data when no file exists yet


@dataclass
class AppConfig:
    """Main application configuration."""

    app_name: str = "Carpool Tracker"
    version: str = __version__
    description: str = "Command-line manager for passengers, drivers and carpools"

    # Paths (will be set automatically)
    home_dir: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = True
    log_dir: str = "logs"  # Relative paths resolve against the home dir
    debug: bool = False


@dataclass
class CarpoolConfig:
    """Complete configuration for Carpool Tracker."""

    app: AppConfig = field(default_factory=AppConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "app": asdict(self.app),
            "storage": asdict(self.storage),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CarpoolConfig":
        """Create from dictionary."""
        return cls(
            app=AppConfig(**data.get("app", {})),
            storage=StorageConfig(**data.get("storage", {})),
        )


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class ConfigManager:
    """Manages configuration loading, saving, and environment overrides."""

    def __init__(self):
        self.config_file: Optional[Path] = None
        self.config: Optional[CarpoolConfig] = None

    def detect_environment(self) -> Dict[str, Any]:
        """Read the environment overrides."""
        env_info: Dict[str, Any] = {}

        env_info["home_dir"] = str(self.get_home_directory())
        env_info["debug"] = _env_flag(ENV_DEBUG, False)
        env_info["log_to_file"] = _env_flag(ENV_LOG_TO_FILE, True)
        env_info["data_file"] = os.getenv(ENV_DATA_FILE)

        return env_info

    def get_home_directory(self) -> Path:
        """Directory holding config.json, the address book and the logs."""
        home = os.getenv(ENV_HOME)
        if home:
            return Path(home)
        return Path.cwd() / "data"

    def get_config_file_path(self) -> Path:
        """Get the path for the config file."""
        config_dir = self.get_home_directory()
        config_dir.mkdir(parents=True, exist_ok=True)
        return config_dir / "config.json"

    def _apply_environment(self, config: CarpoolConfig) -> CarpoolConfig:
        env_info = self.detect_environment()

        config.app.home_dir = env_info["home_dir"]
        if env_info["debug"]:
            config.app.debug = True
            config.app.log_level = "DEBUG"
        if not env_info["log_to_file"]:
            config.app.log_to_file = False
        if env_info["data_file"]:
            config.storage.data_file = env_info["data_file"]

        return config

    def create_default_config(self) -> CarpoolConfig:
        """Create default configuration with environment overrides applied."""
        return self._apply_environment(CarpoolConfig())

    def load_config(self) -> CarpoolConfig:
        """Load configuration from file or create default."""
        self.config_file = self.get_config_file_path()

        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)

                self.config = self._apply_environment(CarpoolConfig.from_dict(data))
                logging.info(f"Loaded configuration from {self.config_file}")

            except (OSError, ValueError, TypeError) as e:
                logging.warning(f"Failed to load config from {self.config_file}: {e}")
                logging.info("Creating default configuration")
                self.config = self.create_default_config()
        else:
            logging.info("No config file found, creating default configuration")
            self.config = self.create_default_config()

        return self.config

    def save_config(self, config: Optional[CarpoolConfig] = None) -> bool:
        """Save configuration to file."""
        if config is None:
            config = self.config

        if config is None:
            logging.error("No configuration to save")
            return False

        try:
            if self.config_file is None:
                self.config_file = self.get_config_file_path()

            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)

            logging.info(f"Saved configuration to {self.config_file}")
            return True

        except OSError as e:
            logging.error(f"Failed to save config to {self.config_file}: {e}")
            return False

    def update_config(self, updates: Dict[str, Any]) -> bool:
        """Update configuration with new values."""
        if self.config is None:
            self.load_config()

        try:
            config_dict = self.config.to_dict()

            for key, value in updates.items():
                if "." in key:
                    # Handle nested keys like "storage.data_file"
                    section, field_name = key.split(".", 1)
                    if section in config_dict:
                        config_dict[section][field_name] = value
                elif key in config_dict and isinstance(value, dict):
                    config_dict[key].update(value)

            self.config = CarpoolConfig.from_dict(config_dict)
            return self.save_config()

        except TypeError as e:
            logging.error(f"Failed to update configuration: {e}")
            return False

    def _resolve(self, path_str: str) -> Path:
        path = Path(path_str)
        if path.is_absolute():
            return path
        return self.get_home_directory() / path

    def get_data_file_path(self) -> Path:
        """Get the address book JSON file path."""
        if self.config is None:
            self.load_config()
        return self._resolve(self.config.storage.data_file)

    def get_log_directory(self) -> Path:
        """Get the log directory path."""
        if self.config is None:
            self.load_config()
        return self._resolve(self.config.app.log_dir)

    def validate_config(self) -> List[str]:
        """Validate configuration and return list of warnings/errors."""
        if self.config is None:
            self.load_config()

        issues = []

        data_file = self.get_data_file_path()
        data_dir = data_file.parent
        if data_file.exists() and not data_file.is_file():
            issues.append(f"Address book path is not a file: {data_file}")
        elif data_dir.exists() and not os.access(data_dir, os.W_OK):
            issues.append(f"Address book directory is not writable: {data_dir}")

        if not isinstance(logging.getLevelName(self.config.app.log_level.upper()), int):
            issues.append(f"Unknown log level: {self.config.app.log_level}")

        return issues


# Global config manager instance
config_manager = ConfigManager()


def get_config() -> CarpoolConfig:
    """Get the current configuration, loading it on first use."""
    if config_manager.config is None:
        return config_manager.load_config()
    return config_manager.config


def get_data_file_path() -> Path:
    """Get the address book file path."""
    return config_manager.get_data_file_path()


def get_log_directory() -> Path:
    """Get the log directory."""
    return config_manager.get_log_directory()


def reset_config() -> None:
    """Forget the loaded configuration so the next access reloads it."""
    config_manager.config = None
    config_manager.config_file = None
