"""Configuration management for cockpitbind.

Loads configuration from YAML files and environment variables using Pydantic.
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseModel):
    """Application settings."""

    name: str = "cockpitbind"
    version: str = "0.1.0"
    log_level: str = "INFO"
    json_logs: bool = False


class RouterConfig(BaseModel):
    """Binding router settings."""

    bindings_path: Optional[str] = None
    log_unhandled: bool = False


class TimerConfig(BaseModel):
    """Countdown timer defaults."""

    duration: float = 1.0
    update_rate: float = 0.05  # must match the device update period


class AnimationConfig(BaseModel):
    """Value animator defaults."""

    update_rate: float = 0.05


class Settings(BaseSettings):
    """Main settings class that loads from YAML and environment."""

    model_config = SettingsConfigDict(
        env_prefix="COCKPITBIND_",
        env_nested_delimiter="__",
    )

    app: AppConfig = Field(default_factory=AppConfig)
    router: RouterConfig = Field(default_factory=RouterConfig)
    timer: TimerConfig = Field(default_factory=TimerConfig)
    animation: AnimationConfig = Field(default_factory=AnimationConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from a YAML file.

        Args:
            config_path: Path to config file. If None, uses default paths.

        Returns:
            Settings instance with loaded configuration.
        """
        default_paths = [
            Path("config/config.yaml"),
            Path("config/default_config.yaml"),
            Path.home() / ".config" / "cockpitbind" / "config.yaml",
        ]

        if config_path and config_path.exists():
            yaml_path = config_path
        else:
            yaml_path = None
            for path in default_paths:
                if path.exists():
                    yaml_path = path
                    break

        if yaml_path:
            with open(yaml_path) as f:
                yaml_config = yaml.safe_load(f) or {}
        else:
            yaml_config = {}

        return cls(**yaml_config)

    def get_bindings_path(self) -> Optional[Path]:
        """Get path to the binding table, if one is configured."""
        if not self.router.bindings_path:
            return None
        return Path(self.router.bindings_path)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns:
        Settings instance (creates one if not exists).
    """
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Reload settings from disk.

    Args:
        config_path: Optional path to config file.

    Returns:
        New settings instance.
    """
    global _settings
    _settings = Settings.load(config_path)
    return _settings
