"""Configuration management for the character sheet editor."""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class UIConfig(BaseModel):
    """UI display configuration."""

    theme: str = "textual-dark"
    notification_timeout: float = 3.0


class PathsConfig(BaseModel):
    """File paths configuration."""

    exports: Path = Path("./exports")


class ImportConfig(BaseModel):
    """Character import configuration."""

    validate_schema: bool = False


class LoggingConfig(BaseModel):
    """Log output configuration."""

    level: str = "INFO"
    file: Path = Path("./logs/charsheet.log")


class AppConfig(BaseModel):
    """Main application configuration."""

    ui: UIConfig = Field(default_factory=UIConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    importing: ImportConfig = Field(default_factory=ImportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: Path | str | None = None) -> AppConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file. Defaults to ./config.yaml

    Returns:
        AppConfig instance with loaded or default values
    """
    if config_path is None:
        config_path = Path("config.yaml")
    else:
        config_path = Path(config_path)

    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        logger.debug(f"Loaded configuration from {config_path}")
        return AppConfig(**data)

    return AppConfig()


def save_config(config: AppConfig, config_path: Path | str | None = None) -> None:
    """Save configuration to YAML file.

    Args:
        config: AppConfig instance to save
        config_path: Path to save to. Defaults to ./config.yaml
    """
    if config_path is None:
        config_path = Path("config.yaml")
    else:
        config_path = Path(config_path)

    data = config.model_dump(mode="json")

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# Global config instance
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get the global configuration instance.

    Returns:
        The loaded AppConfig instance
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config
