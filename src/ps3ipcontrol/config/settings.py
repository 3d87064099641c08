"""Configuration management for ps3ipcontrol.

Loads settings from an optional YAML configuration file with environment
variable overrides. The command line supplies the console's Bluetooth
device address and may override the listening port.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/ps3ipcontrol.yaml")
DEFAULT_PORT = 9090


class GimxConfig(BaseModel):
    binary: str = Field(default="/usr/bin/gimx", description="Path to the gimx executable")
    pgrep: str = Field(default="/usr/bin/pgrep", description="Path to the pgrep executable")
    process_name: str = Field(default="gimx", description="Process name probed for liveness")
    controller_type: str = Field(default="Sixaxis")
    endpoint: str = Field(
        default="127.0.0.1:51914",
        description="Loopback address the emulator listens on for events",
    )


class TimingConfig(BaseModel):
    """Empirical delays, in seconds, tuned against one console/firmware."""

    boot_delay: float = Field(default=35.0, ge=0)
    key_press_duration: float = Field(default=0.1, ge=0)
    power_off_hold: float = Field(default=3.0, ge=0)
    confirm_interval: float = Field(default=0.5, ge=0)


class ServerConfig(BaseModel):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    reconcile_interval: float = Field(
        default=30.0,
        ge=0,
        description="Seconds between power state reconciliation probes (0 disables)",
    )


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)
    access_log: bool = Field(default=True, description="Log one line per HTTP request")


class Settings(BaseSettings):
    """Root configuration for the proxy.

    Loads from YAML file and supports environment variable overrides,
    e.g. ``PS3IPCONTROL_SERVER__PORT=8080``.
    """

    model_config = {
        "env_prefix": "PS3IPCONTROL_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    device_address: str = Field(default="", description="Bluetooth device address of the PS3")

    gimx: GimxConfig = Field(default_factory=GimxConfig)
    timing: TimingConfig = Field(default_factory=TimingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # YAML arrives as init values, environment overrides it
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML > defaults. Nested sections are
    merged key by key, so an env var overrides one YAML key only.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.debug("Config file %s not found, using defaults + env vars", path)

    return Settings(**yaml_data)
