"""Configuration models and loading."""

import json
import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, ValidationError, field_validator

from core.exceptions import ConfigurationError

CONFIG_DIR = Path.home() / ".config" / "http-relay"
CONFIG_FILE = CONFIG_DIR / "config.json"

ENV_HOST = "HTTP_RELAY_HOST"
ENV_PORT = "HTTP_RELAY_PORT"
ENV_TIMEZONE = "HTTP_RELAY_TIMEZONE"


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080
    keep_alive_timeout: int = 5

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


class UpstreamSettings(BaseModel):
    timeout: float = Field(default=60.0, gt=0)
    max_timeout: float = Field(default=300.0, gt=0)


class LimitsSettings(BaseModel):
    max_body_size: int = 50 * 1024 * 1024  # 50MB


class AppSettings(BaseModel):
    timezone: str = "UTC"

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone {value!r}") from e
        return value

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


class Config(BaseModel):
    server: ServerSettings = Field(default_factory=ServerSettings)
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)
    limits: LimitsSettings = Field(default_factory=LimitsSettings)
    app: AppSettings = Field(default_factory=AppSettings)


def load_config(config_file: Path = CONFIG_FILE) -> Config:
    """Load configuration from JSON file, creating default if needed."""
    if not config_file.exists():
        config_file.parent.mkdir(parents=True, exist_ok=True)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return apply_env_overrides(default)

    try:
        data = json.loads(config_file.read_text())
        config = Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and recreate default
        backup = config_file.with_suffix(".json.bak")
        config_file.rename(backup)
        config = Config()
        config_file.write_text(config.model_dump_json(indent=2))
    return apply_env_overrides(config)


def apply_env_overrides(config: Config, environ: dict[str, str] | None = None) -> Config:
    """Apply HTTP_RELAY_* environment variables on top of the file config."""
    env = os.environ if environ is None else environ
    server: dict[str, str | int] = {}
    app: dict[str, str] = {}

    if env.get(ENV_HOST):
        server["host"] = env[ENV_HOST]
    if env.get(ENV_PORT):
        try:
            server["port"] = int(env[ENV_PORT])
        except ValueError:
            raise ConfigurationError(f"{ENV_PORT} must be an integer, got {env[ENV_PORT]!r}") from None
    if env.get(ENV_TIMEZONE):
        app["timezone"] = env[ENV_TIMEZONE]

    if not server and not app:
        return config
    try:
        return Config.model_validate(
            {
                **config.model_dump(),
                "server": {**config.server.model_dump(), **server},
                "app": {**config.app.model_dump(), **app},
            }
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid environment override: {e}") from e
