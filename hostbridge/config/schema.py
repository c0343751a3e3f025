"""Configuration schema using Pydantic.

Persisted to ~/.hostbridge/config.json; every field can also be set from the
environment with the ``HOSTBRIDGE_`` prefix (nested with ``__``).
"""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hostbridge.constants import CHANNEL_NAME


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_enabled: bool = True  # Rotating file sink under ~/.hostbridge/logs


class LaunchConfig(BaseModel):
    """Default launch extras; explicit --extra flags override them."""
    extras: dict[str, bool | int | str] = Field(default_factory=dict)


class DispatchConfig(BaseModel):
    """Dispatch queue configuration."""
    queue_maxsize: int = Field(default=0, ge=0)  # 0 = unbounded


class Config(BaseSettings):
    """Root configuration for hostbridge."""
    channel_name: str = CHANNEL_NAME
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    launch: LaunchConfig = Field(default_factory=LaunchConfig)
    dispatch: DispatchConfig = Field(default_factory=DispatchConfig)

    model_config = SettingsConfigDict(
        env_prefix="HOSTBRIDGE_",
        env_nested_delimiter="__",
    )
