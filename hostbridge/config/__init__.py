"""Configuration module for hostbridge."""

from hostbridge.config.loader import load_config, save_config, get_config_path
from hostbridge.config.schema import Config

__all__ = ["Config", "load_config", "save_config", "get_config_path"]
