"""Configuration helpers for the image filter tools."""

from .loader import DEFAULT_CONFIG_PATH, get_section, load_config

__all__ = ["DEFAULT_CONFIG_PATH", "load_config", "get_section"]
