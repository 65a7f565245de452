"""Configuration management for iconsmith.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- FontConfig: Font metrics and codepoint range
- OutlineConfig: Outline extraction and conversion settings
- NamingConfig: Name table strings
- LoggingConfig: Logging settings
- IconsmithSettings: Main application settings
"""

from iconsmith.config.settings import (
    PUA_END,
    PUA_START,
    FontConfig,
    IconsmithSettings,
    LoggingConfig,
    NamingConfig,
    OutlineConfig,
    get_default_settings,
)

__all__ = [
    "PUA_END",
    "PUA_START",
    "FontConfig",
    "IconsmithSettings",
    "LoggingConfig",
    "NamingConfig",
    "OutlineConfig",
    "get_default_settings",
]
