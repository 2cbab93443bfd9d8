"""Configuration management for schemabind.

Usage:
    >>> from schemabind.config import get_settings, GenerationOptions
    >>> options = GenerationOptions.from_settings(get_settings(), dialect="mysql")
"""

from schemabind.config.settings import GenerationOptions, Settings, get_settings

__all__ = [
    "GenerationOptions",
    "Settings",
    "get_settings",
]
