"""Configuration module."""

from .settings import (
    AppSettings,
    LLMSettings,
    RetrySettings,
    ServerSettings,
    DEFAULT_SETTINGS
)

__all__ = [
    "AppSettings",
    "LLMSettings",
    "RetrySettings",
    "ServerSettings",
    "DEFAULT_SETTINGS"
]
