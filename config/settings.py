"""
Configuration settings for the code vulnerability analysis front end.

Defaults mirror the values the service has always shipped with; every one
of them can be overridden from the environment (or a local .env file) or
from a JSON settings file.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple
import os
import json
import logging

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@dataclass
class LLMSettings:
    """Chat completion API settings."""
    model: str = "gpt-3.5-turbo"
    max_tokens: int = 1500
    base_url: str = "https://api.openai.com/v1"
    api_key: Optional[str] = None
    timeout: int = 600  # seconds, enforced by the transport


@dataclass
class RetrySettings:
    """Retry policy for rate-limited calls."""
    max_attempts: int = 5
    delay_sec: float = 1.0  # fixed, no backoff


@dataclass
class ServerSettings:
    """HTTP server settings."""
    host: str = "0.0.0.0"
    port: int = 8081
    expose_error_details: bool = False
    quota_markers: Tuple[str, ...] = (
        "exceeded your current quota",
        "insufficient quota",
        "insufficient_quota",
    )


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _log_level(value: str) -> str:
    """Normalize a level name, falling back to INFO for unknown names."""
    name = str(value).strip().upper()
    if isinstance(logging.getLevelName(name), int):
        return name
    logger.warning(f"Unknown log level {value!r}, using INFO")
    return "INFO"


@dataclass
class AppSettings:
    """Top-level application settings."""
    llm: LLMSettings = field(default_factory=LLMSettings)
    retry: RetrySettings = field(default_factory=RetrySettings)
    server: ServerSettings = field(default_factory=ServerSettings)
    log_level: str = "INFO"

    @classmethod
    def from_file(cls, file_path: str) -> "AppSettings":
        """Load settings from JSON file."""
        with open(file_path, 'r') as f:
            data = json.load(f)

        settings = cls()

        for section in ('llm', 'retry', 'server'):
            if section in data:
                target = getattr(settings, section)
                for k, v in data[section].items():
                    if hasattr(target, k):
                        setattr(target, k, v)

        if isinstance(settings.server.quota_markers, list):
            settings.server.quota_markers = tuple(settings.server.quota_markers)

        if 'log_level' in data:
            settings.log_level = _log_level(data['log_level'])

        return settings

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "AppSettings":
        """Load settings from environment variables (and .env if present)."""
        if dotenv:
            load_dotenv()

        settings = cls()

        # LLM
        if os.getenv('OPENAI_API_KEY'):
            settings.llm.api_key = os.getenv('OPENAI_API_KEY')
        if os.getenv('OPENAI_BASE_URL'):
            settings.llm.base_url = os.getenv('OPENAI_BASE_URL')
        if os.getenv('LLM_MODEL'):
            settings.llm.model = os.getenv('LLM_MODEL')
        if os.getenv('LLM_MAX_TOKENS'):
            settings.llm.max_tokens = int(os.getenv('LLM_MAX_TOKENS'))
        if os.getenv('LLM_TIMEOUT'):
            settings.llm.timeout = int(os.getenv('LLM_TIMEOUT'))

        # Retry
        if os.getenv('LLM_MAX_ATTEMPTS'):
            settings.retry.max_attempts = int(os.getenv('LLM_MAX_ATTEMPTS'))
        if os.getenv('LLM_RETRY_DELAY'):
            settings.retry.delay_sec = float(os.getenv('LLM_RETRY_DELAY'))

        # Server
        if os.getenv('HOST'):
            settings.server.host = os.getenv('HOST')
        if os.getenv('PORT'):
            settings.server.port = int(os.getenv('PORT'))
        if os.getenv('EXPOSE_ERROR_DETAILS'):
            settings.server.expose_error_details = _as_bool(os.getenv('EXPOSE_ERROR_DETAILS'))

        if os.getenv('LOG_LEVEL'):
            settings.log_level = _log_level(os.getenv('LOG_LEVEL'))

        return settings

    def to_dict(self) -> dict:
        """Convert settings to dictionary. The API key is never included."""
        return {
            "llm": {
                "model": self.llm.model,
                "max_tokens": self.llm.max_tokens,
                "base_url": self.llm.base_url,
                "timeout": self.llm.timeout,
                "api_key_configured": bool(self.llm.api_key)
            },
            "retry": {
                "max_attempts": self.retry.max_attempts,
                "delay_sec": self.retry.delay_sec
            },
            "server": {
                "host": self.server.host,
                "port": self.server.port,
                "expose_error_details": self.server.expose_error_details,
                "quota_markers": list(self.server.quota_markers)
            },
            "log_level": self.log_level
        }


# Default settings instance
DEFAULT_SETTINGS = AppSettings()
