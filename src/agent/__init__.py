"""AI agent for code vulnerability analysis."""

from .llm_client import OpenAIClient
from .analyzer import VulnerabilityAnalyzer, build_messages, create_analyzer

__all__ = ["OpenAIClient", "VulnerabilityAnalyzer", "build_messages", "create_analyzer"]
