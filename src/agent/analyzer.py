"""
Code vulnerability analyzer.

Builds the fixed two-message prompt for a code snippet, sends it to the
chat completion API and retries rate-limited calls with a fixed delay.
"""

import logging
import time
from typing import Callable, Dict, List, Optional

from config import AppSettings
from src.agent.llm_client import OpenAIClient
from src.models import AnalysisResult, AnalysisOutcome, CallerError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a code vulnerability analysis assistant."
USER_PROMPT_PREFIX = "Analyze the following code for vulnerabilities: "


def build_messages(code: str) -> List[Dict[str, str]]:
    """Build the system + user message pair for `code`."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": f"{USER_PROMPT_PREFIX}{code}"}
    ]


class VulnerabilityAnalyzer:
    """
    Runs one analysis per call to `analyze()`.

    Only RATE_LIMITED attempts are retried, up to `max_attempts` calls in
    total with `delay_sec` between them. Every other failure is returned
    as soon as it happens.
    """

    def __init__(
            self,
            client: OpenAIClient,
            max_tokens: int = 1500,
            max_attempts: int = 5,
            delay_sec: float = 1.0,
            sleep: Callable[[float], None] = time.sleep
    ):
        self.client = client
        self.max_tokens = max_tokens
        self.max_attempts = max_attempts
        self.delay_sec = delay_sec
        self._sleep = sleep

    def analyze(self, code: str) -> AnalysisOutcome:
        """
        Analyze a code snippet for vulnerabilities.

        Args:
            code: Source code, passed to the model as-is (may be empty)

        Returns:
            AnalysisResult on success, CallerError otherwise
        """
        messages = build_messages(code)
        logger.info(f"[ANALYZE] Prompt: {messages[1]['content']}")

        for attempt in range(1, self.max_attempts + 1):
            outcome = self.client.chat(messages, max_tokens=self.max_tokens)

            if isinstance(outcome, AnalysisResult):
                outcome.attempts = attempt
                logger.info(f"[ANALYZE] Result ({attempt} attempt(s)): {outcome.text}")
                return outcome

            if not outcome.retryable:
                logger.error(f"[ANALYZE] {outcome.kind.value}: {outcome.message}")
                return outcome

            if attempt < self.max_attempts:
                logger.warning(f"[ANALYZE] Rate limit exceeded. Retrying in {self.delay_sec}s "
                               f"(attempt {attempt}/{self.max_attempts})")
                self._sleep(self.delay_sec)

        error = CallerError.retries_exhausted(self.max_attempts)
        logger.error(f"[ANALYZE] {error.message}")
        return error

    def close(self):
        self.client.close()


def create_analyzer(
        settings: Optional[AppSettings] = None,
        client: Optional[OpenAIClient] = None
) -> VulnerabilityAnalyzer:
    """Factory function to create an analyzer from settings."""
    settings = settings or AppSettings.from_env()
    if client is None:
        client = OpenAIClient(
            api_key=settings.llm.api_key,
            base_url=settings.llm.base_url,
            model=settings.llm.model,
            timeout=settings.llm.timeout
        )
    return VulnerabilityAnalyzer(
        client,
        max_tokens=settings.llm.max_tokens,
        max_attempts=settings.retry.max_attempts,
        delay_sec=settings.retry.delay_sec
    )
