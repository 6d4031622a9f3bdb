"""Client for the OpenAI chat completion API."""

import logging
import time
from typing import Optional, Dict, Any, List

import requests

from src.models import AnalysisResult, AnalysisOutcome, CallerError

logger = logging.getLogger(__name__)


class OpenAIClient:
    """
    Client for OpenAI-compatible chat completion APIs.

    One attempt per call to `chat()`. Transport failures are never raised;
    they come back as a CallerError tagged with what went wrong:

    - the server answered with an error status -> RATE_LIMITED / UPSTREAM_ERROR
    - the request went out but nothing came back -> NO_RESPONSE
    - the request could not be built or sent -> REQUEST_SETUP_ERROR
    """

    def __init__(
            self,
            api_key: Optional[str],
            base_url: str = "https://api.openai.com/v1",
            model: str = "gpt-3.5-turbo",
            timeout: int = 600,
            session: Optional[requests.Session] = None
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: API key sent as a bearer token
            base_url: API base URL
            model: Model identifier
            timeout: Request timeout in seconds
            session: HTTP session to reuse (one is created if omitted)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()

    def chat(self, messages: List[Dict[str, str]], max_tokens: int = 1500) -> AnalysisOutcome:
        """Send one chat completion request."""
        if not self.api_key:
            logger.error("[OPENAI] Error setting up OpenAI API request: no API key configured")
            return CallerError.request_setup("OPENAI_API_KEY is not set")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        payload = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens
        }

        start_time = time.time()

        try:
            response = self.session.post(
                f"{self.base_url}/chat/completions",
                headers=headers,
                json=payload,
                timeout=self.timeout
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.error(f"[OPENAI] No response received from OpenAI API: {e}")
            return CallerError.no_response(str(e))
        except requests.RequestException as e:
            logger.error(f"[OPENAI] Error setting up OpenAI API request: {e}")
            return CallerError.request_setup(str(e))

        logger.info(f"[OPENAI] Response status: {response.status_code} "
                    f"({time.time() - start_time:.2f}s)")

        if response.status_code == 429:
            logger.error(f"[OPENAI] OpenAI API Error: 429 {response.text[:500]}")
            return CallerError.rate_limited(self._error_message(response))

        if not response.ok:
            message = self._error_message(response)
            logger.error(f"[OPENAI] OpenAI API Error: {response.status_code} {message}")
            return CallerError.upstream(response.status_code, message)

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"[OPENAI] Malformed completion payload: {e}")
            return CallerError.upstream(response.status_code, "Malformed completion payload")

        if not isinstance(content, str):
            logger.error("[OPENAI] Malformed completion payload: message has no text content")
            return CallerError.upstream(response.status_code, "Malformed completion payload")

        return AnalysisResult(text=content, model=data.get("model", self.model))

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Extract `error.message` from an error body, falling back to raw text."""
        try:
            data: Dict[str, Any] = response.json()
            message = data.get("error", {}).get("message")
            if message:
                return message
        except (ValueError, AttributeError):
            pass
        return response.text or response.reason or ""

    def close(self):
        """Release pooled connections."""
        self.session.close()
