"""
Custom LLM client for OpenAI-compatible inference endpoints.

Provides a simple wrapper for local/custom inference endpoints that implement
the OpenAI chat completions API format.
"""

import logging
import time
from typing import Optional

import requests

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = (502, 503, 504)


class CustomEndpointLLM:
    """LLM client for OpenAI-compatible endpoints."""

    def __init__(
        self,
        endpoint_url: str,
        model: str,
        api_key: Optional[str] = None,
        temperature: float = 0.1,
        max_tokens: int = 1024,
        timeout: int = 60,
        max_retries: int = 1,
        retry_delay: float = 2.0,
    ):
        """
        Initialize custom endpoint client.

        Args:
            endpoint_url: Full URL to the /v1/chat/completions endpoint
            model: Model identifier sent with every request
            api_key: Optional bearer token
            temperature: Sampling temperature (0.0 to 2.0)
            max_tokens: Maximum tokens to generate
            timeout: Request timeout in seconds
            max_retries: Total attempts for 502/503/504 and connection errors
            retry_delay: Initial delay between retries (uses exponential backoff)
        """
        self.endpoint_url = endpoint_url
        self.model = model
        self.api_key = api_key
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def invoke(self, prompt: str) -> str:
        """
        Call the LLM with a prompt.

        Args:
            prompt: The input prompt text

        Returns:
            The generated response text

        Raises:
            requests.HTTPError: If the API request fails after all attempts
            ValueError: If the response body has no completion text
        """
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

        for attempt in range(self.max_retries):
            last_attempt = attempt == self.max_retries - 1
            try:
                response = requests.post(
                    self.endpoint_url,
                    json=payload,
                    headers=self._headers(),
                    timeout=self.timeout,
                )
                response.raise_for_status()
                return self._extract_text(response.json())

            except requests.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                if status in RETRYABLE_STATUS_CODES and not last_attempt:
                    delay = self.retry_delay * (2 ** attempt)
                    logger.warning(
                        f"Endpoint returned {status}, "
                        f"retrying in {delay:.1f}s (attempt {attempt + 1}/{self.max_retries})"
                    )
                    time.sleep(delay)
                    continue
                raise

            except (requests.Timeout, requests.ConnectionError) as e:
                if not last_attempt:
                    delay = self.retry_delay * (2 ** attempt)
                    logger.warning(
                        f"Connection error: {e!s}, "
                        f"retrying in {delay:.1f}s (attempt {attempt + 1}/{self.max_retries})"
                    )
                    time.sleep(delay)
                    continue
                raise

        raise RuntimeError("All retry attempts failed")

    @staticmethod
    def _extract_text(result: dict) -> str:
        """Pull the completion text out of a chat completions response body."""
        try:
            content = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ValueError(f"Malformed completion response: {e!s}") from e

        if not isinstance(content, str):
            raise ValueError("Completion response has no text content")
        return content
