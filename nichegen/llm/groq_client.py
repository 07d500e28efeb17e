"""
Groq client for the draft stage.

Groq exposes an OpenAI compatible ``/chat/completions`` endpoint, so the
client talks to it directly over HTTP.
"""

import logging
from typing import Mapping, Optional, Sequence

import requests

from .base import EmptyCompletionError, ProviderError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://api.groq.com/openai/v1'
DEFAULT_MODEL = 'llama-3.3-70b-versatile'


class GroqChatClient:
    """
    HTTP client for Groq chat completions
    """

    name = 'groq'

    def __init__(self,
                 api_key: str,
                 model: str = DEFAULT_MODEL,
                 base_url: str = DEFAULT_BASE_URL,
                 timeout: float = 60,
                 session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._session = session or requests.Session()
        logger.info(f"Initializing Groq client with model: {self.model}")

    def generate(self,
                 system_instruction: str,
                 history: Sequence[Mapping[str, str]],
                 max_tokens: int,
                 temperature: float = 0.7) -> str:
        """
        Request a chat completion.

        Args:
            system_instruction: System prompt placed before the history
            history: Prior messages followed by the new user message
            max_tokens: Upper bound on the completion length
            temperature: Sampling temperature

        Returns:
            The completion text

        Raises:
            ProviderError: transport failure, non-200 status or malformed body
            EmptyCompletionError: the completion had no content
        """
        if not self.api_key:
            raise ProviderError(self.name, 'API key is not configured')

        data = {
            'model': self.model,
            'messages': [{'role': 'system', 'content': system_instruction}]
                        + [{'role': m['role'], 'content': m['content']} for m in history],
            'max_tokens': max_tokens,
            'temperature': temperature,
        }

        try:
            response = self._session.post(
                f"{self.base_url}/chat/completions",
                json=data,
                headers={'Authorization': f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Error connecting to Groq: {str(e)}")
            raise ProviderError(self.name, 'request failed') from e

        if response.status_code != 200:
            logger.error(f"Groq request failed with status code: {response.status_code}")
            raise ProviderError(self.name, f"status code {response.status_code}", status_code=response.status_code)

        try:
            content = response.json()['choices'][0]['message']['content']
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Malformed Groq response: {str(e)}")
            raise ProviderError(self.name, 'malformed response body') from e

        if not content or not content.strip():
            raise EmptyCompletionError(self.name, 'completion was empty')

        return content.strip()
