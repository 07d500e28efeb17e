"""
Gemini client for the refinement stage.
"""

import logging
import threading
from typing import Mapping, Optional, Sequence

import google.generativeai as genai

from .base import EmptyCompletionError, ProviderError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = 'gemini-2.0-flash'

# genai.configure() sets a process-wide key, so configure + call must not interleave
# between refiners holding different keys.
_configure_lock = threading.Lock()


def _mask(api_key: str) -> str:
    return f"...{api_key[-4:]}" if len(api_key) > 4 else '****'


class GeminiRefiner:
    """One Gemini credential. Several instances form the refinement fallback chain."""

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL, name: Optional[str] = None):
        self.api_key = api_key
        self.model = model
        self.name = name or 'gemini'
        if api_key:
            logger.info(f"Gemini refiner '{self.name}' configured with key {_mask(api_key)}")

    def generate(self,
                 system_instruction: str,
                 history: Sequence[Mapping[str, str]],
                 max_tokens: int,
                 temperature: float = 0.4) -> str:
        if not self.api_key:
            raise ProviderError(self.name, 'API key is not configured')

        contents = [
            {'role': 'model' if m['role'] == 'assistant' else 'user', 'parts': [m['content']]}
            for m in history
        ]

        with _configure_lock:
            try:
                genai.configure(api_key=self.api_key)
                model = genai.GenerativeModel(
                    model_name=self.model,
                    system_instruction=system_instruction,
                    generation_config=genai.GenerationConfig(
                        max_output_tokens=max_tokens,
                        temperature=temperature,
                    ),
                )
                response = model.generate_content(contents)
            except Exception as e:
                logger.error(f"Gemini call failed for '{self.name}': {str(e)}")
                raise ProviderError(self.name, 'request failed') from e

        try:
            text = response.text
        except ValueError as e:
            # Raised when the candidate was blocked or has no parts
            feedback = getattr(response, 'prompt_feedback', None)
            logger.warning(f"Gemini returned no text for '{self.name}': {feedback}")
            raise EmptyCompletionError(self.name, 'completion was empty') from e

        if not text or not text.strip():
            raise EmptyCompletionError(self.name, 'completion was empty')

        return text.strip()
