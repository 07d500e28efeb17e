"""
LLM provider integration layer.

- base: provider protocol and error types
- groq_client: draft stage (Groq chat completions over HTTP)
- gemini_client: refinement stage (Google Gemini SDK)
- fallback: ordered list of interchangeable providers
"""

from .base import LLMError, ProviderError, EmptyCompletionError, TextGenerator
from .fallback import FallbackChain, ChainResult, ProvidersExhaustedError
from .gemini_client import GeminiRefiner
from .groq_client import GroqChatClient

__all__ = [
    'LLMError',
    'ProviderError',
    'EmptyCompletionError',
    'TextGenerator',
    'FallbackChain',
    'ChainResult',
    'ProvidersExhaustedError',
    'GeminiRefiner',
    'GroqChatClient',
]
