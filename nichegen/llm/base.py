"""
Provider abstraction for text generation.

Both pipeline stages depend on this protocol rather than a vendor SDK:
(system instruction, message history, token ceiling, temperature) -> text.
"""

from typing import Mapping, Optional, Protocol, Sequence

from ..exceptions import NicheGenError


class LLMError(NicheGenError):
    """Base class for provider failures."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"[{provider}] {message}")
        self.provider = provider


class ProviderError(LLMError):
    """The provider could not be reached, rejected the call or sent garbage."""

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        super().__init__(provider, message)
        self.status_code = status_code


class EmptyCompletionError(LLMError):
    """The provider answered but the completion carried no text."""


class TextGenerator(Protocol):
    """A chat model that turns an instruction plus history into text."""

    name: str

    def generate(self,
                 system_instruction: str,
                 history: Sequence[Mapping[str, str]],
                 max_tokens: int,
                 temperature: float) -> str:
        """
        ``history`` is a list of ``{"role", "content"}`` dicts ending with the
        message to answer. ``max_tokens`` is an upper bound on the output.
        """
        ...
