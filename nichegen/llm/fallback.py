"""
Ordered fallback over capability-equivalent providers.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Sequence, Tuple

from ..exceptions import NicheGenError
from .base import LLMError, TextGenerator

logger = logging.getLogger(__name__)


@dataclass
class ChainResult:
    text: str
    provider: str
    failures: List[Tuple[str, LLMError]] = field(default_factory=list)


class ProvidersExhaustedError(NicheGenError):
    """Every provider in the chain failed (or the chain is empty)."""

    def __init__(self, failures: List[Tuple[str, LLMError]]):
        names = ', '.join(name for name, _ in failures) or 'none configured'
        super().__init__(f"All providers failed: {names}")
        self.failures = failures


class FallbackChain:
    """
    Tries providers in priority order and stops at the first success.

    Any ``LLMError`` counts as a failure of that provider and moves on to the
    next one; other exceptions propagate.
    """

    def __init__(self, providers: Sequence[TextGenerator]):
        self.providers = list(providers)

    def run(self,
            system_instruction: str,
            history: Sequence[Mapping[str, str]],
            max_tokens: int,
            temperature: float) -> ChainResult:
        failures: List[Tuple[str, LLMError]] = []

        for provider in self.providers:
            try:
                text = provider.generate(system_instruction, history, max_tokens, temperature)
            except LLMError as e:
                logger.warning(f"Provider '{provider.name}' failed: {e}")
                failures.append((provider.name, e))
                continue

            if failures:
                logger.info(f"Provider '{provider.name}' succeeded after {len(failures)} failure(s)")
            return ChainResult(text=text, provider=provider.name, failures=failures)

        raise ProvidersExhaustedError(failures)
