# tests/mocks/mock_providers.py

import logging
from typing import Dict, List, Optional

from nichegen.config import TestingConfig
from nichegen.llm.base import ProviderError
from nichegen.modules.image_generation import ImageGenerationError
from nichegen.modules.web_search import SearchContext
from nichegen.services import build_services

logger = logging.getLogger(__name__)


class MockSearchClient:
    """Returns a fixed search context, or raises if told to."""

    def __init__(self, sources: Optional[List[Dict[str, str]]] = None, error: Optional[Exception] = None):
        self.sources = sources if sources is not None else [
            {'title': 'Creator economy report', 'url': 'https://example.com/creator-economy'},
        ]
        self.error = error
        self.queries: List[str] = []

    def search(self, query: str) -> SearchContext:
        self.queries.append(query)
        if self.error:
            raise self.error
        text = '\n\n'.join(f"SOURCE: {s['title']}\nCONTENT: snippet\nURL: {s['url']}" for s in self.sources)
        return SearchContext(text=text or 'No real-time data found.', sources=list(self.sources))


class MockGenerator:
    """
    A text generator that records every call.

    ``replies`` are returned in order (the last one repeats); an exception in
    the list is raised instead of returned.
    """

    def __init__(self, name: str, replies=None):
        self.name = name
        self.replies = list(replies) if replies is not None else [f"{name} output"]
        self.calls: List[Dict] = []

    def generate(self, system_instruction, history, max_tokens, temperature):
        self.calls.append({
            'system_instruction': system_instruction,
            'history': [dict(m) for m in history],
            'max_tokens': max_tokens,
            'temperature': temperature,
        })
        index = min(len(self.calls) - 1, len(self.replies) - 1)
        reply = self.replies[index]
        if isinstance(reply, Exception):
            raise reply
        return reply


def failing_generator(name: str) -> MockGenerator:
    return MockGenerator(name, [ProviderError(name, 'invalid API key', status_code=401)])


class MockImageClient:

    def __init__(self, url: str = 'https://images.example.com/1.png', status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        self.prompts: List[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.status_code is not None:
            raise ImageGenerationError(f"status {self.status_code}", status_code=self.status_code)
        return self.url


def make_services(search_client=None, draft_client=None, refiners=None, image_client=None):
    """Services over an in-memory database with mock providers."""
    return build_services(
        TestingConfig(),
        search_client=search_client or MockSearchClient(),
        draft_client=draft_client or MockGenerator('draft'),
        refiners=refiners if refiners is not None else [MockGenerator('refiner')],
        image_client=image_client or MockImageClient(),
    )
