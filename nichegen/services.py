"""
Service wiring for the NicheGen backend.

``build_services`` creates the database engine, the stores and the
generation pipeline from an ``AppConfig``. The app factory stores the result
in ``app.extensions`` and handlers fetch it with ``get_services()``. Tests pass
their own providers through the keyword arguments.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from flask import current_app
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from .config import AppConfig
from .llm import FallbackChain, GeminiRefiner, GroqChatClient, TextGenerator
from .managers.conversation_store import ConversationStore
from .managers.generation_manager import GenerationManager
from .models.connection import create_db_engine, create_session_factory, ensure_tables_exist
from .modules.image_generation import ImageGenerationClient
from .modules.web_search import TavilySearchClient

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'nichegen'


@dataclass
class Services:
    config: AppConfig
    engine: Engine
    session_factory: sessionmaker
    conversation_store: ConversationStore
    generation_manager: GenerationManager
    image_client: ImageGenerationClient


def build_refiners(config: AppConfig) -> FallbackChain:
    """One Gemini refiner per configured key, in priority order."""
    refiners = [
        GeminiRefiner(api_key, model=config.GEMINI_MODEL, name=f"gemini-{index}")
        for index, api_key in enumerate(config.GEMINI_API_KEYS, start=1)
    ]
    if not refiners:
        logger.warning("No GEMINI_API_KEY configured. Drafts will be returned unrefined.")
    return FallbackChain(refiners)


def build_services(config: AppConfig,
                   search_client: Optional[TavilySearchClient] = None,
                   draft_client: Optional[TextGenerator] = None,
                   refiners: Optional[Sequence[TextGenerator]] = None,
                   image_client: Optional[ImageGenerationClient] = None,
                   engine: Optional[Engine] = None) -> Services:
    engine = engine or create_db_engine(config.DATABASE_URL)
    ensure_tables_exist(engine)
    session_factory = create_session_factory(engine)
    store = ConversationStore(session_factory)

    if search_client is None:
        search_client = TavilySearchClient(
            config.TAVILY_API_KEY,
            max_results=config.SEARCH_MAX_RESULTS,
            search_depth=config.SEARCH_DEPTH,
        )
    if draft_client is None:
        draft_client = GroqChatClient(
            config.GROQ_API_KEY,
            model=config.GROQ_MODEL,
            base_url=config.GROQ_BASE_URL,
            timeout=config.PROVIDER_TIMEOUT,
        )
    chain = FallbackChain(refiners) if refiners is not None else build_refiners(config)
    if image_client is None:
        image_client = ImageGenerationClient(
            config.IMAGE_API_URL,
            config.IMAGE_API_KEY,
            model=config.IMAGE_MODEL,
            size=config.IMAGE_SIZE,
        )

    return Services(
        config=config,
        engine=engine,
        session_factory=session_factory,
        conversation_store=store,
        generation_manager=GenerationManager(store, search_client, draft_client, chain),
        image_client=image_client,
    )


def get_services() -> Services:
    """Services of the app handling the current request."""
    return current_app.extensions[EXTENSION_KEY]
