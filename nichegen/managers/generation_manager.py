"""
Generation manager: the content pipeline behind ``POST /api/generate``.

Steps, strictly in sequence:

1. resolve the caller's chat (or start a new one)
2. web search for context (degrades to a placeholder)
3. parse length/tone/platform directives from the prompt
4. draft completion from the first provider
5. refinement through the fallback chain (degrades to the draft)
6. safety truncation for the active length tier
7. append the user/assistant pair and save

The save is the last step, so a failure anywhere leaves the database untouched.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Mapping, Optional

from ..components.directives import GenerationDirectives, LengthTier
from ..components.prompt_builder import PromptBuilder
from ..components.prompts import REFINEMENT_FALLBACK_NOTE, TRUNCATION_MARKER
from ..exceptions import GenerationError
from ..llm.base import LLMError, TextGenerator
from ..llm.fallback import FallbackChain, ProvidersExhaustedError
from ..models import utcnow
from ..models.chat import DEFAULT_CHAT_TITLE
from ..modules.web_search import SearchContext, TavilySearchClient
from .conversation_store import ConversationStore

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Content generation is temporarily unavailable."

DRAFT_TEMPERATURE = 0.7
REFINEMENT_TEMPERATURE = 0.4


@dataclass
class GenerationResult:
    content: str
    chat_id: str
    sources: List[Dict[str, str]] = field(default_factory=list)
    refined_by: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {'content': self.content, 'chatId': self.chat_id, 'sources': self.sources}


def enforce_length(text: str, tier: LengthTier) -> str:
    """Hard cut at the tier's character budget, marking the cut."""
    if len(text) <= tier.max_characters:
        return text
    logger.warning(f"Refined content exceeds {tier.max_characters} chars ({len(text)}), truncating")
    return text[:tier.max_characters].rstrip() + TRUNCATION_MARKER


class GenerationManager:
    """
    Composes the search adapter, both generators and the conversation store.

    Holds no per-request state; one instance serves every request.
    """

    def __init__(self,
                 store: ConversationStore,
                 search_client: TavilySearchClient,
                 draft_client: TextGenerator,
                 refiners: FallbackChain,
                 prompt_builder: Optional[PromptBuilder] = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.store = store
        self.search_client = search_client
        self.draft_client = draft_client
        self.refiners = refiners
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.clock = clock

    def generate(self,
                 owner_id: int,
                 prompt: str,
                 chat_id: Optional[str] = None,
                 overrides: Optional[Mapping[str, str]] = None) -> GenerationResult:
        """
        Run the pipeline for one user prompt.

        Args:
            owner_id: Authenticated user id
            prompt: Raw prompt text, possibly with directive lines
            chat_id: Existing chat to continue; unknown or foreign ids start a new chat
            overrides: Optional length/tone/platform values from the request body

        Raises:
            GenerationError: on any unrecoverable failure
        """
        try:
            return self._run(owner_id, prompt, chat_id, overrides)
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"Generation pipeline failed for user {owner_id}: {str(e)}", exc_info=True)
            raise GenerationError(GENERIC_FAILURE_MESSAGE) from e

    def _run(self, owner_id, prompt, chat_id, overrides) -> GenerationResult:
        now = self.clock()
        directives = GenerationDirectives.parse(prompt, overrides)

        # 1. Conversation resolution
        chat = self.store.find_owned(owner_id, chat_id) if chat_id else None
        if chat is None:
            if chat_id:
                logger.info(f"Chat {chat_id} not found for user {owner_id}, starting a new one")
            chat = self.store.create(owner_id, directives.derive_title(prompt, DEFAULT_CHAT_TITLE))

        # 2. Context acquisition
        search = self._search(prompt)

        # 3./4. Draft stage
        memory = [{'role': m.role, 'content': m.content} for m in chat.messages]
        system_instruction, history = self.prompt_builder.build_draft(
            directives, search.text, memory, prompt, now
        )
        logger.info(f"Requesting draft from '{self.draft_client.name}' "
                    f"({directives.describe()}, max_tokens={directives.length.max_tokens})")
        try:
            draft = self.draft_client.generate(
                system_instruction, history, directives.length.max_tokens, DRAFT_TEMPERATURE
            )
        except LLMError as e:
            logger.error(f"Draft generation failed: {e}")
            raise GenerationError(GENERIC_FAILURE_MESSAGE) from e

        # 5. Refinement stage
        content, refined_by = self._refine(directives, draft, now)

        # 6. Safety truncation; the fallback note is appended after the cut
        content = enforce_length(content, directives.length)
        if refined_by is None:
            content += REFINEMENT_FALLBACK_NOTE

        # 7. Persistence
        self.store.append(chat, 'user', prompt)
        self.store.append(chat, 'assistant', content, search.sources)
        chat.updated_at = utcnow()
        self.store.save(chat)
        logger.info(f"Generated {len(content)} chars for chat {chat.chat_id} "
                    f"(refined by {refined_by or 'none, draft fallback'})")

        return GenerationResult(
            content=content,
            chat_id=chat.chat_id,
            sources=list(search.sources),
            refined_by=refined_by,
        )

    def _search(self, prompt: str) -> SearchContext:
        try:
            return self.search_client.search(prompt)
        except Exception as e:
            logger.error(f"Search adapter failed, continuing without context: {e}", exc_info=True)
            return SearchContext.empty()

    def _refine(self, directives: GenerationDirectives, draft: str, now: datetime):
        """Returns (text, provider name); the provider is None when the draft is used as is."""
        system_instruction, history = self.prompt_builder.build_refinement(directives, draft, now)
        try:
            result = self.refiners.run(
                system_instruction,
                history,
                directives.length.refinement_max_tokens,
                REFINEMENT_TEMPERATURE,
            )
        except ProvidersExhaustedError as e:
            logger.warning(f"Refinement unavailable, using draft: {e}")
            return draft, None
        return result.text, result.provider
