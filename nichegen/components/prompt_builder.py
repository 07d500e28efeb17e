# nichegen/components/prompt_builder.py
import logging
from datetime import datetime
from typing import Dict, List, Sequence, Tuple

from .directives import GenerationDirectives
from .prompts import DRAFT_SYSTEM_PROMPT, REFINEMENT_SYSTEM_PROMPT, format_current_date

logger = logging.getLogger(__name__)


class PromptBuilder:
    """Builds the system instructions and message lists for both generation stages."""

    def build_draft(self,
                    directives: GenerationDirectives,
                    search_context: str,
                    memory: Sequence[Dict[str, str]],
                    prompt: str,
                    now: datetime) -> Tuple[str, List[Dict[str, str]]]:
        """
        Build the draft request.

        Args:
            directives: Parsed length/tone/platform settings
            search_context: Text block from the web search (or its placeholder)
            memory: Prior transcript as ``{"role", "content"}`` dicts, oldest first
            prompt: The new user message
            now: Current time, used for the date line

        Returns:
            (system instruction, history ending with the new user message)
        """
        topic_line = f"TOPIC: {directives.topic}\n" if directives.topic else ""
        system_instruction = DRAFT_SYSTEM_PROMPT.format(
            current_date=format_current_date(now),
            current_year=now.year,
            search_context=search_context,
            tone_label=directives.tone.label,
            tone_instruction=directives.tone.instruction,
            platform_label=directives.platform.label,
            platform_instruction=directives.platform.instruction,
            length_label=directives.length.label,
            length_instruction=directives.length.instruction,
            max_tokens=directives.length.max_tokens,
            topic_line=topic_line,
        )

        history = [{'role': m['role'], 'content': m['content']} for m in memory]
        history.append({'role': 'user', 'content': prompt})

        logger.debug(f"Constructed draft prompt with {len(memory)} memory messages "
                     f"(first 200 chars): {system_instruction[:200]}...")
        return system_instruction, history

    def build_refinement(self,
                         directives: GenerationDirectives,
                         draft: str,
                         now: datetime) -> Tuple[str, List[Dict[str, str]]]:
        system_instruction = REFINEMENT_SYSTEM_PROMPT.format(
            current_date=format_current_date(now),
            platform_label=directives.platform.label,
            platform_instruction=directives.platform.instruction,
            tone_label=directives.tone.label,
            tone_instruction=directives.tone.instruction,
            max_tokens=directives.length.refinement_max_tokens,
            length_instruction=directives.length.instruction,
        )
        return system_instruction, [{'role': 'user', 'content': f"DRAFT:\n{draft}"}]
