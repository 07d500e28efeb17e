"""
Generation directives: length tier, tone, target platform and topic.

Users steer the pipeline by writing ``KEY: value`` lines into their prompt,
for example::

    CONTENT_LENGTH: Short
    TONE: Casual
    Best niche for 2026?

The prompt is parsed once, at the request boundary, into a
``GenerationDirectives`` object. Every unknown or missing value falls back to
the documented default; parsing never fails.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional, Type, TypeVar

# Rough token-to-character ratio used for the post-refinement safety cut
CHARS_PER_TOKEN = 4

# Share of the tier's ceiling granted to the refinement pass
REFINEMENT_BUDGET_RATIO = 0.8

TITLE_MAX_LENGTH = 40

DIRECTIVE_PATTERN = re.compile(
    r'^[ \t]*(CONTENT_LENGTH|LENGTH|TONE|PLATFORM|TOPIC)[ \t]*:[ \t]*(.*?)[ \t]*$',
    re.IGNORECASE | re.MULTILINE,
)

_KEY_ALIASES = {
    'content_length': 'length',
    'length': 'length',
    'tone': 'tone',
    'platform': 'platform',
    'topic': 'topic',
}


class LengthTier(Enum):
    SHORT = ('Short', 600, 'Keep it short: about 150-250 words.')
    MEDIUM = ('Medium', 1200, 'Aim for a medium length: about 400-600 words.')
    LONG = ('Long', 2400, 'Go long and detailed: about 900-1200 words.')

    def __init__(self, label: str, max_tokens: int, instruction: str):
        self.label = label
        self.max_tokens = max_tokens
        self.instruction = instruction

    @property
    def max_characters(self) -> int:
        return self.max_tokens * CHARS_PER_TOKEN

    @property
    def refinement_max_tokens(self) -> int:
        return int(self.max_tokens * REFINEMENT_BUDGET_RATIO)


class Tone(Enum):
    PROFESSIONAL = ('Professional', 'Clear, confident and credible. No slang.')
    CASUAL = ('Casual', 'Relaxed and conversational, like talking to a friend.')
    AGGRESSIVE = ('Aggressive', 'Bold, high-energy, Shark Tank pitch style. Punchy one-liners.')
    INSPIRATIONAL = ('Inspirational', 'Uplifting and motivating, with a clear call to action.')
    HUMOROUS = ('Humorous', 'Witty and playful while still being useful.')

    def __init__(self, label: str, instruction: str):
        self.label = label
        self.instruction = instruction


class Platform(Enum):
    GENERAL = ('General', 'Format for a general web audience.')
    BLOG = ('Blog', 'Format as a blog post with an H1 title, H2 sections and a short conclusion.')
    LINKEDIN = ('LinkedIn', 'Format as a LinkedIn post: strong hook line, short paragraphs, 3-5 hashtags.')
    TWITTER = ('Twitter', 'Format as a numbered X/Twitter thread, each post under 280 characters.')
    INSTAGRAM = ('Instagram', 'Format as an Instagram caption with emojis and a hashtag block.')
    YOUTUBE = ('YouTube', 'Format as a YouTube script with hook, sections and an outro.')

    def __init__(self, label: str, instruction: str):
        self.label = label
        self.instruction = instruction


DEFAULT_LENGTH = LengthTier.MEDIUM
DEFAULT_TONE = Tone.PROFESSIONAL
DEFAULT_PLATFORM = Platform.GENERAL

_LENGTH_LABELS = {
    'short': LengthTier.SHORT,
    'brief': LengthTier.SHORT,
    'medium': LengthTier.MEDIUM,
    'standard': LengthTier.MEDIUM,
    'long': LengthTier.LONG,
    'detailed': LengthTier.LONG,
}
_TONE_LABELS = {tone.label.lower(): tone for tone in Tone}
_PLATFORM_LABELS = {platform.label.lower(): platform for platform in Platform}
_PLATFORM_LABELS['x'] = Platform.TWITTER

E = TypeVar('E', bound=Enum)


def _resolve(value: Optional[str], labels: Mapping[str, E], default: E) -> E:
    """Match ``value`` against known labels; its first word is enough ("Short - 200 words")."""
    if not value:
        return default
    normalized = value.strip().lower()
    if normalized in labels:
        return labels[normalized]
    first_word = re.match(r'[a-z]+', normalized)
    if first_word and first_word.group(0) in labels:
        return labels[first_word.group(0)]
    return default


def resolve_length(value: Optional[str]) -> LengthTier:
    return _resolve(value, _LENGTH_LABELS, DEFAULT_LENGTH)


def resolve_tone(value: Optional[str]) -> Tone:
    return _resolve(value, _TONE_LABELS, DEFAULT_TONE)


def resolve_platform(value: Optional[str]) -> Platform:
    return _resolve(value, _PLATFORM_LABELS, DEFAULT_PLATFORM)


def _collapse(text: str) -> str:
    return ' '.join(text.split())


@dataclass(frozen=True)
class GenerationDirectives:
    length: LengthTier = DEFAULT_LENGTH
    tone: Tone = DEFAULT_TONE
    platform: Platform = DEFAULT_PLATFORM
    topic: Optional[str] = None
    # Prompt text with the directive lines removed
    body: str = ''

    @classmethod
    def parse(cls, prompt: str, overrides: Optional[Mapping[str, str]] = None) -> 'GenerationDirectives':
        """
        Build directives from a prompt.

        Args:
            prompt: Raw user prompt, possibly containing ``KEY: value`` lines
            overrides: Optional ``length``/``tone``/``platform`` values that win
                over whatever the prompt says

        Returns:
            GenerationDirectives with defaults for anything not recognised
        """
        found: Dict[str, str] = {}
        for match in DIRECTIVE_PATTERN.finditer(prompt or ''):
            key = _KEY_ALIASES[match.group(1).lower()]
            # First occurrence wins
            found.setdefault(key, match.group(2))

        for key, value in (overrides or {}).items():
            if key in ('length', 'tone', 'platform') and value:
                found[key] = value

        body = DIRECTIVE_PATTERN.sub('', prompt or '').strip()
        body = re.sub(r'\n{3,}', '\n\n', body)
        topic = _collapse(found.get('topic', '')) or None

        return cls(
            length=resolve_length(found.get('length')),
            tone=resolve_tone(found.get('tone')),
            platform=resolve_platform(found.get('platform')),
            topic=topic,
            body=body,
        )

    def derive_title(self, prompt: str, fallback: str) -> str:
        """Topic if given, otherwise the start of the prompt body."""
        source = self.topic or _collapse(self.body) or _collapse(prompt or '')
        return source[:TITLE_MAX_LENGTH].strip() or fallback

    def describe(self) -> Dict[str, str]:
        return {
            'length': self.length.label,
            'tone': self.tone.label,
            'platform': self.platform.label,
        }
