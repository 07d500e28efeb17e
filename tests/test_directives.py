# tests/test_directives.py

import unittest

from nichegen.components.directives import (
    DEFAULT_LENGTH,
    DEFAULT_PLATFORM,
    DEFAULT_TONE,
    GenerationDirectives,
    LengthTier,
    Platform,
    Tone,
    resolve_length,
)


class TestLengthTiers(unittest.TestCase):

    def test_every_tier_has_a_fixed_ceiling(self):
        self.assertEqual(LengthTier.SHORT.max_tokens, 600)
        self.assertEqual(LengthTier.MEDIUM.max_tokens, 1200)
        self.assertEqual(LengthTier.LONG.max_tokens, 2400)

    def test_refinement_budget_is_within_seventy_to_eighty_five_percent(self):
        for tier in LengthTier:
            ratio = tier.refinement_max_tokens / tier.max_tokens
            self.assertGreaterEqual(ratio, 0.70)
            self.assertLessEqual(ratio, 0.85)

    def test_character_budget_uses_four_chars_per_token(self):
        self.assertEqual(LengthTier.SHORT.max_characters, 2400)

    def test_recognised_labels(self):
        self.assertIs(resolve_length('Short'), LengthTier.SHORT)
        self.assertIs(resolve_length('  brief '), LengthTier.SHORT)
        self.assertIs(resolve_length('DETAILED'), LengthTier.LONG)
        self.assertIs(resolve_length('Short - 200 words'), LengthTier.SHORT)

    def test_unknown_or_missing_label_falls_back_to_default(self):
        for value in (None, '', 'gigantic', '42', '!!!'):
            self.assertIs(resolve_length(value), DEFAULT_LENGTH)
        self.assertIs(DEFAULT_LENGTH, LengthTier.MEDIUM)


class TestGenerationDirectivesParse(unittest.TestCase):

    def test_plain_prompt_uses_defaults(self):
        directives = GenerationDirectives.parse("Best niche for 2026?")

        self.assertIs(directives.length, DEFAULT_LENGTH)
        self.assertIs(directives.tone, DEFAULT_TONE)
        self.assertIs(directives.platform, DEFAULT_PLATFORM)
        self.assertIsNone(directives.topic)
        self.assertEqual(directives.body, "Best niche for 2026?")

    def test_directive_lines_are_parsed_and_removed_from_body(self):
        prompt = "CONTENT_LENGTH: Short\nTONE: casual\nPLATFORM: x\nBest niche for 2026?"
        directives = GenerationDirectives.parse(prompt)

        self.assertIs(directives.length, LengthTier.SHORT)
        self.assertIs(directives.tone, Tone.CASUAL)
        self.assertIs(directives.platform, Platform.TWITTER)
        self.assertEqual(directives.body, "Best niche for 2026?")

    def test_keys_are_case_insensitive(self):
        directives = GenerationDirectives.parse("length: long\nplatform: LinkedIn\nWrite about AI agents")

        self.assertIs(directives.length, LengthTier.LONG)
        self.assertIs(directives.platform, Platform.LINKEDIN)

    def test_unrecognised_values_fall_back(self):
        directives = GenerationDirectives.parse("TONE: sarcastic\nPLATFORM: myspace\nhello")

        self.assertIs(directives.tone, DEFAULT_TONE)
        self.assertIs(directives.platform, DEFAULT_PLATFORM)

    def test_directive_words_inside_a_sentence_are_not_directives(self):
        directives = GenerationDirectives.parse("What tone: should a brand use?")

        self.assertIs(directives.tone, DEFAULT_TONE)
        self.assertEqual(directives.body, "What tone: should a brand use?")

    def test_overrides_win_over_prompt(self):
        directives = GenerationDirectives.parse(
            "CONTENT_LENGTH: Long\nhello",
            overrides={'length': 'short', 'tone': 'humorous'},
        )

        self.assertIs(directives.length, LengthTier.SHORT)
        self.assertIs(directives.tone, Tone.HUMOROUS)

    def test_describe(self):
        directives = GenerationDirectives.parse("CONTENT_LENGTH: Short\nhi")
        self.assertEqual(directives.describe(), {'length': 'Short', 'tone': 'Professional', 'platform': 'General'})


class TestTitleDerivation(unittest.TestCase):

    def test_topic_marker_wins(self):
        directives = GenerationDirectives.parse("TOPIC: Solar panel startups\nGive me ideas")
        self.assertEqual(directives.derive_title("ignored", "New Synthesis"), "Solar panel startups")

    def test_prompt_body_is_truncated(self):
        prompt = "CONTENT_LENGTH: Short\n" + "word " * 30
        directives = GenerationDirectives.parse(prompt)
        title = directives.derive_title(prompt, "New Synthesis")

        self.assertLessEqual(len(title), 40)
        self.assertTrue(title.startswith("word word"))
        self.assertNotIn("CONTENT_LENGTH", title)

    def test_fallback_when_nothing_usable(self):
        directives = GenerationDirectives.parse("   ")
        self.assertEqual(directives.derive_title("   ", "New Synthesis"), "New Synthesis")


if __name__ == '__main__':
    unittest.main()
