# tests/test_generation_manager.py

import unittest
from datetime import datetime
from unittest.mock import patch

from nichegen.components.directives import LengthTier
from nichegen.components.prompts import REFINEMENT_FALLBACK_NOTE, TRUNCATION_MARKER
from nichegen.exceptions import GenerationError
from nichegen.llm import FallbackChain
from nichegen.managers.conversation_store import ConversationStore
from nichegen.managers.generation_manager import GenerationManager, enforce_length
from nichegen.models import Chat, ChatMessage, User
from nichegen.models.connection import create_db_engine, create_session_factory, ensure_tables_exist, get_db

from tests.mocks.mock_providers import MockGenerator, MockSearchClient, failing_generator


class TestGenerationManager(unittest.TestCase):

    def setUp(self):
        self.engine = create_db_engine('sqlite://')
        ensure_tables_exist(self.engine)
        self.session_factory = create_session_factory(self.engine)
        self.store = ConversationStore(self.session_factory)

        with get_db(self.session_factory) as db:
            alice = User(name='Alice', email='alice@example.com', hashed_password='x')
            bob = User(name='Bob', email='bob@example.com', hashed_password='x')
            db.add_all([alice, bob])
            db.flush()
            self.alice_id = alice.user_id
            self.bob_id = bob.user_id

        self.search = MockSearchClient()
        self.draft = MockGenerator('draft', ['raw draft'])
        self.refiner = MockGenerator('gemini-1', ['polished content'])

    def tearDown(self):
        self.engine.dispose()

    def _manager(self, refiners=None):
        return GenerationManager(
            self.store,
            self.search,
            self.draft,
            FallbackChain(refiners if refiners is not None else [self.refiner]),
            clock=lambda: datetime(2026, 10, 16, 12, 0),
        )

    def _counts(self):
        with get_db(self.session_factory) as db:
            return db.query(Chat).count(), db.query(ChatMessage).count()

    def test_new_chat_gets_one_user_and_one_assistant_message(self):
        result = self._manager().generate(self.alice_id, "Best niche for 2026?")

        self.assertEqual(result.content, 'polished content')
        self.assertEqual(result.refined_by, 'gemini-1')
        self.assertEqual(result.sources, self.search.sources)
        self.assertEqual(self._counts(), (1, 2))

        chat = self.store.find_owned(self.alice_id, result.chat_id)
        self.assertEqual(chat.title, "Best niche for 2026?")
        self.assertEqual([m.role for m in chat.messages], ['user', 'assistant'])
        self.assertEqual(chat.messages[0].content, "Best niche for 2026?")
        self.assertEqual(chat.messages[1].content, 'polished content')
        self.assertEqual(chat.messages[1].sources, self.search.sources)

    def test_response_dict(self):
        result = self._manager().generate(self.alice_id, "hello")
        self.assertEqual(set(result.to_dict()), {'content', 'chatId', 'sources'})

    def test_search_uses_the_raw_prompt(self):
        self._manager().generate(self.alice_id, "TONE: casual\nhello")
        self.assertEqual(self.search.queries, ["TONE: casual\nhello"])

    def test_existing_chat_is_extended_with_memory(self):
        manager = self._manager()
        first = manager.generate(self.alice_id, "first question")
        second = manager.generate(self.alice_id, "second question", chat_id=first.chat_id)

        self.assertEqual(second.chat_id, first.chat_id)
        self.assertEqual(self._counts(), (1, 4))

        history = self.draft.calls[1]['history']
        self.assertEqual(history, [
            {'role': 'user', 'content': 'first question'},
            {'role': 'assistant', 'content': 'polished content'},
            {'role': 'user', 'content': 'second question'},
        ])

        chat = self.store.find_owned(self.alice_id, first.chat_id)
        self.assertEqual(
            [m.content for m in chat.messages],
            ['first question', 'polished content', 'second question', 'polished content'],
        )

    def test_foreign_chat_id_starts_a_new_chat(self):
        manager = self._manager()
        bobs = manager.generate(self.bob_id, "bob's question")

        result = manager.generate(self.alice_id, "alice's question", chat_id=bobs.chat_id)

        self.assertNotEqual(result.chat_id, bobs.chat_id)
        self.assertEqual(len(self.store.find_owned(self.bob_id, bobs.chat_id).messages), 2)
        self.assertEqual(self.draft.calls[1]['history'], [{'role': 'user', 'content': "alice's question"}])

    def test_unknown_chat_id_starts_a_new_chat(self):
        result = self._manager().generate(self.alice_id, "hello", chat_id='missing')
        self.assertNotEqual(result.chat_id, 'missing')
        self.assertEqual(self._counts(), (1, 2))

    def test_short_tier_caps_both_provider_calls(self):
        result = self._manager().generate(self.alice_id, "CONTENT_LENGTH: Short\nBest niche for 2026?")

        self.assertTrue(result.content)
        self.assertEqual(self.draft.calls[0]['max_tokens'], 600)
        self.assertEqual(self.refiner.calls[0]['max_tokens'], 480)
        self.assertLessEqual(self.refiner.calls[0]['max_tokens'], LengthTier.SHORT.max_tokens)
        self.assertEqual(self.draft.calls[0]['temperature'], 0.7)
        self.assertEqual(self.refiner.calls[0]['temperature'], 0.4)

    def test_overrides_change_the_tier(self):
        self._manager().generate(self.alice_id, "CONTENT_LENGTH: Short\nhello", overrides={'length': 'long'})
        self.assertEqual(self.draft.calls[0]['max_tokens'], 2400)

    def test_refiner_receives_the_draft(self):
        self._manager().generate(self.alice_id, "hello")
        self.assertEqual(self.refiner.calls[0]['history'], [{'role': 'user', 'content': "DRAFT:\nraw draft"}])

    def test_secondary_refiner_output_wins_over_draft(self):
        secondary = MockGenerator('gemini-2', ['secondary polish'])

        result = self._manager([failing_generator('gemini-1'), secondary]).generate(self.alice_id, "hello")

        self.assertEqual(result.content, 'secondary polish')
        self.assertEqual(result.refined_by, 'gemini-2')

    def test_all_refiners_failing_returns_draft_with_note(self):
        result = self._manager([failing_generator('gemini-1'), failing_generator('gemini-2')]).generate(
            self.alice_id, "hello"
        )

        self.assertEqual(result.content, 'raw draft' + REFINEMENT_FALLBACK_NOTE)
        self.assertIsNone(result.refined_by)
        self.assertEqual(self._counts(), (1, 2))

    def test_no_refiners_configured_returns_draft_with_note(self):
        result = self._manager([]).generate(self.alice_id, "hello")
        self.assertEqual(result.content, 'raw draft' + REFINEMENT_FALLBACK_NOTE)

    def test_overlong_output_is_truncated(self):
        self.refiner.replies = ['x' * 5000]

        result = self._manager().generate(self.alice_id, "CONTENT_LENGTH: Short\nhello")

        self.assertTrue(result.content.endswith(TRUNCATION_MARKER))
        self.assertEqual(len(result.content), 2400 + len(TRUNCATION_MARKER))

    def test_overlong_draft_keeps_fallback_note(self):
        self.draft.replies = ['d' * 3000]

        result = self._manager([failing_generator('gemini-1')]).generate(
            self.alice_id, "CONTENT_LENGTH: Short\nBest niche for 2026?"
        )

        self.assertTrue(result.content.endswith(REFINEMENT_FALLBACK_NOTE))
        self.assertIn(TRUNCATION_MARKER, result.content)
        self.assertEqual(
            result.content,
            'd' * 2400 + TRUNCATION_MARKER + REFINEMENT_FALLBACK_NOTE,
        )

    def test_draft_failure_writes_nothing(self):
        self.draft.replies = [failing_generator('draft').replies[0]]

        with self.assertRaises(GenerationError):
            self._manager().generate(self.alice_id, "hello")

        self.assertEqual(self._counts(), (0, 0))
        self.assertEqual(self.refiner.calls, [])

    def test_draft_failure_leaves_existing_chat_untouched(self):
        manager = self._manager()
        first = manager.generate(self.alice_id, "first")
        self.draft.replies = [failing_generator('draft').replies[0]]

        with self.assertRaises(GenerationError):
            manager.generate(self.alice_id, "second", chat_id=first.chat_id)

        self.assertEqual(self._counts(), (1, 2))

    def test_search_failure_degrades_to_placeholder(self):
        self.search.error = RuntimeError("search down")

        result = self._manager().generate(self.alice_id, "hello")

        self.assertEqual(result.sources, [])
        self.assertIn("No real-time data found.", self.draft.calls[0]['system_instruction'])
        chat = self.store.find_owned(self.alice_id, result.chat_id)
        self.assertIsNone(chat.messages[1].sources)

    def test_persistence_failure_is_a_generation_error(self):
        with patch.object(self.store, 'save', side_effect=RuntimeError("disk full")):
            with self.assertRaises(GenerationError):
                self._manager().generate(self.alice_id, "hello")

        self.assertEqual(self._counts(), (0, 0))


class TestEnforceLength(unittest.TestCase):

    def test_short_text_is_unchanged(self):
        self.assertEqual(enforce_length('abc', LengthTier.SHORT), 'abc')

    def test_exact_budget_is_unchanged(self):
        text = 'a' * LengthTier.SHORT.max_characters
        self.assertEqual(enforce_length(text, LengthTier.SHORT), text)


if __name__ == '__main__':
    unittest.main()
