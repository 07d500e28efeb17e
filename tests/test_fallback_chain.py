# tests/test_fallback_chain.py

import unittest

from nichegen.llm import EmptyCompletionError, FallbackChain, ProvidersExhaustedError

from tests.mocks.mock_providers import MockGenerator, failing_generator


class TestFallbackChain(unittest.TestCase):

    def test_first_success_wins(self):
        primary = MockGenerator('primary', ['from primary'])
        secondary = MockGenerator('secondary', ['from secondary'])

        result = FallbackChain([primary, secondary]).run("s", [], 100, 0.4)

        self.assertEqual(result.text, 'from primary')
        self.assertEqual(result.provider, 'primary')
        self.assertEqual(result.failures, [])
        self.assertEqual(secondary.calls, [])

    def test_falls_through_to_next_provider(self):
        primary = failing_generator('primary')
        secondary = MockGenerator('secondary', [EmptyCompletionError('secondary', 'empty')])
        tertiary = MockGenerator('tertiary', ['from tertiary'])

        result = FallbackChain([primary, secondary, tertiary]).run("s", [], 100, 0.4)

        self.assertEqual(result.text, 'from tertiary')
        self.assertEqual([name for name, _ in result.failures], ['primary', 'secondary'])
        self.assertEqual(tertiary.calls[0]['max_tokens'], 100)

    def test_all_failing_raises(self):
        chain = FallbackChain([failing_generator('a'), failing_generator('b')])

        with self.assertRaises(ProvidersExhaustedError) as ctx:
            chain.run("s", [], 100, 0.4)
        self.assertEqual([name for name, _ in ctx.exception.failures], ['a', 'b'])

    def test_empty_chain_raises(self):
        chain = FallbackChain([])

        with self.assertRaises(ProvidersExhaustedError):
            chain.run("s", [], 100, 0.4)

    def test_unexpected_errors_propagate(self):
        chain = FallbackChain([MockGenerator('broken', [TypeError('bug')]), MockGenerator('ok')])

        with self.assertRaises(TypeError):
            chain.run("s", [], 100, 0.4)


if __name__ == '__main__':
    unittest.main()
