import unittest

from strudel_bridge.guardrails import evaluate_pattern_code, require_valid_pattern


class GuardrailTests(unittest.TestCase):
    def test_balanced_pattern_is_allowed(self) -> None:
        decision = evaluate_pattern_code('stack(s("bd*4"), note("c2 eb2").s("sawtooth").lpf(400))')
        self.assertTrue(decision.allowed)
        self.assertEqual(decision.errors, [])

    def test_empty_pattern_is_rejected(self) -> None:
        self.assertFalse(evaluate_pattern_code("   ").allowed)

    def test_unclosed_parenthesis(self) -> None:
        decision = evaluate_pattern_code('s("bd sd"')
        self.assertFalse(decision.allowed)
        self.assertEqual(decision.errors, ["Unclosed parentheses"])

    def test_closing_before_opening(self) -> None:
        decision = evaluate_pattern_code(')s("bd"(')
        self.assertIn("Unbalanced parentheses", decision.errors)

    def test_unclosed_quotes(self) -> None:
        self.assertEqual(evaluate_pattern_code("s('bd)").errors, ["Unclosed single quotes"])
        self.assertEqual(evaluate_pattern_code('s("bd)').errors, ["Unclosed double quotes"])

    def test_require_valid_pattern_exits_with_reason(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            require_valid_pattern('s("bd"')
        self.assertIn("Unclosed parentheses", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
