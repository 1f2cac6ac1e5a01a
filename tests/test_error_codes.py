"""Test error codes returned by various functions."""

import unittest

from mathsteps_pkg.api import check, simplify_expression, solve_equation
from mathsteps_pkg.parser import parse
from mathsteps_pkg.types import ParseError, ValidationError


class TestErrorCodes(unittest.TestCase):
    """Test that functions return appropriate error codes."""

    def assertParseFails(self, text, exception, code):
        with self.assertRaises(exception) as ctx:
            parse(text)
        self.assertEqual(ctx.exception.code, code, f"Expected {code}, got {ctx.exception.code}")
        return ctx.exception

    def test_empty_input_error_code(self):
        self.assertParseFails("", ValidationError, "EMPTY_INPUT")
        self.assertParseFails("   ", ValidationError, "EMPTY_INPUT")

    def test_too_long_error_code(self):
        """Test that overly long input returns TOO_LONG error code."""
        long_input = "x" * 10001  # Exceeds MAX_INPUT_LENGTH
        error = self.assertParseFails(long_input, ValidationError, "TOO_LONG")
        self.assertIn("too long", str(error).lower())

    def test_unbalanced_parens_error_code(self):
        self.assertParseFails("(x + 1", ValidationError, "UNBALANCED_PARENS")
        self.assertParseFails("x + 1)", ValidationError, "UNBALANCED_PARENS")

    def test_invalid_character_error_code(self):
        error = self.assertParseFails("2 $ 3", ParseError, "INVALID_CHARACTER")
        self.assertEqual(error.position, 2)

    def test_unexpected_end_error_code(self):
        self.assertParseFails("x +", ParseError, "UNEXPECTED_END")

    def test_unexpected_token_error_code(self):
        self.assertParseFails("x = = y", ParseError, "UNEXPECTED_TOKEN")

    def test_mixed_relations_error_code(self):
        self.assertParseFails("x < y > z", ParseError, "MIXED_RELATIONS")

    def test_too_deep_error_code(self):
        """Test that deeply nested input returns TOO_DEEP error code."""
        nested = "(" * 150 + "x + 1" + ")" * 150
        error = self.assertParseFails(nested, ValidationError, "TOO_DEEP")
        self.assertIn("nested", str(error).lower())
        self.assertParseFails("-" * 600 + "x", ValidationError, "TOO_DEEP")
        self.assertParseFails("x" + "^x" * 150, ValidationError, "TOO_DEEP")

    def test_moderate_nesting_parses(self):
        node = parse("(" * 20 + "x + 1" + ")" * 20)
        self.assertEqual(str(node), "x + 1")


class TestAPIErrorCodes(unittest.TestCase):
    """Errors are reported in results rather than raised."""

    def test_check_reports_parse_error(self):
        result = check("x +", "x")
        self.assertFalse(result.ok)
        self.assertEqual(result.error_code, "UNEXPECTED_END")
        self.assertIsNotNone(result.error)

    def test_simplify_reports_validation_error(self):
        result = simplify_expression("(x + 1")
        self.assertFalse(result.ok)
        self.assertEqual(result.error_code, "UNBALANCED_PARENS")

    def test_deep_nesting_is_reported(self):
        nested = "(" * 150 + "x + 1" + ")" * 150
        result = simplify_expression(nested)
        self.assertFalse(result.ok)
        self.assertEqual(result.error_code, "TOO_DEEP")
        result = check(nested, "x + 1")
        self.assertFalse(result.ok)
        self.assertEqual(result.error_code, "TOO_DEEP")

    def test_solve_reports_solver_error(self):
        result = solve_equation("x + 1")
        self.assertFalse(result.ok)
        self.assertEqual(result.error_code, "NOT_AN_EQUATION")

    def test_solve_reports_invalid_variable(self):
        result = solve_equation("2x = 4", "2x")
        self.assertFalse(result.ok)
        self.assertEqual(result.error_code, "INVALID_VARIABLE")


if __name__ == "__main__":
    unittest.main()
