"""Tests for the fraction checks of the step checker."""

import unittest

from mathsteps_pkg.checker import check_step
from mathsteps_pkg.parser import parse
from mathsteps_pkg.types import Options


def messages(result):
    return [step.message for step in result.steps]


class TestFractionChecks(unittest.TestCase):
    def test_multiplying_by_one_over(self):
        result = check_step(parse("a*1/b"), parse("a/b"))
        self.assertTrue(result.equivalent)
        self.assertEqual(
            messages(result), ["multiplying by one over something results in a fraction"]
        )

    def test_fraction_as_multiplying_by_one_over(self):
        result = check_step(parse("a/b"), parse("a*1/b"))
        self.assertTrue(result.equivalent)
        self.assertEqual(messages(result), ["fraction is the same as multiplying by one over"])
        step = result.steps[0]
        self.assertEqual(str(step.before), "a / b")
        self.assertEqual(str(step.after), "a * 1 / b")

    def test_prime_factor_cancellation(self):
        result = check_step(parse("24/6"), parse("4"), Options(eval_fractions=False))
        self.assertTrue(result.equivalent)
        self.assertEqual(
            messages(result),
            [
                "prime factorization",
                "extract common factors from numerator and denominator",
                "division by the same value",
                "multiplication with identity",
                "evaluation of multiplication",
                "division by one",
            ],
        )
        self.assertEqual(str(result.steps[0].after), "(2 * 2 * 2 * 3) / (2 * 3)")

    def test_evaluated_division(self):
        result = check_step(parse("24/6"), parse("4"))
        self.assertTrue(result.equivalent)
        self.assertEqual(messages(result), ["evaluation of division"])

    def test_multiplying_fractions_with_products(self):
        result = check_step(parse("ab/cd * e/f"), parse("abe / cdf"))
        self.assertTrue(result.equivalent)
        self.assertEqual(messages(result), ["multiplying fractions"])

    def test_one_over_moved_last_first(self):
        result = check_step(parse("1/b * a"), parse("a / b"))
        self.assertTrue(result.equivalent)
        self.assertEqual(
            messages(result),
            [
                "commutative property",
                "multiplying by one over something results in a fraction",
            ],
        )
        self.assertEqual(str(result.steps[0].after), "a * 1 / b")

    def test_fraction_of_sum_splits(self):
        result = check_step(parse("(a + b) / c"), parse("a/c + b/c"))
        self.assertTrue(result.equivalent)
        self.assertEqual(len(result.steps), 4)
        self.assertEqual(
            messages(result)[:2],
            ["fraction is the same as multiplying by one over", "distribution"],
        )

    def test_sum_of_fractions_combines(self):
        result = check_step(parse("a/c + b/c"), parse("(a + b) / c"))
        self.assertTrue(result.equivalent)
        self.assertEqual(
            messages(result),
            [
                "fraction is the same as multiplying by one over",
                "fraction is the same as multiplying by one over",
                "factoring",
                "multiplying by one over something results in a fraction",
            ],
        )

    def test_fraction_of_sum_as_product(self):
        result = check_step(parse("(a + b) / c"), parse("(a + b) * 1/c"))
        self.assertTrue(result.equivalent)
        self.assertEqual(messages(result), ["fraction is the same as multiplying by one over"])

    def test_dividing_by_a_fraction(self):
        result = check_step(parse("a / (b/c)"), parse("a * c/b"))
        self.assertTrue(result.equivalent)
        self.assertEqual(
            messages(result),
            ["dividing by a fraction is the same as multiplying by the reciprocal"],
        )

    def test_division_by_one(self):
        for before, after in [("a", "a / 1"), ("a / 1", "a")]:
            with self.subTest(before=before):
                result = check_step(parse(before), parse(after))
                self.assertTrue(result.equivalent)
                self.assertEqual(messages(result), ["division by one"])

    def test_no_false_positive_from_partial_match(self):
        result = check_step(parse("2x/2"), parse("2b"))
        self.assertFalse(result.equivalent)
        self.assertEqual(result.steps, ())


if __name__ == "__main__":
    unittest.main()
