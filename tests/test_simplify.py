"""Tests for the simplifier.

SymPy is used as an oracle: every simplification must keep the value of the
expression.
"""

import unittest
from fractions import Fraction
from unittest import mock

import pytest
import sympy as sp

from mathsteps_pkg.expression import apply_steps
from mathsteps_pkg.parser import parse
from mathsteps_pkg.simplify import simplify
from mathsteps_pkg.simplify.transforms import distribute, div_by_fraction, reduce_fraction
from mathsteps_pkg.simplify.util import mul_terms, split_term
from mathsteps_pkg.sympy_bridge import to_sympy


def messages(step):
    return [substep.message for substep in step.substeps]


CASES = [
    ("3x + 4x", "7x", ["collect like terms"]),
    ("3(x + 1) + 4", "3x + 7", ["distribute", "collect like terms"]),
    (
        "(x+1)(x+3)",
        "x^2 + 4x + 3",
        [
            "distribute",
            "distribute",
            "distribute",
            "collect like terms",
            "repeated multiplication can be written as a power",
        ],
    ),
    ("x + 1 + 4", "x + 5", ["collect like terms"]),
    ("(x + 1) + 4", "x + 5", ["drop parentheses", "collect like terms"]),
    ("(3)(3)", "9", ["evaluate multiplication"]),
    ("xx", "x^2", ["repeated multiplication can be written as a power"]),
    ("banana", "ba^3n^2", ["repeated multiplication can be written as a power"]),
    ("abc / bc", "a", ["reduce fraction"]),
    ("-abc / bcd", "-a / d", ["reduce fraction"]),
    ("(a*b)/(b*d)", "a / d", ["reduce fraction"]),
    ("2x / 2", "x", ["reduce fraction"]),
    ("4 / 6", "2 / 3", ["evaluate division"]),
    ("a + -b", "a - b", ["adding the inverse is the same as subtraction"]),
    ("3 - (x + 1)", "2 - x", ["distribute", "collect like terms"]),
    ("3(x + 2(x - 1))", "9x - 6", ["distribute", "collect like terms", "distribute"]),
    ("x/2 + x/3", "5x / 6", ["collect like terms", "multiply fraction(s)"]),
    ("(1 + 2)(x + 1)", "3x + 3", ["evaluate addition", "distribute"]),
]


class TestSimplifyTraces:
    @pytest.mark.parametrize("before,after,expected", CASES)
    def test_result_and_substeps(self, before, after, expected):
        step = simplify(parse(before))
        assert step is not None
        assert step.message == "simplify expression"
        assert str(step.after) == after
        assert messages(step) == expected

    @pytest.mark.parametrize("before,after,expected", CASES)
    def test_value_is_preserved(self, before, after, expected):
        step = simplify(parse(before))
        assert sp.simplify(to_sympy(step.before) - to_sympy(step.after)) == 0

    @pytest.mark.parametrize("before,after,expected", CASES)
    def test_result_is_a_fixed_point(self, before, after, expected):
        step = simplify(parse(before))
        assert simplify(step.after) is None

    @pytest.mark.parametrize("text", ["3(x + 1) + 4", "(x+1)(x+3)", "3 - (x + 1)"])
    def test_substeps_replay_onto_input(self, text):
        node = parse(text)
        step = simplify(node)
        assert apply_steps(node, step.substeps) == step.after


class TestNothingToDo(unittest.TestCase):
    def test_simplified_expressions_return_none(self):
        for text in ["2 / 3", "x", "2x + 1", "x^2", "a - b"]:
            with self.subTest(text=text):
                self.assertIsNone(simplify(parse(text)))


class TestDistribute(unittest.TestCase):
    def test_distribute_substeps(self):
        node = parse("3 - (x + 1)")
        step = distribute(node, ())
        self.assertEqual(
            [s.message for s in step.substeps],
            [
                "negation is the same as multiplying by negative one",
                "multiply each term",
                "multiplying a negative by a positive is negative",
                "multiplying a negative by a positive is negative",
                "adding the negative is the same as subtraction",
                "adding the negative is the same as subtraction",
            ],
        )
        self.assertEqual(str(step.after), "3 - x - 1")
        self.assertEqual(apply_steps(node, step.substeps), step.after)

    def test_subtraction_inside_distributed_sum(self):
        node = parse("2(x - 1)")
        step = distribute(node, ())
        self.assertEqual(step.substeps[0].message, "subtraction is the same as adding the negative")
        self.assertEqual(str(step.after), "2x - 2")
        self.assertEqual(apply_steps(node, step.substeps), step.after)

    def test_product_inside_sum_is_left_to_the_sum(self):
        node = parse("3(x + 1) + 4")
        self.assertIsNone(distribute(node.args[0], (node,)))


class TestReduceFraction(unittest.TestCase):
    def test_sign_is_kept_once(self):
        self.assertEqual(str(reduce_fraction(parse("-abc / bcd"), ()).after), "-a / d")
        self.assertEqual(str(reduce_fraction(parse("abc / -bcd"), ()).after), "a / -d")
        self.assertEqual(str(reduce_fraction(parse("-abc / -bcd"), ()).after), "a / d")

    def test_coefficient_is_recombined(self):
        self.assertEqual(str(reduce_fraction(parse("12x / 8"), ()).after), "3x / 2")

    def test_numbers_are_left_to_division(self):
        self.assertIsNone(reduce_fraction(parse("4 / 6"), ()))


class TestDivideByFraction(unittest.TestCase):
    def test_numeric_quotient_is_evaluated(self):
        step = simplify(parse("10 / (5/6)"))
        self.assertEqual(str(step.after), "12")
        self.assertEqual(
            messages(step),
            [
                "dividing by a fraction is the same as multiplying by the reciprocal",
                "evaluate multiplication",
            ],
        )

    def test_symbolic_quotient(self):
        step = simplify(parse("a / (b/c)"))
        self.assertEqual(str(step.after), "ac / b")
        self.assertEqual(
            messages(step),
            [
                "dividing by a fraction is the same as multiplying by the reciprocal",
                "multiply fraction(s)",
            ],
        )

    def test_zero_numerator_is_left_alone(self):
        self.assertIsNone(div_by_fraction(parse("a / (0/c)"), ()))


class TestLimits(unittest.TestCase):
    """The iteration and pass caps stop simplification early."""

    def test_single_pass_single_iteration(self):
        with mock.patch("mathsteps_pkg.simplify.simplify.MAX_SIMPLIFY_PASSES", 1), mock.patch(
            "mathsteps_pkg.simplify.simplify.MAX_SIMPLIFY_ITERATIONS", 1
        ):
            step = simplify(parse("10 / (5/6)"))
        self.assertEqual(len(step.substeps), 1)
        self.assertEqual(sp.simplify(to_sympy(step.after) - 12), 0)

    def test_later_passes_finish_the_work(self):
        with mock.patch("mathsteps_pkg.simplify.simplify.MAX_SIMPLIFY_ITERATIONS", 1):
            step = simplify(parse("10 / (5/6)"))
        self.assertEqual(str(step.after), "12")

    def test_pass_cap_leaves_product_unfinished(self):
        with mock.patch("mathsteps_pkg.simplify.simplify.MAX_SIMPLIFY_PASSES", 1):
            step = simplify(parse("(x+1)(x+3)"))
        self.assertNotIn("repeated multiplication can be written as a power", messages(step))
        self.assertEqual(sp.expand(to_sympy(step.after) - to_sympy(step.before)), 0)


class TestUtil(unittest.TestCase):
    def test_mul_terms(self):
        self.assertEqual(str(mul_terms(parse("3"), parse("-2x"))), "-6x")
        self.assertEqual(str(mul_terms(parse("-1"), parse("-1"))), "1")
        self.assertEqual(str(mul_terms(parse("x"), parse("3"))), "3x")

    def test_split_term(self):
        coefficient, factors = split_term(parse("-3xy"))
        self.assertEqual(coefficient, -3)
        self.assertEqual([str(f) for f in factors], ["x", "y"])
        coefficient, factors = split_term(parse("x / 2"))
        self.assertEqual(coefficient, Fraction(1, 2))
        self.assertEqual([str(f) for f in factors], ["x"])


if __name__ == "__main__":
    unittest.main()
