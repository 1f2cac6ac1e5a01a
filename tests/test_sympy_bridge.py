"""Tests for the SymPy conversion used to confirm values."""

import unittest

import sympy as sp

from mathsteps_pkg.parser import parse
from mathsteps_pkg.sympy_bridge import to_sympy, values_match

x, y = sp.symbols("x y")


class TestToSympy(unittest.TestCase):
    def test_expressions(self):
        self.assertEqual(to_sympy(parse("2x + 3")), 2 * x + 3)
        self.assertEqual(to_sympy(parse("a - b")), sp.Symbol("a") - sp.Symbol("b"))
        self.assertEqual(to_sympy(parse("x / 2")), x / 2)
        self.assertEqual(to_sympy(parse("x^2")), x**2)
        self.assertEqual(to_sympy(parse("0.5")), sp.Rational(1, 2))

    def test_subscripted_identifier(self):
        self.assertEqual(to_sympy(parse("x_1")), sp.Symbol("x_1"))

    def test_relations(self):
        self.assertEqual(to_sympy(parse("x = 5")), sp.Eq(x, 5, evaluate=False))
        chained = to_sympy(parse("1 < x < 5"))
        self.assertIsInstance(chained, sp.And)

    def test_ellipsis_has_no_counterpart(self):
        with self.assertRaises(TypeError):
            to_sympy(parse("1 + 2 + ..."))


class TestValuesMatch(unittest.TestCase):
    def test_expressions(self):
        self.assertTrue(values_match(parse("2(x + 1)"), parse("2x + 2")))
        self.assertFalse(values_match(parse("2x/2"), parse("2b")))

    def test_equations_scaled_or_flipped(self):
        self.assertTrue(values_match(parse("x + 5 = 10"), parse("x = 5")))
        self.assertTrue(values_match(parse("x = 5"), parse("5 = x")))
        self.assertTrue(values_match(parse("2x = 6"), parse("x = 3")))
        self.assertFalse(values_match(parse("x = 5"), parse("x = 6")))

    def test_undecided(self):
        self.assertIsNone(values_match(parse("x < 5"), parse("x < 6")))
        self.assertIsNone(values_match(parse("1 + ..."), parse("1 + ...")))
