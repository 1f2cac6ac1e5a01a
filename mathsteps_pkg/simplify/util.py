"""Helpers shared by the simplifier transforms."""

from __future__ import annotations

from fractions import Fraction

from ..checker.util import evaluate
from ..expression import Div, Mul, Neg, Node, Number, get_factors, is_number, mul_factors, neg, number


def strip_neg(node: Node) -> tuple[Node, bool]:
    """Peel every leading minus off ``node``; returns the core and its sign."""
    negative = False
    while isinstance(node, Neg):
        negative = not negative
        node = node.arg
    return node, negative


def mul_terms(a: Node, b: Node) -> Node:
    """Product of two terms in canonical form.

    Signs are pulled out front, nested products are flattened and numeric
    factors are multiplied into a single leading coefficient:
    ``mul_terms(3, -2x)`` is ``-6x``.
    """
    negative = False
    factors: list[Node] = []
    for operand in (a, b):
        core, sign = strip_neg(operand)
        negative ^= sign
        for factor in get_factors(core):
            inner, sign = strip_neg(factor)
            negative ^= sign
            factors.extend(get_factors(inner))

    coefficient = Fraction(1)
    rest: list[Node] = []
    for factor in factors:
        if isinstance(factor, Number):
            coefficient *= factor.value
        else:
            rest.append(factor)
    if coefficient == 0:
        return number(0)
    if coefficient != 1 or not rest:
        rest.insert(0, number(coefficient))
    product = mul_factors(rest, implicit=True)
    return neg(product) if negative else product


def split_term(term: Node) -> tuple[Fraction, list[Node]]:
    """Split an additive term into its numeric coefficient and other factors.

    ``-3xy`` gives ``(-3, [x, y])``, ``x / 2`` gives ``(1/2, [x])``.
    """
    if isinstance(term, Neg):
        coefficient, factors = split_term(term.arg)
        return -coefficient, factors
    if isinstance(term, Number):
        return term.value, []
    if isinstance(term, Div) and is_number(term.denominator):
        try:
            denominator = evaluate(term.denominator)
        except ValueError:
            return Fraction(1), [term]
        if denominator == 0:
            return Fraction(1), [term]
        coefficient, factors = split_term(term.numerator)
        return coefficient / denominator, factors
    if isinstance(term, Mul):
        coefficient = Fraction(1)
        factors: list[Node] = []
        for arg in term.args:
            value, inner = split_term(arg)
            coefficient *= value
            factors.extend(inner)
        return coefficient, factors
    return Fraction(1), [term]
