"""Equation transforms used by the solver.

Each transform takes a two-sided equation and the variable being solved for
and returns the Step producing the new equation, or None when it does not
apply. Anything added to both sides is copied so the two sides never share
node ids.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..expression import (
    Div,
    Eq,
    Identifier,
    Mul,
    Neg,
    Node,
    add_terms,
    clone,
    contains,
    div,
    eq,
    get_factors,
    get_terms,
    is_subtraction,
    mul,
    mul_factors,
    neg,
    number,
)
from ..simplify import simplify
from ..types import Step

SolveTransform = Callable[[Eq, Identifier], Optional[Step]]


def simplify_both_sides(equation: Eq, variable: Identifier) -> Optional[Step]:
    substeps = []
    sides = []
    for side in equation.args:
        step = simplify(side)
        if step is None:
            sides.append(side)
        else:
            substeps.append(step)
            sides.append(step.after)
    if not substeps:
        return None
    return Step("simplify both sides", equation, eq(sides), tuple(substeps))


def _inverse(term: Node) -> Node:
    if isinstance(term, Neg):
        return clone(term.arg)
    return neg(clone(term), subtraction=True)


def move_terms_to_one_side(equation: Eq, variable: Identifier) -> Optional[Step]:
    """Gather terms with ``variable`` on the left and the rest on the right.

    Every moved term is removed from its side by adding its inverse to both
    sides, one substep per term.
    """
    if not contains(equation, variable):
        return None
    lhs, rhs = equation.args
    moving = [t for t in get_terms(lhs) if not contains(t, variable)]
    moving += [t for t in get_terms(rhs) if contains(t, variable)]
    if not moving:
        return None

    substeps = []
    current = equation
    for term in moving:
        left, right = current.args
        left_inverse, right_inverse = _inverse(term), _inverse(term)
        new = eq(
            [
                add_terms(get_terms(left) + [left_inverse]),
                add_terms(get_terms(right) + [right_inverse]),
            ]
        )
        if is_subtraction(left_inverse):
            message = "subtract the same value from both sides"
        else:
            message = "add the same value to both sides"
        substeps.append(Step(message, current, new))
        current = new
    return Step("move terms to one side", equation, current, tuple(substeps))


def _coefficient(node: Node, variable: Identifier) -> Optional[Node]:
    """Product of the factors of ``node`` that do not contain ``variable``."""
    if not isinstance(node, Mul):
        return None
    factors = [f for f in get_factors(node) if not contains(f, variable)]
    if not factors or len(factors) == len(node.args):
        return None
    return mul_factors(factors)


def div_both_sides(equation: Eq, variable: Identifier) -> Optional[Step]:
    """``2x = 6 -> 2x / 2 = 6 / 2`` and ``-x = 3 -> -x / -1 = 3 / -1``"""
    lhs, rhs = equation.args
    if isinstance(lhs, Neg) and contains(lhs.arg, variable):
        coefficient = _coefficient(lhs.arg, variable)
        divisor = neg(coefficient if coefficient is not None else number(1))
    else:
        divisor = _coefficient(lhs, variable)
        if divisor is None:
            return None
    new = eq([div(lhs, clone(divisor)), div(rhs, clone(divisor))])
    return Step("divide both sides", equation, new)


def mul_both_sides(equation: Eq, variable: Identifier) -> Optional[Step]:
    """``x / 2 = 3 -> x / 2 * 2 = 3 * 2``"""
    lhs, rhs = equation.args
    if not isinstance(lhs, Div):
        return None
    if not contains(lhs.numerator, variable) or contains(lhs.denominator, variable):
        return None
    new = eq(
        [mul([lhs, clone(lhs.denominator)]), mul([rhs, clone(lhs.denominator)])]
    )
    return Step("multiply both sides", equation, new)


SOLVE_TRANSFORMS: tuple[SolveTransform, ...] = (
    simplify_both_sides,
    move_terms_to_one_side,
    simplify_both_sides,
    div_both_sides,
    simplify_both_sides,
    mul_both_sides,
    simplify_both_sides,
)
