"""Checks for operations applied to both sides of an equation.

Run forward, a check confirms that the same term, factor or divisor was
applied to both sides. Run reversed, it undoes that operation on the later
equation and verifies the result against the earlier one; the step history in
the context stops the two directions from undoing each other forever.
"""

from __future__ import annotations

from dataclasses import replace

from ..expression import (
    Add,
    Div,
    Eq,
    Mul,
    Neg,
    Node,
    add_terms,
    div,
    eq,
    get_factors,
    get_terms,
    is_subtraction,
    mul,
    mul_factors,
    neg,
)
from ..types import FAILED, Result, Step
from .base import Context, check
from .util import difference


def _sides(prev: Node, next_: Node) -> tuple[Node, Node, Node, Node] | None:
    if not (isinstance(prev, Eq) and isinstance(next_, Eq)):
        return None
    if len(prev.args) != 2 or len(next_.args) != 2:
        return None
    return prev.args[0], prev.args[1], next_.args[0], next_.args[1]


def _undo(
    guard: str, prev: Node, next_: Node, new_prev: Node, context: Context
) -> Result:
    """Check the re-synthesized ``new_prev`` against ``prev`` below a cycle guard."""
    inner = replace(
        context,
        reversed=not context.reversed,
        steps=context.steps + (Step(guard, prev, next_),),
    )
    return inner.check_step(new_prev, prev)


def _inverse(term: Node) -> Node:
    if isinstance(term, Neg):
        return term.arg
    return neg(term, subtraction=True)


@check(symmetric=True)
def check_add_sub(prev: Node, next_: Node, context: Context) -> Result:
    sides = _sides(prev, next_)
    if sides is None:
        return FAILED
    lhs_a, rhs_a, lhs_b, rhs_b = sides
    if not (isinstance(lhs_b, Add) and isinstance(rhs_b, Add)):
        return FAILED

    lhs_new = difference(get_terms(lhs_b), get_terms(lhs_a), context)
    rhs_new = difference(get_terms(rhs_b), get_terms(rhs_a), context)
    if not lhs_new or not rhs_new:
        return FAILED

    if context.reversed:
        guard = "removing the same term from both sides"
        if context.has_step(guard):
            return FAILED
        lhs_inverse = [_inverse(term) for term in lhs_new]
        rhs_inverse = [_inverse(term) for term in rhs_new]
        new_prev = eq(
            [
                add_terms(get_terms(lhs_b) + lhs_inverse),
                add_terms(get_terms(rhs_b) + rhs_inverse),
            ]
        )
        result = _undo(guard, prev, next_, new_prev, context)
        if not result.equivalent:
            return FAILED
        if all(is_subtraction(term) for term in lhs_inverse + rhs_inverse):
            message = "subtract the same value from both sides"
        else:
            message = "add the same value to both sides"
        return Result(True, (Step(message, next_, new_prev),) + result.steps)

    result = context.check_step(add_terms(lhs_new), add_terms(rhs_new))
    if not result.equivalent or result.steps:
        return FAILED
    if all(is_subtraction(term) for term in lhs_new + rhs_new):
        message = "subtracting the same value from both sides"
    else:
        message = "adding the same value to both sides"
    return Result(True, (Step(message, prev, next_),))


@check(symmetric=True)
def check_mul(prev: Node, next_: Node, context: Context) -> Result:
    sides = _sides(prev, next_)
    if sides is None:
        return FAILED
    lhs_a, rhs_a, lhs_b, rhs_b = sides
    if not (isinstance(lhs_b, Mul) and isinstance(rhs_b, Mul)):
        return FAILED

    lhs_new = difference(get_factors(lhs_b), get_factors(lhs_a), context)
    rhs_new = difference(get_factors(rhs_b), get_factors(rhs_a), context)
    if not lhs_new or not rhs_new:
        return FAILED

    if context.reversed:
        guard = "remove common factor on both sides"
        if context.has_step(guard):
            return FAILED
        new_prev = eq([div(lhs_b, mul_factors(lhs_new)), div(rhs_b, mul_factors(rhs_new))])
        result = _undo(guard, prev, next_, new_prev, context)
        if not result.equivalent:
            return FAILED
        return Result(
            True,
            (Step("divide both sides by the same value", next_, new_prev),) + result.steps,
        )

    result = context.check_step(mul_factors(lhs_new), mul_factors(rhs_new))
    if not result.equivalent or result.steps:
        return FAILED
    return Result(True, (Step("multiply both sides by the same value", prev, next_),))


@check(symmetric=True)
def check_div(prev: Node, next_: Node, context: Context) -> Result:
    sides = _sides(prev, next_)
    if sides is None:
        return FAILED
    lhs_a, rhs_a, lhs_b, rhs_b = sides
    if not (isinstance(lhs_b, Div) and isinstance(rhs_b, Div)):
        return FAILED

    if context.reversed:
        guard = "remove division by the same amount"
        if context.has_step(guard):
            return FAILED
        new_prev = eq(
            [mul([lhs_b.denominator, lhs_b]), mul([rhs_b.denominator, rhs_b])]
        )
        result = _undo(guard, prev, next_, new_prev, context)
        if not result.equivalent:
            return FAILED
        return Result(
            True,
            (Step("multiply both sides by the same value", next_, new_prev),) + result.steps,
        )

    for old, new in ((lhs_a, lhs_b.numerator), (rhs_a, rhs_b.numerator)):
        result = context.check_step(old, new)
        if not result.equivalent or result.steps:
            return FAILED
    result = context.check_step(lhs_b.denominator, rhs_b.denominator)
    if not result.equivalent or result.steps:
        return FAILED
    return Result(True, (Step("divide both sides by the same value", prev, next_),))


EQUATION_CHECKS = (check_add_sub, check_mul, check_div)
