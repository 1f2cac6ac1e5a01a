"""Fraction rules: reciprocals, products of fractions and cancelling factors."""

from __future__ import annotations

from ..expression import (
    Add,
    Div,
    Mul,
    Node,
    apply_steps,
    div,
    get_factors,
    is_one,
    mul,
    mul_factors,
    number,
)
from ..types import FAILED, Result, Step
from .base import Context, check, ordered
from .util import decompose, difference, intersection, is_zero


@check(symmetric=True)
def mul_by_frac_is_div(prev: Node, next_: Node, context: Context) -> Result:
    """``a * 1/b -> a / b``, and ``a / b -> a * 1/b`` when that opens up a sum."""
    if isinstance(prev, Div):
        return _div_to_mul_by_one_over(prev, next_, context)
    if not isinstance(prev, Mul):
        return FAILED
    last = len(prev.args) - 1
    for index, factor in enumerate(prev.args):
        if not isinstance(factor, Div):
            continue
        one = context.check_step(factor.numerator, number(1))
        if not one.equivalent:
            continue
        others = prev.args[:index] + prev.args[index + 1 :]
        new_prev = div(mul_factors(others, prev.implicit), factor.denominator)
        result = context.check_step(new_prev, next_)
        if not result.equivalent:
            continue
        if index == last or one.steps:
            return ordered(
                context,
                "multiplying by one over something results in a fraction",
                prev,
                new_prev,
                one.steps,
                result.steps,
                reverse_message="fraction is the same as multiplying by one over",
            )
        # 1/b * a: move the fraction to the end first
        moved = mul(others + (factor,), prev.implicit)
        if context.reversed:
            return Result(
                True,
                result.steps
                + (
                    Step("fraction is the same as multiplying by one over", new_prev, moved),
                    Step("commutative property", moved, prev),
                ),
            )
        return Result(
            True,
            (
                Step("commutative property", prev, moved),
                Step("multiplying by one over something results in a fraction", moved, new_prev),
            )
            + result.steps,
        )
    return FAILED


def _div_to_mul_by_one_over(prev: Div, next_: Node, context: Context) -> Result:
    # Only towards a sum, where distribution can take over.
    if is_one(prev.numerator) or not isinstance(next_, Add):
        return FAILED
    new_prev = mul([prev.numerator, div(number(1), prev.denominator)])
    result = context.check_step(new_prev, next_)
    if not result.equivalent:
        return FAILED
    return ordered(
        context,
        "fraction is the same as multiplying by one over",
        prev,
        new_prev,
        after=result.steps,
        reverse_message="multiplying by one over something results in a fraction",
    )


@check(symmetric=True)
def div_by_frac_is_mul_reciprocal(prev: Node, next_: Node, context: Context) -> Result:
    """``a / (b/c) -> a * c/b``"""
    if not isinstance(prev, Div) or not isinstance(prev.denominator, Div):
        return FAILED
    inner = prev.denominator
    new_prev = mul([prev.numerator, div(inner.denominator, inner.numerator)])
    result = context.check_step(new_prev, next_)
    if not result.equivalent:
        return FAILED
    return ordered(
        context,
        "dividing by a fraction is the same as multiplying by the reciprocal",
        prev,
        new_prev,
        after=result.steps,
    )


@check(symmetric=True)
def mul_fractions(prev: Node, next_: Node, context: Context) -> Result:
    """``a/b * c/d -> ac / bd``"""
    if not isinstance(prev, Mul) or not all(isinstance(arg, Div) for arg in prev.args):
        return FAILED
    new_prev = div(
        mul_factors([f for arg in prev.args for f in get_factors(arg.numerator)]),
        mul_factors([f for arg in prev.args for f in get_factors(arg.denominator)]),
    )
    result = context.check_step(new_prev, next_)
    if not result.equivalent:
        return FAILED
    return ordered(context, "multiplying fractions", prev, new_prev, after=result.steps)


@check(symmetric=True)
def div_by_same_value(prev: Node, next_: Node, context: Context) -> Result:
    """``a / a -> 1``"""
    if not isinstance(prev, Div) or is_zero(prev.denominator):
        return FAILED
    same = context.check_step(prev.numerator, prev.denominator)
    if not same.equivalent:
        return FAILED
    one = number(1)
    result = context.check_step(one, next_)
    if not result.equivalent:
        return FAILED
    message = "division by the same value"
    if context.reversed:
        return Result(True, result.steps + (Step(message, one, prev),) + same.steps)
    return Result(
        True,
        same.steps + (Step(message, apply_steps(prev, same.steps), one),) + result.steps,
    )


@check(symmetric=True)
def div_by_one(prev: Node, next_: Node, context: Context) -> Result:
    """``a / 1 -> a``"""
    if not isinstance(prev, Div):
        return FAILED
    one = context.check_step(prev.denominator, number(1))
    if not one.equivalent:
        return FAILED
    result = context.check_step(prev.numerator, next_)
    if not result.equivalent:
        return FAILED
    message = "division by one"
    if context.reversed:
        return Result(
            True, result.steps + (Step(message, prev.numerator, prev),) + one.steps
        )
    before = one.steps + result.steps
    return Result(True, before + (Step(message, apply_steps(prev, before), next_),))


@check()
def cancel_common_factors(prev: Node, next_: Node, context: Context) -> Result:
    """Split numbers into primes and pull the factors shared above and below out.

    ``24/6`` becomes ``(2*2*2*3) / (2*3)`` and then
    ``(2*3)/(2*3) * (2*2)/1``, which the rest of the checker reduces further.
    """
    if not isinstance(prev, Div):
        return FAILED
    num_factors = get_factors(prev.numerator)
    den_factors = get_factors(prev.denominator)
    num_primes = decompose(num_factors)
    den_primes = decompose(den_factors)

    steps: list[Step] = []
    decomposed: Node = prev
    if num_primes != num_factors or den_primes != den_factors:
        decomposed = div(mul_factors(num_primes), mul_factors(den_primes))
        steps.append(Step("prime factorization", prev, decomposed))

    if isinstance(next_, Div):
        removed_above = difference(num_primes, decompose(get_factors(next_.numerator)))
        removed_below = difference(den_primes, decompose(get_factors(next_.denominator)))
        common = intersection(removed_above, removed_below)
    else:
        common = intersection(num_primes, den_primes)
    if not common:
        return FAILED

    num_rest = difference(num_primes, common)
    den_rest = difference(den_primes, common)
    new_prev = mul(
        [
            div(mul_factors(common), mul_factors(common)),
            div(mul_factors(num_rest), mul_factors(den_rest)),
        ]
    )
    steps.append(
        Step("extract common factors from numerator and denominator", decomposed, new_prev)
    )
    result = context.check_step(new_prev, next_)
    if not result.equivalent:
        return FAILED
    return Result(True, tuple(steps) + result.steps)


FRACTION_CHECKS = (
    mul_by_frac_is_div,
    div_by_frac_is_mul_reciprocal,
    mul_fractions,
    div_by_same_value,
    div_by_one,
    cancel_common_factors,
)
