"""Sign rules: additive inverses, subtraction, negation and double negatives."""

from __future__ import annotations

from itertools import combinations

from ..expression import (
    Add,
    Mul,
    Neg,
    Node,
    add,
    add_terms,
    get_factors,
    is_negative,
    is_one,
    is_subtraction,
    mul,
    mul_factors,
    neg,
    number,
)
from ..types import FAILED, Result
from .base import Context, check, ordered


def _shortest(results: list[Result]) -> Result:
    if not results:
        return FAILED
    return min(results, key=lambda r: len(r.steps))


@check(symmetric=True)
def add_inverse(prev: Node, next_: Node, context: Context) -> Result:
    """``a + -a -> 0``, for any two terms of a sum."""
    if not isinstance(prev, Add):
        return FAILED
    terms = prev.args
    for i, j in combinations(range(len(terms)), 2):
        for positive, negative in ((terms[i], terms[j]), (terms[j], terms[i])):
            if not isinstance(negative, Neg) or isinstance(positive, Neg):
                continue
            match = context.check_step(positive, negative.arg)
            if not match.equivalent:
                continue
            new_prev = add_terms([t for k, t in enumerate(terms) if k not in (i, j)])
            result = context.check_step(new_prev, next_)
            if result.equivalent:
                return ordered(
                    context, "adding inverse", prev, new_prev, match.steps, result.steps
                )
    return FAILED


def _negated_forms(term: Neg) -> list[Node]:
    forms = [neg(term.arg)]
    if isinstance(term.arg, Mul):
        first, *rest = term.arg.args
        forms.append(mul([neg(first), *rest], term.arg.implicit))
    return forms


@check(symmetric=True, prefer_shorter=True)
def sub_is_neg(prev: Node, next_: Node, context: Context) -> Result:
    """``a - b -> a + -b``"""
    if not isinstance(prev, Add):
        return FAILED
    results = []
    for index, term in enumerate(prev.args):
        if not is_subtraction(term):
            continue
        for form in _negated_forms(term):
            args = prev.args[:index] + (form,) + prev.args[index + 1 :]
            new_prev = add(args)
            result = context.check_step(new_prev, next_)
            if result.equivalent:
                results.append(
                    ordered(
                        context,
                        "subtracting is the same as adding the inverse",
                        prev,
                        new_prev,
                        after=result.steps,
                    )
                )
    return _shortest(results)


@check(symmetric=True)
def mul_two_negs_is_pos(prev: Node, next_: Node, context: Context) -> Result:
    """``(-a)(-b) -> ab``"""
    if not isinstance(prev, Mul):
        return FAILED
    negatives = [index for index, arg in enumerate(prev.args) if is_negative(arg)]
    if len(negatives) < 2:
        return FAILED
    args = list(prev.args)
    for index in negatives[:2]:
        args[index] = args[index].arg
    new_prev = mul(args, prev.implicit)
    result = context.check_step(new_prev, next_)
    if not result.equivalent:
        return FAILED
    return ordered(
        context, "multiplying two negatives is a positive", prev, new_prev, after=result.steps
    )


@check(symmetric=True, prefer_shorter=True)
def double_negative(prev: Node, next_: Node, context: Context) -> Result:
    """``--a -> a``"""
    if not (is_negative(prev) and is_negative(prev.arg)):
        return FAILED
    new_prev = prev.arg.arg
    result = context.check_step(new_prev, next_)
    if not result.equivalent:
        return FAILED
    return ordered(
        context, "negative of a negative is positive", prev, new_prev, after=result.steps
    )


@check(symmetric=True)
def neg_is_mul_neg_one(prev: Node, next_: Node, context: Context) -> Result:
    """``-a -> -1 * a``; never applied to ``-1`` itself."""
    if not is_negative(prev) or is_one(prev.arg):
        return FAILED
    new_prev = mul_factors([neg(number(1)), *get_factors(prev.arg)], implicit=True)
    result = context.check_step(new_prev, next_)
    if not result.equivalent:
        return FAILED
    return ordered(
        context,
        "negation is the same as multiplying by negative one",
        prev,
        new_prev,
        after=result.steps,
    )


INTEGER_CHECKS = (
    add_inverse,
    sub_is_neg,
    mul_two_negs_is_pos,
    double_negative,
    neg_is_mul_neg_one,
)
