"""Numeric evaluation checks and their reverse, decomposition.

``x + 1 + 2 -> x + 3`` is an evaluation of addition; ``6 -> 2 * 3`` is a
decomposition of a product. The non-numeric operands on both sides must be
the same.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Callable

from ..expression import Add, Div, Mul, Node, get_factors, get_terms, is_number
from ..types import FAILED, Result
from .base import Context, check, ordered
from .util import difference, equality, evaluate


def _split(nodes: list[Node]) -> tuple[list[Node], list[Node]]:
    numbers = [node for node in nodes if is_number(node)]
    others = [node for node in nodes if not is_number(node)]
    return numbers, others


def _product(values) -> Fraction:
    result = Fraction(1)
    for value in values:
        result *= value
    return result


def _check_evaluation(
    prev: Node,
    next_: Node,
    context: Context,
    operands: Callable[[Node], list[Node]],
    combine: Callable[[list[Fraction]], Fraction],
    message: str,
    reverse_message: str,
) -> Result:
    prev_numbers, prev_others = _split(operands(prev))
    next_numbers, next_others = _split(operands(next_))
    if not equality(prev_others, next_others):
        return FAILED

    old = difference(prev_numbers, next_numbers)
    new = difference(next_numbers, prev_numbers)
    if len(old) < 2 or not new:
        return FAILED

    allow_division = context.checker.options.eval_fractions
    try:
        old_value = combine([evaluate(node, allow_division) for node in old])
        new_value = combine([evaluate(node, allow_division) for node in new])
    except ValueError:
        return FAILED
    if old_value != new_value:
        return FAILED
    return ordered(context, message, prev, next_, reverse_message=reverse_message)


@check(symmetric=True, unfilterable=True)
def eval_add(prev: Node, next_: Node, context: Context) -> Result:
    if not isinstance(prev, Add):
        return FAILED
    return _check_evaluation(
        prev, next_, context, get_terms, sum, "evaluation of addition", "decompose sum"
    )


@check(symmetric=True, unfilterable=True)
def eval_mul(prev: Node, next_: Node, context: Context) -> Result:
    if not isinstance(prev, Mul):
        return FAILED
    return _check_evaluation(
        prev,
        next_,
        context,
        get_factors,
        _product,
        "evaluation of multiplication",
        "decompose product",
    )


@check(unfilterable=True)
def eval_div(prev: Node, next_: Node, context: Context) -> Result:
    if not context.checker.options.eval_fractions:
        return FAILED
    if not isinstance(prev, Div) or not is_number(prev) or not is_number(next_):
        return FAILED
    try:
        same = evaluate(prev) == evaluate(next_)
    except ValueError:
        return FAILED
    if not same:
        return FAILED
    return ordered(context, "evaluation of division", prev, next_)


EVAL_DECOMP_CHECKS = (eval_add, eval_mul, eval_div)
