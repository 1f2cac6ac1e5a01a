"""Checks for the field axioms: identities, distribution, commutativity, zero."""

from __future__ import annotations

from dataclasses import replace

from ..expression import (
    Add,
    Eq,
    Mul,
    Neq,
    Node,
    add,
    add_terms,
    apply_steps,
    is_subtraction,
    mul,
    mul_factors,
    neg,
    number,
    relation,
)
from ..types import FAILED, Result, Step
from .base import Context, check, ordered
from .util import check_args

DISTRIBUTION_CHECKS = frozenset(
    {
        "add_zero",
        "mul_one",
        "check_distribution",
        "neg_is_mul_neg_one",
        "sub_is_neg",
        "mul_two_negs_is_pos",
    }
)


def _rebuild(node: Add | Mul, args: list[Node]) -> Node:
    if isinstance(node, Add):
        return add_terms(args)
    return mul_factors(args, node.implicit)


def _check_identity(prev: Add | Mul, next_: Node, context: Context, value: int, message: str) -> Result:
    """Drop every operand of ``prev`` equivalent to the identity ``value``."""
    identity_steps: list[Step] = []
    non_identity: list[Node] = []
    with_literals: list[Node] = []
    for arg in prev.args:
        identity = number(value)
        result = context.check_step(arg, identity)
        if result.equivalent:
            identity_steps.extend(result.steps)
            with_literals.append(identity)
        else:
            non_identity.append(arg)
            with_literals.append(arg)

    if len(non_identity) == len(prev.args):
        return FAILED

    new_prev = _rebuild(prev, non_identity)
    result = context.check_step(new_prev, next_)
    if not result.equivalent:
        return FAILED

    if context.reversed:
        new_next = _rebuild(prev, with_literals)
        return Result(
            True, result.steps + (Step(message, new_prev, new_next),) + tuple(identity_steps)
        )
    return Result(
        True,
        tuple(identity_steps)
        + (Step(message, apply_steps(prev, identity_steps), new_prev),)
        + result.steps,
    )


@check(symmetric=True)
def add_zero(prev: Node, next_: Node, context: Context) -> Result:
    if not isinstance(prev, Add):
        return FAILED
    return _check_identity(prev, next_, context, 0, "addition with identity")


@check(symmetric=True)
def mul_one(prev: Node, next_: Node, context: Context) -> Result:
    if not isinstance(prev, Mul):
        return FAILED
    return _check_identity(prev, next_, context, 1, "multiplication with identity")


def _distribute_product(factor: Node, terms: tuple[Node, ...], factor_first: bool = True) -> Node:
    """``factor`` times each term; subtracted terms become negative products."""
    products = []
    for term in terms:
        if is_subtraction(term):
            term = neg(term.arg)
        pair = [factor, term] if factor_first else [term, factor]
        products.append(mul(pair))
    return add(products)


def _shortest(results: list[Result]) -> Result:
    if not results:
        return FAILED
    return min(results, key=lambda r: len(r.steps))


def _distribute_within_sum(prev: Add, next_: Add, context: Context) -> Result:
    narrowed = replace(context, allowed_checks=DISTRIBUTION_CHECKS)
    results = []
    for index, term in enumerate(prev.args):
        if (
            isinstance(term, Mul)
            and len(term.args) == 2
            and isinstance(term.args[1], Add)
        ):
            distributed = _distribute_product(term.args[0], term.args[1].args)
            message = "distribution"
            reverse_message = "factoring"
        elif is_subtraction(term) and isinstance(term.arg, Add):
            distributed = mul([neg(number(1)), term.arg])
            message = reverse_message = (
                "subtraction is the same as multiplying by negative one"
            )
        else:
            continue

        if isinstance(distributed, Add):
            args = prev.args[:index] + distributed.args + prev.args[index + 1 :]
        else:
            args = prev.args[:index] + (distributed,) + prev.args[index + 1 :]
        new_prev = add(args)
        result = narrowed.check_step(new_prev, next_)
        if result.equivalent:
            results.append(
                ordered(
                    context,
                    message,
                    prev,
                    new_prev,
                    after=result.steps,
                    reverse_message=reverse_message,
                )
            )
    return _shortest(results)


@check(symmetric=True)
def check_distribution(prev: Node, next_: Node, context: Context) -> Result:
    """``a(b + c) -> ab + ac`` (or factoring when reversed)."""
    if isinstance(prev, Add) and isinstance(next_, Add):
        return _distribute_within_sum(prev, next_, context)
    if not isinstance(prev, Mul) or not isinstance(next_, Add) or len(prev.args) != 2:
        return FAILED

    left, right = prev.args
    if isinstance(right, Add):
        new_prev = _distribute_product(left, right.args)
    elif isinstance(left, Add):
        new_prev = _distribute_product(right, left.args, factor_first=False)
    else:
        return FAILED

    result = context.check_step(new_prev, next_)
    if not result.equivalent:
        return FAILED
    return ordered(
        context, "distribution", prev, new_prev, after=result.steps, reverse_message="factoring"
    )


@check(symmetric=True)
def mul_by_zero(prev: Node, next_: Node, context: Context) -> Result:
    if not isinstance(prev, Mul):
        return FAILED
    for index, arg in enumerate(prev.args):
        zero = number(0)
        zero_result = context.check_step(arg, zero)
        if zero_result.equivalent:
            break
    else:
        return FAILED

    new_prev = number(0)
    result = context.check_step(new_prev, next_)
    if not result.equivalent:
        return FAILED

    message = "multiplication by zero"
    if context.reversed:
        args = list(prev.args)
        args[index] = zero
        new_next = mul(args, prev.implicit)
        return Result(
            True, result.steps + (Step(message, new_prev, new_next),) + zero_result.steps
        )
    return Result(
        True,
        zero_result.steps
        + (Step(message, apply_steps(prev, zero_result.steps), new_prev),)
        + result.steps,
    )


def _reordered(prev: Node, next_: Node, context: Context) -> bool:
    return any(
        a != b and not context.check_step(a, b).equivalent
        for a, b in zip(prev.children, next_.children)
    )


@check()
def commute_addition(prev: Node, next_: Node, context: Context) -> Result:
    if not (isinstance(prev, Add) and isinstance(next_, Add)):
        return FAILED
    result = check_args(prev, next_, context)
    if not result.equivalent or not _reordered(prev, next_, context):
        return FAILED
    if context.reversed:
        return Result(True, (Step("commutative property", next_, prev),) + result.steps)
    return Result(True, result.steps + (Step("commutative property", prev, next_),))


@check()
def commute_multiplication(prev: Node, next_: Node, context: Context) -> Result:
    if not (isinstance(prev, Mul) and isinstance(next_, Mul)):
        return FAILED
    result = check_args(prev, next_, context)
    if not result.equivalent or not _reordered(prev, next_, context):
        return FAILED
    if context.reversed:
        return Result(True, result.steps + (Step("commutative property", next_, prev),))
    return Result(True, (Step("commutative property", prev, next_),) + result.steps)


@check(symmetric=True)
def symmetric_property(prev: Node, next_: Node, context: Context) -> Result:
    """``a = b -> b = a``; only tried reversed so it comes last in a trace."""
    if not context.reversed:
        return FAILED
    if not isinstance(prev, (Eq, Neq)) or type(prev) is not type(next_):
        return FAILED
    if len(prev.args) != len(next_.args):
        return FAILED

    message = "symmetric property"
    if len(prev.args) == 2:
        swapped = relation(type(prev), [prev.args[1], prev.args[0]])
        if swapped == next_:
            return Result(True, (Step(message, next_, prev),))
        return FAILED

    if not _reordered(prev, next_, context):
        return FAILED
    result = check_args(prev, next_, context)
    if not result.equivalent:
        return FAILED
    return Result(True, result.steps + (Step(message, next_, prev),))


AXIOM_CHECKS = (
    add_zero,
    mul_one,
    check_distribution,
    mul_by_zero,
    commute_addition,
    commute_multiplication,
    symmetric_property,
)
