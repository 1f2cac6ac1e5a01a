"""Operand matching, numeric evaluation and prime decomposition helpers.

The bag helpers pair operands greedily: each operand takes the first candidate
it matches (an identical candidate is preferred) and that candidate leaves the
pool. No backtracking is done, so a poor early pairing can block a later one;
``check_args`` can therefore miss some equivalences between long operand lists.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Optional, Sequence

import sympy as sp

from ..expression import Add, Div, Mul, Neg, Node, Number, number
from ..types import FAILED, Result, Step
from .base import Context


def _find_match(item: Node, pool: list[Node], context: Optional[Context]) -> tuple[int, Result]:
    for index, candidate in enumerate(pool):
        if candidate == item:
            return index, Result(True, ())
    if context is None:
        return -1, FAILED
    for index, candidate in enumerate(pool):
        result = context.check_step(item, candidate)
        if result.equivalent:
            return index, result
    return -1, FAILED


def check_args(prev: Node, next_: Node, context: Context) -> Result:
    """Bag match of the operands of two same-kind nodes."""
    if len(prev.children) != len(next_.children):
        return FAILED
    pool = list(next_.children)
    steps: list[Step] = []
    for arg in prev.children:
        index, result = _find_match(arg, pool, context)
        if index < 0:
            return FAILED
        steps.extend(result.steps)
        del pool[index]
    return Result(True, tuple(steps))


def difference(
    items: Sequence[Node], others: Sequence[Node], context: Optional[Context] = None
) -> list[Node]:
    """Items with no matching element in ``others`` (each match used once).

    Without a context only structurally equal nodes match.
    """
    pool = list(others)
    rest = []
    for item in items:
        index, _ = _find_match(item, pool, context)
        if index < 0:
            rest.append(item)
        else:
            del pool[index]
    return rest


def intersection(
    items: Sequence[Node], others: Sequence[Node], context: Optional[Context] = None
) -> list[Node]:
    """Items of ``items`` that have a match in ``others`` (each match used once)."""
    pool = list(others)
    common = []
    for item in items:
        index, _ = _find_match(item, pool, context)
        if index >= 0:
            common.append(item)
            del pool[index]
    return common


def equality(
    items: Sequence[Node], others: Sequence[Node], context: Optional[Context] = None
) -> bool:
    return len(items) == len(others) and not difference(items, others, context)


def evaluate(node: Node, allow_division: bool = True) -> Fraction:
    """Exact value of a numeric-only tree.

    Raises:
        ValueError: if the tree is not numeric, or divides when division is
            not allowed or by zero
    """
    if isinstance(node, Number):
        return node.value
    if isinstance(node, Neg):
        return -evaluate(node.arg, allow_division)
    if isinstance(node, Add):
        return sum((evaluate(arg, allow_division) for arg in node.args), Fraction(0))
    if isinstance(node, Mul):
        value = Fraction(1)
        for arg in node.args:
            value *= evaluate(arg, allow_division)
        return value
    if isinstance(node, Div) and allow_division:
        denominator = evaluate(node.denominator, allow_division)
        if denominator == 0:
            raise ValueError("division by zero")
        return evaluate(node.numerator, allow_division) / denominator
    raise ValueError(f"cannot evaluate {node.kind} node")


def is_zero(node: Node) -> bool:
    try:
        return evaluate(node) == 0
    except ValueError:
        return False


def prime_factors(n: int) -> list[int]:
    """Prime factors with multiplicity in ascending order; [] for 1."""
    if n < 2:
        return [] if n == 1 else [n]
    return [p for p, k in sorted(sp.factorint(n).items()) for _ in range(k)]


def decompose(factors: Sequence[Node]) -> list[Node]:
    """Replace integer factors by their prime factors and drop factors of 1."""
    result: list[Node] = []
    for factor in factors:
        if isinstance(factor, Number) and factor.value.denominator == 1 and factor.value > 0:
            primes = prime_factors(factor.value.numerator)
            if primes == [factor.value.numerator]:
                result.append(factor)
            else:
                result.extend(number(p) for p in primes)
        else:
            result.append(factor)
    return result
