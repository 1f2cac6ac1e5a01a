"""Conversion of expression trees to SymPy objects.

Used to confirm that two expressions have the same value independently of the
step checker, e.g. to tell a wrong step from a correct step the checker cannot
explain.
"""

from __future__ import annotations

from functools import reduce
from operator import mul as _mul

import sympy as sp

from .expression import (
    Add,
    Div,
    Eq,
    Identifier,
    Mul,
    Neg,
    Node,
    Number,
    Pow,
    Relation,
    Root,
)
from .logging_config import get_logger
from .printer import print_node

logger = get_logger("sympy_bridge")


def _symbol_name(node: Identifier) -> str:
    if node.subscript is None:
        return node.name
    return f"{node.name}_{print_node(node.subscript)}"


def to_sympy(node: Node) -> sp.Expr:
    """Convert ``node`` to a SymPy expression (relations to ``sp.Eq`` etc.).

    Raises:
        TypeError: for node kinds SymPy has no counterpart for (ellipsis)
    """
    if isinstance(node, Number):
        return sp.Rational(node.value.numerator, node.value.denominator)
    if isinstance(node, Identifier):
        return sp.Symbol(_symbol_name(node))
    if isinstance(node, Add):
        return sp.Add(*[to_sympy(arg) for arg in node.args])
    if isinstance(node, Mul):
        return reduce(_mul, [to_sympy(arg) for arg in node.args])
    if isinstance(node, Neg):
        return -to_sympy(node.arg)
    if isinstance(node, Div):
        return to_sympy(node.numerator) / to_sympy(node.denominator)
    if isinstance(node, Pow):
        return sp.Pow(to_sympy(node.base), to_sympy(node.exp))
    if isinstance(node, Root):
        return sp.root(to_sympy(node.radicand), to_sympy(node.index))
    if isinstance(node, Relation):
        return _relation_to_sympy(node)
    raise TypeError(f"Cannot convert node of kind {node.kind!r} to SymPy")


_SYMPY_RELATIONS = {
    "eq": sp.Eq,
    "neq": sp.Ne,
    "lt": sp.Lt,
    "lte": sp.Le,
    "gt": sp.Gt,
    "gte": sp.Ge,
}


def _relation_to_sympy(node: Relation):
    operands = [to_sympy(arg) for arg in node.args]
    rel = _SYMPY_RELATIONS[node.kind]
    pairs = [rel(a, b, evaluate=False) for a, b in zip(operands, operands[1:])]
    return pairs[0] if len(pairs) == 1 else sp.And(*pairs)


def values_match(before: Node, after: Node) -> bool | None:
    """Whether two expressions (or two equations) have the same value.

    Equations match when ``lhs - rhs`` of one is a nonzero constant multiple of
    the other's. Returns None when SymPy cannot decide.
    """
    try:
        if isinstance(before, Eq) and isinstance(after, Eq):
            if len(before.args) != 2 or len(after.args) != 2:
                return None
            first = to_sympy(before.args[0]) - to_sympy(before.args[1])
            second = to_sympy(after.args[0]) - to_sympy(after.args[1])
            if first == 0 or second == 0:
                return bool(sp.simplify(first - second) == 0)
            ratio = sp.simplify(first / second)
            return bool(ratio.is_constant() and ratio != 0)
        if isinstance(before, Relation) or isinstance(after, Relation):
            return None
        difference = sp.simplify(to_sympy(before) - to_sympy(after))
        return bool(difference == 0)
    except (TypeError, ZeroDivisionError, sp.SympifyError) as e:
        logger.debug("SymPy comparison failed: %s", e)
        return None
