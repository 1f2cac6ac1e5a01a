"""Render expression trees as display text."""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

from .expression import (
    Add,
    Div,
    EllipsisNode,
    Identifier,
    Mul,
    Neg,
    Node,
    Number,
    Pow,
    Relation,
    Root,
)


def format_number(value: Fraction) -> str:
    """Integers as-is, terminating rationals as decimals, anything else as p/q."""
    if value.denominator == 1:
        return str(value.numerator)
    denominator = value.denominator
    for prime in (2, 5):
        while denominator % prime == 0:
            denominator //= prime
    if denominator == 1:
        return format(Decimal(value.numerator) / Decimal(value.denominator), "f")
    return f"{value.numerator}/{value.denominator}"


def _wrap(text: str) -> str:
    return f"({text})"


def _print_implicit_mul(node: Mul) -> str:
    texts = [print_node(arg) for arg in node.args]
    # "x2" or "x-1" would read back differently, so every factor gets parens
    wrap_all = any(isinstance(arg, Div) for arg in node.args) or any(
        text[0].isdigit() or text[0] == "-" for text in texts[1:]
    )
    parts = []
    for arg, text in zip(node.args, texts):
        if wrap_all or isinstance(arg, (Add, Mul, Relation)):
            text = _wrap(text)
        parts.append(text)
    return "".join(parts)


def _print_factor(node: Node) -> str:
    text = print_node(node)
    if isinstance(node, (Add, Relation)) or (isinstance(node, Mul) and not node.implicit):
        return _wrap(text)
    return text


def _print_operand(node: Node) -> str:
    text = print_node(node)
    if isinstance(node, (Add, Div, Relation)) or (
        isinstance(node, Mul) and not node.implicit
    ):
        return _wrap(text)
    return text


def _print_power_part(node: Node) -> str:
    text = print_node(node)
    if isinstance(node, (Number, Identifier, EllipsisNode)):
        return text
    return _wrap(text)


def print_node(node: Node) -> str:
    """Render ``node`` as text the parser reads back."""
    if isinstance(node, Number):
        return format_number(node.value)
    if isinstance(node, Identifier):
        if node.subscript is None:
            return node.name
        return f"{node.name}_{_print_power_part(node.subscript)}"
    if isinstance(node, Add):
        parts = [_print_term(node.args[0])]
        for arg in node.args[1:]:
            if isinstance(arg, Neg) and arg.subtraction:
                parts.append(" - ")
                parts.append(_print_term(arg.arg))
            else:
                parts.append(" + ")
                parts.append(_print_term(arg))
        return "".join(parts)
    if isinstance(node, Mul):
        if node.implicit:
            return _print_implicit_mul(node)
        return " * ".join(_print_factor(arg) for arg in node.args)
    if isinstance(node, Neg):
        inner = print_node(node.arg)
        if isinstance(node.arg, (Add, Div, Relation)) or (
            isinstance(node.arg, Mul) and not node.arg.implicit
        ):
            inner = _wrap(inner)
        return f"-{inner}"
    if isinstance(node, Div):
        return f"{_print_operand(node.numerator)} / {_print_operand(node.denominator)}"
    if isinstance(node, Pow):
        return f"{_print_power_part(node.base)}^{_print_power_part(node.exp)}"
    if isinstance(node, Root):
        radicand = print_node(node.radicand)
        if isinstance(node.index, Number) and node.index.value == 2:
            return f"√({radicand})"
        return f"√[{print_node(node.index)}]({radicand})"
    if isinstance(node, Relation):
        return f" {node.symbol} ".join(print_node(arg) for arg in node.args)
    if isinstance(node, EllipsisNode):
        return "⋯"
    raise TypeError(f"Cannot print node of kind {node.kind!r}")


def _print_term(node: Node) -> str:
    text = print_node(node)
    if isinstance(node, (Add, Relation)):
        return _wrap(text)
    return text
