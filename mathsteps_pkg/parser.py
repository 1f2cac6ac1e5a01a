"""Input parsing module.

This module handles:
- Input validation (empty input, length limit, balanced brackets)
- Tokenizing expression text
- Recursive-descent parsing into expression trees

Letters are single-letter identifiers, so ``abc`` is the implicit product
``a * b * c``. Binary minus becomes addition of a subtraction ``Neg`` and a
chain ``a - b + c`` becomes one flat sum; explicit parentheses are kept as
nested nodes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Callable

from .config import MAX_EXPRESSION_DEPTH, MAX_INPUT_LENGTH
from .expression import (
    RELATION_TYPES,
    IdArena,
    Node,
    SourceLocation,
    add,
    div,
    ellipsis,
    identifier,
    mul,
    neg,
    number,
    power,
    relation,
    root,
)
from .logging_config import get_logger
from .types import ParseError, ValidationError

logger = get_logger("parser")

_TOKEN_REGEX = re.compile(
    r"""
    (?P<space>\s+)
    |(?P<number>\d+(?:\.\d+)?|\.\d+)
    |(?P<ellipsis>\.\.\.|⋯|…)
    |(?P<relop><=|>=|!=|[=<>≤≥≠])
    |(?P<op>[-+*/^()_\[\]√×·÷−])
    |(?P<letter>[^\W\d_])
    """,
    re.VERBOSE,
)

_ALIASES = {
    "−": "-",
    "×": "*",
    "·": "*",
    "÷": "/",
    "<=": "≤",
    ">=": "≥",
    "!=": "≠",
    "…": "...",
    "⋯": "...",
}

_ATOM_STARTS = {"(", "√"}


@dataclass(frozen=True)
class Token:
    type: str
    value: str
    start: int
    end: int


def is_balanced(input_str: str) -> tuple[bool, int | None]:
    """Check whether parentheses and brackets are balanced.

    Returns:
        (True, None) when balanced, otherwise (False, position of the problem)
    """
    pairs = {")": "(", "]": "["}
    stack: list[tuple[str, int]] = []
    for index, char in enumerate(input_str):
        if char in "([":
            stack.append((char, index))
        elif char in pairs:
            if not stack or stack[-1][0] != pairs[char]:
                return False, index
            stack.pop()
    if stack:
        return False, stack[-1][1]
    return True, None


def tokenize(text: str) -> list[Token]:
    tokens = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_REGEX.match(text, pos)
        if match is None:
            raise ParseError(
                f"Unexpected character {text[pos]!r} at position {pos}",
                "INVALID_CHARACTER",
                pos,
            )
        kind = match.lastgroup
        if kind != "space":
            value = _ALIASES.get(match.group(), match.group())
            tokens.append(Token(kind, value, match.start(), match.end()))
        pos = match.end()
    return tokens


class _Parser:
    def __init__(self, text: str, arena: IdArena | None):
        self.tokens = tokenize(text)
        self.pos = 0
        self.arena = arena
        self.depth = 0

    def peek(self) -> Token | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def peek_value(self) -> str | None:
        token = self.peek()
        return token.value if token is not None else None

    def advance(self) -> Token:
        token = self.peek()
        if token is None:
            raise ParseError("Unexpected end of input", "UNEXPECTED_END")
        self.pos += 1
        return token

    def expect(self, value: str) -> Token:
        token = self.advance()
        if token.value != value:
            raise ParseError(
                f"Expected {value!r} but found {token.value!r} at position {token.start}",
                "UNEXPECTED_TOKEN",
                token.start,
            )
        return token

    def located(self, node: Node, start: int) -> Node:
        end = self.tokens[self.pos - 1].end
        return replace(node, loc=SourceLocation(start, end))

    def start(self) -> int:
        token = self.peek()
        return token.start if token is not None else 0

    def nested(self, rule: Callable[[], Node]) -> Node:
        """Parse ``rule`` one nesting level deeper."""
        self.depth += 1
        if self.depth > MAX_EXPRESSION_DEPTH:
            raise ValidationError(
                f"Expression too deeply nested (>{MAX_EXPRESSION_DEPTH} levels)", "TOO_DEEP"
            )
        node = rule()
        self.depth -= 1
        return node

    def parse(self) -> Node:
        if not self.tokens:
            raise ParseError("Input contains no expression", "UNEXPECTED_END")
        node = self.relation()
        token = self.peek()
        if token is not None:
            raise ParseError(
                f"Unexpected token {token.value!r} at position {token.start}",
                "UNEXPECTED_TOKEN",
                token.start,
            )
        return node

    def relation(self) -> Node:
        start = self.start()
        args = [self.sum()]
        cls = None
        while (token := self.peek()) is not None and token.type == "relop":
            self.advance()
            op_cls = RELATION_TYPES[token.value]
            if cls is not None and op_cls is not cls:
                raise ParseError(
                    f"Cannot chain {cls.symbol!r} with {token.value!r}",
                    "MIXED_RELATIONS",
                    token.start,
                )
            cls = op_cls
            args.append(self.sum())
        if cls is None:
            return args[0]
        return self.located(relation(cls, args, arena=self.arena), start)

    def sum(self) -> Node:
        start = self.start()
        terms = [self.product()]
        while self.peek_value() in ("+", "-"):
            op_start = self.start()
            op = self.advance().value
            term = self.product()
            if op == "-":
                term = self.located(neg(term, subtraction=True, arena=self.arena), op_start)
            terms.append(term)
        if len(terms) == 1:
            return terms[0]
        return self.located(add(terms, arena=self.arena), start)

    def product(self) -> Node:
        start = self.start()
        factors = [self.quotient()]
        while self.peek_value() == "*":
            self.advance()
            factors.append(self.quotient())
        if len(factors) == 1:
            return factors[0]
        return self.located(mul(factors, arena=self.arena), start)

    def quotient(self) -> Node:
        start = self.start()
        node = self.unary()
        while self.peek_value() == "/":
            self.advance()
            node = self.located(div(node, self.unary(), arena=self.arena), start)
        return node

    def unary(self) -> Node:
        start = self.start()
        if self.peek_value() == "-":
            self.advance()
            return self.located(neg(self.nested(self.unary), arena=self.arena), start)
        return self.implicit()

    def starts_atom(self) -> bool:
        token = self.peek()
        if token is None:
            return False
        return token.type in ("number", "letter", "ellipsis") or token.value in _ATOM_STARTS

    def implicit(self) -> Node:
        start = self.start()
        factors = [self.power()]
        while self.starts_atom():
            factors.append(self.power())
        if len(factors) == 1:
            return factors[0]
        return self.located(mul(factors, implicit=True, arena=self.arena), start)

    def power(self) -> Node:
        start = self.start()
        base = self.atom()
        if self.peek_value() == "^":
            self.advance()
            return self.located(
                power(base, self.nested(self.exponent), arena=self.arena), start
            )
        return base

    def exponent(self) -> Node:
        start = self.start()
        if self.peek_value() == "-":
            self.advance()
            return self.located(neg(self.nested(self.exponent), arena=self.arena), start)
        return self.power()

    def atom(self) -> Node:
        start = self.start()
        token = self.advance()
        if token.type == "number":
            return self.located(number(token.value, arena=self.arena), start)
        if token.type == "letter":
            subscript = None
            if self.peek_value() == "_":
                self.advance()
                subscript = self.nested(self.atom)
            return self.located(identifier(token.value, subscript, arena=self.arena), start)
        if token.type == "ellipsis":
            return self.located(ellipsis(arena=self.arena), start)
        if token.value == "(":
            inner = self.nested(self.relation)
            self.expect(")")
            return inner
        if token.value == "√":
            index = None
            if self.peek_value() == "[":
                self.advance()
                index = self.nested(self.sum)
                self.expect("]")
            self.expect("(")
            radicand = self.nested(self.sum)
            self.expect(")")
            return self.located(root(radicand, index, arena=self.arena), start)
        raise ParseError(
            f"Unexpected token {token.value!r} at position {token.start}",
            "UNEXPECTED_TOKEN",
            token.start,
        )


def validate_input(input_str: str) -> str:
    """Validate raw input and return it stripped.

    Raises:
        ValidationError: on empty, overlong or unbalanced input
    """
    if input_str is None or not input_str.strip():
        raise ValidationError("Input cannot be empty", "EMPTY_INPUT")
    if len(input_str) > MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long (>{MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )
    balanced, position = is_balanced(input_str)
    if not balanced:
        raise ValidationError(
            f"Unbalanced parentheses at position {position}", "UNBALANCED_PARENS"
        )
    return input_str.strip()


def parse(input_str: str, *, arena: IdArena | None = None) -> Node:
    """Parse expression or relation text into a tree.

    Args:
        input_str: Text such as ``"3(x + 1) + 4"`` or ``"2x + 5 = 10"``
        arena: Optional id arena for the created nodes

    Returns:
        Root node of the parsed expression

    Raises:
        ValidationError: if the input fails validation or nests too deeply
        ParseError: if the input is not a well-formed expression
    """
    text = validate_input(input_str)
    node = _Parser(text, arena).parse()
    logger.debug("Parsed %r", text)
    return node
