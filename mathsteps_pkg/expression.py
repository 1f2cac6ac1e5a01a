"""Algebraic expression model.

This module handles:
- Immutable node types for the expression tree (frozen dataclasses)
- Node identity issued by an ``IdArena``
- Builder functions used by the parser, checker, simplifier and solver
- Term/factor helpers and numeric predicates
- Post-order traversal with node replacement
- Path based replacement and replaying of steps onto a tree

Dataclass equality is structural ("deep") equality: ``id`` and ``loc`` take no
part in comparison or hashing, everything else is compared recursively with
operand tuples compared positionally.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace
from fractions import Fraction
from typing import TYPE_CHECKING, Callable, ClassVar, Iterable, Optional, Sequence

from .logging_config import get_logger

if TYPE_CHECKING:
    from .types import Step

logger = get_logger("expression")


@dataclass(frozen=True)
class SourceLocation:
    """Character span of a node in the text it was parsed from."""

    start: int
    end: int


class IdArena:
    """Issues monotonically increasing node ids.

    Each arena has its own counter so tests can build trees with reproducible
    ids; the module default arena is used when a builder gets no ``arena``.
    """

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def next_id(self) -> int:
        return next(self._counter)


_default_arena = IdArena()


def default_arena() -> IdArena:
    return _default_arena


def _next_id(arena: IdArena | None) -> int:
    return (arena or _default_arena).next_id()


@dataclass(frozen=True)
class Node:
    """Base class of every expression node."""

    kind: ClassVar[str] = "node"

    id: int = field(default=0, compare=False, repr=False, kw_only=True)
    loc: Optional[SourceLocation] = field(
        default=None, compare=False, repr=False, kw_only=True
    )

    @property
    def children(self) -> tuple[Node, ...]:
        return ()

    def with_children(self, children: Sequence[Node]) -> Node:
        """Return a copy with new children, keeping this node's id."""
        return self

    def __str__(self) -> str:
        from .printer import print_node

        return print_node(self)


@dataclass(frozen=True)
class Number(Node):
    kind: ClassVar[str] = "number"

    value: Fraction


@dataclass(frozen=True)
class Identifier(Node):
    kind: ClassVar[str] = "identifier"

    name: str
    subscript: Optional[Node] = None

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.subscript,) if self.subscript is not None else ()

    def with_children(self, children: Sequence[Node]) -> Node:
        return replace(self, subscript=children[0]) if children else self


@dataclass(frozen=True)
class Add(Node):
    kind: ClassVar[str] = "add"

    args: tuple[Node, ...]

    @property
    def children(self) -> tuple[Node, ...]:
        return self.args

    def with_children(self, children: Sequence[Node]) -> Node:
        return replace(self, args=tuple(children))


@dataclass(frozen=True)
class Mul(Node):
    kind: ClassVar[str] = "mul"

    args: tuple[Node, ...]
    implicit: bool = False

    @property
    def children(self) -> tuple[Node, ...]:
        return self.args

    def with_children(self, children: Sequence[Node]) -> Node:
        return replace(self, args=tuple(children))


@dataclass(frozen=True)
class Neg(Node):
    """Unary minus, or binary subtraction when ``subtraction`` is set.

    ``a - b`` is an ``Add`` whose second term is ``Neg(b, subtraction=True)``.
    """

    kind: ClassVar[str] = "neg"

    arg: Node
    subtraction: bool = False

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.arg,)

    def with_children(self, children: Sequence[Node]) -> Node:
        return replace(self, arg=children[0])


@dataclass(frozen=True)
class Div(Node):
    kind: ClassVar[str] = "div"

    args: tuple[Node, Node]

    @property
    def numerator(self) -> Node:
        return self.args[0]

    @property
    def denominator(self) -> Node:
        return self.args[1]

    @property
    def children(self) -> tuple[Node, ...]:
        return self.args

    def with_children(self, children: Sequence[Node]) -> Node:
        return replace(self, args=(children[0], children[1]))


@dataclass(frozen=True)
class Pow(Node):
    kind: ClassVar[str] = "exp"

    base: Node
    exp: Node

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.base, self.exp)

    def with_children(self, children: Sequence[Node]) -> Node:
        return replace(self, base=children[0], exp=children[1])


@dataclass(frozen=True)
class Root(Node):
    kind: ClassVar[str] = "root"

    radicand: Node
    index: Node

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.radicand, self.index)

    def with_children(self, children: Sequence[Node]) -> Node:
        return replace(self, radicand=children[0], index=children[1])


@dataclass(frozen=True)
class Relation(Node):
    """Chained relation ``a R b R c``; subclasses fix the operator."""

    kind: ClassVar[str] = "relation"
    symbol: ClassVar[str] = "?"

    args: tuple[Node, ...]

    @property
    def children(self) -> tuple[Node, ...]:
        return self.args

    def with_children(self, children: Sequence[Node]) -> Node:
        return replace(self, args=tuple(children))


@dataclass(frozen=True)
class Eq(Relation):
    kind: ClassVar[str] = "eq"
    symbol: ClassVar[str] = "="


@dataclass(frozen=True)
class Neq(Relation):
    kind: ClassVar[str] = "neq"
    symbol: ClassVar[str] = "≠"


@dataclass(frozen=True)
class Lt(Relation):
    kind: ClassVar[str] = "lt"
    symbol: ClassVar[str] = "<"


@dataclass(frozen=True)
class Lte(Relation):
    kind: ClassVar[str] = "lte"
    symbol: ClassVar[str] = "≤"


@dataclass(frozen=True)
class Gt(Relation):
    kind: ClassVar[str] = "gt"
    symbol: ClassVar[str] = ">"


@dataclass(frozen=True)
class Gte(Relation):
    kind: ClassVar[str] = "gte"
    symbol: ClassVar[str] = "≥"


@dataclass(frozen=True)
class EllipsisNode(Node):
    kind: ClassVar[str] = "ellipsis"


NUMERIC_TYPES = (Number, Identifier, Add, Mul, Div, Pow, Root, Neg, EllipsisNode)
RELATION_TYPES = {cls.symbol: cls for cls in (Eq, Neq, Lt, Lte, Gt, Gte)}


# Builders


def number(value: str | int | Fraction, *, arena: IdArena | None = None) -> Number:
    return Number(Fraction(value), id=_next_id(arena))


def identifier(
    name: str, subscript: Node | None = None, *, arena: IdArena | None = None
) -> Identifier:
    return Identifier(name, subscript, id=_next_id(arena))


def _operands(args: Iterable[Node], kind: str) -> tuple[Node, ...]:
    operands = tuple(args)
    if len(operands) < 2:
        raise ValueError(f"{kind} needs at least two operands, got {len(operands)}")
    return operands


def add(args: Iterable[Node], *, arena: IdArena | None = None) -> Add:
    return Add(_operands(args, "add"), id=_next_id(arena))


def mul(
    args: Iterable[Node], implicit: bool = False, *, arena: IdArena | None = None
) -> Mul:
    return Mul(_operands(args, "mul"), implicit, id=_next_id(arena))


def neg(arg: Node, subtraction: bool = False, *, arena: IdArena | None = None) -> Neg:
    return Neg(arg, subtraction, id=_next_id(arena))


def div(numerator: Node, denominator: Node, *, arena: IdArena | None = None) -> Div:
    return Div((numerator, denominator), id=_next_id(arena))


def power(base: Node, exp: Node, *, arena: IdArena | None = None) -> Pow:
    return Pow(base, exp, id=_next_id(arena))


def root(
    radicand: Node, index: Node | None = None, *, arena: IdArena | None = None
) -> Root:
    if index is None:
        index = number(2, arena=arena)
    return Root(radicand, index, id=_next_id(arena))


def relation(
    cls: type[Relation], args: Iterable[Node], *, arena: IdArena | None = None
) -> Relation:
    return cls(_operands(args, cls.kind), id=_next_id(arena))


def eq(args: Iterable[Node], *, arena: IdArena | None = None) -> Eq:
    return relation(Eq, args, arena=arena)


def ellipsis(*, arena: IdArena | None = None) -> EllipsisNode:
    return EllipsisNode(id=_next_id(arena))


def add_terms(terms: Sequence[Node], *, arena: IdArena | None = None) -> Node:
    """Sum of ``terms``; 0 for no terms, the term itself for one."""
    if not terms:
        return number(0, arena=arena)
    if len(terms) == 1:
        return terms[0]
    return add(terms, arena=arena)


def mul_factors(
    factors: Sequence[Node], implicit: bool = False, *, arena: IdArena | None = None
) -> Node:
    """Product of ``factors``; 1 for no factors, the factor itself for one."""
    if not factors:
        return number(1, arena=arena)
    if len(factors) == 1:
        return factors[0]
    return mul(factors, implicit, arena=arena)


def clone(node: Node, *, arena: IdArena | None = None) -> Node:
    """Deep copy of ``node`` where every node gets a fresh id."""
    children = [clone(child, arena=arena) for child in node.children]
    copy = node.with_children(children) if children else node
    return replace(copy, id=_next_id(arena))


def from_fraction(value: Fraction, *, arena: IdArena | None = None) -> Node:
    """Build the canonical node for an exact rational: ``n``, ``-n`` or ``p / q``."""
    if value < 0:
        return neg(from_fraction(-value, arena=arena), arena=arena)
    if value.denominator == 1:
        return number(value, arena=arena)
    return div(
        number(value.numerator, arena=arena),
        number(value.denominator, arena=arena),
        arena=arena,
    )


# Queries


def get_terms(node: Node) -> list[Node]:
    return list(node.args) if isinstance(node, Add) else [node]


def get_factors(node: Node) -> list[Node]:
    return list(node.args) if isinstance(node, Mul) else [node]


def is_subtraction(node: Node) -> bool:
    return isinstance(node, Neg) and node.subtraction


def is_negative(node: Node) -> bool:
    """True for unary minus (not for subtraction)."""
    return isinstance(node, Neg) and not node.subtraction


def is_numeric(node: Node) -> bool:
    """True for node kinds that take part in arithmetic simplification."""
    return isinstance(node, NUMERIC_TYPES)


def is_number(node: Node) -> bool:
    """True when ``node`` is built from numbers and arithmetic only."""
    if isinstance(node, Number):
        return True
    if isinstance(node, Neg):
        return is_number(node.arg)
    if isinstance(node, (Add, Mul, Div)):
        return all(is_number(arg) for arg in node.args)
    return False


def is_one(node: Node) -> bool:
    return isinstance(node, Number) and node.value == 1


def contains(node: Node, target: Node) -> bool:
    """True when ``target`` occurs anywhere inside ``node``."""
    if node == target:
        return True
    return any(contains(child, target) for child in node.children)


# Traversal and replacement

Visitor = Callable[[Node, tuple[Node, ...]], Optional[Node]]


def traverse(
    node: Node, enter: Visitor | None = None, exit: Visitor | None = None
) -> Node:
    """Depth-first walk calling ``enter`` before and ``exit`` after the children.

    Both callbacks get the node and its ancestors (root first). A non-None value
    returned by ``exit`` replaces the node. Untouched subtrees are returned as
    the same objects.
    """

    def visit(current: Node, ancestors: tuple[Node, ...]) -> Node:
        if enter is not None:
            enter(current, ancestors)
        children = current.children
        if children:
            inner = ancestors + (current,)
            new_children = [visit(child, inner) for child in children]
            if any(new is not old for new, old in zip(new_children, children)):
                current = current.with_children(new_children)
        if exit is not None:
            replacement = exit(current, ancestors)
            if replacement is not None:
                return replacement
        return current

    return visit(node, ())


def find_path(root: Node, node_id: int) -> tuple[int, ...] | None:
    """Child-index path from ``root`` to the first node with ``node_id``."""
    if root.id == node_id:
        return ()
    for index, child in enumerate(root.children):
        path = find_path(child, node_id)
        if path is not None:
            return (index,) + path
    return None


def node_at(root: Node, path: Sequence[int]) -> Node:
    node = root
    for index in path:
        node = node.children[index]
    return node


def replace_at(root: Node, path: Sequence[int], replacement: Node) -> Node:
    """Replace the node at ``path``; only the ancestors on the path are rebuilt."""
    if not path:
        return replacement
    children = list(root.children)
    children[path[0]] = replace_at(children[path[0]], path[1:], replacement)
    return root.with_children(children)


def apply_step(root: Node, step: Step) -> Node:
    """Replay ``step`` on ``root`` by replacing ``step.before`` with ``step.after``.

    A sum replacing one term of a sum has its terms spliced into the parent.
    """
    path = find_path(root, step.before.id)
    if path is None:
        logger.debug("Step %r does not apply: node %s not found", step.message, step.before.id)
        return root
    replacement = step.after
    if path and isinstance(replacement, Add) and not isinstance(step.before, Add):
        parent = node_at(root, path[:-1])
        if isinstance(parent, Add):
            index = path[-1]
            args = parent.args[:index] + replacement.args + parent.args[index + 1 :]
            return replace_at(root, path[:-1], parent.with_children(args))
    return replace_at(root, path, replacement)


def apply_steps(root: Node, steps: Iterable[Step]) -> Node:
    for step in steps:
        root = apply_step(root, step)
    return root
