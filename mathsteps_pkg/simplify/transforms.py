"""Local rewrite rules applied by the simplifier.

Each transform receives a node and its ancestors (root first) and returns the
Step rewriting that node, or None when it does not apply. The order of
``TRANSFORMS`` matters: sign and identity clean-up runs first, and turning
``a + -b`` back into ``a - b`` runs last so the other rules only ever see
addition of negatives.
"""

from __future__ import annotations

from collections import Counter
from fractions import Fraction
from typing import Callable, Optional

from ..checker.util import decompose, difference, evaluate, intersection, is_zero
from ..expression import (
    Add,
    Div,
    Mul,
    Neg,
    Node,
    Number,
    add,
    add_terms,
    div,
    from_fraction,
    get_factors,
    is_negative,
    is_number,
    is_one,
    is_subtraction,
    mul,
    mul_factors,
    neg,
    number,
    power,
)
from ..types import Step
from .util import mul_terms, split_term, strip_neg

Transform = Callable[[Node, tuple[Node, ...]], Optional[Step]]


def _is_constant(node: Node) -> bool:
    return isinstance(node, Number) or (isinstance(node, Div) and is_number(node))


def simplify_mul(node: Node, ancestors: tuple[Node, ...]) -> Optional[Step]:
    """Pull minus signs out of a product and drop factors of 1."""
    if not isinstance(node, Mul) or any(isinstance(arg, Add) for arg in node.args):
        return None
    negative = False
    changed = False
    factors = []
    for arg in node.args:
        core, sign = strip_neg(arg)
        if sign:
            negative = not negative
            changed = True
        if is_one(core):
            changed = True
            continue
        factors.append(core)
    if not changed:
        return None
    result = mul_factors(factors, implicit=True)
    if negative:
        result = neg(result)
    return Step("simplify multiplication", node, result)


# Distribution


def _distributable(node: Node) -> bool:
    if isinstance(node, Mul):
        return any(isinstance(arg, Add) for arg in node.args)
    return isinstance(node, Neg) and isinstance(node.arg, Add)


def _product_message(left: Node, right: Node) -> str:
    if is_negative(left) and is_negative(right):
        return "multiplying two negatives is a positive"
    if is_negative(left) or is_negative(right):
        return "multiplying a negative by a positive is negative"
    return "multiply monomials"


def _expand(product: Mul) -> tuple[list[Step], list[Node]]:
    """Multiply the first sum in ``product`` by the remaining factors."""
    factors = product.args
    if isinstance(factors[1], Add):
        index = 1
    else:
        index = next(i for i, arg in enumerate(factors) if isinstance(arg, Add))
    sum_ = factors[index]
    others = mul_factors(factors[:index] + factors[index + 1 :], implicit=True)

    steps: list[Step] = []
    if any(is_subtraction(term) for term in sum_.args):
        converted = add(
            [neg(term.arg) if is_subtraction(term) else term for term in sum_.args]
        )
        steps.append(Step("subtraction is the same as adding the negative", sum_, converted))
        args = list(factors)
        args[index] = converted
        product = product.with_children(args)
        sum_ = converted

    if index == 0:
        pairs = [(term, others) for term in sum_.args]
    else:
        pairs = [(others, term) for term in sum_.args]
    naive = [mul(pair, implicit=True) for pair in pairs]
    steps.append(Step("multiply each term", product, add(naive)))

    terms = []
    for (left, right), raw in zip(pairs, naive):
        result = mul_terms(left, right)
        if result == raw:
            terms.append(raw)
            continue
        steps.append(Step(_product_message(left, right), raw, result))
        terms.append(result)
    return steps, terms


def _distribute_term(term: Node) -> tuple[list[Step], list[Node]]:
    if isinstance(term, Neg):
        product = mul([neg(number(1)), term.arg], implicit=True)
        first = Step("negation is the same as multiplying by negative one", term, product)
        steps, terms = _expand(product)
        return [first] + steps, terms
    return _expand(term)


def distribute(node: Node, ancestors: tuple[Node, ...]) -> Optional[Step]:
    """``a(b + c) -> ab + ac`` and ``-(a + b) -> -a - b``.

    A product or negation that is a term of a sum is expanded by the sum
    itself so its terms are spliced into the surrounding sum.
    """
    parent = ancestors[-1] if ancestors else None
    if isinstance(node, (Mul, Neg)) and isinstance(parent, Add):
        return None

    if isinstance(node, Add):
        for index, term in enumerate(node.args):
            if _distributable(term):
                break
        else:
            return None
        steps, products = _distribute_term(term)
        terms = list(node.args[:index]) + products + list(node.args[index + 1 :])
        start, stop = index, index + len(products)
    elif _distributable(node):
        steps, terms = _distribute_term(node)
        start, stop = 0, len(terms)
    else:
        return None

    for i in range(max(start, 1), stop):
        if is_negative(terms[i]):
            subtraction = neg(terms[i].arg, subtraction=True)
            steps.append(
                Step("adding the negative is the same as subtraction", terms[i], subtraction)
            )
            terms[i] = subtraction
    return Step("distribute", node, add_terms(terms), tuple(steps))


def collect_like_terms(node: Node, ancestors: tuple[Node, ...]) -> Optional[Step]:
    """``3x + 4x -> 7x``; terms are alike when their non-numeric factors match."""
    if not isinstance(node, Add):
        return None
    groups: dict[frozenset, list[tuple[Fraction, list[Node]]]] = {}
    for term in node.args:
        coefficient, factors = split_term(term)
        key = frozenset(Counter(factors).items())
        groups.setdefault(key, []).append((coefficient, factors))
    if all(len(members) < 2 for members in groups.values()):
        return None
    # numbers alone are left to evaluate_addition
    if all(not key for key in groups):
        return None

    terms: list[Node] = []
    for members in groups.values():
        total = sum((coefficient for coefficient, _ in members), Fraction(0))
        if total == 0:
            continue
        factors = members[0][1]
        magnitude = abs(total)
        if not factors:
            core = from_fraction(magnitude)
        elif magnitude == 1:
            core = mul_factors(factors, implicit=True)
        elif magnitude.denominator == 1:
            core = mul_factors([number(magnitude), *factors], implicit=True)
        else:
            fraction = div(number(magnitude.numerator), number(magnitude.denominator))
            core = mul_factors([fraction, *factors], implicit=True)
        if total < 0:
            core = neg(core, subtraction=bool(terms))
        terms.append(core)
    return Step("collect like terms", node, add_terms(terms))


def drop_parens(node: Node, ancestors: tuple[Node, ...]) -> Optional[Step]:
    """``(a + b) + c -> a + b + c`` and ``(ab)c -> abc``."""
    if isinstance(node, Add):
        if not any(isinstance(term, Add) for term in node.args):
            return None
        terms: list[Node] = []
        for term in node.args:
            terms.extend(term.args if isinstance(term, Add) else (term,))
        return Step("drop parentheses", node, add(terms))
    if isinstance(node, Mul):
        if not any(isinstance(factor, Mul) for factor in node.args):
            return None
        factors: list[Node] = []
        for factor in node.args:
            factors.extend(factor.args if isinstance(factor, Mul) else (factor,))
        return Step("drop parentheses", node, mul(factors, node.implicit))
    return None


def eval_mul(node: Node, ancestors: tuple[Node, ...]) -> Optional[Step]:
    if not isinstance(node, Mul):
        return None
    positions = [i for i, factor in enumerate(node.args) if _is_constant(factor)]
    if len(positions) < 2:
        return None
    try:
        value = Fraction(1)
        for i in positions:
            value *= evaluate(node.args[i])
    except ValueError:
        return None
    factors = []
    for i, factor in enumerate(node.args):
        if i == positions[0]:
            factors.append(from_fraction(value))
        elif i not in positions:
            factors.append(factor)
    return Step("evaluate multiplication", node, mul_factors(factors, implicit=True))


def eval_add(node: Node, ancestors: tuple[Node, ...]) -> Optional[Step]:
    if not isinstance(node, Add) or not all(is_number(term) for term in node.args):
        return None
    try:
        value = evaluate(node)
    except ValueError:
        return None
    return Step("evaluate addition", node, from_fraction(value))


def _recombine(factors: list[Node]) -> Node:
    """Multiply numeric factors back into one leading coefficient."""
    coefficient = Fraction(1)
    rest = []
    for factor in factors:
        if isinstance(factor, Number):
            coefficient *= factor.value
        else:
            rest.append(factor)
    if coefficient != 1 or not rest:
        rest.insert(0, number(coefficient))
    return mul_factors(rest, implicit=True)


def reduce_fraction(node: Node, ancestors: tuple[Node, ...]) -> Optional[Step]:
    """Cancel factors shared by numerator and denominator.

    Integers are split into primes first, so ``12x / 8`` becomes ``3x / 2``.
    Signs are taken off both sides beforehand and one minus sign is put back
    when exactly one side was negative: ``-abc / bcd -> -a / d``.
    """
    if not isinstance(node, Div) or is_zero(node.denominator):
        return None
    num_core, num_negative = strip_neg(node.numerator)
    den_core, den_negative = strip_neg(node.denominator)
    if isinstance(num_core, Number) and isinstance(den_core, Number):
        return None

    num_factors = decompose(get_factors(num_core))
    den_factors = decompose(get_factors(den_core))
    common = intersection(num_factors, den_factors)
    if not common and den_factors:
        return None

    numerator = _recombine(difference(num_factors, common))
    den_rest = difference(den_factors, common)
    if not den_rest:
        result = numerator
        if num_negative != den_negative:
            result = neg(result)
    else:
        denominator = _recombine(den_rest)
        if num_negative and not den_negative:
            numerator = neg(numerator)
        elif den_negative and not num_negative:
            denominator = neg(denominator)
        result = div(numerator, denominator)
    return Step("reduce fraction", node, result)


def div_by_fraction(node: Node, ancestors: tuple[Node, ...]) -> Optional[Step]:
    """``a / (b/c) -> a * c/b``"""
    if not isinstance(node, Div) or not isinstance(node.denominator, Div):
        return None
    inner = node.denominator
    if is_zero(inner.numerator):
        return None
    return Step(
        "dividing by a fraction is the same as multiplying by the reciprocal",
        node,
        mul([node.numerator, div(inner.denominator, inner.numerator)]),
    )


def mul_fraction(node: Node, ancestors: tuple[Node, ...]) -> Optional[Step]:
    """``a * b/c -> ab / c``"""
    if not isinstance(node, Mul) or not any(isinstance(f, Div) for f in node.args):
        return None
    numerators: list[Node] = []
    denominators: list[Node] = []
    for factor in node.args:
        if isinstance(factor, Div):
            numerators.append(factor.numerator)
            denominators.append(factor.denominator)
        else:
            numerators.append(factor)
    result = div(
        mul_factors(numerators, implicit=True), mul_factors(denominators, implicit=True)
    )
    return Step("multiply fraction(s)", node, result)


def _is_signed_number(node: Node) -> bool:
    return isinstance(strip_neg(node)[0], Number)


def eval_div(node: Node, ancestors: tuple[Node, ...]) -> Optional[Step]:
    if not isinstance(node, Div) or not all(_is_signed_number(arg) for arg in node.args):
        return None
    try:
        value = evaluate(node)
    except ValueError:
        return None
    result = from_fraction(value)
    if result == node:
        return None
    return Step("evaluate division", node, result)


def mul_to_pow(node: Node, ancestors: tuple[Node, ...]) -> Optional[Step]:
    """``xxy -> x^2 y``"""
    if not isinstance(node, Mul):
        return None
    counts = Counter(f for f in node.args if not isinstance(f, Number))
    if all(count < 2 for count in counts.values()):
        return None
    factors: list[Node] = []
    seen: set[Node] = set()
    for factor in node.args:
        if isinstance(factor, Number):
            factors.append(factor)
            continue
        if factor in seen:
            continue
        seen.add(factor)
        count = counts[factor]
        factors.append(power(factor, number(count)) if count > 1 else factor)
    return Step(
        "repeated multiplication can be written as a power",
        node,
        mul_factors(factors, implicit=True),
    )


def add_neg_to_sub(node: Node, ancestors: tuple[Node, ...]) -> Optional[Step]:
    """``a + -b -> a - b``"""
    if not isinstance(node, Add) or not any(is_negative(t) for t in node.args[1:]):
        return None
    terms = [node.args[0]] + [
        neg(term.arg, subtraction=True) if is_negative(term) else term
        for term in node.args[1:]
    ]
    return Step("adding the inverse is the same as subtraction", node, add(terms))


TRANSFORMS: tuple[Transform, ...] = (
    simplify_mul,
    distribute,
    collect_like_terms,
    drop_parens,
    eval_mul,
    eval_add,
    reduce_fraction,
    div_by_fraction,
    mul_fraction,
    eval_div,
    mul_to_pow,
    add_neg_to_sub,
)
