"""Equivalence checking between two expressions.

This module handles:
- The ordered battery of checks tried for a pair of expressions
- The generic operand match for same-kind nodes
- Recursion limits (pairs already on the path, maximum depth)
"""

from __future__ import annotations

from dataclasses import replace

from ..config import MAX_CHECK_DEPTH
from ..expression import (
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
from ..logging_config import get_logger
from ..types import FAILED, Options, Result, Step
from .axiom_checks import AXIOM_CHECKS
from .base import Context, run_checks
from .equation_checks import EQUATION_CHECKS
from .eval_decomp_checks import EVAL_DECOMP_CHECKS
from .fraction_checks import FRACTION_CHECKS
from .integer_checks import INTEGER_CHECKS
from .util import check_args

logger = get_logger("checker")


class StepChecker:
    """Decides whether one expression is a valid rewriting of another."""

    def __init__(self, options: Options | None = None):
        self.options = options or Options()

    def check_step(
        self, prev: Node, next_: Node, context: Context | None = None
    ) -> Result:
        """Check ``prev -> next_`` and return the steps that explain it.

        Args:
            prev: expression before the rewrite
            next_: expression after the rewrite
            context: context of an enclosing check; a fresh one is created
                for top-level calls

        Returns:
            Result whose ``steps`` read from ``prev`` to ``next_``; ``FAILED``
            when no explanation was found

        Raises:
            TypeError: if either argument is not an expression node
        """
        if not isinstance(prev, Node) or not isinstance(next_, Node):
            raise TypeError(
                f"check_step expects expression nodes, got "
                f"{type(prev).__name__} and {type(next_).__name__}"
            )
        if context is None:
            context = Context(checker=self)

        if prev == next_:
            return Result(True, ())

        pair = (prev, next_)
        if pair in context.visited:
            return FAILED
        if context.depth >= MAX_CHECK_DEPTH:
            logger.debug("Check depth limit %d reached", MAX_CHECK_DEPTH)
            return FAILED
        context = replace(
            context, visited=context.visited | {pair}, depth=context.depth + 1
        )

        result = run_checks(AXIOM_CHECKS, prev, next_, context)
        if result.equivalent:
            return result

        result = self._check_operands(prev, next_, context)
        if result.equivalent:
            return result

        if isinstance(prev, Eq) and isinstance(next_, Eq):
            result = run_checks(EQUATION_CHECKS, prev, next_, context)
            if result.equivalent:
                return result

        if not self.options.skip_eval_checker:
            result = run_checks(EVAL_DECOMP_CHECKS, prev, next_, context)
            if result.equivalent:
                return result

        for battery in (INTEGER_CHECKS, FRACTION_CHECKS):
            result = run_checks(battery, prev, next_, context)
            if result.equivalent:
                return result

        return self._check_atoms(prev, next_)

    def _check_operands(self, prev: Node, next_: Node, context: Context) -> Result:
        """Same-kind nodes whose operands are pairwise equivalent."""
        if type(prev) is not type(next_):
            return FAILED
        if isinstance(prev, Neg):
            if prev.subtraction != next_.subtraction:
                return FAILED
            return context.check_step(prev.arg, next_.arg)
        if isinstance(prev, (Add, Mul, Relation)):
            return check_args(prev, next_, context)
        if isinstance(prev, (Div, Pow, Root)):
            steps: list[Step] = []
            for old, new in zip(prev.children, next_.children):
                result = context.check_step(old, new)
                if not result.equivalent:
                    return FAILED
                steps.extend(result.steps)
            return Result(True, tuple(steps))
        return FAILED

    @staticmethod
    def _check_atoms(prev: Node, next_: Node) -> Result:
        if isinstance(prev, Number) and isinstance(next_, Number):
            return Result(True, ()) if prev.value == next_.value else FAILED
        if isinstance(prev, Identifier) and isinstance(next_, Identifier):
            if prev.name == next_.name and prev.subscript == next_.subscript:
                return Result(True, ())
        return FAILED


def check_step(prev: Node, next_: Node, options: Options | None = None) -> Result:
    """Check ``prev -> next_`` with a new checker."""
    return StepChecker(options).check_step(prev, next_)
