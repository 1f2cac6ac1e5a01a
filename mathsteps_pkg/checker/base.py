"""Check objects, the checking Context and the runner for a battery of checks."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from ..expression import Node
from ..logging_config import get_logger
from ..types import FAILED, Result, Step

if TYPE_CHECKING:
    from .step_checker import StepChecker

logger = get_logger("checker")


@dataclass(frozen=True)
class Context:
    """State threaded through one top-level ``check_step`` call.

    Contexts are never mutated; narrower contexts are derived with
    ``dataclasses.replace``. ``successful_checks`` is the one shared collection:
    every derived context records into the same set.
    """

    checker: StepChecker
    steps: tuple[Step, ...] = ()
    reversed: bool = False
    allowed_checks: Optional[frozenset[str]] = None
    disallowed_checks: Optional[frozenset[str]] = None
    successful_checks: set[str] = field(default_factory=set, compare=False)
    visited: frozenset[tuple[Node, Node]] = frozenset()
    depth: int = 0

    def check_step(self, prev: Node, next_: Node) -> Result:
        return self.checker.check_step(prev, next_, self)

    def flipped(self) -> Context:
        return replace(self, reversed=not self.reversed)

    def has_step(self, message: str) -> bool:
        return any(step.message == message for step in self.steps)


CheckFunc = Callable[[Node, Node, Context], Result]


class Check:
    """A named rule deciding whether ``next_`` is one rewrite away from ``prev``."""

    def __init__(
        self,
        func: CheckFunc,
        symmetric: bool = False,
        unfilterable: bool = False,
        prefer_shorter: bool = False,
    ):
        self.func = func
        self.name = func.__name__
        self.symmetric = symmetric
        self.unfilterable = unfilterable
        self.prefer_shorter = prefer_shorter
        functools.update_wrapper(self, func)

    def __call__(self, prev: Node, next_: Node, context: Context) -> Result:
        return self.func(prev, next_, context)

    def __repr__(self) -> str:
        return f"Check({self.name!r}, symmetric={self.symmetric})"

    def allowed(self, context: Context) -> bool:
        if self.unfilterable:
            return True
        if context.allowed_checks is not None and self.name not in context.allowed_checks:
            return False
        if context.disallowed_checks is not None and self.name in context.disallowed_checks:
            return False
        return True

    def run(self, prev: Node, next_: Node, context: Context) -> Result:
        """Try the check forward and, for symmetric checks, with prev/next swapped."""
        forward = self(prev, next_, context)
        if not self.symmetric or (forward.equivalent and not self.prefer_shorter):
            return forward
        backward = self(next_, prev, context.flipped())
        if forward.equivalent and backward.equivalent:
            return forward if len(forward.steps) < len(backward.steps) else backward
        return forward if forward.equivalent else backward


def check(
    symmetric: bool = False, unfilterable: bool = False, prefer_shorter: bool = False
) -> Callable[[CheckFunc], Check]:
    """Decorator turning a check function into a ``Check``.

    Args:
        symmetric: also try the rule with prev and next swapped
        unfilterable: ignore the context's allow/deny filters
        prefer_shorter: run both directions and keep the one with fewer steps
    """

    def decorator(func: CheckFunc) -> Check:
        return Check(func, symmetric, unfilterable, prefer_shorter)

    return decorator


def run_checks(
    battery: Iterable[Check], prev: Node, next_: Node, context: Context
) -> Result:
    """Return the first successful result of ``battery``, or ``FAILED``."""
    for chk in battery:
        if not chk.allowed(context):
            continue
        result = chk.run(prev, next_, context)
        if result.equivalent:
            context.successful_checks.add(chk.name)
            logger.debug("%s succeeded with %d step(s)", chk.name, len(result.steps))
            return result
    return FAILED


def ordered(
    context: Context,
    message: str,
    source: Node,
    target: Node,
    before: Iterable[Step] = (),
    after: Iterable[Step] = (),
    reverse_message: str | None = None,
) -> Result:
    """Successful result for a rewrite ``source -> target`` found by a check.

    ``before`` and ``after`` are the steps found around the rewrite in search
    order. When the check ran reversed the rewrite is flipped to
    ``target -> source`` and the sequence reordered, so steps always read from
    the user's first expression to their second.
    """
    before, after = tuple(before), tuple(after)
    if context.reversed:
        rewrite = Step(reverse_message or message, target, source)
        return Result(True, after + (rewrite,) + before)
    return Result(True, before + (Step(message, source, target),) + after)
