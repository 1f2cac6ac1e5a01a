"""Isolate a variable in a linear equation."""

from __future__ import annotations

from typing import Optional

from ..config import MAX_SOLVE_ROUNDS
from ..expression import Eq, Identifier, Node
from ..logging_config import get_logger
from ..types import SolverError, Step
from .transforms import SOLVE_TRANSFORMS

logger = get_logger("solve")


def solve(equation: Node, variable: Identifier) -> Optional[Step]:
    """Solve ``equation`` for ``variable``.

    Args:
        equation: a two-sided equation
        variable: identifier to isolate

    Returns:
        A "solve for variable" Step ending in an equation with ``variable``
        alone on one side, or None if no step applies or it could not be
        isolated

    Raises:
        SolverError: if ``equation`` is not a two-sided equation
    """
    if not isinstance(equation, Eq) or len(equation.args) != 2:
        raise SolverError(
            f"Cannot solve {equation.kind} node, expected an equation with two sides",
            "NOT_AN_EQUATION",
        )

    substeps: list[Step] = []
    current = equation
    for _ in range(MAX_SOLVE_ROUNDS):
        changed = False
        for transform in SOLVE_TRANSFORMS:
            step = transform(current, variable)
            if step is not None:
                logger.debug("%s: %s -> %s", step.message, step.before, step.after)
                substeps.append(step)
                current = step.after
                changed = True
        if not changed:
            break
    else:
        logger.debug("Round limit reached solving %s", equation)

    if not substeps:
        logger.debug("No solving step applies to %s", equation)
        return None
    if variable not in current.args:
        logger.debug("Could not isolate %s in %s", variable, current)
        return None
    return Step("solve for variable", equation, current, tuple(substeps))
