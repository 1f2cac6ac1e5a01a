"""Bottom-up simplification to a fixed point."""

from __future__ import annotations

from typing import Optional

from ..config import MAX_SIMPLIFY_ITERATIONS, MAX_SIMPLIFY_PASSES
from ..expression import Node, is_numeric, traverse
from ..logging_config import get_logger
from ..types import Step
from .transforms import TRANSFORMS

logger = get_logger("simplify")


def _simplify_node(
    node: Node, ancestors: tuple[Node, ...], substeps: list[Step]
) -> Optional[Node]:
    """Apply transforms to one node until none applies; None if nothing did."""
    if not is_numeric(node):
        return None
    current = node
    for _ in range(MAX_SIMPLIFY_ITERATIONS):
        for transform in TRANSFORMS:
            step = transform(current, ancestors)
            if step is not None:
                logger.debug("%s: %s -> %s", step.message, step.before, step.after)
                substeps.append(step)
                current = step.after
                break
        else:
            break
    else:
        logger.debug("Iteration limit reached simplifying %s", node)
    return current if current is not node else None


def simplify(node: Node) -> Optional[Step]:
    """Simplify ``node`` as far as the transforms allow.

    Args:
        node: expression to simplify

    Returns:
        A "simplify expression" Step whose substeps are every transform
        applied, in order; None when the expression is already simplified
    """
    substeps: list[Step] = []

    def exit_(current: Node, ancestors: tuple[Node, ...]) -> Optional[Node]:
        return _simplify_node(current, ancestors, substeps)

    current = node
    for _ in range(MAX_SIMPLIFY_PASSES):
        result = traverse(current, exit=exit_)
        if result is current:
            break
        current = result
    else:
        logger.debug("Pass limit reached simplifying %s", node)

    if not substeps:
        return None
    return Step("simplify expression", node, current, tuple(substeps))
