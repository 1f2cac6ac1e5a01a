"""Public API for mathsteps - returns structured objects without side effects."""

from __future__ import annotations

from .checker import StepChecker
from .config import EVAL_FRACTIONS, SKIP_EVAL_CHECKER
from .expression import Identifier
from .logging_config import get_logger
from .parser import parse
from .printer import print_node
from .simplify import simplify
from .solve import solve
from .sympy_bridge import values_match
from .types import (
    CheckResult,
    Options,
    ParseError,
    SimplifyResult,
    SolveResult,
    SolverError,
    ValidationError,
)

logger = get_logger("api")


def check(
    before: str,
    after: str,
    skip_eval_checker: bool | None = None,
    eval_fractions: bool | None = None,
) -> CheckResult:
    """Check whether ``after`` is a valid rewriting of ``before``.

    Args:
        before: Expression or equation text (e.g., "2(x + 1)")
        after: The rewritten text (e.g., "2x + 2")
        skip_eval_checker: Disable numeric evaluation checks (default from config)
        eval_fractions: Allow numeric division to fold (default from config)

    Returns:
        CheckResult with the verdict, the explaining steps and SymPy's
        opinion on whether the values match

    Example:
        >>> from mathsteps_pkg.api import check
        >>> result = check("a + b", "b + a")
        >>> print(result.equivalent)
        True
        >>> print([s["message"] for s in result.steps])
        ['commutative property']
    """
    options = Options(
        skip_eval_checker=SKIP_EVAL_CHECKER if skip_eval_checker is None else skip_eval_checker,
        eval_fractions=EVAL_FRACTIONS if eval_fractions is None else eval_fractions,
    )
    try:
        prev = parse(before)
        next_ = parse(after)
    except (ValidationError, ParseError) as e:
        return CheckResult(ok=False, error=e.message, error_code=e.code)

    result = StepChecker(options).check_step(prev, next_)
    return CheckResult(
        ok=True,
        equivalent=result.equivalent,
        steps=[step.to_dict() for step in result.steps],
        values_match=values_match(prev, next_),
    )


def simplify_expression(expression: str) -> SimplifyResult:
    """Simplify an expression.

    Args:
        expression: Expression text (e.g., "3(x + 1) + 4")

    Returns:
        SimplifyResult with the simplified text and the transforms applied

    Example:
        >>> from mathsteps_pkg.api import simplify_expression
        >>> result = simplify_expression("3x + 4x")
        >>> print(result.result)
        7x
    """
    try:
        node = parse(expression)
    except (ValidationError, ParseError) as e:
        return SimplifyResult(ok=False, error=e.message, error_code=e.code)

    step = simplify(node)
    if step is None:
        return SimplifyResult(ok=True, result=print_node(node), changed=False)
    return SimplifyResult(
        ok=True,
        result=print_node(step.after),
        changed=True,
        steps=[substep.to_dict() for substep in step.substeps],
    )


def solve_equation(equation: str, variable: str = "x") -> SolveResult:
    """Solve a linear equation for one variable.

    Args:
        equation: Equation text (e.g., "2x + 4 = 10")
        variable: Name of the variable to isolate

    Returns:
        SolveResult with the final equation when the variable was isolated

    Example:
        >>> from mathsteps_pkg.api import solve_equation
        >>> result = solve_equation("2x + 4 = 10", "x")
        >>> print(result.result)
        x = 3
    """
    try:
        node = parse(equation)
        target = parse(variable)
        if not isinstance(target, Identifier):
            raise ValidationError(
                f"Cannot solve for {variable!r}: not a variable", "INVALID_VARIABLE"
            )
        step = solve(node, target)
    except (ValidationError, ParseError, SolverError) as e:
        return SolveResult(ok=False, variable=variable, error=e.message, error_code=e.code)

    if step is None:
        logger.info("Could not isolate %s in %s", variable, equation)
        return SolveResult(ok=True, solved=False, variable=variable)
    return SolveResult(
        ok=True,
        solved=True,
        result=print_node(step.after),
        variable=variable,
        steps=[substep.to_dict() for substep in step.substeps],
    )
