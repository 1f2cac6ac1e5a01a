"""Type definitions, result dataclasses and exceptions shared across the package."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .expression import Node


@dataclass(frozen=True)
class Step:
    """One named rewrite from ``before`` to ``after``.

    ``substeps`` expands a coarse step (e.g. "simplify expression") into the
    atomic rewrites that produced it.
    """

    message: str
    before: Node
    after: Node
    substeps: tuple[Step, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        from .printer import print_node

        result_dict: dict[str, Any] = {
            "message": self.message,
            "before": print_node(self.before),
            "after": print_node(self.after),
        }
        if self.substeps:
            result_dict["substeps"] = [s.to_dict() for s in self.substeps]
        return result_dict


@dataclass(frozen=True)
class Result:
    """Outcome of a check: ``equivalent`` plus the steps that prove it."""

    equivalent: bool
    steps: tuple[Step, ...] = ()


FAILED = Result(False, ())


@dataclass(frozen=True)
class Options:
    """Checker options.

    skip_eval_checker disables the numeric evaluation checks so that symbolic
    paths are used instead. eval_fractions lets numeric division fold into a
    single rational.
    """

    skip_eval_checker: bool = False
    eval_fractions: bool = True


@dataclass
class CheckResult:
    """Result of checking a single rewrite step."""

    ok: bool
    equivalent: bool = False
    steps: list[dict[str, Any]] = field(default_factory=list)
    values_match: bool | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok, "type": "check"}
        if self.ok:
            result_dict["equivalent"] = self.equivalent
            result_dict["steps"] = self.steps
        if self.values_match is not None:
            result_dict["values_match"] = self.values_match
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"CheckResult(ok=False, error={self.error!r})"
        parts = [f"ok={self.ok}", f"equivalent={self.equivalent}"]
        parts.append(f"steps={[s['message'] for s in self.steps]!r}")
        if self.values_match is not None:
            parts.append(f"values_match={self.values_match!r}")
        return f"CheckResult({', '.join(parts)})"


@dataclass
class SimplifyResult:
    """Result of simplifying an expression."""

    ok: bool
    result: str | None = None
    changed: bool = False
    steps: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok, "type": "simplify"}
        if self.result is not None:
            result_dict["result"] = self.result
        if self.ok:
            result_dict["changed"] = self.changed
            result_dict["steps"] = self.steps
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"SimplifyResult(ok=False, error={self.error!r})"
        return (
            f"SimplifyResult(ok={self.ok}, result={self.result!r}, "
            f"changed={self.changed})"
        )


@dataclass
class SolveResult:
    """Result of solving an equation for one variable."""

    ok: bool
    solved: bool = False
    result: str | None = None
    variable: str | None = None
    steps: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok, "type": "equation"}
        if self.variable is not None:
            result_dict["variable"] = self.variable
        if self.ok:
            result_dict["solved"] = self.solved
            result_dict["steps"] = self.steps
        if self.result is not None:
            result_dict["result"] = self.result
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"SolveResult(ok=False, error={self.error!r})"
        parts = [f"ok={self.ok}", f"solved={self.solved}"]
        if self.result is not None:
            parts.append(f"result={self.result!r}")
        return f"SolveResult({', '.join(parts)})"


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ParseError(Exception):
    """Raised when parsing fails."""

    def __init__(self, message: str, code: str = "PARSE_ERROR", position: int | None = None):
        self.message = message
        self.code = code
        self.position = position
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class SolverError(Exception):
    """Raised when the solver is called with input it cannot process."""

    def __init__(self, message: str, code: str = "SOLVER_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message
