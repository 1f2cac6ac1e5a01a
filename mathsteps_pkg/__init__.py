"""mathsteps package: expression model, step checker, simplifier, solver and CLI."""

__all__ = [
    "config",
    "expression",
    "parser",
    "printer",
    "checker",
    "simplify",
    "solve",
    "sympy_bridge",
    "types",
    "api",
    "cli",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "check",
    "simplify_expression",
    "solve_equation",
]
