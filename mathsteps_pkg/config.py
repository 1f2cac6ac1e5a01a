"""Centralized configuration for mathsteps.

This module defines:
- Loop caps for the simplifier and solver fixpoint iterations
- Recursion limit for the step checker
- Input validation limits
- Default checker options

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with MATHSTEPS_)
"""

import importlib.metadata
import os

try:
    VERSION = importlib.metadata.version("mathsteps")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout
    VERSION = "1.0.0"

# Fixpoint loop caps
MAX_SIMPLIFY_ITERATIONS = int(
    os.getenv("MATHSTEPS_MAX_SIMPLIFY_ITERATIONS", "10")
)  # transforms per node per pass
MAX_SIMPLIFY_PASSES = int(os.getenv("MATHSTEPS_MAX_SIMPLIFY_PASSES", "10"))
MAX_SOLVE_ROUNDS = int(os.getenv("MATHSTEPS_MAX_SOLVE_ROUNDS", "10"))

# Nested check_step calls allowed below one top-level check
MAX_CHECK_DEPTH = int(os.getenv("MATHSTEPS_MAX_CHECK_DEPTH", "60"))

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("MATHSTEPS_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("MATHSTEPS_MAX_EXPRESSION_DEPTH", "100")
)  # nesting levels

# Checker defaults
SKIP_EVAL_CHECKER = os.getenv("MATHSTEPS_SKIP_EVAL_CHECKER", "false").lower() == "true"
EVAL_FRACTIONS = os.getenv("MATHSTEPS_EVAL_FRACTIONS", "true").lower() == "true"
