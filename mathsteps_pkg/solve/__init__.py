"""Solver: isolate a variable in a linear equation."""

from .solve import solve
from .transforms import SOLVE_TRANSFORMS

__all__ = ["SOLVE_TRANSFORMS", "solve"]
