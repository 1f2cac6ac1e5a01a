"""Equivalence checker: is one expression a valid rewriting of another?"""

from ..types import FAILED, Options, Result
from .base import Check, Context, check
from .step_checker import StepChecker, check_step

__all__ = [
    "FAILED",
    "Check",
    "Context",
    "Options",
    "Result",
    "StepChecker",
    "check",
    "check_step",
]
