"""Simplifier: rewrite an expression bottom-up until no transform applies."""

from .simplify import simplify
from .transforms import TRANSFORMS

__all__ = ["TRANSFORMS", "simplify"]
