"""Main entry point for running mathsteps_pkg as a module.

This allows running mathsteps with:
    python -m mathsteps_pkg --check "2(x + 1)" "2x + 2"
    python -m mathsteps_pkg --simplify "3x + 4x"
    python -m mathsteps_pkg --solve "2x + 4 = 10" --var x
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
