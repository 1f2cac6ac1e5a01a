"""Command line interface for mathsteps."""

from __future__ import annotations

import argparse
import json
from typing import Any

from .api import check, simplify_expression, solve_equation
from .config import VERSION


def _print_steps(steps: list[dict[str, Any]], indent: int = 0) -> None:
    pad = "  " * indent
    for number, step in enumerate(steps, 1):
        print(f"{pad}{number}. {step['message']}: {step['before']} -> {step['after']}")
        if step.get("substeps"):
            _print_steps(step["substeps"], indent + 1)


def print_result_pretty(res: dict[str, Any], output_format: str = "human") -> None:
    """Print result in specified format.

    Args:
        res: Result dictionary
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res, indent=2, ensure_ascii=False))
        return
    if not res.get("ok"):
        print("Error:", res.get("error"))
        return
    typ = res.get("type")
    if typ == "check":
        verdict = "equivalent" if res.get("equivalent") else "not equivalent"
        print(f"Result: {verdict}")
        _print_steps(res.get("steps", []))
        if "values_match" in res:
            print(f"Values match: {'yes' if res['values_match'] else 'no'}")
    elif typ == "simplify":
        if res.get("changed"):
            _print_steps(res.get("steps", []))
        else:
            print("Already simplified")
        print(f"Result: {res.get('result')}")
    elif typ == "equation":
        if res.get("solved"):
            _print_steps(res.get("steps", []))
            print(f"Solution: {res.get('result')}")
        else:
            print(f"Could not isolate {res.get('variable')}")
    else:
        print(res)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the mathsteps CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(
        prog="mathsteps",
        description="Check, simplify and solve algebra with step-by-step explanations",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--check",
        nargs=2,
        metavar=("BEFORE", "AFTER"),
        help="Check whether AFTER is a valid rewriting of BEFORE",
    )
    mode.add_argument("--simplify", type=str, metavar="EXPR", help="Simplify an expression")
    mode.add_argument("--solve", type=str, metavar="EQ", help="Solve a linear equation")
    parser.add_argument(
        "--var", type=str, default="x", help="Variable to solve for (default: x)"
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "--skip-eval",
        action="store_true",
        help="Disable numeric evaluation checks when checking a step",
    )
    parser.add_argument(
        "--no-eval-fractions",
        action="store_true",
        help="Keep numeric division unevaluated when checking a step",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    args = parser.parse_args(argv)

    from .logging_config import setup_logging

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0

    if args.check:
        before, after = args.check
        res = check(
            before,
            after,
            skip_eval_checker=args.skip_eval or None,
            eval_fractions=False if args.no_eval_fractions else None,
        )
    elif args.simplify is not None:
        res = simplify_expression(args.simplify)
    elif args.solve is not None:
        res = solve_equation(args.solve, args.var)
    else:
        parser.print_help()
        return 1

    print_result_pretty(res.to_dict(), output_format=args.format)
    return 0 if res.ok else 1
