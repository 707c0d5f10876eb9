"""Parse lambda terms and print their reduction, step by step.

Usage:
  debruijn "(λa a) λb b"
  debruijn --binder '\\' '(\\a a) \\b b'
  debruijn --max-steps 16 --table "(λa a a) λa a a"
  debruijn --svg diagrams "((λa λb b a) λc c)"

Without terms, the built-in examples are run.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core import ReductionLimitExceeded, reduction_chain
from .dataframe import trace_frame
from .display import display
from .parser import BINDER, ParseError, check_binder, parse_strict
from .show import show
from .term import Term

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 1000

EXAMPLES = [
    "(λa a) λb b",
    "(λa λb b a)",
    "((λa λb b a) λc c)",
]

EXIT_OK = 0
EXIT_PARSE_FAILED = 1
EXIT_BUDGET_EXHAUSTED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="debruijn",
        description="Reduce untyped lambda terms written with single-letter variables.",
    )
    parser.add_argument("terms", nargs="*", help="terms to reduce (default: built-in examples)")
    parser.add_argument(
        "--binder", default=BINDER, help=f"character introducing a lambda (default: {BINDER})"
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=DEFAULT_MAX_STEPS,
        help=f"give up after this many reductions (default: {DEFAULT_MAX_STEPS})",
    )
    parser.add_argument(
        "--no-limit", action="store_true", help="reduce until a normal form, however long it takes"
    )
    parser.add_argument("--table", action="store_true", help="print a summary table of each trace")
    parser.add_argument("--svg", type=Path, metavar="DIR", help="write a diagram of each final term to DIR")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every parse and reduction step")
    return parser


def run(text: str, number: int, args: argparse.Namespace) -> int:
    """Parse and reduce one term, returns its exit status."""
    print("Input:", text)
    try:
        term = parse_strict(text, args.binder)
    except ParseError as e:
        print(f"Parsing failed: {e}")
        return EXIT_PARSE_FAILED

    print("De Bruijn notation:", show(term, args.binder))
    print("Reduction steps:")
    max_steps = None if args.no_limit else args.max_steps
    trace: List[Term] = []
    status = EXIT_OK
    try:
        for step, reduced in enumerate(reduction_chain(term, max_steps), start=1):
            print(f"  Step {step}:", show(reduced, args.binder))
            trace.append(reduced)
        print("  Normal form reached.")
    except ReductionLimitExceeded as e:
        print(f"  Step budget exhausted after {e.steps} steps.")
        status = EXIT_BUDGET_EXHAUSTED

    if args.table:
        print(trace_frame(trace))
    if args.svg is not None:
        args.svg.mkdir(parents=True, exist_ok=True)
        path = args.svg / f"term-{number}.svg"
        path.write_text(display(trace[-1]).as_str(), encoding="utf-8")
        logger.info("wrote %s", path)
    return status


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_steps < 0:
        parser.error(f"--max-steps must not be negative, got {args.max_steps}")
    try:
        check_binder(args.binder)
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    statuses = []
    for number, text in enumerate(args.terms or EXAMPLES):
        try:
            statuses.append(run(text, number, args))
        except RecursionError:
            print("Term nested too deeply to process.")
            statuses.append(EXIT_PARSE_FAILED)
        print("---")

    if EXIT_PARSE_FAILED in statuses:
        return EXIT_PARSE_FAILED
    if EXIT_BUDGET_EXHAUSTED in statuses:
        return EXIT_BUDGET_EXHAUSTED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
