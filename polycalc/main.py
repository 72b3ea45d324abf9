#!/usr/bin/env python

"""
Main entry point for the polynomial calculator. Run with --help for options.
"""

import sys
import argparse

from polycalc import common
from polycalc import logging
from polycalc import opts
from polycalc.evaluator import Evaluator

def read_lines(f):
    """Yield the lines of binary file f as str, one character per byte."""
    for line in f:
        yield line.decode("latin-1")

def run(argv=None):
    """Entry point for the polycalc executable.

    This procedure reads argv (default: sys.argv) and evaluates the requested
    input.
    """

    parser = argparse.ArgumentParser(description='Stack-based calculator for sparse multivariate polynomials.')
    parser.add_argument("-o", "--output", metavar="FILE", type=str, default="-", help="Output file for command results, use '-' for stdout (default)")
    parser.add_argument("--profile", metavar="FILE", type=str, default=None, help="Write per-task timings to FILE on exit")

    internal_opts = parser.add_argument_group("Internal parameters")
    opts.setup(internal_opts)

    parser.add_argument("file", nargs="?", default=None, help="Input file (omit to use stdin)")
    args = parser.parse_args(argv)
    opts.read(args)

    with common.open_maybe_stdin(args.file or "-", mode="rb") as f:
        with common.open_maybe_stdout(args.output) as out:
            evaluator = Evaluator(out=out, err=sys.stderr)
            with logging.task("evaluating", file=args.file or "stdin"):
                evaluator.run(read_lines(f))
            evaluator.stack.clear()

    if args.profile:
        logging.dump_profile(args.profile)

    return 0

if __name__ == "__main__":
    sys.exit(run())
