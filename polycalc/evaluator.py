"""Line-oriented front end of the calculator.

Each input line is a comment (starting with '#'), an empty line, a command
(starting with an ASCII letter) or a polynomial.  Problems are reported as

    ERROR <line number> <message>

on the error stream and processing continues with the next line.
"""

import re
import sys

from polycalc import commands
from polycalc import logging
from polycalc import polynomials
from polycalc.parse import parse_poly, ParseError
from polycalc.stack import PolyStack

WRONG_COMMAND   = "WRONG COMMAND"
WRONG_POLY      = "WRONG POLY"
STACK_UNDERFLOW = "STACK UNDERFLOW"

# Message for a malformed argument of each command taking one.
WRONG_ARGUMENT = {
    "DEG_BY":  "DEG BY WRONG VARIABLE",
    "AT":      "AT WRONG VALUE",
    "COMPOSE": "COMPOSE WRONG PARAMETER",
}

# Argument commands are recognized by prefix, in this order.
_ARG_COMMAND_ORDER = ("DEG_BY", "COMPOSE", "AT")

_POLY_CHARS    = re.compile(r"[0-9+\-,()]*\Z")
_UNSIGNED_ARG  = re.compile(r"[0-9]+\Z")
_SIGNED_ARG    = re.compile(r"-?[0-9]+\Z")
_MAX_UNSIGNED  = 2**64 - 1

def _is_letter(ch):
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")

def _parse_argument(name, text):
    """The integer argument of command `name`, or None if it is malformed."""
    if name == "AT":
        if not _SIGNED_ARG.match(text):
            return None
        x = int(text)
        bounds = polynomials.coefficient_range()
        if bounds is not None and not (bounds[0] <= x <= bounds[1]):
            return None
        return x
    if not _UNSIGNED_ARG.match(text):
        return None
    n = int(text)
    return n if n <= _MAX_UNSIGNED else None

class Evaluator(object):
    """Runs calculator input against a PolyStack.

    Command output goes to `out`, diagnostics to `err`.
    """

    def __init__(self, out=None, err=None, stack=None):
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.stack = stack if stack is not None else PolyStack()

    def error(self, lineno, message):
        logging.event("line {}: {}".format(lineno, message))
        self.err.write("ERROR {} {}\n".format(lineno, message))

    def run(self, lines):
        """Process every line of `lines`; numbering starts at 1."""
        for lineno, line in enumerate(lines, 1):
            self.process_line(lineno, line)

    def process_line(self, lineno, line):
        if line.endswith("\n"):
            line = line[:-1]
        if not line or line.startswith("#"):
            return
        if _is_letter(line[0]):
            self.process_command(lineno, line)
        else:
            self.process_poly(lineno, line)

    def process_command(self, lineno, line):
        for name in _ARG_COMMAND_ORDER:
            if line.startswith(name):
                self.process_arg_command(lineno, line, name)
                return
        f = commands.COMMANDS.get(line)
        if f is None:
            self.error(lineno, WRONG_COMMAND)
            return
        with logging.task(line):
            if not f(self.stack, self.out):
                self.error(lineno, STACK_UNDERFLOW)

    def process_arg_command(self, lineno, line, name):
        n = len(name)
        if len(line) > n and line[n] != " ":
            self.error(lineno, WRONG_COMMAND)
            return
        arg = _parse_argument(name, line[n+1:]) if len(line) >= n + 2 else None
        if arg is None:
            self.error(lineno, WRONG_ARGUMENT[name])
            return
        with logging.task(name, arg=arg):
            if not commands.ARG_COMMANDS[name](self.stack, self.out, arg):
                self.error(lineno, STACK_UNDERFLOW)

    def process_poly(self, lineno, line):
        if not _POLY_CHARS.match(line):
            self.error(lineno, WRONG_POLY)
            return
        try:
            p = parse_poly(line)
        except ParseError as e:
            logging.event("line {}: {}".format(lineno, e))
            self.error(lineno, WRONG_POLY)
            return
        self.stack.push(p)
