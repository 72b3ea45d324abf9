"""Calculator commands.

Every command takes the stack and an output stream (plus one integer for
DEG_BY, AT and COMPOSE) and returns True, or False if the stack holds too
few polynomials; in that case the stack is left untouched.

Important names:
 - COMMANDS: command name -> function, for commands without an argument
 - ARG_COMMANDS: command name -> function, for commands with an argument
"""

from polycalc import polynomials as P
from polycalc.syntax_tools import pprint

def _println_bool(out, b):
    out.write("1\n" if b else "0\n")

def zero(stack, out):
    stack.push(P.ZERO)
    return True

def is_coeff(stack, out):
    if stack.underflow(1):
        return False
    _println_bool(out, P.is_scalar(stack.top()))
    return True

def is_zero(stack, out):
    if stack.underflow(1):
        return False
    _println_bool(out, P.is_zero(stack.top()))
    return True

def clone(stack, out):
    if stack.underflow(1):
        return False
    stack.push(P.clone(stack.top()))
    return True

def _binary(f):
    def command(stack, out):
        if stack.underflow(2):
            return False
        top = stack.pop()
        prev_top = stack.pop()
        stack.push(f(top, prev_top))
        return True
    command.__name__ = f.__name__
    command.__doc__ = "Replace the two topmost polynomials p (top), q with {}(p, q).".format(f.__name__)
    return command

add = _binary(P.add)
mul = _binary(P.multiply)
sub = _binary(P.subtract)

def neg(stack, out):
    if stack.underflow(1):
        return False
    stack.push(P.negate(stack.pop()))
    return True

def is_eq(stack, out):
    if stack.underflow(2):
        return False
    _println_bool(out, P.equal(stack.top(), stack.prev_top()))
    return True

def deg(stack, out):
    if stack.underflow(1):
        return False
    out.write("{}\n".format(P.degree(stack.top())))
    return True

def print_top(stack, out):
    if stack.underflow(1):
        return False
    out.write(pprint(stack.top()))
    out.write("\n")
    return True

def pop(stack, out):
    if stack.underflow(1):
        return False
    stack.pop()
    return True

def deg_by(stack, out, var_index):
    if stack.underflow(1):
        return False
    out.write("{}\n".format(P.degree_in_variable(stack.top(), var_index)))
    return True

def at(stack, out, x):
    if stack.underflow(1):
        return False
    stack.push(P.at(stack.pop(), x))
    return True

def compose(stack, out, k):
    """Pop p and k substitutes below it; push p(q_0, ..., q_{k-1}).

    The value directly below p is q_{k-1}, the deepest one q_0.
    """
    if stack.underflow(k + 1):
        return False
    p = stack.pop()
    substitutes = [stack.pop() for _ in range(k)]
    substitutes.reverse()
    stack.push(P.compose(p, k, substitutes))
    return True

COMMANDS = {
    "ZERO":     zero,
    "IS_COEFF": is_coeff,
    "IS_ZERO":  is_zero,
    "CLONE":    clone,
    "ADD":      add,
    "MUL":      mul,
    "NEG":      neg,
    "SUB":      sub,
    "IS_EQ":    is_eq,
    "DEG":      deg,
    "PRINT":    print_top,
    "POP":      pop,
}

ARG_COMMANDS = {
    "DEG_BY":  deg_by,
    "AT":      at,
    "COMPOSE": compose,
}
