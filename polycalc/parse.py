"""Parser for the textual polynomial grammar.

    polynomial     := scalar-literal | monomial ('+' monomial)*
    monomial       := '(' polynomial ',' exponent ')'
    scalar-literal := ['-'] digit+
    exponent       := digit+

No whitespace is allowed anywhere.  The parser normalizes what it reads, so
"(1,2)+(2,0)+(0,5)" and "(2,0)+(1,2)" produce the same canonical value.

The important functions are:
 - tokenize:   str -> iterator of ply tokens
 - parse_poly: str -> Poly
"""

# builtin
import types

# 3rd party
from ply import lex, yacc

# ours
from polycalc import parsetools
from polycalc import polynomials

class ParseError(Exception):
    """Raised when a string is not a polynomial in the textual grammar."""
    pass

# Each operator has a name and a syntax.  Each becomes an OP_* token for the
# lexer.  So, e.g. ("PLUS", "+") matches "+" and the token will be named
# OP_PLUS.
_OPERATORS = [
    ("PLUS", "+"),
    ("MINUS", "-"),
    ("COMMA", ","),
    ("OPEN_PAREN", "("),
    ("CLOSE_PAREN", ")"),
    ]

# Lexer ########################################################################

def op_token_name(opname):
    return "OP_{}".format(opname.upper())

# Enumerate token names
tokens = []
for opname, op in _OPERATORS:
    tokens.append(op_token_name(opname))
tokens += ["NUM"]
tokens = tuple(tokens) # freeze tokens

def make_lexer():
    t_OP_PLUS        = r"\+"
    t_OP_MINUS       = r"-"
    t_OP_COMMA       = r","
    t_OP_OPEN_PAREN  = r"\("
    t_OP_CLOSE_PAREN = r"\)"

    def t_NUM(t):
        r"\d+"
        t.value = int(t.value)
        return t

    def t_error(t):
        raise ParseError("illegal character {!r} at position {}".format(t.value[0], t.lexpos))

    return lex.lex()

_lexer = make_lexer()
def tokenize(s):
    lexer = _lexer.clone() # Because lexer objects are stateful
    lexer.input(s)
    while True:
        tok = lexer.token()
        if not tok:
            break
        yield tok

# Parser #######################################################################

def make_parser():
    # Productions are collected into an explicit namespace since parsetools
    # adds some of them programmatically.
    grammar = {
        "tokens": tokens,
        "start": "poly",
        "__module__": __name__ }

    def p_poly(p):
        """poly : scalar
                | monos"""
        if isinstance(p[1], tuple):
            p[0] = polynomials.own_monomials(list(p[1]))
        else:
            p[0] = p[1]

    def p_scalar(p):
        """scalar : NUM
                  | OP_MINUS NUM"""
        value = p[1] if len(p) == 2 else -p[2]
        bounds = polynomials.coefficient_range()
        if bounds is not None and not (bounds[0] <= value <= bounds[1]):
            raise ParseError("coefficient {} out of range".format(value))
        p[0] = polynomials.from_scalar(value)

    def p_mono(p):
        """mono : OP_OPEN_PAREN poly OP_COMMA NUM OP_CLOSE_PAREN"""
        if p[4] > polynomials.MAX_EXPONENT:
            raise ParseError("exponent {} out of range".format(p[4]))
        p[0] = polynomials.Monomial(p[4], p[2])

    def p_error(p):
        if p is None:
            raise ParseError("unexpected end of input")
        raise ParseError("syntax error at position {} ({!r})".format(p.lexpos, p.value))

    grammar.update((name, f) for name, f in locals().items() if name.startswith("p_"))
    parsetools.multi(grammar, "monos", "mono", sep="OP_PLUS", allow_empty=False)

    return yacc.yacc(
        module=types.SimpleNamespace(**grammar),
        debug=False,
        write_tables=False,
        errorlog=yacc.NullLogger())

_parser = make_parser()

def parse_poly(s):
    """Parse a string as a polynomial.

    Raises ParseError if s is not in the grammar or a number in it is out of
    range."""
    return _parser.parse(s, lexer=_lexer.clone())
