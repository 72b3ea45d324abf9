"""Utilities for working with polynomial values.

Important functions:
 - pprint: render a polynomial in the textual grammar read by polycalc.parse
"""

from polycalc import common

class PrettyPrinter(common.Visitor):
    """Renders canonical polynomials.

        polynomial := scalar | monomial ('+' monomial)*
        monomial   := '(' polynomial ',' exponent ')'

    Each visit_* method returns the pieces of its node's text: strings, and
    child nodes that still have to be rendered.  `render` expands them with
    a work stack, so nesting depth is not limited by the recursion limit.
    """

    def visit_Scalar(self, p):
        return [str(p.coeff)]

    def visit_Composite(self, p):
        pieces = [p.monos[0]]
        for m in p.monos[1:]:
            pieces.append("+")
            pieces.append(m)
        return pieces

    def visit_Monomial(self, m):
        return ["(", m.poly, ",{})".format(m.exp)]

    def render(self, p):
        out = []
        work = [p]
        while work:
            x = work.pop()
            if isinstance(x, str):
                out.append(x)
            else:
                work.extend(reversed(self.visit(x)))
        return "".join(out)

_PRETTYPRINTER = PrettyPrinter()
def pprint(p):
    return _PRETTYPRINTER.render(p)
