"""Sparse multivariate polynomials with integer coefficients.

A polynomial in variable 0 is stored recursively: each coefficient with
respect to variable 0 is itself a polynomial in variables 1, 2, ... until a
variable-free value is reached.

    Scalar(c)              - the constant c
    Composite(monos)       - sum of c_i * x^e_i over the monomials (e_i, c_i)
    Monomial(exp, poly)    - one term of a Composite

Every value handed out by this module is canonical:
 1. monomials are sorted by strictly increasing exponent
 2. no monomial has the zero Scalar as its coefficient
 3. nothing that could be a Scalar is a Composite (no empty Composite, no
    Composite consisting of a single exponent-0 monomial with a Scalar
    coefficient)

`own_monomials` is the one place where these properties are established
from arbitrary input.  The arithmetic functions take canonical values and
produce canonical values, so equality is plain structural equality.

Important functions:
 - own_monomials, clone_monomials, from_scalar, variable: construction
 - add, multiply, negate, subtract: arithmetic
 - is_zero, is_scalar, equal, degree, degree_in_variable: queries
 - at: evaluate the leading variable
 - compose: substitute polynomials for the leading variables
"""

from polycalc.common import ADT, declare_case, typechecked, unroll
from polycalc.opts import Option
from polycalc.syntax_tools import pprint
from polycalc import logging

coefficient_bits = Option("coefficient-bits", int, 64,
    description="Width of signed coefficients; arithmetic wraps around at this width (0 disables wrapping)",
    metavar="N")

# Exponents are 32-bit signed values that are never negative.
MAX_EXPONENT = 2**31 - 1

class Poly(ADT):
    def __add__(self, other):
        return add(self, other)
    def __sub__(self, other):
        return subtract(self, other)
    def __mul__(self, other):
        return multiply(self, other)
    def __neg__(self):
        return negate(self)
    def __str__(self):
        return pprint(self)

Scalar    = declare_case(Poly, "Scalar",    ["coeff"])
Composite = declare_case(Poly, "Composite", ["monos"])
Monomial  = declare_case(ADT,  "Monomial",  ["exp", "poly"])

# Coefficient arithmetic ######################################################

def coefficient_range():
    """Return (lo, hi), the representable coefficients, or None if unbounded."""
    bits = coefficient_bits.value
    if bits <= 0:
        return None
    half = 1 << (bits - 1)
    return (-half, half - 1)

def wrap(c):
    """Reduce c to the configured coefficient width (two's complement)."""
    bits = coefficient_bits.value
    if bits <= 0:
        return c
    half = 1 << (bits - 1)
    return ((c + half) % (1 << bits)) - half

def fast_pow(c, exp):
    """c**exp at the configured coefficient width."""
    assert exp >= 0
    bits = coefficient_bits.value
    if bits <= 0:
        return c ** exp
    return wrap(pow(c, exp, 1 << bits))

# Construction ################################################################

def from_scalar(c) -> Poly:
    return Scalar(wrap(c))

ZERO = Scalar(0)
ONE  = Scalar(1)

def is_scalar(p) -> bool:
    return isinstance(p, Scalar)

def is_zero(p) -> bool:
    return isinstance(p, Scalar) and p.coeff == 0

def _collapse(monos):
    """Turn sorted, zero-free monomials into a canonical value."""
    if not monos:
        return ZERO
    if len(monos) == 1 and monos[0].exp == 0 and is_scalar(monos[0].poly):
        return monos[0].poly
    return Composite(tuple(monos))

def own_monomials(monos) -> Poly:
    """Build the canonical polynomial equal to the sum of `monos`.

    The monomials may come in any order and may repeat exponents; their
    coefficients must already be canonical.  The given Monomial objects may
    end up inside the result.
    """
    if not monos:
        return ZERO
    monos = sorted(monos, key=lambda m: m.exp)
    merged = []
    exp = monos[0].exp
    acc = monos[0].poly
    for m in monos[1:]:
        if m.exp == exp:
            acc = add(acc, m.poly)
            continue
        if not is_zero(acc):
            merged.append(Monomial(exp, acc))
        exp = m.exp
        acc = m.poly
    if not is_zero(acc):
        merged.append(Monomial(exp, acc))
    return _collapse(merged)

def clone_monomials(monos) -> Poly:
    """Like own_monomials, but the result shares nothing with `monos`."""
    return own_monomials([Monomial(m.exp, clone(m.poly)) for m in monos])

def _map_coefficients(f, p):
    # rebuild p with f applied to each Scalar coefficient
    if is_scalar(p):
        return f(p)
    monos = []
    for m in p.monos:
        monos.append(Monomial(m.exp, (yield _map_coefficients(f, m.poly))))
    return Composite(tuple(monos))

def _copy_scalar(c):
    return Scalar(c.coeff)

def clone(p) -> Poly:
    return unroll(_map_coefficients(_copy_scalar, p))

def variable(i) -> Poly:
    """The polynomial x_i."""
    assert i >= 0
    p = Composite((Monomial(1, ONE),))
    for _ in range(i):
        p = Composite((Monomial(0, p),))
    return p

# Arithmetic ##################################################################
#
# The recursive helpers below are generators run by `unroll`: a recursive
# call is written `yield _helper(...)`.

def _lift(c):
    # Raw exponent-0 monomial around a Scalar.  Not canonical; only the
    # arithmetic below may see it.
    return (Monomial(0, c),)

def _monos(p):
    return _lift(p) if is_scalar(p) else p.monos

def _add(p, q):
    if is_scalar(p) and is_scalar(q):
        return Scalar(wrap(p.coeff + q.coeff))
    return (yield _add_monos(_monos(p), _monos(q)))

def _add_monos(ps, qs):
    # Merge two exponent-sorted monomial sequences.
    res = []
    i = j = 0
    while i < len(ps) or j < len(qs):
        if j == len(qs) or (i < len(ps) and ps[i].exp < qs[j].exp):
            m = ps[i]
            i += 1
        elif i == len(ps) or qs[j].exp < ps[i].exp:
            m = qs[j]
            j += 1
        else:
            m = Monomial(ps[i].exp, (yield _add(ps[i].poly, qs[j].poly)))
            i += 1
            j += 1
        if not is_zero(m.poly):
            res.append(m)
    return _collapse(res)

def _multiply(p, q):
    if is_scalar(p) and is_scalar(q):
        return Scalar(wrap(p.coeff * q.coeff))
    ps = _monos(p)
    qs = _monos(q)
    if len(ps) > len(qs):
        ps, qs = qs, ps
    res = ZERO
    for a in ps:
        # exponents grow together, so the row stays sorted
        row = []
        for b in qs:
            row.append(Monomial(a.exp + b.exp, (yield _multiply(a.poly, b.poly))))
        res = yield _add_monos(_monos(res), row)
    return res

def _negate_scalar(c):
    return Scalar(wrap(-c.coeff))

def add(p, q) -> Poly:
    return unroll(_add(p, q))

def multiply(p, q) -> Poly:
    return unroll(_multiply(p, q))

def negate(p) -> Poly:
    return unroll(_map_coefficients(_negate_scalar, p))

def subtract(p, q) -> Poly:
    return add(p, negate(q))

# Queries #####################################################################

def equal(p, q) -> bool:
    work = [(p, q)]
    while work:
        p, q = work.pop()
        if is_scalar(p) or is_scalar(q):
            if not (is_scalar(p) and is_scalar(q) and p.coeff == q.coeff):
                return False
            continue
        if len(p.monos) != len(q.monos):
            return False
        for a, b in zip(p.monos, q.monos):
            if a.exp != b.exp:
                return False
            work.append((a.poly, b.poly))
    return True

def degree(p) -> int:
    """Total degree; -1 for the zero polynomial."""
    if is_zero(p):
        return -1
    res = 0
    work = [(p, 0)]
    while work:
        p, d = work.pop()
        if is_scalar(p):
            res = max(res, d)
        else:
            work.extend((m.poly, d + m.exp) for m in p.monos)
    return res

def degree_in_variable(p, var_index) -> int:
    """Degree with respect to x_{var_index}; -1 for the zero polynomial."""
    if is_zero(p):
        return -1
    res = 0
    work = [(p, var_index)]
    while work:
        p, i = work.pop()
        if is_scalar(p):
            continue
        if i == 0:
            res = max(res, p.monos[-1].exp)
        else:
            work.extend((m.poly, i - 1) for m in p.monos)
    return res

# Evaluation ##################################################################

def at(p, x) -> Poly:
    """Substitute the integer x for the leading variable of p."""
    if is_scalar(p):
        return clone(p)
    res = ZERO
    for m in p.monos:
        res = add(res, multiply(m.poly, Scalar(fast_pow(x, m.exp))))
    return res

# Composition #################################################################

def _max_exponents(p, k):
    res = [0] * k
    work = [(p, 0)]
    while work:
        p, depth = work.pop()
        if is_scalar(p) or depth >= k:
            continue
        for m in p.monos:
            res[depth] = max(res[depth], m.exp)
            work.append((m.poly, depth + 1))
    return res

def _squarings(q, max_exp):
    """[q, q^2, q^4, ...], enough powers to build any q^e with e <= max_exp."""
    powers = [q]
    for _ in range(1, max(1, max_exp.bit_length())):
        powers.append(multiply(powers[-1], powers[-1]))
    return powers

def _power(powers, exp):
    res = ONE
    for i in reversed(range(len(powers))):
        if (exp >> i) & 1:
            res = multiply(res, powers[i])
    return res

def _compose(p, k, powers, depth):
    # no substitute is left for x_k, x_{k+1}, ...: they are evaluated at 0
    while not is_scalar(p) and depth >= k:
        if p.monos[0].exp != 0:
            return ZERO
        p = p.monos[0].poly
        depth += 1
    if is_scalar(p):
        return Scalar(p.coeff)
    res = ZERO
    for m in p.monos:
        inner = yield _compose(m.poly, k, powers, depth + 1)
        res = add(res, multiply(_power(powers[depth], m.exp), inner))
    return res

@typechecked
def compose(p : Poly, k : int, substitutes : [Poly]) -> Poly:
    """Substitute substitutes[i] for x_i, for i < k.

    Variables x_k, x_{k+1}, ... that still occur in p are evaluated at 0.
    Powers of each substitute are built by repeated squaring, up to the
    largest exponent its variable reaches in p.
    """
    assert len(substitutes) >= k
    with logging.task("compose", k=k):
        max_exp = _max_exponents(p, k)
        logging.event("max exponents: {}".format(max_exp))
        powers = [_squarings(substitutes[i], max_exp[i]) for i in range(k)]
        return unroll(_compose(p, k, powers, 0))
