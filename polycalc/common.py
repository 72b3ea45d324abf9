"""Helpers shared by the polynomial engine and the calculator front end.

Important functions and classes:
 - @typechecked: check argument and return annotations at call time
 - ADT: base class for immutable tree-shaped values
 - declare_case: define one case (a subclass) of an ADT
 - Visitor: dispatch on the class of an ADT value
 - unroll: run a generator-based recursive computation on a heap stack
 - fresh_name: a name never returned before
"""

# builtins
from contextlib import contextmanager
from functools import wraps
import inspect
import itertools
import os
import shutil
import sys
import tempfile

def check_type(value, ty, value_name="value"):
    """
    Assert that `value` matches the annotation `ty`.
        ty may be
            None            - anything goes (no annotation)
            int, Poly, ...  - an instance of that class
            (t1, t2, ...)   - a tuple of exactly those entry types
            [t]             - a list or tuple whose entries all match t
    `value_name` names the checked expression in the assertion message.
    """

    if ty is None:
        return
    if type(ty) is tuple:
        assert isinstance(value, tuple), "{} is a {}, expected a tuple".format(value_name, type(value).__name__)
        assert len(value) == len(ty), "{} has {} entries, expected {}".format(value_name, len(value), len(ty))
        for i, (v, t) in enumerate(zip(value, ty)):
            check_type(v, t, "{}[{}]".format(value_name, i))
    elif type(ty) is list:
        assert isinstance(value, (list, tuple)), "{} is a {}, expected a sequence".format(value_name, type(value).__name__)
        for i, v in enumerate(value):
            check_type(v, ty[0], "{}[{}]".format(value_name, i))
    else:
        assert isinstance(value, ty), "{} is a {}, expected {}".format(value_name, type(value).__name__, ty.__name__)

def typechecked(f):
    """Decorator: check f's annotated arguments and result with check_type."""
    params = inspect.getfullargspec(f).args
    annotations = f.__annotations__
    @wraps(f)
    def checked(*args, **kwargs):
        for name, val in itertools.chain(zip(params, args), kwargs.items()):
            check_type(val, annotations.get(name), name)
        ret = f(*args, **kwargs)
        check_type(ret, annotations.get("return"), "return")
        return ret
    return checked

def unroll(gen):
    """Drive a recursive computation without growing the Python call stack.

    Each call of the computation is a generator.  To make a recursive call it
    yields the generator for that call, and `yield` evaluates to the callee's
    return value.  The value returned by `gen` is the result.

    Polynomials may be nested thousands of variables deep, which is far more
    than the interpreter's recursion limit allows.
    """
    stack = [gen]
    value = None
    while stack:
        try:
            callee = stack[-1].send(value)
        except StopIteration as ret:
            stack.pop()
            value = ret.value
        else:
            stack.append(callee)
            value = None
    return value

class ADT(object):
    """An immutable value made of named children.

    Values compare and hash by their class and children.  Subclasses are
    created with `declare_case`; a Visitor walks them.
    """

    def children(self):
        return ()
    def __str__(self):
        return repr(self)
    def __repr__(self):
        return "{}({})".format(type(self).__name__, ", ".join(repr(c) for c in self.children()))
    def __hash__(self):
        if not hasattr(self, "_hash"):
            self._hash = hash((type(self).__name__, self.children()))
        return self._hash
    def __eq__(self, other):
        if self is other:
            return True
        return type(self) is type(other) and self.children() == other.children()
    def __ne__(self, other):
        return not self.__eq__(other)

def declare_case(supertype, name, attrs=()):
    """Create a new case of an ADT.

        CaseName = declare_case(SuperType, "CaseName", ["member1", ...])

    The case takes its members positionally, in the order given.
    """
    attrs = tuple(attrs)
    def __init__(self, *args):
        assert len(args) == len(attrs), "{} takes {} values, got {}".format(name, len(attrs), len(args))
        for attr, val in zip(attrs, args):
            setattr(self, attr, val)
    def children(self):
        return tuple(getattr(self, a) for a in attrs)
    return type(name, (supertype,), {
        "__init__": __init__,
        "children": children })

class Visitor(object):
    def visit(self, x, *args, **kwargs):
        """Call visit_C for the nearest class C in type(x)'s base chain."""
        for t in type(x).__mro__:
            f = getattr(self, "visit_" + t.__name__, None)
            if f is not None:
                return f(x, *args, **kwargs)
        raise NotImplementedError("{} has no visit_{}".format(type(self).__name__, type(x).__name__))

_names = itertools.count()

def fresh_name(hint : str = "name", omit : {str} = ()) -> str:
    """A name built from `hint` that is not in `omit` and was never returned before."""
    while True:
        name = "_{}{}".format(hint, next(_names))
        if name not in omit:
            return name

@contextmanager
def AtomicWriteableFile(dst, mode="w"):
    """Write to a temporary file; move it over `dst` only when the block exits cleanly.

        with AtomicWriteableFile(path) as f:
            f.write(...)
    """
    tmp_fd, tmp_path = tempfile.mkstemp(text=True)
    with os.fdopen(tmp_fd, mode) as f:
        yield f
        f.flush()
        os.fsync(tmp_fd)
    shutil.move(src=tmp_path, dst=dst)

def open_maybe_stdin(f : str, mode="r"):
    """Open f for reading, or a duplicate of standard input if f is "-".

    The caller closes the returned handle."""
    if f == "-":
        return os.fdopen(os.dup(sys.stdin.fileno()), mode)
    return open(f, mode)

def open_maybe_stdout(f : str, mode="w"):
    """Open f for writing, or a duplicate of standard output if f is "-".

    Regular files are written through AtomicWriteableFile, so use the result
    as a context manager."""
    if f == "-":
        return os.fdopen(os.dup(sys.stdout.fileno()), mode)
    return AtomicWriteableFile(f, mode)
