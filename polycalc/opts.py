"""Tools to define local options.

Some polycalc modules have local settings, such as the coefficient width used
by the arithmetic or the verbosity of the logger.  It is convenient for those
options to be listed next to the code that reads them, but inconvenient to
collect them by hand for the command-line parser.  Each module declares
Option instances for its settings, and `setup` informs an argparse parser
about every Option defined by the program so far.
"""

# All Option objects that have ever been created.
_OPTS = []

# Default values for options.  The `restore` procedure needs this to override
# values for options in modules that have not been imported yet.
_DEFAULT_VALUE_OVERRIDES = {}

class Option(object):
    def __init__(self, name, type, default, description="", metavar=None):
        assert type in (bool, str, int)
        self.name = name
        self.description = description
        self.type = type
        self.default = default
        self.value = _DEFAULT_VALUE_OVERRIDES.get(name, default)
        self.metavar = metavar
        _OPTS.append(self)

    def __bool__(self):
        raise Exception(
            "An attempt was made to convert an Option to a boolean. " +
            "If you intended to read the value of this Option, use `_.value`. " +
            "If you intended to check whether this object is None, use `_ is None`.")

    def __repr__(self):
        return "Option({!r}, value={!r})".format(self.name, self.value)

def _argname(o):
    if o.type is bool:
        return ("no-" + o.name) if o.default else o.name
    return o.name

def _help(o):
    if o.type is bool:
        return o.description
    default = "default={}".format(repr(o.default))
    return "{} ({})".format(o.description, default) if o.description else default

def setup(parser):
    """Add an argument to `parser` for every known Option."""
    for o in _OPTS:
        n = _argname(o)
        if o.type is bool:
            parser.add_argument("--" + n, action="store_true", default=False, help=_help(o))
        else:
            parser.add_argument("--" + n, metavar=o.metavar, type=o.type, default=o.value, help=_help(o))

def read(args):
    """Copy parsed argparse values back into the Options."""
    for o in _OPTS:
        o.value = getattr(args, _argname(o).replace("-", "_"))
        if o.type is bool and o.default:
            o.value = not o.value

def snapshot():
    """Produce a snapshot of current option values."""
    return { o.name : o.value for o in _OPTS }

def restore(snap):
    """Restore a snapshot of option values."""
    global _DEFAULT_VALUE_OVERRIDES

    # Set the values for options that have already been imported.
    for o in _OPTS:
        o.value = snap.get(o.name, o.value)

    # Set the overrides for options that have not yet been imported.
    _DEFAULT_VALUE_OVERRIDES = dict(snap)
