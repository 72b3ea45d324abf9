"""The LIFO stack of polynomials the calculator commands operate on."""

class PolyStack(object):
    """A stack of canonical polynomials.

    Index 0 of `peek` is the top of the stack, index 1 the value directly
    below it, and so on.
    """

    def __init__(self, items=()):
        self._items = list(items)

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        """Iterate from the top of the stack down."""
        return reversed(self._items)

    def __repr__(self):
        return "PolyStack({!r})".format(self._items)

    def is_empty(self):
        return not self._items

    def underflow(self, n):
        """True if fewer than n values are on the stack."""
        return len(self._items) < n

    def push(self, p):
        self._items.append(p)

    def peek(self, i=0):
        return self._items[-1 - i]

    def top(self):
        return self.peek(0)

    def prev_top(self):
        return self.peek(1)

    def pop(self):
        return self._items.pop()

    def clear(self):
        del self._items[:]
