# ============================================================
# stoogesort - in-place stooge sort
# ============================================================
#
# Stooge sort fixes the two ends of a range, then sorts the first
# two-thirds, the last two-thirds, and the first two-thirds again.
#
#   worst case   O(n^(log 3 / log 1.5)) ~ O(n^2.7095) comparisons
#   recursion    about log_1.5(n) frames deep
#   stability    none: equal elements may swap places
#
# Works on anything with __len__, __getitem__ and __setitem__:
# lists, bytearrays, array.array, 1-D numpy arrays.
# ============================================================

import operator

NAME = "Stooge Sort"

__all__ = ["NAME", "sort_natural", "sort_by", "sort_by_key", "stooge_steps"]


# ============================================================
# ========================== CORE ============================
# ============================================================

def _stooge(seq, lo, hi, is_less):
    if not is_less(seq[lo], seq[hi]):
        seq[lo], seq[hi] = seq[hi], seq[lo]

    if hi - lo + 1 > 2:
        t = (hi - lo + 1) // 3
        _stooge(seq, lo, hi - t, is_less)
        _stooge(seq, lo + t, hi, is_less)
        _stooge(seq, lo, hi - t, is_less)


def _check_sequence(seq):
    for attr in ("__len__", "__getitem__", "__setitem__"):
        if not hasattr(seq, attr):
            raise TypeError(
                f"expected a mutable sequence, got {type(seq).__name__!r}"
            )


def _check_callable(fn, what):
    if not callable(fn):
        raise TypeError(f"{what} must be callable, got {type(fn).__name__!r}")


def _run(seq, is_less):
    n = len(seq)
    if n > 1:
        _stooge(seq, 0, n - 1, is_less)


# ============================================================
# ======================= PUBLIC API =========================
# ============================================================

def sort_natural(seq):
    """
    Sort *seq* in place by the elements' own ``<``.

    >>> v = [-5, 4, 1, -3, 2]
    >>> sort_natural(v)
    >>> v
    [-5, -3, 1, 2, 4]
    """
    _check_sequence(seq)
    _run(seq, operator.lt)


def sort_by(seq, compare):
    """
    Sort *seq* in place with a cmp-style comparator.

    ``compare(a, b)`` returns a negative number when a sorts before b,
    zero when they are equal and a positive number otherwise (the same
    convention ``functools.cmp_to_key`` uses).

    The comparator must be a total order over the elements. If it is not,
    the resulting order is unspecified but the call still returns: sorting
    floats containing NaN is the usual way to get there, so filter NaN out
    first.

    >>> floats = [5.0, 4.0, 1.0, 3.0, 2.0]
    >>> sort_by(floats, lambda a, b: (a > b) - (a < b))
    >>> floats
    [1.0, 2.0, 3.0, 4.0, 5.0]
    """
    _check_sequence(seq)
    _check_callable(compare, "compare")
    _run(seq, lambda a, b: compare(a, b) < 0)


def sort_by_key(seq, key):
    """
    Sort *seq* in place, ordering elements by ``key(element)``.

    The key is computed afresh for both sides of every comparison and is
    never cached, so an O(m) key makes the whole sort O(n^2.7095 * m).

    >>> v = [-5, 4, 1, -3, 2]
    >>> sort_by_key(v, abs)
    >>> v
    [1, 2, -3, 4, -5]
    """
    _check_sequence(seq)
    _check_callable(key, "key")
    _run(seq, lambda a, b: key(a) < key(b))


# ============================================================
# ======================= STEP TRACER ========================
# ============================================================

def stooge_steps(seq, is_less=None, trace_compares=False):
    """
    Generator form of the sort for visualizers.

    Yields ``(seq, [lo, hi])`` after every corrective swap, and before
    every comparison too when *trace_compares* is set. Mutates *seq* in
    place exactly as the plain sort does; once exhausted, *seq* is sorted.
    """
    _check_sequence(seq)
    if is_less is None:
        is_less = operator.lt
    else:
        _check_callable(is_less, "is_less")

    def stooge(lo, hi):
        if trace_compares:
            yield seq, [lo, hi]
        if not is_less(seq[lo], seq[hi]):
            seq[lo], seq[hi] = seq[hi], seq[lo]
            yield seq, [lo, hi]

        if hi - lo + 1 > 2:
            t = (hi - lo + 1) // 3
            yield from stooge(lo, hi - t)
            yield from stooge(lo + t, hi)
            yield from stooge(lo, hi - t)

    if len(seq) > 1:
        yield from stooge(0, len(seq) - 1)
