"""
Randomized quicksort, generic and specialized.

The generic sorts go through a Comparator object for every comparison.
The specialized sorts (sort_ints, sort_strs) run the same algorithm with
the comparison written inline, so timing both shows what the indirection
costs.
"""

from __future__ import annotations
import random
from abc import ABC, abstractmethod
from typing import Generic, MutableSequence, Optional, TypeVar

T = TypeVar("T")


# =============================================================================
# Errors
# =============================================================================

class SortError(Exception):
    """Base class for programmer errors raised by the sorts."""


class InvalidRange(SortError, IndexError):
    def __init__(self, low: int, high: int, length: int):
        super().__init__(f"invalid range [{low}, {high}] for sequence of length {length}")
        self.low = low
        self.high = high
        self.length = length


class TypeMismatch(SortError, TypeError):
    def __init__(self, expected: type, value):
        super().__init__(f"expected {expected.__name__}, got {type(value).__name__}: {value!r}")
        self.expected = expected
        self.value = value


# =============================================================================
# Comparators
# =============================================================================

class Comparator(ABC, Generic[T]):
    """Three-way comparison: negative, zero or positive like C's strcmp."""

    @abstractmethod
    def compare(self, a: T, b: T) -> int: pass


class IntComparator(Comparator[int]):
    """Numeric ordering of ints. bool is rejected even though it subclasses int."""

    def compare(self, a, b):
        if type(a) is not int:
            raise TypeMismatch(int, a)
        if type(b) is not int:
            raise TypeMismatch(int, b)
        if a < b:
            return -1
        elif a == b:
            return 0
        return 1


class StrComparator(Comparator[str]):
    """Code point ordering, independent of locale."""

    def compare(self, a, b):
        if not isinstance(a, str):
            raise TypeMismatch(str, a)
        if not isinstance(b, str):
            raise TypeMismatch(str, b)
        if a < b:
            return -1
        elif a == b:
            return 0
        return 1


# =============================================================================
# Helpers
# =============================================================================

def check_range(v, low, high):
    """Raise InvalidRange if [low, high] reaches outside v. Empty ranges pass."""
    if low < 0 or high >= len(v):
        raise InvalidRange(low, high, len(v))


def random_index(rng, low, high):
    """Uniform random index in [low, high] inclusive."""
    return rng.randint(low, high)


def _rng(rng):
    #Each top-level call owns its generator; no module-level state
    return rng if rng is not None else random.Random()


# =============================================================================
# Generic (comparator driven)
# =============================================================================

def sort(v: MutableSequence[T], low: int, high: int,
         cmp: Comparator[T], rng: Optional[random.Random] = None) -> None:
    """
    Sort v[low]..v[high] in place into increasing order according to cmp.

    Every element of the range stays in the sequence; only positions change.
    Equal elements may be reordered (the sort is not stable).

    Recursion depth is O(log n) on average but O(n) when the range holds
    long runs of equal keys, since all of them land on the right of the
    pivot. Use sort_iterative for such input.

    Raises:
        InvalidRange: low < 0 or high >= len(v)
        TypeMismatch: cmp was given an element of the wrong type
    """
    check_range(v, low, high)
    _sort(v, low, high, cmp, _rng(rng))


def _sort(v, left, right, cmp, rng):
    if left >= right:
        return  #0 or 1 elements
    p = random_index(rng, left, right)
    v[left], v[p] = v[p], v[left]  #move pivot to v[left]
    last = left
    for i in range(left + 1, right + 1):
        if cmp.compare(v[i], v[left]) < 0:
            last += 1
            v[last], v[i] = v[i], v[last]
    v[left], v[last] = v[last], v[left]  #restore pivot
    _sort(v, left, last - 1, cmp, rng)
    _sort(v, last + 1, right, cmp, rng)


def sort_iterative(v: MutableSequence[T], low: int, high: int,
                   cmp: Comparator[T], rng: Optional[random.Random] = None) -> None:
    """
    Same partitioning as sort(), driven by an explicit stack of ranges.

    The larger side is pushed first so the smaller one is handled next,
    which keeps the stack at O(log n) ranges whatever the input.
    """
    check_range(v, low, high)
    rng = _rng(rng)
    stack = [(low, high)]
    while stack:
        left, right = stack.pop()
        if left >= right:
            continue
        p = random_index(rng, left, right)
        v[left], v[p] = v[p], v[left]
        last = left
        for i in range(left + 1, right + 1):
            if cmp.compare(v[i], v[left]) < 0:
                last += 1
                v[last], v[i] = v[i], v[last]
        v[left], v[last] = v[last], v[left]
        if last - left < right - last:
            stack.append((last + 1, right))
            stack.append((left, last - 1))
        else:
            stack.append((left, last - 1))
            stack.append((last + 1, right))


# =============================================================================
# Specialized (comparison inlined)
# =============================================================================

def sort_ints(v: MutableSequence[int], low: int, high: int,
              rng: Optional[random.Random] = None) -> None:
    """sort() for ints with the comparison written as a plain `<`."""
    check_range(v, low, high)
    _sort_ints(v, low, high, _rng(rng))


def _sort_ints(v, left, right, rng):
    if left >= right:
        return
    p = random_index(rng, left, right)
    v[left], v[p] = v[p], v[left]
    pivot = v[left]
    last = left
    for i in range(left + 1, right + 1):
        if v[i] < pivot:
            last += 1
            v[last], v[i] = v[i], v[last]
    v[left], v[last] = v[last], v[left]
    _sort_ints(v, left, last - 1, rng)
    _sort_ints(v, last + 1, right, rng)


def sort_strs(v: MutableSequence[str], low: int, high: int,
              rng: Optional[random.Random] = None) -> None:
    """sort() for strs with the lexicographic comparison inlined."""
    check_range(v, low, high)
    _sort_strs(v, low, high, _rng(rng))


def _sort_strs(v, left, right, rng):
    if left >= right:
        return
    p = random_index(rng, left, right)
    v[left], v[p] = v[p], v[left]
    pivot = v[left]
    last = left
    for i in range(left + 1, right + 1):
        if v[i] < pivot:
            last += 1
            v[last], v[i] = v[i], v[last]
    v[left], v[last] = v[last], v[left]
    _sort_strs(v, left, last - 1, rng)
    _sort_strs(v, last + 1, right, rng)


# =============================================================================
# Convenience
# =============================================================================

def quicksort(v: MutableSequence[T], cmp: Optional[Comparator[T]] = None,
              rng: Optional[random.Random] = None) -> None:
    """
    Sort all of v in place.

    With a comparator this is the generic sort. Without one, the element
    type of v[0] picks sort_ints or sort_strs; any other type raises
    TypeMismatch.
    """
    if cmp is not None:
        sort(v, 0, len(v) - 1, cmp, rng)
        return
    if not v:
        return
    first = v[0]
    if type(first) is int:
        sort_ints(v, 0, len(v) - 1, rng)
    elif isinstance(first, str):
        sort_strs(v, 0, len(v) - 1, rng)
    else:
        raise TypeMismatch(int, first)
