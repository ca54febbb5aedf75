#!/usr/bin/env python3
"""
Subset Generator

Enumerates every non-empty subset of a sequence for "try every grouping"
searches. Enumeration order decides which grouping wins when several
match, so it is fixed: ascending bit mask, member j included iff bit j of
the mask is set.

The search is exponential; callers keep inputs to tens of elements
(shipments of one order, items of one match, entries inside a date window).
Subsets are produced lazily so a scan that stops early never builds the rest.
"""

from collections.abc import Iterator, Sequence
from typing import TypeVar

T = TypeVar("T")


def subsets(sequence: Sequence[T]) -> Iterator[list[T]]:
    """
    Iterate over all non-empty subsets in ascending mask order.

    The sequence is copied up front, so later changes to it do not affect
    the iteration.

    Args:
        sequence: Ordered elements

    Returns:
        Iterator over ``2**n - 1`` lists, each preserving the input's
        relative order; empty when the sequence is empty

    Example:
        >>> list(subsets(["a", "b", "c"]))
        [['a'], ['b'], ['a', 'b'], ['c'], ['a', 'c'], ['b', 'c'], ['a', 'b', 'c']]
    """
    items = list(sequence)
    return (
        [item for j, item in enumerate(items) if mask & (1 << j)]
        for mask in range(1, 1 << len(items))
    )
