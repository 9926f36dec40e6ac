"""
Ordering and filtering primitives used by the availability engine.
"""

from typing import Any, Callable, Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")


def _identity(item: Any) -> Any:
    return item


def _merge(left: List[T], right: List[T], key: Callable[[T], Any]) -> List[T]:
    merged: List[T] = []
    i = j = 0
    while i < len(left) and j < len(right):
        # Take from the left run on ties so equal items keep their order
        if key(right[j]) < key(left[i]):
            merged.append(right[j])
            j += 1
        else:
            merged.append(left[i])
            i += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged


def _merge_sort(items: Sequence[T], key: Callable[[T], Any]) -> List[T]:
    if len(items) <= 1:
        return list(items)
    middle = len(items) // 2
    return _merge(
        _merge_sort(items[:middle], key),
        _merge_sort(items[middle:], key),
        key,
    )


def merge_sort(
    items: Iterable[T], key: Optional[Callable[[T], Any]] = None
) -> List[T]:
    """
    Return a new list with ``items`` in ascending ``key`` order.

    Top-down merge sort: O(n log n) and stable. The input is never mutated.

    Args:
        items: Items to order
        key: Function mapping an item to a comparable value (identity if None)

    Returns:
        The sorted items as a new list
    """
    return _merge_sort(list(items), key or _identity)


def filter_and_sort(
    items: Iterable[T],
    predicate: Callable[[T], bool],
    key: Optional[Callable[[T], Any]] = None,
) -> List[T]:
    """Keep the items satisfying ``predicate``, merge sorted by ``key``."""
    return merge_sort((item for item in items if predicate(item)), key)
