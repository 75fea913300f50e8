"""Uniform random sampling without replacement."""

import secrets
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")


def sample(
    items: Sequence[T],
    n: int,
    randbelow: Callable[[int], int] = secrets.randbelow,
) -> List[T]:
    """
    Return min(n, len(items)) distinct elements of items in selection order.
    Each pick draws a uniform index over the remaining candidates and removes it.
    items is not modified. randbelow(k) must return an int in [0, k).
    """
    pool = list(items)
    out: List[T] = []
    for _ in range(min(n, len(pool))):
        out.append(pool.pop(randbelow(len(pool))))
    return out
