"""
Ordering utilities.
"""

import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar('T')


def shuffle_order(items: Sequence[T], rng: Optional[random.Random] = None,
                  seed: Optional[int] = None) -> List[T]:
    """
    Return a uniformly random permutation of ``items`` (Fisher-Yates).

    Args:
        items: Sequence to permute; left untouched
        rng: Random source to draw from
        seed: Seed for a private random source when ``rng`` is not given

    Returns:
        Shuffled copy of the sequence
    """
    if rng is None:
        rng = random.Random(seed) if seed is not None else random
    order = list(items)
    for i in range(len(order) - 1, 0, -1):
        j = rng.randint(0, i)
        order[i], order[j] = order[j], order[i]
    return order
