import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


def shuffled(items: Sequence[T], rng: Optional[random.Random] = None) -> list[T]:
    """Uniform permutation of a copy; `items` is left untouched."""
    rng = rng or random.Random()
    out = list(items)
    # Fisher-Yates
    for i in range(len(out) - 1, 0, -1):
        j = rng.randint(0, i)
        out[i], out[j] = out[j], out[i]
    return out


def reshuffled_order(order: Sequence[T], previous_first: Optional[T] = None,
                     rng: Optional[random.Random] = None) -> list[T]:
    """
    Shuffle a render order; with more than one element the new first element
    never equals `previous_first`.
    """
    rng = rng or random.Random()
    out = shuffled(order, rng)
    if previous_first is None or len(set(out)) < 2:
        return out
    while out[0] == previous_first:
        out = shuffled(order, rng)
    return out
