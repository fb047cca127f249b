"""Random point values for the bank, the player and drawn cards."""

import random
from random import Random


def random_in_range(low: int, high: int, rng: Random | None = None) -> int:
    """
    Return an integer chosen uniformly from the inclusive range [low, high].

    Args:
        low: Smallest value that may be returned
        high: Largest value that may be returned
        rng: Random number generator (the module-level generator if not provided)

    Raises:
        ValueError: If the bounds are not integers or low > high
    """
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (low, high)):
        raise ValueError("Range bounds must be integers")
    if low > high:
        raise ValueError(f"Invalid range: {low} > {high}")

    source = rng if rng is not None else random
    return source.randint(low, high)
