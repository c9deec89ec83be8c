import threading
from typing import Collection, List, Optional

import numpy as np

_local = threading.local()


def get_random_generator() -> np.random.Generator:
    """
    Returns the random generator owned by the calling thread.
    
    Every thread lazily gets its own generator seeded from OS entropy, so concurrent
    callers never share (or lock) random state.
    """
    rng = getattr(_local, 'rng', None)
    if rng is None:
        rng = np.random.default_rng()
        _local.rng = rng
    return rng


def seed_random_generator(seed: Optional[int]) -> np.random.Generator:
    """Reseeds the calling thread's generator. Other threads are not affected."""
    _local.rng = np.random.default_rng(seed)
    return _local.rng


def random_subset(ids: Collection[int], size: int, rng: np.random.Generator) -> List[int]:
    """
    Draws a uniformly random subset of `size` IDs without replacement.

    Args:
        ids: Population to draw from.
        size: Number of IDs to draw, within [0, len(ids)].
        rng: Generator used for the draw.

    Returns:
        The drawn IDs as a list of ints.
    """
    if size < 0:
        raise ValueError(f"Subset size should be >= 0, got {size}.")
    if size > len(ids):
        raise ValueError(f"Subset size {size} exceeds the number of available IDs ({len(ids)}).")
    if size == 0:
        return []
    # draw positions, IDs may not fit in int64
    population = list(ids)
    return [population[int(p)] for p in rng.choice(len(population), size=size, replace=False)]
