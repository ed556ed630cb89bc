"""
Random state management for reproducible seeding.

Every sampling operation takes an explicit ``numpy.random.Generator``.
``resolve_rng`` turns the loose forms callers pass in (a generator, an
integer seed, or nothing) into one.
"""

from typing import Optional, Union
import numpy as np

RngLike = Union[None, int, np.random.Generator]

_default_seed: Optional[int] = None
_default_rng: Optional[np.random.Generator] = None


def set_seed(seed: Optional[int] = None):
    """Reset the fallback generator used when no generator is supplied."""
    global _default_seed, _default_rng
    _default_seed = seed
    _default_rng = np.random.default_rng(seed)


def get_rng() -> np.random.Generator:
    """Get the fallback random number generator."""
    global _default_rng
    if _default_rng is None:
        set_seed(_default_seed)
    return _default_rng


def resolve_rng(rng: RngLike = None) -> np.random.Generator:
    """
    Resolve a generator, seed, or None into a generator.

    Args:
        rng: An existing generator (returned unchanged), an integer seed
            (a fresh generator is created), or None (fallback generator).

    Returns:
        A numpy Generator.
    """
    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None:
        return get_rng()
    if isinstance(rng, (bool, np.bool_)) or not isinstance(rng, (int, np.integer)):
        raise TypeError(f"Expected a numpy Generator or an integer seed, got {type(rng).__name__}")
    return np.random.default_rng(int(rng))
