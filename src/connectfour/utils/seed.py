"""
Random seed management for reproducibility.
"""

from __future__ import annotations

from typing import Optional
import numpy as np


def create_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Create the generator used as the search's entropy source.

    The same seed gives the same expansions and playouts, so searches
    (and whole arena runs) can be replayed exactly.
    """
    return np.random.default_rng(seed)
