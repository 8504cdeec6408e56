from __future__ import annotations
import numpy as np
from typing import Union

RngLike = Union[None, int, np.random.Generator]


def make_rng(rng: RngLike = None) -> np.random.Generator:
    """Pass a Generator through untouched; build one from a seed (or OS entropy) otherwise."""
    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None:
        ss = np.random.SeedSequence()
    else:
        ss = np.random.SeedSequence(int(rng))
    return np.random.default_rng(ss)
