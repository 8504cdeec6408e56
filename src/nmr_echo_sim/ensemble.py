from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .constants import NUM_SPINS
from .errors import InvalidParameter
from .params import require_positive
from .rng import RngLike, make_rng


def _frozen(values) -> np.ndarray:
    arr = np.array(values, dtype=np.float64).ravel()
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class SpinEnsemble:
    """Static field inhomogeneity (T2*) as a frozen sample of per-spin offsets (rad/us)."""

    offsets: np.ndarray

    def __len__(self) -> int:
        return int(self.offsets.shape[0])

    @property
    def count(self) -> int:
        return len(self)

    @classmethod
    def draw(cls, count: int = NUM_SPINS, inhomogeneous_decay: float = 5.0, rng: RngLike = None) -> "SpinEnsemble":
        """
        Draw `count` i.i.d. offsets from N(0, 1/inhomogeneous_decay).

        `rng` may be a Generator (consumed), a seed, or None for fresh entropy.
        """
        T2_star = require_positive("inhomogeneous_decay", inhomogeneous_decay)
        if int(count) < 1:
            raise InvalidParameter("count", count, "must be >= 1")
        sigma = 1.0 / T2_star
        gen = make_rng(rng)
        return cls(_frozen(gen.normal(0.0, sigma, size=int(count))))

    @classmethod
    def from_offsets(cls, values: Iterable[float]) -> "SpinEnsemble":
        arr = _frozen(list(values))
        if arr.size < 1:
            raise InvalidParameter("count", 0, "must be >= 1")
        return cls(arr)
