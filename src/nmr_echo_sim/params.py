from __future__ import annotations
import math
from dataclasses import dataclass, field, fields, replace as _dc_replace
from typing import Any, Dict, Mapping, Tuple

import numpy as np

from .constants import B_1, GAMMA, OMEGA_0
from .errors import InvalidParameter

# Slider ranges of the interactive front end (inclusive). The model itself only
# requires the two decay times to be positive.
PARAMETER_BOUNDS: Dict[str, Tuple[float, float]] = {
    "drive_frequency": (7.5, 12.5),
    "pulse1_duration": (0.0, 10.0),
    "pulse2_duration": (0.0, 20.0),
    "inhomogeneous_decay": (1.0, 20.0),
    "true_decay": (10.0, 500.0),
}

PARAMETER_STEPS: Dict[str, float] = {
    "drive_frequency": 0.1,
    "pulse1_duration": 0.1,
    "pulse2_duration": 0.1,
    "inhomogeneous_decay": 1.0,
    "true_decay": 10.0,
}

_POSITIVE = ("inhomogeneous_decay", "true_decay")


def _clip(bounds: Dict[str, Tuple[float, float]], k: str, v: float) -> float:
    lo, hi = bounds[k]
    return float(np.minimum(hi, np.maximum(lo, v)))


def require_positive(name: str, value: float) -> float:
    value = float(value)
    if not (math.isfinite(value) and value > 0.0):
        raise InvalidParameter(name, value)
    return value


@dataclass(frozen=True)
class SimulationParameters:
    """
    The five adjustable inputs of one simulation, plus the quantities derived
    from them:

      theta1, theta2      rotation angles of the two hard pulses (rad)
      resonance_detuning  drive_frequency - OMEGA_0
      pulse_field         B_1, the RF field amplitude

    Derived values are fixed at construction.
    """

    drive_frequency: float
    pulse1_duration: float
    pulse2_duration: float
    inhomogeneous_decay: float
    true_decay: float

    pulse_field: float = field(init=False, repr=False)
    theta1: float = field(init=False, repr=False)
    theta2: float = field(init=False, repr=False)
    resonance_detuning: float = field(init=False, repr=False)

    def __post_init__(self):
        for f in self.input_names():
            object.__setattr__(self, f, float(getattr(self, f)))
        object.__setattr__(self, "pulse_field", B_1)
        object.__setattr__(self, "theta1", GAMMA * B_1 * self.pulse1_duration)
        object.__setattr__(self, "theta2", GAMMA * B_1 * self.pulse2_duration)
        object.__setattr__(self, "resonance_detuning", self.drive_frequency - OMEGA_0)

    @classmethod
    def input_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls) if f.init)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any], base: "SimulationParameters" = None) -> "SimulationParameters":
        """Build from a dict; keys missing from `values` come from `base` (defaults if None)."""
        names = cls.input_names()
        unknown = sorted(set(values) - set(names))
        if unknown:
            raise InvalidParameter(unknown[0], values[unknown[0]], "unknown parameter")
        base = DEFAULT_PARAMETERS if base is None else base
        return _dc_replace(base, **{k: float(v) for k, v in values.items()})

    def replace(self, **changes) -> "SimulationParameters":
        return self.from_mapping(changes, base=self)

    def as_dict(self) -> Dict[str, float]:
        return {k: getattr(self, k) for k in self.input_names()}

    def clipped(self, bounds: Dict[str, Tuple[float, float]] = PARAMETER_BOUNDS) -> "SimulationParameters":
        return self.replace(**{k: _clip(bounds, k, v) for k, v in self.as_dict().items() if k in bounds})

    def validate(self) -> "SimulationParameters":
        for name in _POSITIVE:
            require_positive(name, getattr(self, name))
        return self


DEFAULT_PARAMETERS = SimulationParameters(
    drive_frequency=10.0,
    pulse1_duration=4.5,
    pulse2_duration=9.0,
    inhomogeneous_decay=5.0,
    true_decay=100.0,
)
