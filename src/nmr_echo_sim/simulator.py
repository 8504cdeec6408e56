from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

from .constants import ECHO_TIME_US, NUM_SPINS
from .ensemble import SpinEnsemble
from .params import SimulationParameters
from .rng import RngLike
from .signal_model import ModeLike, SignalModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SimulationInstance:
    """One parameter set with its own freshly drawn ensemble. Never mutated."""

    parameters: SimulationParameters
    ensemble: SpinEnsemble
    model: SignalModel = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "model", SignalModel(self.parameters, self.ensemble))

    def signal(self, t: float, mode: ModeLike, echo_time: float = ECHO_TIME_US) -> float:
        return self.model.signal(t, mode, echo_time)

    def signal_trace(self, times, mode: ModeLike, echo_time: float = ECHO_TIME_US) -> np.ndarray:
        return self.model.signal_trace(times, mode, echo_time)

    def magnetization(self, t: float, mode: ModeLike, echo_time: float = ECHO_TIME_US) -> Tuple[float, float]:
        return self.model.magnetization(t, mode, echo_time)

    def pulse_amplitude_for_display(self) -> float:
        return self.model.pulse_amplitude_for_display()


def build_instance(
    parameters: SimulationParameters,
    rng: RngLike = None,
    num_spins: int = NUM_SPINS,
) -> SimulationInstance:
    """
    Validate `parameters`, draw a new ensemble and bind both into an instance.

    Raises InvalidParameter before anything is drawn if either decay time is
    not positive; no partially built instance is ever returned.
    """
    parameters.validate()
    ensemble = SpinEnsemble.draw(num_spins, parameters.inhomogeneous_decay, rng=rng)
    instance = SimulationInstance(parameters, ensemble)
    logger.debug(
        "built instance: %s, %d spins, theta1=%.4f theta2=%.4f detuning=%.3f",
        parameters,
        len(ensemble),
        parameters.theta1,
        parameters.theta2,
        parameters.resonance_detuning,
    )
    return instance
