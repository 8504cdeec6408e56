from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

import numpy as np
from numba import njit

from .constants import ECHO_TIME_US, PULSE_DISPLAY_GAIN, SIGNAL_GAIN
from .ensemble import SpinEnsemble
from .errors import InvalidParameter
from .params import SimulationParameters, require_positive


class Mode(str, Enum):
    FID = "fid"
    ECHO = "echo"

    @classmethod
    def coerce(cls, value: Union["Mode", str]) -> "Mode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidParameter("mode", value, "expected 'fid' or 'echo'") from None


ModeLike = Union[Mode, str]


# =============================================================================
# Per-spin rotation kernel
# =============================================================================
@njit
def _ensemble_average(offsets, detuning, theta1, theta2, t, echo_time, echo):
    """
    Ensemble-averaged (Mx, My) in the rotating frame, no relaxation.

    Hard pulses: pulse 1 leaves My = sin(theta1), Mx = 0. The refocusing pulse
    acts on Mz as it stood right after pulse 1 (cos(theta1)), not on an evolved
    longitudinal component. Echo spins contribute nothing until t > echo_time.
    """
    n = offsets.shape[0]
    my0 = np.sin(theta1)
    mx0 = 0.0
    mz0 = np.cos(theta1)
    cos2 = np.cos(theta2)
    sin2 = np.sin(theta2)
    t_evolve = echo_time if echo else t
    t_after = t - echo_time

    sum_mx = 0.0
    sum_my = 0.0
    for i in range(n):
        total_dw = detuning + offsets[i]
        phase1 = total_dw * t_evolve
        my1 = my0 * np.cos(phase1) + mx0 * np.sin(phase1)
        mx1 = mx0 * np.cos(phase1) - my0 * np.sin(phase1)
        if echo:
            my2 = my1 * cos2 - mz0 * sin2
            mx2 = mx1
            if t_after > 0.0:
                phase2 = total_dw * t_after
                sum_my += my2 * np.cos(phase2) + mx2 * np.sin(phase2)
                sum_mx += mx2 * np.cos(phase2) - my2 * np.sin(phase2)
        else:
            sum_my += my1
            sum_mx += mx1
    return sum_mx / n, sum_my / n


@dataclass(frozen=True, eq=False)
class SignalModel:
    """Observable transverse signal of one (parameters, ensemble) pair; pure and read-only."""

    parameters: SimulationParameters
    ensemble: SpinEnsemble

    def __post_init__(self):
        require_positive("true_decay", self.parameters.true_decay)

    def magnetization(self, t: float, mode: ModeLike, echo_time: float = ECHO_TIME_US) -> Tuple[float, float]:
        p = self.parameters
        mx, my = _ensemble_average(
            self.ensemble.offsets,
            float(p.resonance_detuning),
            float(p.theta1),
            float(p.theta2),
            float(t),
            float(echo_time),
            Mode.coerce(mode) is Mode.ECHO,
        )
        return float(mx), float(my)

    def signal(self, t: float, mode: ModeLike, echo_time: float = ECHO_TIME_US) -> float:
        """
        Ensemble-averaged My, damped by exp(-t/T2) and scaled to display units.

        T1 recovery and relaxation during the pulses are neglected.
        """
        _, my = self.magnetization(t, mode, echo_time)
        signal = my * np.exp(-float(t) / self.parameters.true_decay)
        return float(signal * SIGNAL_GAIN * self.parameters.pulse_field)

    def signal_trace(self, times, mode: ModeLike, echo_time: float = ECHO_TIME_US) -> np.ndarray:
        mode = Mode.coerce(mode)
        times = np.asarray(times, dtype=float).ravel()
        return np.array([self.signal(t, mode, echo_time) for t in times], dtype=float)

    def pulse_amplitude_for_display(self) -> float:
        return float(PULSE_DISPLAY_GAIN * self.parameters.pulse_field)
