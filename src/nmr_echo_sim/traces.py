from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
import pandas as pd

from .constants import ECHO_TIME_US, TRACE_END_US, TRACE_STEP_US
from .params import SimulationParameters
from .signal_model import Mode
from .simulator import SimulationInstance


@dataclass(frozen=True)
class PulseShape:
    start_us: float
    duration_us: float
    height: float

    def outline(self) -> Tuple[np.ndarray, np.ndarray]:
        """Open rectangle (baseline-up-across-down) as x, y vertex arrays."""
        x0, x1 = self.start_us, self.start_us + self.duration_us
        return np.array([x0, x0, x1, x1]), np.array([0.0, self.height, self.height, 0.0])


@dataclass
class TraceSet:
    parameters: SimulationParameters
    echo_time_us: float
    fid_times_us: np.ndarray
    fid: np.ndarray
    echo_times_us: np.ndarray
    echo: np.ndarray
    pulses: List[PulseShape]

    def to_frame(self) -> pd.DataFrame:
        fid = pd.DataFrame({"time_us": self.fid_times_us, "signal": self.fid, "trace": Mode.FID.value})
        echo = pd.DataFrame({"time_us": self.echo_times_us, "signal": self.echo, "trace": Mode.ECHO.value})
        return pd.concat([fid, echo], ignore_index=True)

    def summary(self) -> dict:
        out = {}
        for name, taus, y in (("fid", self.fid_times_us, self.fid), ("echo", self.echo_times_us, self.echo)):
            if len(y) == 0:
                out[name] = None
                continue
            k = int(np.argmax(np.abs(y)))
            out[name] = {"n": int(len(y)), "peak_time_us": float(taus[k]), "peak_signal": float(y[k])}
        return out


def time_grid(start_us: float, end_us: float, step_us: float = TRACE_STEP_US) -> np.ndarray:
    """start, start+step, ... strictly below end (empty if end <= start)."""
    n = max(0, int(np.ceil((float(end_us) - float(start_us)) / float(step_us))))
    taus = float(start_us) + float(step_us) * np.arange(n)
    return taus[taus < end_us]


def pulse_shapes(instance: SimulationInstance, echo_time_us: float = ECHO_TIME_US) -> List[PulseShape]:
    p = instance.parameters
    h = instance.pulse_amplitude_for_display()
    return [
        PulseShape(0.0, p.pulse1_duration, h),
        PulseShape(float(echo_time_us), p.pulse2_duration, h),
    ]


def sample_traces(
    instance: SimulationInstance,
    echo_time_us: float = ECHO_TIME_US,
    step_us: float = TRACE_STEP_US,
    t_end_us: float = TRACE_END_US,
) -> TraceSet:
    """
    Sample the two displayed traces:
      FID  from the end of pulse 1 up to the echo time,
      echo from echo_time + 2*pulse1_duration up to t_end_us.
    """
    p = instance.parameters
    fid_t = time_grid(p.pulse1_duration, echo_time_us, step_us)
    echo_t = time_grid(echo_time_us + 2.0 * p.pulse1_duration, t_end_us, step_us)
    return TraceSet(
        parameters=p,
        echo_time_us=float(echo_time_us),
        fid_times_us=fid_t,
        fid=instance.signal_trace(fid_t, Mode.FID, echo_time_us),
        echo_times_us=echo_t,
        echo=instance.signal_trace(echo_t, Mode.ECHO, echo_time_us),
        pulses=pulse_shapes(instance, echo_time_us),
    )
