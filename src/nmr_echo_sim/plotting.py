from __future__ import annotations
import numpy as np
import matplotlib.pyplot as plt
from typing import Optional

from .traces import TraceSet

BACKGROUND = "#000000"
AXIS_COLOR = "#aaaaaa"
PULSE_COLOR = "#00ff00"
TRACE_COLOR = "#ffffff"
VALUE_COLOR = "#00ffff"

PARAMETER_LABELS = {
    "drive_frequency": ("omega_1", " MHz"),
    "pulse1_duration": ("t_pulse1 (90°)", " µs"),
    "pulse2_duration": ("t_pulse2 (180°)", " µs"),
    "inhomogeneous_decay": ("T2* (Inhomo)", " µs"),
    "true_decay": ("T2 (True)", " µs"),
}


# =============================================================================
# Plotting
# =============================================================================
def format_parameter_value(value, unit: str = "") -> str:
    return f"{float(value):.1f}{unit}"


def _parameter_lines(parameters):
    out = []
    for k, (label, unit) in PARAMETER_LABELS.items():
        out.append(f"{label}: {format_parameter_value(getattr(parameters, k), unit)}")
    return out


def style_axes(ax, t_end_us: float):
    ax.set_facecolor(BACKGROUND)
    for side in ("top", "right"):
        ax.spines[side].set_visible(False)
    ax.spines["left"].set_color(AXIS_COLOR)
    ax.spines["bottom"].set_color(AXIS_COLOR)
    ax.spines["bottom"].set_position(("data", 0.0))
    ax.set_xlim(0.0, t_end_us)
    ax.set_xticks(np.arange(0.0, t_end_us + 1e-9, 10.0))
    ax.set_xticks(np.arange(0.0, t_end_us + 1e-9, 5.0), minor=True)
    ax.tick_params(colors=AXIS_COLOR, which="both")
    ax.set_xlabel("Time [µs]", color=AXIS_COLOR)
    ax.set_ylabel("Voltage [mV]", color=AXIS_COLOR)


def plot_sequence(
    traces: TraceSet,
    ax: Optional[plt.Axes] = None,
    t_end_us: Optional[float] = None,
    show_parameters: bool = False,
):
    """Pulse rectangles plus FID and echo polylines on a shared time axis."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(9, 5))
        fig.patch.set_facecolor(BACKGROUND)
    if t_end_us is None:
        ends = [traces.echo_time_us] + [p.start_us + p.duration_us for p in traces.pulses]
        if len(traces.echo_times_us):
            ends.append(float(traces.echo_times_us[-1]))
        t_end_us = max(ends)

    style_axes(ax, t_end_us)

    for pulse in traces.pulses:
        x, y = pulse.outline()
        ax.plot(x, y, color=PULSE_COLOR, lw=2.0)

    ax.plot(traces.fid_times_us, traces.fid, color=TRACE_COLOR, lw=1.5, label="FID")
    ax.plot(traces.echo_times_us, traces.echo, color=TRACE_COLOR, lw=1.5, label="SE")

    if show_parameters:
        ax.text(
            0.99,
            0.98,
            "\n".join(_parameter_lines(traces.parameters)),
            transform=ax.transAxes,
            fontsize=9,
            va="top",
            ha="right",
            color=VALUE_COLOR,
        )
    return ax.figure
