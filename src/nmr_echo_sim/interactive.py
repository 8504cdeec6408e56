from __future__ import annotations
from typing import Dict, Optional

import matplotlib.pyplot as plt
from matplotlib.widgets import Button, Slider

from .constants import ECHO_TIME_US, TRACE_END_US, TRACE_STEP_US
from .errors import InvalidParameter
from .params import DEFAULT_PARAMETERS, PARAMETER_BOUNDS, PARAMETER_STEPS, SimulationParameters
from .plotting import BACKGROUND, PARAMETER_LABELS, plot_sequence
from .session import SimulationSession
from .traces import TraceSet, sample_traces


class EchoExplorer:
    """
    Matplotlib window with one slider per parameter and a Reset button.
    Any slider change rebuilds the simulation (fresh ensemble) and redraws.
    """

    def __init__(
        self,
        session: Optional[SimulationSession] = None,
        echo_time_us: float = ECHO_TIME_US,
        step_us: float = TRACE_STEP_US,
        t_end_us: float = TRACE_END_US,
    ):
        self.session = SimulationSession() if session is None else session
        self.echo_time_us = float(echo_time_us)
        self.step_us = float(step_us)
        self.t_end_us = float(t_end_us)
        self._muted = False

        self.fig = plt.figure(figsize=(10, 5))
        self.fig.patch.set_facecolor(BACKGROUND)
        self.ax = self.fig.add_axes([0.08, 0.12, 0.58, 0.82])

        self.sliders: Dict[str, Slider] = {}
        names = SimulationParameters.input_names()
        for i, name in enumerate(names):
            lo, hi = PARAMETER_BOUNDS[name]
            label, unit = PARAMETER_LABELS[name]
            ax_s = self.fig.add_axes([0.76, 0.86 - 0.12 * i, 0.16, 0.04])
            s = Slider(
                ax_s,
                label,
                lo,
                hi,
                valinit=getattr(self.session.parameters, name),
                valstep=PARAMETER_STEPS[name],
                valfmt="%.1f" + unit,
            )
            s.on_changed(self._on_change)
            self.sliders[name] = s

        ax_b = self.fig.add_axes([0.76, 0.86 - 0.12 * len(names), 0.16, 0.06])
        self.reset_button = Button(ax_b, "Reset", color="#444444", hovercolor="#888888")
        self.reset_button.on_clicked(self._on_reset)

        self.traces: TraceSet = self.redraw()

    def slider_parameters(self) -> SimulationParameters:
        return SimulationParameters.from_mapping({k: s.val for k, s in self.sliders.items()})

    def redraw(self) -> TraceSet:
        self.traces = sample_traces(self.session.current, self.echo_time_us, self.step_us, self.t_end_us)
        self.ax.cla()
        plot_sequence(self.traces, ax=self.ax, t_end_us=self.t_end_us)
        self.fig.canvas.draw_idle()
        return self.traces

    def _on_change(self, _val):
        if self._muted:
            return
        try:
            self.session.update(self.slider_parameters())
        except InvalidParameter:
            # session keeps the previous instance
            return
        self.redraw()

    def _on_reset(self, _event=None):
        self._muted = True
        try:
            for name, s in self.sliders.items():
                s.set_val(getattr(DEFAULT_PARAMETERS, name))
        finally:
            self._muted = False
        self.session.reset()
        self.redraw()

    def show(self):
        plt.show()


def launch(**kwargs) -> EchoExplorer:
    app = EchoExplorer(**kwargs)
    app.show()
    return app
