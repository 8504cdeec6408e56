import numpy as np
import pytest

from nmr_echo_sim import DEFAULT_PARAMETERS, Mode, build_instance, sample_traces
from nmr_echo_sim.traces import PulseShape, time_grid


def test_time_grid_is_half_open():
    g = time_grid(4.5, 30.0, 1.0 / 3.0)
    assert g[0] == 4.5
    assert g[-1] < 30.0
    assert len(g) == 77
    np.testing.assert_allclose(np.diff(g), 1.0 / 3.0)
    assert time_grid(30.0, 30.0).size == 0
    assert time_grid(31.0, 30.0).size == 0


def test_default_windows(default_instance):
    tr = sample_traces(default_instance)
    assert tr.fid_times_us[0] == 4.5
    assert tr.fid_times_us[-1] < 30.0
    assert tr.echo_times_us[0] == pytest.approx(39.0)
    assert tr.echo_times_us[-1] < 70.0
    np.testing.assert_array_equal(tr.fid, default_instance.signal_trace(tr.fid_times_us, Mode.FID, 30.0))
    np.testing.assert_array_equal(tr.echo, default_instance.signal_trace(tr.echo_times_us, Mode.ECHO, 30.0))


def test_pulses(default_instance):
    tr = sample_traces(default_instance, echo_time_us=25.0)
    h = default_instance.pulse_amplitude_for_display()
    assert tr.pulses == [PulseShape(0.0, 4.5, h), PulseShape(25.0, 9.0, h)]
    x, y = tr.pulses[1].outline()
    np.testing.assert_allclose(x, [25.0, 25.0, 34.0, 34.0])
    np.testing.assert_allclose(y, [0.0, h, h, 0.0])


def test_long_first_pulse_empties_windows():
    inst = build_instance(DEFAULT_PARAMETERS.replace(pulse1_duration=10.0), rng=0)
    tr = sample_traces(inst, echo_time_us=8.0, t_end_us=20.0)
    assert tr.fid.size == 0
    assert tr.echo.size == 0
    assert tr.summary() == {"fid": None, "echo": None}


def test_to_frame_long_format(default_instance):
    tr = sample_traces(default_instance)
    df = tr.to_frame()
    assert list(df.columns) == ["time_us", "signal", "trace"]
    assert len(df) == len(tr.fid) + len(tr.echo)
    assert set(df["trace"]) == {"fid", "echo"}
    np.testing.assert_array_equal(df.loc[df["trace"] == "echo", "signal"].to_numpy(), tr.echo)


def test_summary_reports_fid_peak_at_start(default_instance):
    s = sample_traces(default_instance).summary()
    assert s["fid"]["peak_time_us"] == 4.5
    assert s["echo"]["n"] > 0
