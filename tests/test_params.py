import dataclasses

import numpy as np
import pytest

from nmr_echo_sim import DEFAULT_PARAMETERS, InvalidParameter, SimulationParameters
from nmr_echo_sim.constants import B_1, OMEGA_0


def test_default_derived_quantities():
    p = DEFAULT_PARAMETERS
    assert p.theta1 == pytest.approx(np.pi / 2)
    assert p.theta2 == pytest.approx(np.pi)
    assert p.resonance_detuning == 0.0
    assert p.pulse_field == B_1
    assert OMEGA_0 == 10.0


def test_detuning_follows_drive_frequency():
    p = DEFAULT_PARAMETERS.replace(drive_frequency=11.5)
    assert p.resonance_detuning == pytest.approx(1.5)
    assert p.theta1 == DEFAULT_PARAMETERS.theta1


def test_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_PARAMETERS.true_decay = 3.0


def test_from_mapping_fills_missing_from_defaults():
    p = SimulationParameters.from_mapping({"true_decay": 250})
    assert p.true_decay == 250.0
    assert p.pulse1_duration == DEFAULT_PARAMETERS.pulse1_duration


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(InvalidParameter):
        SimulationParameters.from_mapping({"T1": 10.0})


def test_clipped_to_slider_bounds():
    p = DEFAULT_PARAMETERS.replace(drive_frequency=20.0, inhomogeneous_decay=0.0, true_decay=1000.0)
    c = p.clipped()
    assert c.drive_frequency == 12.5
    assert c.inhomogeneous_decay == 1.0
    assert c.true_decay == 500.0
    assert c.pulse2_duration == p.pulse2_duration


def test_validate_only_checks_decay_times():
    DEFAULT_PARAMETERS.replace(pulse1_duration=0.0, drive_frequency=-3.0).validate()
    with pytest.raises(InvalidParameter):
        DEFAULT_PARAMETERS.replace(true_decay=0.0).validate()
    with pytest.raises(InvalidParameter):
        DEFAULT_PARAMETERS.replace(inhomogeneous_decay=-2.0).validate()


def test_as_dict_round_trip():
    d = DEFAULT_PARAMETERS.as_dict()
    assert set(d) == set(SimulationParameters.input_names())
    assert SimulationParameters(**d) == DEFAULT_PARAMETERS
