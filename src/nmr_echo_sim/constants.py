from __future__ import annotations
import numpy as np

# Model units: frequencies in rad/us, times in us.
GAMMA = 10.0
B_0 = 1.0
OMEGA_0 = GAMMA * B_0
NINETY_DEGREE_PULSE_US = 4.5
B_1 = (np.pi / 2) / (GAMMA * NINETY_DEGREE_PULSE_US)

NUM_SPINS = 500

# display scales (pulse height, signal in mV)
PULSE_DISPLAY_GAIN = 1700.0
SIGNAL_GAIN = 5000.0 / np.pi

# time axis of the rendered sequence
ECHO_TIME_US = 30.0
TRACE_STEP_US = 1.0 / 3.0
TRACE_END_US = 70.0
