import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from nmr_echo_sim import DEFAULT_PARAMETERS, build_instance


@pytest.fixture
def default_instance():
    return build_instance(DEFAULT_PARAMETERS, rng=np.random.default_rng(20240401))
