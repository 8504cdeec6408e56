# __init__.py
from .errors import InvalidParameter
from .params import SimulationParameters, DEFAULT_PARAMETERS, PARAMETER_BOUNDS
from .ensemble import SpinEnsemble
from .signal_model import Mode, SignalModel
from .simulator import SimulationInstance, build_instance
from .session import SimulationSession
from .traces import PulseShape, TraceSet, sample_traces
from .rng import make_rng
from .config import RunConfig, load_run_config

# plotting / interactive are importable but not pulled in here (matplotlib backends)
