from __future__ import annotations
import logging
from typing import Optional

from .constants import NUM_SPINS
from .errors import InvalidParameter
from .params import DEFAULT_PARAMETERS, SimulationParameters
from .rng import RngLike, make_rng
from .simulator import SimulationInstance, build_instance

logger = logging.getLogger(__name__)


class SimulationSession:
    """
    Owns the current SimulationInstance. Every accepted update replaces it
    wholesale with a fresh ensemble drawn from the session's generator; a
    rejected update leaves it untouched.
    """

    def __init__(
        self,
        parameters: Optional[SimulationParameters] = None,
        rng: RngLike = None,
        num_spins: int = NUM_SPINS,
    ):
        self.rng = make_rng(rng)
        self.num_spins = int(num_spins)
        self.current: SimulationInstance = build_instance(
            DEFAULT_PARAMETERS if parameters is None else parameters, rng=self.rng, num_spins=self.num_spins
        )

    @property
    def parameters(self) -> SimulationParameters:
        return self.current.parameters

    def update(self, parameters: Optional[SimulationParameters] = None, **changes) -> SimulationInstance:
        if parameters is None:
            parameters = self.parameters
        try:
            new = build_instance(parameters.replace(**changes), rng=self.rng, num_spins=self.num_spins)
        except InvalidParameter as e:
            logger.warning("rejected parameter update (%s); keeping %s", e, self.parameters)
            raise
        self.current = new
        return new

    def reset(self) -> SimulationInstance:
        return self.update(DEFAULT_PARAMETERS)
