from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .constants import ECHO_TIME_US, NUM_SPINS, TRACE_END_US, TRACE_STEP_US
from .params import DEFAULT_PARAMETERS, SimulationParameters


def _read_text_strip_bom(p: Path) -> str:
    return p.read_text(encoding="utf-8-sig")


def load_yaml(p: Path) -> Dict[str, Any]:
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p.resolve()}")
    return yaml.safe_load(_read_text_strip_bom(p)) or {}


def resolve_path(maybe_path: Any, base_dir: Path) -> Optional[Path]:
    if maybe_path is None:
        return None
    s = str(maybe_path).strip()
    if not s:
        return None
    p = Path(s)
    return p if p.is_absolute() else (Path(base_dir) / p)


@dataclass
class RunConfig:
    parameters: SimulationParameters = DEFAULT_PARAMETERS
    echo_time_us: float = ECHO_TIME_US
    step_us: float = TRACE_STEP_US
    t_end_us: float = TRACE_END_US
    num_spins: int = NUM_SPINS
    rng_seed: Optional[int] = None
    interactive: bool = False
    show: bool = True
    out_png: Optional[Path] = None
    extra: Dict[str, Any] = field(default_factory=dict)


def run_config_from_dict(cfg: Dict[str, Any], base_dir: Path = Path(".")) -> RunConfig:
    """
    Layout:
      parameters: {drive_frequency, pulse1_duration, ...}   # partial is fine
      sim:  {echo_time_us, step_us, t_end_us, num_spins, rng_seed}
      plot: {interactive, show, out_png}
    """
    params_cfg = cfg.get("parameters", {}) or {}
    sim_cfg = cfg.get("sim", {}) or {}
    plot_cfg = cfg.get("plot", {}) or {}

    seed = sim_cfg.get("rng_seed", None)
    return RunConfig(
        parameters=SimulationParameters.from_mapping(params_cfg),
        echo_time_us=float(sim_cfg.get("echo_time_us", ECHO_TIME_US)),
        step_us=float(sim_cfg.get("step_us", TRACE_STEP_US)),
        t_end_us=float(sim_cfg.get("t_end_us", TRACE_END_US)),
        num_spins=int(sim_cfg.get("num_spins", NUM_SPINS)),
        rng_seed=None if seed is None else int(seed),
        interactive=bool(plot_cfg.get("interactive", False)),
        show=bool(plot_cfg.get("show", True)),
        out_png=resolve_path(plot_cfg.get("out_png"), base_dir),
        extra={k: v for k, v in cfg.items() if k not in ("parameters", "sim", "plot")},
    )


def load_run_config(path, base_dir: Optional[Path] = None) -> RunConfig:
    path = Path(path)
    return run_config_from_dict(load_yaml(path), base_dir=path.parent if base_dir is None else base_dir)
