from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt

from nmr_echo_sim import SimulationSession, load_run_config, sample_traces
from nmr_echo_sim.plotting import format_parameter_value, plot_sequence


def main(cfg_path: Optional[Path] = None):
    repo_root = Path(__file__).resolve().parents[1]  # repo/
    if cfg_path is None:
        cfg_path = repo_root / "configs" / "default.yaml"
    cfg = load_run_config(cfg_path, base_dir=repo_root)

    session = SimulationSession(cfg.parameters, rng=cfg.rng_seed, num_spins=cfg.num_spins)

    if cfg.interactive:
        from nmr_echo_sim.interactive import launch

        return launch(session=session, echo_time_us=cfg.echo_time_us, step_us=cfg.step_us, t_end_us=cfg.t_end_us)

    p = session.parameters
    print(
        f"omega_1={format_parameter_value(p.drive_frequency, ' MHz')}  "
        f"theta1={p.theta1:.3f} rad  theta2={p.theta2:.3f} rad  "
        f"T2*={format_parameter_value(p.inhomogeneous_decay, ' us')}  "
        f"T2={format_parameter_value(p.true_decay, ' us')}"
    )

    traces = sample_traces(session.current, cfg.echo_time_us, cfg.step_us, cfg.t_end_us)
    for name, s in traces.summary().items():
        if s is None:
            print(f"{name}: empty window")
        else:
            print(f"{name}: {s['n']} points, peak {s['peak_signal']:.2f} mV at {s['peak_time_us']:.2f} us")

    fig = plot_sequence(traces, t_end_us=cfg.t_end_us, show_parameters=True)
    if cfg.out_png is not None:
        cfg.out_png.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(cfg.out_png, dpi=200, bbox_inches="tight")
        print(f"Saved plot: {cfg.out_png.resolve()}")
    if cfg.show:
        plt.show()
    return traces


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="FID / spin-echo ensemble simulation")
    ap.add_argument("config", nargs="?", type=Path, default=None)
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    main(args.config)
