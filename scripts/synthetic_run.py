"""Drive the elasticity output with a synthetic, converging solver.

Usage:
    python scripts/synthetic_run.py \
        --config tests/cases/beam3d/report.yaml --steps 3 --inner 6

Residuals decay geometrically over the inner iterations of each step so the
screen table, history file and volume file can be inspected without a real
structural solver.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from feareport import IterationCounters, ReportingConfig, StructuralState, make_output


def synthetic_state(ndim: int, npoints: int, inner: int, rng) -> StructuralState:
    decay = 10.0 ** (-(inner + 1))
    nstress = 3 if ndim == 2 else 6
    stresses = rng.normal(0.0, 1e5, (npoints, nstress))
    return StructuralState(
        coords=rng.uniform(0.0, 1.0, (npoints, ndim)),
        displacement=rng.normal(0.0, 1e-3, (npoints, ndim)),
        velocities=rng.normal(0.0, 1e-2, (npoints, ndim)),
        accelerations=rng.normal(0.0, 1e-1, (npoints, ndim)),
        stresses=stresses,
        von_mises=np.abs(stresses).max(axis=1),
        res_rms=np.full(3, decay),
        res_fem=np.full(3, decay * 1e-2),
        res_bgs=np.full(3, decay * 10.0),
        total_von_mises=float(np.abs(stresses).max()),
        load_increment=1.0,
        force_coeff=1.0,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Exercise structural output reporting")
    parser.add_argument("--config", type=Path, default=ROOT / "tests/cases/beam3d/report.yaml")
    parser.add_argument("--steps", type=int, default=2, help="Number of time/load steps")
    parser.add_argument("--inner", type=int, default=5, help="Inner iterations per step")
    parser.add_argument("--points", type=int, default=8, help="Mesh points in the volume file")
    parser.add_argument("--output-dir", type=Path, default=Path("tests/artifacts/synthetic"))
    args = parser.parse_args()

    config = ReportingConfig.from_yaml(args.config)
    output = make_output("elasticity", config.analysis, config.output, output_dir=args.output_dir)
    rng = np.random.default_rng(0)

    state = None
    ext_iter = 0
    for step in range(args.steps):
        for inner in range(args.inner):
            state = synthetic_state(config.analysis.spatial_dim, args.points, inner, rng)
            counters = IterationCounters(time_iter=step, outer_iter=0, inner_iter=inner, ext_iter=ext_iter)
            output.postprocess_iteration(state, counters)
            ext_iter += 1

    if state is not None:
        table = output.write_volume(state)
        print(f"\nWrote {table.shape[0]} points x {table.shape[1]} fields to {args.output_dir}")
    output.close()


if __name__ == "__main__":
    main()
