import itertools
import pathlib
import sys

import numpy as np

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from feareport.core.config import AnalysisConfig, GeometryMode, TimeMode
from feareport.solver.state import StructuralState


ALL_CONFIGS = [
    AnalysisConfig(geometry_mode=geo, time_mode=time, spatial_dim=dim, multizone=mz)
    for geo, time, dim, mz in itertools.product(
        list(GeometryMode), list(TimeMode), (2, 3), (False, True)
    )
]


def config_id(config: AnalysisConfig) -> str:
    return "-".join(
        [
            config.geometry_mode.value,
            config.time_mode.value,
            f"{config.spatial_dim}d",
            "mz" if config.multizone else "sz",
        ]
    )


def make_state(ndim: int = 2, npoints: int = 4, **overrides) -> StructuralState:
    rng = np.random.default_rng(1234)
    nstress = 3 if ndim == 2 else 6
    data = dict(
        coords=rng.uniform(0.0, 1.0, (npoints, ndim)),
        displacement=rng.normal(0.0, 1e-3, (npoints, ndim)),
        velocities=rng.normal(0.0, 1e-2, (npoints, ndim)),
        accelerations=rng.normal(0.0, 1e-1, (npoints, ndim)),
        stresses=rng.normal(0.0, 1e5, (npoints, nstress)),
        von_mises=rng.uniform(0.0, 2e5, npoints),
        res_rms=np.array([1e-3, 1e-4, 1e-5]),
        res_fem=np.array([1e-6, 1e-7, 1e-8]),
        res_bgs=np.array([1e-2, 1e-2, 1e-2]),
        total_von_mises=2.5e5,
        load_increment=0.25,
        force_coeff=0.5,
    )
    data.update(overrides)
    return StructuralState(**data)
