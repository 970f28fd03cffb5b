"""Read-only view of structural solver state consumed by the loader."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np


def _as_array(values, ndim: int, name: str) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if arr.ndim != ndim:
        raise ValueError(f"{name} expects a {ndim}-D array, got shape {arr.shape}")
    return arr


@dataclass
class StructuralState:
    """Snapshot of an FEA solver at the end of an iteration.

    Residual arrays are indexed by component; point arrays have shape
    ``(npoints, ndim)`` (stress: ``(npoints, 3)`` in 2-D, ``(npoints, 6)`` in
    3-D ordered xx, yy, xy, zz, xz, yz). The loader only calls the accessor
    methods, so any object exposing them can stand in for this class.
    """

    coords: np.ndarray
    displacement: np.ndarray
    stresses: np.ndarray
    von_mises: np.ndarray
    res_rms: np.ndarray = field(default_factory=lambda: np.ones(3))
    res_fem: np.ndarray = field(default_factory=lambda: np.ones(3))
    res_bgs: np.ndarray = field(default_factory=lambda: np.ones(3))
    total_von_mises: float = 0.0
    load_increment: float = 1.0
    force_coeff: float = 1.0
    velocities: Optional[np.ndarray] = None
    accelerations: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        self.coords = _as_array(self.coords, 2, "coords")
        npoints = self.coords.shape[0]
        self.displacement = _as_array(self.displacement, 2, "displacement")
        self.stresses = _as_array(self.stresses, 2, "stresses")
        self.von_mises = _as_array(self.von_mises, 1, "von_mises")
        for name in ("displacement", "stresses", "von_mises"):
            if getattr(self, name).shape[0] != npoints:
                raise ValueError(
                    f"{name} has {getattr(self, name).shape[0]} points, expected {npoints}"
                )
        self.res_rms = _as_array(self.res_rms, 1, "res_rms")
        self.res_fem = _as_array(self.res_fem, 1, "res_fem")
        self.res_bgs = _as_array(self.res_bgs, 1, "res_bgs")
        if self.velocities is None:
            self.velocities = np.zeros_like(self.displacement)
        if self.accelerations is None:
            self.accelerations = np.zeros_like(self.displacement)

    @property
    def npoints(self) -> int:
        return int(self.coords.shape[0])

    def rms_residual(self, comp: int) -> float:
        return self.res_rms[comp]

    def fem_residual(self, comp: int) -> float:
        return self.res_fem[comp]

    def bgs_residual(self, comp: int) -> float:
        return self.res_bgs[comp]

    def coord(self, point: int, comp: int) -> float:
        return self.coords[point, comp]

    def solution(self, point: int, comp: int) -> float:
        return self.displacement[point, comp]

    def velocity(self, point: int, comp: int) -> float:
        return self.velocities[point, comp]

    def acceleration(self, point: int, comp: int) -> float:
        return self.accelerations[point, comp]

    def stress(self, point: int) -> np.ndarray:
        return self.stresses[point]

    def von_mises_stress(self, point: int) -> float:
        return self.von_mises[point]
