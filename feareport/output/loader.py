"""Pull history and volume values out of solver state into records."""

from __future__ import annotations

from typing import Iterator, Optional

import numpy as np

from ..core.config import AnalysisConfig, IterationCounters
from ..core.record import HistoryRecord, RecordSnapshot, VolumeRecord
from .catalog import build_history_catalog, build_volume_catalog, history_residual_ids


def log_residual(value) -> np.float64:
    """Base-10 log of a residual; zero gives -inf and negatives give nan."""

    with np.errstate(divide="ignore", invalid="ignore"):
        return np.log10(np.float64(value))


def load_history(
    config: AnalysisConfig,
    state,
    counters: IterationCounters,
    record: Optional[HistoryRecord] = None,
) -> HistoryRecord:
    if record is None:
        record = HistoryRecord(build_history_catalog(config))
    axes = config.axes

    record.set("TIME_ITER", counters.time_iter)
    record.set("INNER_ITER", counters.inner_iter)
    record.set("OUTER_ITER", counters.outer_iter)

    # Linear: RMS of the displacement residual per axis.
    # Nonlinear: displacement, residual and energy tolerances.
    residual = state.rms_residual if config.linear else state.fem_residual
    for comp, fid in enumerate(history_residual_ids(config)):
        record.set(fid, log_residual(residual(comp)))

    if config.multizone:
        for comp, axis in enumerate(axes):
            record.set(f"BGS_DISP_{axis}", log_residual(state.bgs_residual(comp)))

    record.set("VMS", state.total_von_mises)
    record.set("LOAD_INCREMENT", state.load_increment)
    record.set("LOAD_RAMP", state.force_coeff)

    record.require_complete()
    return record


def load_volume_point(
    config: AnalysisConfig,
    state,
    point: int,
    record: Optional[VolumeRecord] = None,
) -> VolumeRecord:
    if record is None:
        record = VolumeRecord(build_volume_catalog(config), point)
    axes = config.axes

    for comp, axis in enumerate(axes):
        record.set(f"COORD-{axis}", state.coord(point, comp))
    for comp, axis in enumerate(axes):
        record.set(f"DISPLACEMENT-{axis}", state.solution(point, comp))

    if config.dynamic:
        for comp, axis in enumerate(axes):
            record.set(f"VELOCITY-{axis}", state.velocity(point, comp))
        for comp, axis in enumerate(axes):
            record.set(f"ACCELERATION-{axis}", state.acceleration(point, comp))

    stress = state.stress(point)
    record.set("STRESS-XX", stress[0])
    record.set("STRESS-YY", stress[1])
    record.set("STRESS-XY", stress[2])
    if config.spatial_dim == 3:
        record.set("STRESS-ZZ", stress[3])
        record.set("STRESS-XZ", stress[4])
        record.set("STRESS-YZ", stress[5])
    record.set("VON_MISES_STRESS", state.von_mises_stress(point))

    record.require_complete()
    return record


def iter_volume(config: AnalysisConfig, state, catalog=None) -> Iterator[RecordSnapshot]:
    """Yield one snapshot per mesh point; each point gets a fresh record."""

    if catalog is None:
        catalog = build_volume_catalog(config)
    for point in range(state.npoints):
        yield load_volume_point(config, state, point, VolumeRecord(catalog, point)).snapshot()


def load_volume(config: AnalysisConfig, state, field_ids=None, catalog=None) -> np.ndarray:
    """Volume values as an ``(npoints, nfields)`` array in catalog order."""

    if catalog is None:
        catalog = build_volume_catalog(config)
    ids = catalog.ids() if field_ids is None else tuple(field_ids)
    table = np.empty((state.npoints, len(ids)), dtype=float)
    for snap in iter_volume(config, state, catalog):
        table[snap.index, :] = snap.row(ids)
    return table
