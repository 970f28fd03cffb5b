"""Field catalogs for structural output.

Both builders are pure functions of an :class:`AnalysisConfig`: the same
configuration always yields the same fields in the same order, and nothing
is added or removed once a run starts.
"""

from __future__ import annotations

from typing import List

from ..core.config import AnalysisConfig, GeometryMode
from ..core.errors import ConfigurationError
from ..core.fields import FieldCatalog, FieldDescriptor, FieldKind, FormatClass

INTEGER = FormatClass.INTEGER
FIXED = FormatClass.FIXED
SCIENTIFIC = FormatClass.SCIENTIFIC
RESIDUAL = FieldKind.RESIDUAL

# Nonlinear solves report convergence of displacement (U), residual (R) and
# energy (E) tolerances instead of per-axis displacement residuals.
TOLERANCE_RESIDUALS = ("RMS_UTOL", "RMS_RTOL", "RMS_ETOL")

RESIDUAL_LABELS = {
    "RMS_UTOL": "rms[U]",
    "RMS_RTOL": "rms[R]",
    "RMS_ETOL": "rms[E]",
    "RMS_DISP_X": "rms[DispX]",
    "RMS_DISP_Y": "rms[DispY]",
    "RMS_DISP_Z": "rms[DispZ]",
}

STRESS_IN_PLANE = (("STRESS-XX", "Sxx"), ("STRESS-YY", "Syy"), ("STRESS-XY", "Sxy"))
STRESS_OUT_OF_PLANE = (("STRESS-ZZ", "Szz"), ("STRESS-XZ", "Sxz"), ("STRESS-YZ", "Syz"))


def _validate(config: AnalysisConfig) -> None:
    if not isinstance(config.geometry_mode, GeometryMode):
        raise ConfigurationError(f"Unknown geometric conditions '{config.geometry_mode}'")
    if config.spatial_dim not in (2, 3):
        raise ConfigurationError(f"Spatial dimension must be 2 or 3, got {config.spatial_dim}")


def history_residual_ids(config: AnalysisConfig) -> List[str]:
    """RMS residual fields active for ``config``, in catalog order."""

    if config.geometry_mode is GeometryMode.SMALL_DEFORMATIONS:
        return [f"RMS_DISP_{axis}" for axis in config.axes]
    return list(TOLERANCE_RESIDUALS[: config.spatial_dim])


def build_history_catalog(config: AnalysisConfig) -> FieldCatalog:
    _validate(config)
    fields = [
        FieldDescriptor("TIME_ITER", "Time_Iter", INTEGER, "ITER"),
        FieldDescriptor("OUTER_ITER", "Outer_Iter", INTEGER, "ITER"),
        FieldDescriptor("INNER_ITER", "Inner_Iter", INTEGER, "ITER"),
    ]

    for fid in history_residual_ids(config):
        fields.append(FieldDescriptor(fid, RESIDUAL_LABELS[fid], FIXED, "RMS_RES", RESIDUAL))

    if config.multizone:
        for axis in config.axes:
            fields.append(
                FieldDescriptor(f"BGS_DISP_{axis}", f"bgs[Disp{axis}]", FIXED, "BGS_RES", RESIDUAL)
            )

    fields.extend(
        [
            FieldDescriptor("VMS", "VonMises", SCIENTIFIC, "VMS"),
            FieldDescriptor("LOAD_INCREMENT", "Load_Increment", FIXED, "LOAD_INCREMENT"),
            FieldDescriptor("LOAD_RAMP", "Load_Ramp", FIXED, "LOAD_RAMP"),
        ]
    )
    return FieldCatalog("history", fields)


def _per_axis(config: AnalysisConfig, prefix: str, label: str, group: str) -> List[FieldDescriptor]:
    return [
        FieldDescriptor(f"{prefix}-{axis}", f"{label}{axis.lower()}", FIXED, group)
        for axis in config.axes
    ]


def build_volume_catalog(config: AnalysisConfig) -> FieldCatalog:
    _validate(config)
    fields = [
        FieldDescriptor(f"COORD-{axis}", axis.lower(), FIXED, "COORDINATES")
        for axis in config.axes
    ]
    fields += _per_axis(config, "DISPLACEMENT", "Displacement_", "SOLUTION")
    if config.dynamic:
        fields += _per_axis(config, "VELOCITY", "Velocity_", "VELOCITY")
        fields += _per_axis(config, "ACCELERATION", "Acceleration_", "ACCELERATION")

    components = STRESS_IN_PLANE + (STRESS_OUT_OF_PLANE if config.spatial_dim == 3 else ())
    fields += [FieldDescriptor(fid, label, FIXED, "STRESS") for fid, label in components]
    fields.append(FieldDescriptor("VON_MISES_STRESS", "Von_Mises_Stress", FIXED, "STRESS"))
    return FieldCatalog("volume", fields)
