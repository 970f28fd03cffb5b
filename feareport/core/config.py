"""Analysis and output configuration for structural reporting."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from ..utils.io import read_yaml_file
from .errors import ConfigurationError


class GeometryMode(str, Enum):
    SMALL_DEFORMATIONS = "small_deformations"
    LARGE_DEFORMATIONS = "large_deformations"


class TimeMode(str, Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"


_GEOMETRY_ALIASES = {
    "small_deformations": GeometryMode.SMALL_DEFORMATIONS,
    "small": GeometryMode.SMALL_DEFORMATIONS,
    "linear": GeometryMode.SMALL_DEFORMATIONS,
    "large_deformations": GeometryMode.LARGE_DEFORMATIONS,
    "large": GeometryMode.LARGE_DEFORMATIONS,
    "nonlinear": GeometryMode.LARGE_DEFORMATIONS,
}


def _coerce_geometry(value) -> GeometryMode:
    if isinstance(value, GeometryMode):
        return value
    mode = _GEOMETRY_ALIASES.get(str(value).strip().lower())
    if mode is None:
        raise ConfigurationError(f"Unknown geometric conditions '{value}'")
    return mode


def _exact_int(value, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc
    if number != value:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return number


def _coerce_time(value) -> TimeMode:
    if isinstance(value, TimeMode):
        return value
    try:
        return TimeMode(str(value).strip().lower())
    except ValueError as exc:
        raise ConfigurationError(f"Unknown time mode '{value}'") from exc


@dataclass(frozen=True)
class AnalysisConfig:
    """Solver configuration that shapes the field catalogs."""

    geometry_mode: GeometryMode = GeometryMode.SMALL_DEFORMATIONS
    time_mode: TimeMode = TimeMode.STATIC
    spatial_dim: int = 2
    multizone: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "geometry_mode", _coerce_geometry(self.geometry_mode))
        object.__setattr__(self, "time_mode", _coerce_time(self.time_mode))
        object.__setattr__(self, "spatial_dim", _exact_int(self.spatial_dim, "nDim"))
        if self.spatial_dim not in (2, 3):
            raise ConfigurationError(
                f"Spatial dimension must be 2 or 3, got {self.spatial_dim}"
            )
        object.__setattr__(self, "multizone", bool(self.multizone))

    @property
    def linear(self) -> bool:
        return self.geometry_mode is GeometryMode.SMALL_DEFORMATIONS

    @property
    def nonlinear(self) -> bool:
        return self.geometry_mode is GeometryMode.LARGE_DEFORMATIONS

    @property
    def dynamic(self) -> bool:
        return self.time_mode is TimeMode.DYNAMIC

    @property
    def axes(self) -> Tuple[str, ...]:
        return ("X", "Y", "Z")[: self.spatial_dim]

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AnalysisConfig":
        data = data or {}
        geometry = data.get("geometricConditions", "small_deformations")
        # A time-domain run is dynamic whatever the analysis type says.
        if bool(data.get("timeDomain", False)):
            time_mode = TimeMode.DYNAMIC
        else:
            time_mode = data.get("dynamicAnalysis", "static")
        return cls(
            geometry_mode=geometry,
            time_mode=time_mode,
            spatial_dim=data.get("nDim", 2),
            multizone=bool(data.get("multizone", False)),
        )


@dataclass(frozen=True)
class OutputSettings:
    """Cadence, requested fields and file names for output."""

    write_frequency: int = 1
    write_zone_convergence: bool = False
    history_fields: Tuple[str, ...] = ()
    screen_fields: Tuple[str, ...] = ()
    volume_fields: Tuple[str, ...] = ()
    convergence_field: Optional[str] = None
    zone: int = 0
    history_filename: str = "history.csv"
    volume_filename: str = "flow"
    surface_filename: str = "surface_flow"
    restart_filename: str = "restart_flow.dat"

    def __post_init__(self) -> None:
        object.__setattr__(self, "write_frequency", _exact_int(self.write_frequency, "writeFrequency"))
        if self.write_frequency < 1:
            raise ConfigurationError(
                f"writeFrequency must be a positive integer, got {self.write_frequency}"
            )
        object.__setattr__(self, "zone", _exact_int(self.zone, "zone"))
        for name in ("history_fields", "screen_fields", "volume_fields"):
            object.__setattr__(self, name, tuple(str(v) for v in getattr(self, name)))

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "OutputSettings":
        data = data or {}
        defaults = cls()
        return cls(
            write_frequency=data.get("writeFrequency", defaults.write_frequency),
            write_zone_convergence=bool(data.get("writeZoneConvergence", False)),
            history_fields=tuple(data.get("historyFields", ()) or ()),
            screen_fields=tuple(data.get("screenFields", ()) or ()),
            volume_fields=tuple(data.get("volumeFields", ()) or ()),
            convergence_field=data.get("convergenceField"),
            zone=data.get("zone", 0),
            history_filename=data.get("historyFilename", defaults.history_filename),
            volume_filename=data.get("volumeFilename", defaults.volume_filename),
            surface_filename=data.get("surfaceFilename", defaults.surface_filename),
            restart_filename=data.get("restartFilename", defaults.restart_filename),
        )


@dataclass(frozen=True)
class ReportingConfig:
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    output: OutputSettings = field(default_factory=OutputSettings)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ReportingConfig":
        data = data or {}
        return cls(
            analysis=AnalysisConfig.from_dict(data.get("analysis")),
            output=OutputSettings.from_dict(data.get("output")),
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ReportingConfig":
        config_path = Path(path)
        if config_path.suffix.lower() not in (".yaml", ".yml"):
            raise ConfigurationError(f"Expected a YAML configuration file, got {config_path.name}")
        return cls.from_dict(read_yaml_file(config_path))


@dataclass(frozen=True)
class IterationCounters:
    time_iter: int = 0
    outer_iter: int = 0
    inner_iter: int = 0
    ext_iter: Optional[int] = None

    def __post_init__(self) -> None:
        if self.ext_iter is None:
            object.__setattr__(self, "ext_iter", self.time_iter)
