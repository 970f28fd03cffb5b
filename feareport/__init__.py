"""Structured history and volume reporting for structural solvers."""

from .core import (
    AnalysisConfig,
    ConfigurationError,
    FieldCatalog,
    FieldDescriptor,
    GeometryMode,
    HistoryRecord,
    IterationCounters,
    OutputSettings,
    ReportingConfig,
    TimeMode,
    UnregisteredFieldError,
    VolumeRecord,
)
from .output import ElasticityOutput, build_history_catalog, build_volume_catalog, make_output
from .solver import StructuralState

__all__ = [
    "AnalysisConfig",
    "ConfigurationError",
    "FieldCatalog",
    "FieldDescriptor",
    "GeometryMode",
    "HistoryRecord",
    "IterationCounters",
    "OutputSettings",
    "ReportingConfig",
    "TimeMode",
    "UnregisteredFieldError",
    "VolumeRecord",
    "ElasticityOutput",
    "build_history_catalog",
    "build_volume_catalog",
    "make_output",
    "StructuralState",
]
