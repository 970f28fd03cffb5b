"""Core reporting data structures."""

from .config import AnalysisConfig, GeometryMode, IterationCounters, OutputSettings, ReportingConfig, TimeMode
from .errors import ConfigurationError, IncompleteRecordError, ReportingError, UnregisteredFieldError
from .fields import FieldCatalog, FieldDescriptor, FieldKind, FormatClass
from .record import FieldRecord, HistoryRecord, RecordSnapshot, VolumeRecord

__all__ = [
    "AnalysisConfig",
    "GeometryMode",
    "IterationCounters",
    "OutputSettings",
    "ReportingConfig",
    "TimeMode",
    "ConfigurationError",
    "IncompleteRecordError",
    "ReportingError",
    "UnregisteredFieldError",
    "FieldCatalog",
    "FieldDescriptor",
    "FieldKind",
    "FormatClass",
    "FieldRecord",
    "HistoryRecord",
    "RecordSnapshot",
    "VolumeRecord",
]
