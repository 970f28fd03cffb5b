"""Exceptions raised by the reporting layer."""

from __future__ import annotations


class ReportingError(Exception):
    """Base class for reporting failures."""


class ConfigurationError(ReportingError, ValueError):
    """Analysis or output configuration cannot produce a catalog."""


class UnregisteredFieldError(ReportingError, KeyError):
    """A field id was used that the active catalog never declared."""

    def __init__(self, field_id: str, namespace: str = "output") -> None:
        super().__init__(field_id)
        self.field_id = field_id
        self.namespace = namespace

    def __str__(self) -> str:
        return f"Field '{self.field_id}' is not registered in the {self.namespace} catalog"


class IncompleteRecordError(ReportingError, RuntimeError):
    """The loader left catalog fields unwritten."""
