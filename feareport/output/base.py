"""Base output agent and the registry used to select one per solver."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.config import AnalysisConfig, IterationCounters, OutputSettings
from ..core.fields import FieldCatalog
from ..core.record import HistoryRecord, VolumeRecord
from ..utils.registry import Registry
from .gate import WriteDecision

MASTER_NODE = 0

output_registry = Registry("output")


def register_output(name: str):
    return output_registry.register(name)


def make_output(name: str, config: AnalysisConfig, settings=None, **kwargs):
    return output_registry.create(name, config, settings or OutputSettings(), **kwargs)


class OutputAgent(ABC):
    def __init__(self, config: AnalysisConfig, settings: OutputSettings, rank: int = MASTER_NODE) -> None:
        self.config = config
        self.settings = settings
        self.rank = rank
        self.history_catalog = self.build_history_catalog()
        self.volume_catalog = self.build_volume_catalog()

    @property
    def is_master(self) -> bool:
        return self.rank == MASTER_NODE

    @abstractmethod
    def build_history_catalog(self) -> FieldCatalog:
        """Register every history field reported by this solver."""

    @abstractmethod
    def build_volume_catalog(self) -> FieldCatalog:
        """Register every per-point field reported by this solver."""

    @abstractmethod
    def load_history(self, state, counters: IterationCounters) -> HistoryRecord:
        """Fill a history record from the solver state."""

    @abstractmethod
    def load_volume_point(self, state, point: int) -> VolumeRecord:
        """Fill a volume record for one mesh point."""

    @abstractmethod
    def write_decision(self, counters: IterationCounters) -> WriteDecision:
        """Header, screen row and history file decisions for this iteration."""
