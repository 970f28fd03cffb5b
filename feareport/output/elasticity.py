"""Output agent for structural (elasticity) solvers."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, TextIO, Tuple

import numpy as np

from ..core.config import AnalysisConfig, IterationCounters, OutputSettings
from ..core.errors import ConfigurationError
from ..core.fields import FieldCatalog
from ..core.record import HistoryRecord, RecordSnapshot, VolumeRecord
from ..utils.io import HistoryFile, write_volume_csv
from ..utils.logging import ScreenTable
from . import gate, loader
from .base import MASTER_NODE, OutputAgent, register_output
from .catalog import build_history_catalog, build_volume_catalog, history_residual_ids
from .gate import WriteDecision


def default_history_fields(config: AnalysisConfig) -> List[str]:
    return ["ITER", "RMS_RES"]


def default_screen_fields(config: AnalysisConfig) -> List[str]:
    fields = []
    if config.dynamic:
        fields.append("TIME_ITER")
    if config.multizone:
        fields.append("OUTER_ITER")
    fields.append("INNER_ITER")
    fields.extend(history_residual_ids(config))
    fields.append("VMS")
    return fields


def default_volume_fields(config: AnalysisConfig) -> List[str]:
    return ["COORDINATES", "SOLUTION", "STRESS"]


@register_output("elasticity")
class ElasticityOutput(OutputAgent):
    def __init__(
        self,
        config: AnalysisConfig,
        settings: Optional[OutputSettings] = None,
        rank: int = MASTER_NODE,
        stream: Optional[TextIO] = None,
        output_dir: str | Path = ".",
    ) -> None:
        super().__init__(config, settings or OutputSettings(), rank)
        settings = self.settings

        self.history_fields = self.history_catalog.select(
            settings.history_fields or default_history_fields(config)
        )
        self.screen_fields = self.history_catalog.select(
            settings.screen_fields or default_screen_fields(config)
        )
        self.volume_fields = self.volume_catalog.select(
            settings.volume_fields or default_volume_fields(config)
        )

        self.multizone_header = f"Zone {settings.zone} (Structure)"
        self.output_dir = Path(output_dir)
        self.volume_filename = settings.volume_filename
        self.surface_filename = settings.surface_filename
        self.restart_filename = settings.restart_filename

        self.convergence_field = settings.convergence_field or (
            "RMS_DISP_X" if config.linear else "RMS_UTOL"
        )
        if self.convergence_field not in self.history_catalog:
            raise ConfigurationError(
                f"Convergence field {self.convergence_field} is not reported by this analysis"
            )

        self.screen = ScreenTable(
            self.screen_fields,
            title=self.multizone_header if config.multizone else None,
            stream=stream,
        )
        self.history_file: Optional[HistoryFile] = None
        if self.is_master:
            self.history_file = HistoryFile(self.output_dir / settings.history_filename)
        self._history_header_written = False

    def build_history_catalog(self) -> FieldCatalog:
        return build_history_catalog(self.config)

    def build_volume_catalog(self) -> FieldCatalog:
        return build_volume_catalog(self.config)

    def load_history(self, state, counters: IterationCounters) -> HistoryRecord:
        return loader.load_history(self.config, state, counters, HistoryRecord(self.history_catalog))

    def load_volume_point(self, state, point: int) -> VolumeRecord:
        return loader.load_volume_point(self.config, state, point, VolumeRecord(self.volume_catalog, point))

    def write_decision(self, counters: IterationCounters) -> WriteDecision:
        return gate.decide(self.config, counters, self.settings)

    def convergence_value(self, snapshot: RecordSnapshot):
        return snapshot[self.convergence_field]

    def postprocess_iteration(self, state, counters: IterationCounters) -> Tuple[RecordSnapshot, WriteDecision]:
        """Load the iteration's history data and emit it where the gate allows.

        Every rank loads; only the master rank prints or writes files.
        """

        snapshot = self.load_history(state, counters).snapshot()
        decision = self.write_decision(counters)
        if not self.is_master:
            return snapshot, decision

        if decision.emit_header:
            self.screen.print_header()
        if decision.emit_row:
            self.screen.print_row(snapshot)
        if decision.emit_history:
            if not self._history_header_written:
                self.history_file.write_header(self.history_fields)
                self._history_header_written = True
            self.history_file.write_row(self.history_fields, snapshot)
        return snapshot, decision

    def write_volume(self, state, path: str | Path | None = None) -> np.ndarray:
        ids = [desc.field_id for desc in self.volume_fields]
        table = loader.load_volume(self.config, state, ids, catalog=self.volume_catalog)
        if self.is_master:
            target = Path(path) if path is not None else self.output_dir / self.volume_filename
            write_volume_csv(target, self.volume_fields, table)
        return table

    def close(self) -> None:
        if self.history_file is not None:
            self.history_file.close()
