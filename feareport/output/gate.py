"""Cadence rules for screen headers, screen rows and history file rows.

Every decision is recomputed from its inputs; nothing is remembered between
iterations.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.config import AnalysisConfig, IterationCounters, OutputSettings

# Linear runs repeat the screen header every HEADER_PERIOD written rows.
HEADER_PERIOD = 40


@dataclass(frozen=True)
class WriteDecision:
    emit_header: bool
    emit_row: bool
    emit_history: bool = True


def _zone_gate(config: AnalysisConfig, settings: OutputSettings, flag: bool) -> bool:
    # Multizone runs print per-zone convergence only when asked to.
    if config.multizone:
        return flag and settings.write_zone_convergence
    return flag


def should_emit_header(
    config: AnalysisConfig,
    counters: IterationCounters,
    settings: OutputSettings,
) -> bool:
    if config.nonlinear:
        write_header = counters.inner_iter == 0
    else:
        write_header = counters.ext_iter % (settings.write_frequency * HEADER_PERIOD) == 0
    return _zone_gate(config, settings, write_header)


def should_emit_row(config: AnalysisConfig, settings: OutputSettings) -> bool:
    return _zone_gate(config, settings, True)


def should_write_history_file(config: AnalysisConfig, settings: OutputSettings) -> bool:
    return True


def decide(
    config: AnalysisConfig,
    counters: IterationCounters,
    settings: OutputSettings,
) -> WriteDecision:
    return WriteDecision(
        emit_header=should_emit_header(config, counters, settings),
        emit_row=should_emit_row(config, settings),
        emit_history=should_write_history_file(config, settings),
    )
