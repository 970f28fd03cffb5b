"""Output agents, field catalogs, loaders and write gating."""

from .base import MASTER_NODE, OutputAgent, make_output, output_registry, register_output
from .catalog import build_history_catalog, build_volume_catalog
from .gate import WriteDecision, decide, should_emit_header, should_emit_row, should_write_history_file
from .loader import iter_volume, load_history, load_volume, load_volume_point
from .elasticity import ElasticityOutput

__all__ = [
    "MASTER_NODE",
    "OutputAgent",
    "make_output",
    "output_registry",
    "register_output",
    "build_history_catalog",
    "build_volume_catalog",
    "WriteDecision",
    "decide",
    "should_emit_header",
    "should_emit_row",
    "should_write_history_file",
    "iter_volume",
    "load_history",
    "load_volume",
    "load_volume_point",
    "ElasticityOutput",
]
