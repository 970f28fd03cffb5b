"""Solver-side collaborators of the reporting layer."""

from .state import StructuralState

__all__ = ["StructuralState"]
