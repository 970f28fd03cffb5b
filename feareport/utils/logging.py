"""Screen table printing for solver iterations."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, TextIO

COLUMN_WIDTH = 12


@dataclass
class ScreenTable:
    """Fixed-width convergence table printed to the console.

    Every printed row is also kept in ``history`` keyed by field id.
    """

    columns: Sequence[Any]
    title: Optional[str] = None
    stream: Optional[TextIO] = None
    history: List[Dict[str, Any]] = field(default_factory=list)

    def _print(self, text: str) -> None:
        print(text, file=self.stream or sys.stdout, flush=True)

    def _widths(self) -> List[int]:
        return [max(COLUMN_WIDTH, len(desc.label)) for desc in self.columns]

    def _rule(self) -> str:
        return "+" + "-" * (sum(w + 1 for w in self._widths()) - 1) + "+"

    def print_header(self) -> None:
        rule = self._rule()
        if self.title:
            self._print(self.title)
        self._print(rule)
        labels = [desc.label.rjust(width) for desc, width in zip(self.columns, self._widths())]
        self._print("|" + "|".join(labels) + "|")
        self._print(rule)

    def print_row(self, snapshot) -> None:
        entry = {desc.field_id: snapshot[desc.field_id] for desc in self.columns}
        self.history.append(entry)
        cells = [
            desc.format(entry[desc.field_id], width)
            for desc, width in zip(self.columns, self._widths())
        ]
        self._print("|" + "|".join(cells) + "|")
