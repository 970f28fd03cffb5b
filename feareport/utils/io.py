"""Configuration reading and tabular output files."""

from __future__ import annotations

from pathlib import Path
from typing import IO, Any, Dict, Optional, Sequence

import numpy as np
import yaml


def read_yaml_file(path: str | Path) -> Dict[str, Any]:
    file_path = Path(path)
    with file_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    return data


def _header_line(descriptors: Sequence) -> str:
    return ",".join(f'"{desc.label}"' for desc in descriptors)


class HistoryFile:
    """Comma separated convergence history, one row per iteration.

    The file is opened on the first write so that ranks which never write
    never hold a handle.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._handle: Optional[IO[str]] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _open(self) -> IO[str]:
        if self._closed:
            raise ValueError(f"History file {self.path} is already closed")
        if self._handle is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._handle = self.path.open("w", encoding="utf-8")
        return self._handle

    def write_header(self, descriptors: Sequence) -> None:
        handle = self._open()
        handle.write(_header_line(descriptors) + "\n")

    def write_row(self, descriptors: Sequence, snapshot) -> None:
        handle = self._open()
        handle.write(",".join(desc.format(snapshot[desc.field_id]) for desc in descriptors) + "\n")
        handle.flush()

    def close(self) -> None:
        if self._closed:
            return
        if self._handle is not None:
            self._handle.close()
            self._handle = None
        self._closed = True


def write_volume_csv(path: str | Path, descriptors: Sequence, table: np.ndarray) -> Path:
    file_path = Path(path)
    if file_path.suffix.lower() != ".csv":
        file_path = file_path.with_suffix(".csv")
    file_path.parent.mkdir(parents=True, exist_ok=True)
    np.savetxt(
        file_path,
        np.atleast_2d(table),
        delimiter=",",
        fmt="%.12e",
        header=_header_line(descriptors),
        comments="",
    )
    return file_path
