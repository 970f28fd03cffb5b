"""Per-iteration and per-point value stores addressed by field id."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional, Set

from .errors import IncompleteRecordError, UnregisteredFieldError
from .fields import FieldCatalog


class RecordSnapshot(Mapping):
    """Read-only copy of a record handed to output sinks."""

    def __init__(self, catalog: FieldCatalog, values: Dict[str, Any], scope: str, index=None) -> None:
        self.catalog = catalog
        self.scope = scope
        self.index = index
        self._values = dict(values)

    def __getitem__(self, field_id: str) -> Any:
        try:
            return self._values[field_id]
        except KeyError as exc:
            raise UnregisteredFieldError(field_id, self.catalog.namespace) from exc

    def __iter__(self) -> Iterator[str]:
        return iter(self.catalog.ids())

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"RecordSnapshot({self.scope!r}, {self._values!r})"

    def row(self, field_ids=None) -> List[Any]:
        ids = self.catalog.ids() if field_ids is None else field_ids
        return [self[fid] for fid in ids]


class FieldRecord:
    """Mutable mapping from catalog field ids to their latest values.

    History and volume data share this store; they differ only in scope, one
    record per solver iteration or one per mesh point.
    """

    scope = "record"

    def __init__(self, catalog: FieldCatalog, index: Optional[int] = None) -> None:
        self.catalog = catalog
        self.index = index
        self._values: Dict[str, Any] = {fid: 0.0 for fid in catalog.ids()}
        self._written: Set[str] = set()

    def _check(self, field_id: str) -> None:
        if field_id not in self._values:
            raise UnregisteredFieldError(field_id, self.catalog.namespace)

    def set(self, field_id: str, value: Any) -> None:
        self._check(field_id)
        self._values[field_id] = value
        self._written.add(field_id)

    def get(self, field_id: str) -> Any:
        self._check(field_id)
        return self._values[field_id]

    def __getitem__(self, field_id: str) -> Any:
        return self.get(field_id)

    def __setitem__(self, field_id: str, value: Any) -> None:
        self.set(field_id, value)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._values

    def written(self) -> Set[str]:
        return set(self._written)

    def missing(self) -> List[str]:
        return [fid for fid in self.catalog.ids() if fid not in self._written]

    def require_complete(self) -> None:
        absent = self.missing()
        if absent:
            where = self.scope if self.index is None else f"{self.scope} {self.index}"
            raise IncompleteRecordError(
                f"{self.catalog.namespace} fields not loaded for {where}: {', '.join(absent)}"
            )

    def snapshot(self) -> RecordSnapshot:
        return RecordSnapshot(self.catalog, self._values, self.scope, self.index)


class HistoryRecord(FieldRecord):
    scope = "iteration"


class VolumeRecord(FieldRecord):
    scope = "point"

    def __init__(self, catalog: FieldCatalog, point: int) -> None:
        super().__init__(catalog, index=point)

    @property
    def point(self) -> int:
        return self.index
