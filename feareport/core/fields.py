"""Named output field descriptors and the ordered catalog holding them."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from .errors import ConfigurationError, UnregisteredFieldError


class FormatClass(str, Enum):
    INTEGER = "integer"
    FIXED = "fixed"
    SCIENTIFIC = "scientific"


class FieldKind(str, Enum):
    VALUE = "value"
    RESIDUAL = "residual"


@dataclass(frozen=True)
class FieldDescriptor:
    """One reportable quantity.

    ``group`` clusters related fields under a single request name, so asking
    for ``RMS_RES`` selects every RMS residual active in the run.
    """

    field_id: str
    label: str
    fmt: FormatClass = FormatClass.FIXED
    group: str = ""
    kind: FieldKind = FieldKind.VALUE

    def column(self) -> Tuple[str, str, FormatClass, str]:
        return (self.field_id, self.label, self.fmt, self.group)

    def format(self, value, width: int = 0) -> str:
        if self.fmt is FormatClass.INTEGER and math.isfinite(value):
            text = f"{int(value)}"
        elif self.fmt is FormatClass.SCIENTIFIC:
            text = f"{value:.4e}"
        else:
            text = f"{value:.6f}"
        return text.rjust(width)


class FieldCatalog:
    """Immutable, ordered set of field descriptors.

    Registration order is column order for every downstream table.
    """

    def __init__(self, namespace: str, descriptors: Iterable[FieldDescriptor]) -> None:
        self.namespace = namespace
        self._descriptors: Tuple[FieldDescriptor, ...] = tuple(descriptors)
        self._index: Dict[str, int] = {}
        for pos, desc in enumerate(self._descriptors):
            if desc.field_id in self._index:
                raise ConfigurationError(
                    f"{namespace} catalog already has field {desc.field_id}"
                )
            self._index[desc.field_id] = pos

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._descriptors)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._index

    def __getitem__(self, field_id: str) -> FieldDescriptor:
        try:
            return self._descriptors[self._index[field_id]]
        except KeyError as exc:
            raise UnregisteredFieldError(field_id, self.namespace) from exc

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldCatalog):
            return NotImplemented
        return self.namespace == other.namespace and self._descriptors == other._descriptors

    def __repr__(self) -> str:
        return f"FieldCatalog({self.namespace!r}, {list(self.ids())!r})"

    def position(self, field_id: str) -> int:
        if field_id not in self._index:
            raise UnregisteredFieldError(field_id, self.namespace)
        return self._index[field_id]

    def ids(self) -> Tuple[str, ...]:
        return tuple(desc.field_id for desc in self._descriptors)

    def labels(self) -> Tuple[str, ...]:
        return tuple(desc.label for desc in self._descriptors)

    def groups(self) -> Tuple[str, ...]:
        seen: List[str] = []
        for desc in self._descriptors:
            if desc.group not in seen:
                seen.append(desc.group)
        return tuple(seen)

    def columns(self) -> List[Tuple[str, str, FormatClass, str]]:
        return [desc.column() for desc in self._descriptors]

    def select(self, requested: Sequence[str]) -> List[FieldDescriptor]:
        """Resolve field ids or group tags to descriptors in catalog order."""

        wanted = set()
        groups = set(self.groups())
        for name in requested:
            if name in self._index:
                wanted.add(name)
            elif name in groups:
                wanted.update(d.field_id for d in self._descriptors if d.group == name)
            else:
                raise ConfigurationError(
                    f"Requested {self.namespace} output '{name}' is neither a field nor a group"
                )
        return [desc for desc in self._descriptors if desc.field_id in wanted]
