"""Name-to-factory registry used to select output agents at runtime."""

from __future__ import annotations

from typing import Any, Callable, Dict, TypeVar

from ..core.errors import ConfigurationError

T = TypeVar("T")


class Registry:
    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._factories: Dict[str, Callable[..., Any]] = {}

    @staticmethod
    def _normalise(name: str) -> str:
        return name.strip().lower()

    def register(self, name: str) -> Callable[[Callable[..., T]], Callable[..., T]]:
        key = self._normalise(name)

        def decorator(factory: Callable[..., T]) -> Callable[..., T]:
            if key in self._factories:
                raise ValueError(f"{self.kind} '{name}' is already registered")
            self._factories[key] = factory
            return factory

        return decorator

    def __contains__(self, name: str) -> bool:
        return self._normalise(name) in self._factories

    def get(self, name: str) -> Callable[..., Any]:
        try:
            return self._factories[self._normalise(name)]
        except KeyError as exc:
            known = ", ".join(sorted(self._factories)) or "none"
            raise ConfigurationError(f"Unknown {self.kind} '{name}' (known: {known})") from exc

    def create(self, name: str, *args: Any, **kwargs: Any) -> Any:
        return self.get(name)(*args, **kwargs)
