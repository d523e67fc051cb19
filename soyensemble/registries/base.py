from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, Iterable, Optional, TypeVar

K = TypeVar("K")
V = TypeVar("V")


@dataclass
class Registry(Generic[K, V]):
    """Key -> factory mapping filled by decorator at import time.

        BUILDERS = Registry[type, Callable[..., ModelBuilder]](_name="builders")

        @BUILDERS.register(SVRRegressorConfig)
        def make_svr(cfg, seed): ...
    """

    _items: Dict[K, V] = field(default_factory=dict)
    _name: str = "registry"

    def register(self, key: K) -> Callable[[V], V]:
        def deco(value: V) -> V:
            if key in self._items and self._items[key] is not value:
                raise KeyError(f"{self._name}: {key!r} is already registered")
            self._items[key] = value
            return value

        return deco

    def try_get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        return self._items.get(key, default)

    def keys(self) -> Iterable[K]:
        return self._items.keys()
