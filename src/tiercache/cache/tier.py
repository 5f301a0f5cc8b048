from __future__ import annotations

import collections
import enum
from typing import Any, Hashable, List, NamedTuple, Optional, Tuple, Union

from .errors import ConfigurationError

_MISSING = object()


class EvictionPolicy(str, enum.Enum):
    LRU = "LRU"
    FIFO = "FIFO"

    @classmethod
    def parse(cls, value: Union["EvictionPolicy", str]) -> "EvictionPolicy":
        if isinstance(value, cls):
            return value
        name = str(value).strip().upper()
        try:
            return cls(name)
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ConfigurationError(f"Unknown eviction policy {value!r}; expected one of: {allowed}") from None


class Evicted(NamedTuple):
    key: Hashable
    value: Any


class Tier:
    """
    Bounded key-value store with a single eviction policy.

    The OrderedDict keeps both the entries and their eviction order:
    the first key is always the next one to go.
    - LRU: reads and writes move a key to the back.
    - FIFO: only writes move a key to the back; reads never reorder.
    """

    def __init__(self, capacity: int, policy: Union[EvictionPolicy, str] = EvictionPolicy.LRU):
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise ConfigurationError(f"Tier capacity must be an integer, got {capacity!r}")
        if capacity <= 0:
            raise ConfigurationError(f"Tier capacity must be positive, got {capacity}")
        self._cap = capacity
        self._policy = EvictionPolicy.parse(policy)
        self._store: "collections.OrderedDict[Hashable, Any]" = collections.OrderedDict()

    @property
    def capacity(self) -> int:
        return self._cap

    @property
    def policy(self) -> EvictionPolicy:
        return self._policy

    @property
    def is_full(self) -> bool:
        return len(self._store) >= self._cap

    def get(self, key: Hashable, default: Any = None) -> Any:
        val = self._store.get(key, _MISSING)
        if val is _MISSING:
            return default
        if self._policy is EvictionPolicy.LRU:
            self._store.move_to_end(key)
        return val

    def peek(self, key: Hashable, default: Any = None) -> Any:
        return self._store.get(key, default)

    def put(self, key: Hashable, value: Any) -> Optional[Evicted]:
        """
        Insert or update `key`. Returns the displaced entry when a new key
        arrives at a full tier, otherwise None.
        """
        evicted: Optional[Evicted] = None
        if key in self._store:
            self._store.move_to_end(key)
        elif len(self._store) >= self._cap:
            evicted = Evicted(*self._store.popitem(last=False))
        self._store[key] = value
        return evicted

    def force_remove(self, key: Hashable) -> None:
        self._store.pop(key, None)

    def keys(self) -> List[Hashable]:
        return list(self._store.keys())

    def items(self) -> List[Tuple[Hashable, Any]]:
        return list(self._store.items())

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"Tier(capacity={self._cap}, policy={self._policy.value}, size={len(self._store)})"
