from __future__ import annotations

import logging
from typing import Any, Hashable, Iterable, List, Optional, Sequence, Tuple, Union

from .errors import ConfigurationError
from .tier import Evicted, EvictionPolicy, Tier

logger = logging.getLogger(__name__)


class TieredCache:
    """
    Ordered hierarchy of tiers, index 0 fastest.

    - set: insert at tier 0, overflow cascades down one tier at a time and
      falls off the end of the last tier.
    - get: a hit at tier i > 0 moves the entry up to tier i - 1; whatever that
      displaces cascades down starting at tier i.
    A key lives in at most one tier.
    """

    def __init__(self, tiers: Iterable[Tier]):
        tiers = list(tiers)
        if not tiers:
            raise ConfigurationError("TieredCache requires at least one tier.")
        for t in tiers:
            if not isinstance(t, Tier):
                raise ConfigurationError(f"Expected Tier instances, got {type(t).__name__}")
        self._tiers: List[Tier] = tiers

    @classmethod
    def from_specs(cls, specs: Sequence[Tuple[int, Union[EvictionPolicy, str]]]) -> "TieredCache":
        return cls(Tier(capacity, policy) for capacity, policy in specs)

    @property
    def tiers(self) -> Tuple[Tier, ...]:
        return tuple(self._tiers)

    def add_tier(self, capacity: int, policy: Union[EvictionPolicy, str] = EvictionPolicy.LRU) -> Tier:
        tier = Tier(capacity, policy)
        self._tiers.append(tier)
        return tier

    def get(self, key: Hashable, default: Any = None) -> Any:
        for i, tier in enumerate(self._tiers):
            if key not in tier:
                continue
            value = tier.get(key)
            if i > 0:
                self._promote(i, key, value)
            return value
        return default

    def set(self, key: Hashable, value: Any) -> None:
        for tier in self._tiers[1:]:
            tier.force_remove(key)
        self._cascade(self._tiers[0].put(key, value), 1)

    def locate(self, key: Hashable) -> Optional[int]:
        for i, tier in enumerate(self._tiers):
            if key in tier:
                return i
        return None

    def snapshot(self) -> List[List[Hashable]]:
        return [t.keys() for t in self._tiers]

    def _promote(self, i: int, key: Hashable, value: Any) -> None:
        evicted = self._tiers[i - 1].put(key, value)
        self._tiers[i].force_remove(key)
        logger.debug("promoted %r from tier %d to tier %d", key, i, i - 1)
        self._cascade(evicted, i)

    def _cascade(self, evicted: Optional[Evicted], start: int) -> None:
        # Push an evicted entry down from `start` until some tier absorbs it.
        i = start
        while evicted is not None and i < len(self._tiers):
            logger.debug("demoting %r to tier %d", evicted.key, i)
            evicted = self._tiers[i].put(evicted.key, evicted.value)
            i += 1
        if evicted is not None:
            logger.debug("dropped %r past last tier", evicted.key)

    def __contains__(self, key: object) -> bool:
        return any(key in t for t in self._tiers)

    def __len__(self) -> int:
        return sum(len(t) for t in self._tiers)

    def __repr__(self) -> str:
        layout = ", ".join(f"{t.capacity}:{t.policy.value}" for t in self._tiers)
        return f"TieredCache([{layout}])"
