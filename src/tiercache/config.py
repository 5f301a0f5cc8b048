import os
from dataclasses import dataclass
from typing import List, Tuple

from dotenv import load_dotenv

from tiercache.cache.errors import ConfigurationError
from tiercache.cache.tier import EvictionPolicy

DEFAULT_TIERS = "3:LRU,2:LRU"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

TierSpec = Tuple[int, EvictionPolicy]


@dataclass(frozen=True)
class Settings:
    tiers_layout: str
    log_level: str

    @property
    def tiers(self) -> List[TierSpec]:
        return parse_tier_specs(self.tiers_layout)


def parse_tier_specs(text: str) -> List[TierSpec]:
    """
    Parse a layout such as "3:LRU,2:FIFO,16" into (capacity, policy) pairs,
    fastest tier first. A missing policy means LRU.
    """
    items = [p.strip() for p in (text or "").split(",") if p.strip()]
    if not items:
        raise ConfigurationError("Tier layout is empty; expected e.g. '3:LRU,2:LRU'.")
    specs: List[TierSpec] = []
    for item in items:
        cap_s, _, policy_s = item.partition(":")
        try:
            capacity = int(cap_s.strip())
        except ValueError:
            raise ConfigurationError(f"Invalid tier capacity in {item!r}") from None
        if capacity <= 0:
            raise ConfigurationError(f"Tier capacity must be positive in {item!r}")
        policy = EvictionPolicy.parse(policy_s) if policy_s.strip() else EvictionPolicy.LRU
        specs.append((capacity, policy))
    return specs


def get_settings() -> Settings:
    load_dotenv()
    tiers_layout = os.getenv("TIERCACHE_TIERS", DEFAULT_TIERS)
    log_level = (os.getenv("TIERCACHE_LOG_LEVEL", "INFO") or "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(f"Unknown TIERCACHE_LOG_LEVEL {log_level!r}; expected one of: {', '.join(LOG_LEVELS)}")
    return Settings(tiers_layout=tiers_layout, log_level=log_level)
