"""Eviction policies for the cache simulator.

Both policies share one victim rule: the way with the smallest `recency`
stamp is evicted (lowest way index on ties). They only differ in what
happens on a hit:

- LRU: a hit refreshes the way's stamp, so the smallest stamp is the
  least recently used way.
- FIFO: hits leave the stamp alone, so the smallest stamp is the way that
  was installed first.
"""

from enum import Enum


class EvictionPolicy(Enum):
    """Eviction discipline used when a set is full."""
    LRU = "lru"
    FIFO = "fifo"

    @property
    def refreshes_on_hit(self) -> bool:
        return self is EvictionPolicy.LRU

    @classmethod
    def from_token(cls, token: str) -> "EvictionPolicy":
        """Map a command-line token (`lru` / `fifo`, any case) to a policy."""
        try:
            return cls(token.strip().lower())
        except ValueError:
            raise ValueError(f"unknown eviction policy {token!r} (expected 'lru' or 'fifo')") from None


__all__ = ["EvictionPolicy"]
