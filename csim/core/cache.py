"""Core cache implementation

Set-associative cache state used by the simulator.
Behavior:
- Cache is composed of `num_sets` sets; each set has `blocks_per_set` ways.
  set_index = (address >> block_offset_bits) & (num_sets - 1)
  tag = address >> (block_offset_bits + set_index_bits)
- lookup() scans a set once and reports the hit way, the first free way and
  the eviction candidate (smallest recency stamp, lowest way on ties).
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from csim.core.config import CacheConfig


@dataclass
class CacheBlock:
    """container for a cache line (way).

    Fields:
    - tag: the tag stored in the line
    - valid: whether the line currently holds a block
    - dirty: whether the line was written and not yet written back
    - recency: access-counter stamp, set on install (and on hits under LRU)
    """

    tag: int = 0
    valid: bool = False
    dirty: bool = False
    recency: int = 0


@dataclass(frozen=True)
class LookupResult:
    """Outcome of scanning one set for a tag."""

    set_index: int
    tag: int
    hit_index: Optional[int]
    free_index: Optional[int]
    victim_index: int

    @property
    def hit(self) -> bool:
        return self.hit_index is not None

    @property
    def is_eviction(self) -> bool:
        # a miss with no free way overwrites the victim
        return self.free_index is None

    @property
    def target_index(self) -> int:
        """Way a missing block gets installed into."""
        return self.free_index if self.free_index is not None else self.victim_index


class Cache:
    """Simple set-associative cache model.
    """

    def __init__(self, config: CacheConfig):
        self.config = config
        self.num_sets = config.num_sets
        self.blocks_per_set = config.blocks_per_set
        self._offset_bits = config.block_offset_bits
        self._index_bits = config.set_index_bits
        self._index_mask = (1 << self._index_bits) - 1

        # allocate the sets matrix: num_sets x blocks_per_set
        self.sets: List[List[CacheBlock]] = [
            [CacheBlock() for _ in range(self.blocks_per_set)]
            for _ in range(self.num_sets)
        ]

    def decode(self, address: int) -> Tuple[int, int]:
        """Decode address into (set_index, tag)."""
        set_index = (address >> self._offset_bits) & self._index_mask
        tag = address >> (self._offset_bits + self._index_bits)
        return set_index, tag

    def lookup(self, address: int) -> LookupResult:
        """Scan the set `address` maps to.

        One pass from way 0 upwards: stops at the first valid way holding the
        tag. Until then it remembers the first invalid way and the way with
        the smallest recency stamp (strict `<`, so earlier ways win ties).
        """
        set_index, tag = self.decode(address)
        cache_set = self.sets[set_index]

        hit_index = None
        free_index = None
        victim_index = 0
        oldest = None
        # wi = way-index
        for wi, block in enumerate(cache_set):
            if block.valid and block.tag == tag:
                hit_index = wi
                break
            if not block.valid and free_index is None:
                free_index = wi
            if oldest is None or block.recency < oldest:
                oldest = block.recency
                victim_index = wi

        return LookupResult(set_index, tag, hit_index, free_index, victim_index)

    def block(self, set_index: int, way_index: int) -> CacheBlock:
        return self.sets[set_index][way_index]

    def install(self, result: LookupResult, stamp: int, dirty: bool = False) -> Tuple[int, Optional[CacheBlock]]:
        """Place result.tag into the target way of its set.

        Returns (way_index, evicted) where `evicted` is a copy of the block
        that was overwritten, or None if a free way was used.
        """
        way_index = result.target_index
        block = self.sets[result.set_index][way_index]
        evicted = None
        if result.is_eviction:
            evicted = CacheBlock(tag=block.tag, valid=block.valid, dirty=block.dirty, recency=block.recency)
        block.valid = True
        block.tag = result.tag
        block.recency = stamp
        block.dirty = dirty
        return way_index, evicted

    def contains(self, address: int) -> bool:
        return self.lookup(address).hit

    def reset(self):
        """Clear cache contents.
        """

        for s in self.sets:
            for b in s:
                b.tag = 0
                b.valid = False
                b.dirty = False
                b.recency = 0

    def valid_blocks(self) -> int:
        return sum(1 for s in self.sets for b in s if b.valid)
