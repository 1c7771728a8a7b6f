"""CacheSimulator coordinates cache accesses, cycle costs and statistics.
Feeds decoded accesses into the core Cache one at a time, in order.
"""
import logging
from typing import Callable, Iterable, List, Optional

from .access import Access
from .cache import Cache, LookupResult
from .config import CACHE_HIT_CYCLES, MEMORY_ACCESS_CYCLES, CacheConfig
from ..data.stats_export import Statistics

logger = logging.getLogger(__name__)

# a write that goes to both the cache and memory
WRITE_THROUGH_CYCLES = CACHE_HIT_CYCLES + MEMORY_ACCESS_CYCLES


class CacheSimulator:
    def __init__(self, cache: Cache, stats: Optional[Statistics] = None, record_history: bool = False):
        self.cache = cache
        self.config: CacheConfig = cache.config
        self.stats = stats or Statistics()
        # recency stamps come from here; one tick per processed access
        self.access_counter = 0
        self.sequence: List[Access] = []
        self.index = 0
        self.hit_rate_history: Optional[List[float]] = [] if record_history else None

    def reset(self):
        # clear stats, counter and cache, rewind the sequence pointer
        self.stats.reset()
        self.access_counter = 0
        self.index = 0
        self.cache.reset()
        if self.hit_rate_history is not None:
            self.hit_rate_history.clear()

    def load_sequence(self, accesses: Iterable[Access]):
        self.sequence = list(accesses)
        self.index = 0

    def has_next(self) -> bool:
        return self.index < len(self.sequence)

    def step(self) -> Optional[dict]:
        if not self.has_next():
            return None
        access = self.sequence[self.index]
        self.index += 1
        return self.process(access)

    def run_all(self, callback: Optional[Callable[[dict], None]] = None):
        while self.has_next():
            info = self.step()
            if callback:
                callback(info)
        return self.stats

    def process(self, access: Access) -> dict:
        """Simulate one access and return what happened to it."""
        result = self.cache.lookup(access.address)
        self.access_counter += 1

        if access.is_store:
            cycles, way_index, evicted = self._store(result)
            self.stats.record_store(result.hit, cycles)
        else:
            cycles, way_index, evicted = self._load(result)
            self.stats.record_load(result.hit, cycles)

        dirty_writeback = bool(evicted is not None and evicted.dirty and self.config.write_back)
        if evicted is not None:
            self.stats.record_eviction(evicted.dirty)
        if self.hit_rate_history is not None:
            self.hit_rate_history.append(self.stats.hit_rate)

        logger.debug(
            "%s 0x%x set=%d tag=0x%x %s way=%s cycles=%d%s",
            access.kind.name.lower(), access.address, result.set_index, result.tag,
            "hit" if result.hit else "miss", way_index, cycles,
            " (dirty write-back)" if dirty_writeback else "",
        )

        return {
            'address': access.address,
            'kind': access.kind,
            'hit': result.hit,
            'set_index': result.set_index,
            'tag': result.tag,
            'way_index': way_index,
            'cycles': cycles,
            'evicted': evicted,
            'dirty_writeback': dirty_writeback,
            'stats': {
                'accesses': self.stats.accesses,
                'hits': self.stats.hits,
                'misses': self.stats.misses,
                'hit_rate': self.stats.hit_rate,
                'cycles': self.stats.cycles,
            },
        }

    def _touch(self, result: LookupResult):
        if self.config.eviction_policy.refreshes_on_hit:
            self.cache.block(result.set_index, result.hit_index).recency = self.access_counter

    def _writeback_penalty(self, result: LookupResult) -> int:
        # evicting a dirty block under write-back costs one block transfer
        if result.is_eviction and self.config.write_back:
            if self.cache.block(result.set_index, result.victim_index).dirty:
                return self.config.memory_transfer_cycles
        return 0

    def _load(self, result: LookupResult):
        if result.hit:
            self._touch(result)
            return CACHE_HIT_CYCLES, result.hit_index, None

        cycles = self.config.memory_transfer_cycles + CACHE_HIT_CYCLES
        cycles += self._writeback_penalty(result)
        way_index, evicted = self.cache.install(result, self.access_counter, dirty=False)
        return cycles, way_index, evicted

    def _store(self, result: LookupResult):
        if result.hit:
            block = self.cache.block(result.set_index, result.hit_index)
            if self.config.write_back:
                cycles = CACHE_HIT_CYCLES
                block.dirty = True
            else:
                cycles = WRITE_THROUGH_CYCLES
            self._touch(result)
            return cycles, result.hit_index, None

        if not self.config.write_allocate:
            # straight to memory, cache untouched
            return MEMORY_ACCESS_CYCLES, None, None

        cycles = self.config.memory_transfer_cycles
        cycles += self._writeback_penalty(result)
        way_index, evicted = self.cache.install(result, self.access_counter, dirty=self.config.write_back)
        if self.config.write_back:
            cycles += CACHE_HIT_CYCLES
        else:
            cycles += WRITE_THROUGH_CYCLES
        return cycles, way_index, evicted


def simulate(config: CacheConfig, accesses: Iterable[Access], stats: Optional[Statistics] = None) -> Statistics:
    """Run a whole trace against a fresh cache and return its statistics."""
    sim = CacheSimulator(Cache(config), stats=stats)
    for access in accesses:
        sim.process(access)
    return sim.stats
