"""Simulation driver used by the command line

Builds a fresh cache for a config, feeds it a trace and keeps the
resulting statistics (and optionally a hit-rate history for charting).
"""
import logging
from typing import Iterable, Optional, TextIO

from csim.core.access import Access
from csim.core.cache import Cache
from csim.core.config import CacheConfig
from csim.core.simulator import CacheSimulator
from csim.data.stats_export import Statistics
from csim.data.trace import read_trace

logger = logging.getLogger(__name__)


class Simulation:
    def __init__(self, config: CacheConfig, record_history: bool = False):
        self.config = config
        self.cache = Cache(config)
        self.sim = CacheSimulator(self.cache, record_history=record_history)

    @property
    def stats(self) -> Statistics:
        return self.sim.stats

    @property
    def hit_rate_history(self):
        return self.sim.hit_rate_history

    def run(self, accesses: Iterable[Access]) -> Statistics:
        logger.info("simulating %s", self.config.describe())
        count = 0
        for access in accesses:
            self.sim.process(access)
            count += 1
        logger.info("processed %d accesses: %d hits, %d misses, %d cycles",
                    count, self.stats.hits, self.stats.misses, self.stats.cycles)
        return self.stats

    def run_trace(self, stream: TextIO) -> Statistics:
        """Decode `stream` line by line and simulate it."""
        return self.run(read_trace(stream))

    def run_trace_file(self, path: str) -> Statistics:
        logger.info("reading trace %s", path)
        # binary, so each line is decoded (and reported) on its own
        with open(path, 'rb') as fh:
            return self.run_trace(fh)

    def reset(self):
        self.sim.reset()


def run_simulation(config: CacheConfig, stream: TextIO, record_history: bool = False) -> Simulation:
    """Convenience wrapper: run `stream` through a new Simulation and return it."""
    simulation = Simulation(config, record_history=record_history)
    simulation.run_trace(stream)
    return simulation
