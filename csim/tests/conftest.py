"""Test configuration for pytest.

Ensure the repository root is on sys.path so tests can import the `csim`
package without needing PYTHONPATH set externally.
"""
import os
import sys

import pytest

# Compute project root: two directories above this file (csim/tests -> csim -> project root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from csim.core.cache import Cache  # noqa: E402
from csim.core.config import CacheConfig  # noqa: E402
from csim.core.replacement_policies import EvictionPolicy  # noqa: E402
from csim.core.simulator import CacheSimulator  # noqa: E402


@pytest.fixture
def make_sim():
    """Factory for a simulator over a fresh cache; defaults to the
    smallest legal geometry (1 set, 1 way, 4-byte blocks, write-allocate,
    write-back, LRU)."""
    def _make(num_sets=1, blocks_per_set=1, block_size=4, write_allocate=True,
              write_back=True, policy=EvictionPolicy.LRU, **kwargs):
        config = CacheConfig(num_sets=num_sets, blocks_per_set=blocks_per_set, block_size=block_size,
                             write_allocate=write_allocate, write_back=write_back, eviction_policy=policy)
        return CacheSimulator(Cache(config), **kwargs)
    return _make
