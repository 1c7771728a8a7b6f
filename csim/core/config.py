"""Cache configuration.

A `CacheConfig` is built once per run and never changes afterwards. All
validation happens in `__post_init__`, so holding a `CacheConfig` means the
geometry and policies are legal and the simulator can't fail later on.
"""

from dataclasses import dataclass
from typing import Sequence

from csim.core.replacement_policies import EvictionPolicy

# memory moves 4-byte words, each costing this many cycles
MEMORY_ACCESS_CYCLES = 100
WORD_SIZE = 4
CACHE_HIT_CYCLES = 1


class ConfigurationError(ValueError):
    """Raised when cache parameters are invalid."""


def _is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


@dataclass(frozen=True)
class CacheConfig:
    """Geometry and policies of the simulated cache.

    Attributes:
        num_sets: number of sets (power of two)
        blocks_per_set: ways per set (power of two)
        block_size: bytes per block (power of two, at least 4)
        write_allocate: allocate a block on a store miss
        write_back: write-back (True) or write-through (False)
        eviction_policy: LRU or FIFO
    """

    num_sets: int
    blocks_per_set: int
    block_size: int
    write_allocate: bool = True
    write_back: bool = True
    eviction_policy: EvictionPolicy = EvictionPolicy.LRU

    def __post_init__(self):
        for name in ("num_sets", "blocks_per_set", "block_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or not _is_power_of_two(value):
                raise ConfigurationError(f"{name} must be a positive power of 2, got {value!r}")
        if self.block_size < WORD_SIZE:
            raise ConfigurationError(f"block_size must be >= {WORD_SIZE} bytes, got {self.block_size}")
        if not isinstance(self.eviction_policy, EvictionPolicy):
            raise ConfigurationError(f"eviction_policy must be an EvictionPolicy, got {self.eviction_policy!r}")
        if not self.write_allocate and self.write_back:
            raise ConfigurationError("no-write-allocate cannot be used with write-back")

    @property
    def block_offset_bits(self) -> int:
        return self.block_size.bit_length() - 1

    @property
    def set_index_bits(self) -> int:
        return self.num_sets.bit_length() - 1

    @property
    def words_per_block(self) -> int:
        return self.block_size // WORD_SIZE

    @property
    def memory_transfer_cycles(self) -> int:
        """Cycles to move one whole block between memory and the cache."""
        return MEMORY_ACCESS_CYCLES * self.words_per_block

    def describe(self) -> str:
        return (
            f"{self.num_sets} sets x {self.blocks_per_set} ways x {self.block_size}B, "
            f"{'write-allocate' if self.write_allocate else 'no-write-allocate'}, "
            f"{'write-back' if self.write_back else 'write-through'}, "
            f"{self.eviction_policy.value}"
        )


def _parse_size(name: str, token: str) -> int:
    try:
        return int(token)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got {token!r}") from None


def parse_config_args(args: Sequence[str]) -> CacheConfig:
    """Build a config from the six command-line tokens.

    Order: num_sets blocks_per_set block_size
    write-allocate|no-write-allocate write-through|write-back lru|fifo
    """
    if len(args) != 6:
        raise ConfigurationError(f"expected 6 cache parameters, got {len(args)}")
    num_sets = _parse_size("num_sets", args[0])
    blocks_per_set = _parse_size("blocks_per_set", args[1])
    block_size = _parse_size("block_size", args[2])

    alloc = args[3].strip().lower()
    if alloc not in ("write-allocate", "no-write-allocate"):
        raise ConfigurationError(f"unknown write-miss policy {args[3]!r}")
    write = args[4].strip().lower()
    if write not in ("write-through", "write-back"):
        raise ConfigurationError(f"unknown write-hit policy {args[4]!r}")
    try:
        policy = EvictionPolicy.from_token(args[5])
    except ValueError as e:
        raise ConfigurationError(str(e)) from None

    return CacheConfig(
        num_sets=num_sets,
        blocks_per_set=blocks_per_set,
        block_size=block_size,
        write_allocate=(alloc == "write-allocate"),
        write_back=(write == "write-back"),
        eviction_policy=policy,
    )


__all__ = ["CacheConfig", "ConfigurationError", "parse_config_args"]
