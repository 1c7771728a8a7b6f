"""Entry point for the cache simulator.

Usage:
    python run.py <num_sets> <blocks_per_set> <block_size> \\
        <write-allocate|no-write-allocate> <write-through|write-back> <lru|fifo> < trace

See `csim.cli` for the optional flags.
"""
import sys

from csim.cli import main

if __name__ == '__main__':
    sys.exit(main())
