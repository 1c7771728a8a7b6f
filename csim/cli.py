"""Command line for the cache simulator.

Usage:
    csim <num_sets> <blocks_per_set> <block_size> \\
        <write-allocate|no-write-allocate> <write-through|write-back> <lru|fifo> \\
        [--trace PATH] [--csv PATH] [--json PATH] [--chart PATH] [--verbose] < trace

The trace is read from stdin unless --trace is given.
"""
import logging
import sys

from csim.core.config import ConfigurationError, parse_config_args
from csim.data.stats_export import Exporter, export_chart_pdf, format_summary
from csim.data.trace import TraceFormatError
from csim.simulation import Simulation

USAGE = ("Usage: csim <num_sets> <blocks_per_set> <block_size> "
         "<write-allocate|no-write-allocate> <write-through|write-back> <lru|fifo> "
         "[--trace PATH] [--csv PATH] [--json PATH] [--chart PATH] [--verbose]")

PATH_OPTIONS = ('--trace', '--csv', '--json', '--chart')


def split_args(argv):
    """Separate positional cache parameters from --options."""
    positional = []
    options = {}
    verbose = False
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg in ('-v', '--verbose'):
            verbose = True
        elif arg in PATH_OPTIONS:
            if i + 1 >= len(argv):
                raise ConfigurationError(f"{arg} needs a path")
            options[arg[2:]] = argv[i + 1]
            i += 1
        else:
            positional.append(arg)
        i += 1
    return positional, options, verbose


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if '-h' in argv or '--help' in argv:
        print(USAGE)
        return 0

    try:
        positional, options, verbose = split_args(argv)
        config = parse_config_args(positional)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    want_history = 'chart' in options or 'json' in options
    simulation = Simulation(config, record_history=want_history)
    try:
        if 'trace' in options:
            stats = simulation.run_trace_file(options['trace'])
        else:
            # raw bytes when available, so bad UTF-8 is reported per line
            stats = simulation.run_trace(getattr(sys.stdin, 'buffer', sys.stdin))
    except TraceFormatError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: cannot read trace: {e}", file=sys.stderr)
        return 1

    print(format_summary(stats))

    try:
        if 'csv' in options:
            Exporter.export_stats_csv(options['csv'], stats)
        if 'json' in options:
            Exporter.export_stats_json(options['json'], stats, simulation.hit_rate_history)
        if 'chart' in options:
            export_chart_pdf(simulation.hit_rate_history, options['chart'], title=config.describe())
    except OSError as e:
        print(f"Error: cannot write export: {e}", file=sys.stderr)
        return 1
    return 0
