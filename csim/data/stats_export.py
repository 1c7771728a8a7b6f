"""Statistics and exporter.
"""
import csv
import json
from typing import Dict, List, Optional, Tuple

SUMMARY_LABELS = (
    "Total loads",
    "Total stores",
    "Load hits",
    "Load misses",
    "Store hits",
    "Store misses",
    "Total cycles",
)


def export_chart_json(hit_rate_history: List[float], stats: Dict[str, float], fpath: str) -> str:
    """Export hit-rate history and stats to a JSON file. Returns saved path.
    """
    data = {
        'hit_rate_history': list(hit_rate_history),
        'stats': stats
    }
    with open(fpath, 'w', encoding='utf-8') as fh:
        json.dump(data, fh, indent=2)
    return fpath


def export_chart_pdf(hit_rate_history: List[float], fpath: str, title: Optional[str] = None) -> str:
    """Render the hit-rate history to a PDF using matplotlib and save it.
    Returns the saved file path.
    """
    # Use matplotlib
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    data = list(hit_rate_history) or [0]
    fig, ax = plt.subplots(figsize=(6, 2))
    ax.plot(range(len(data)), data, color='#FFA500', linewidth=2)
    ax.fill_between(range(len(data)), data, color='#FFA500', alpha=0.1)
    ax.set_ylim(0, 1)
    ax.set_xlabel('Access')
    ax.set_ylabel('Hit rate')
    if title:
        ax.set_title(title, fontsize=8)
    ax.grid(False)
    fig.tight_layout()
    fig.savefig(fpath, format='pdf', dpi=150)
    plt.close(fig)
    return fpath


class Statistics:
    def __init__(self):
        self.reset()

    def reset(self):
        # counters start from zero
        self.total_loads = 0
        self.total_stores = 0
        self.load_hits = 0
        self.load_misses = 0
        self.store_hits = 0
        self.store_misses = 0
        self.cycles = 0
        self.evictions = 0
        self.dirty_evictions = 0

    def record_load(self, hit: bool, cycles: int):
        self.total_loads += 1
        if hit:
            self.load_hits += 1
        else:
            self.load_misses += 1
        self.cycles += cycles

    def record_store(self, hit: bool, cycles: int):
        self.total_stores += 1
        if hit:
            self.store_hits += 1
        else:
            self.store_misses += 1
        self.cycles += cycles

    def record_eviction(self, dirty: bool):
        self.evictions += 1
        if dirty:
            self.dirty_evictions += 1

    @property
    def accesses(self):
        return self.total_loads + self.total_stores

    @property
    def hits(self):
        return self.load_hits + self.store_hits

    @property
    def misses(self):
        return self.load_misses + self.store_misses

    @property
    def hit_rate(self):
        return (self.hits / self.accesses) if self.accesses else 0.0

    @property
    def miss_rate(self):
        return (self.misses / self.accesses) if self.accesses else 0.0

    def as_tuple(self) -> Tuple[int, int, int, int, int, int, int]:
        """The seven summary counters in report order."""
        return (
            self.total_loads, self.total_stores,
            self.load_hits, self.load_misses,
            self.store_hits, self.store_misses,
            self.cycles,
        )

    def as_dict(self) -> Dict[str, float]:
        return {
            'total_loads': self.total_loads,
            'total_stores': self.total_stores,
            'load_hits': self.load_hits,
            'load_misses': self.load_misses,
            'store_hits': self.store_hits,
            'store_misses': self.store_misses,
            'cycles': self.cycles,
            'evictions': self.evictions,
            'dirty_evictions': self.dirty_evictions,
            'hit_rate': self.hit_rate,
            'miss_rate': self.miss_rate,
        }

    def __repr__(self):
        return 'Statistics(%s)' % ', '.join('%s=%d' % (k, v) for k, v in zip(
            ('loads', 'stores', 'load_hits', 'load_misses', 'store_hits', 'store_misses', 'cycles'),
            self.as_tuple()))


def format_summary(stats: Statistics) -> str:
    """Seven `Label: value` lines, one per summary counter."""
    return '\n'.join(f'{label}: {value}' for label, value in zip(SUMMARY_LABELS, stats.as_tuple()))


class Exporter:
    @staticmethod
    def export_stats_csv(path: str, stats: Statistics):
        with open(path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(['total_loads', 'total_stores', 'load_hits', 'load_misses',
                             'store_hits', 'store_misses', 'cycles', 'hit_rate', 'miss_rate'])
            writer.writerow(list(stats.as_tuple()) + [stats.hit_rate, stats.miss_rate])

    @staticmethod
    def export_stats_json(path: str, stats: Statistics, hit_rate_history: Optional[List[float]] = None):
        return export_chart_json(hit_rate_history or [], stats.as_dict(), path)
